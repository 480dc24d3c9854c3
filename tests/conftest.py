"""Shared fixtures: a small skill catalog and a skills directory on disk."""
import pytest

from skillwright.skills.document import render_skill_markdown
from skillwright.skills.models import SkillMetadata


def make_skill(skill_id, name, description, tags=None, deprecated_at=None):
    return SkillMetadata(
        id=skill_id,
        name=name,
        description=description,
        tags=list(tags or []),
        deprecated_at=deprecated_at,
    )


@pytest.fixture
def catalog():
    return [
        make_skill(
            "skill-git",
            "git-workflow",
            "Manage git repositories, commits, branches and merge conflicts.",
            tags=["git", "vcs"],
        ),
        make_skill(
            "skill-pytest",
            "python-testing",
            "Write and run pytest suites for Python projects, including fixtures and mocks.",
            tags=["python", "testing"],
        ),
        make_skill(
            "skill-docker",
            "docker-deploy",
            "Build docker images and deploy containers to a registry.",
            tags=["docker", "devops"],
        ),
        make_skill(
            "skill-old-git",
            "legacy-git",
            "Manage git repositories, commits and branches the old way.",
            tags=["git"],
            deprecated_at=1700000000.0,
        ),
    ]


@pytest.fixture
def skills_dir(tmp_path):
    """Two skills in SKILL.md layout plus one *.skill.md file."""
    git = tmp_path / "git-workflow"
    git.mkdir()
    (git / "SKILL.md").write_text(
        render_skill_markdown(
            "git-workflow",
            "Manage git repositories, commits, branches and merge conflicts.",
            overview="Day to day git work.",
            steps=["Create a branch", "Commit changes", "Open a pull request"],
            examples=["git checkout -b feature/x"],
            tags=["git", "vcs"],
        ),
        encoding="utf-8",
    )
    testing = tmp_path / "python" / "python-testing"
    testing.mkdir(parents=True)
    (testing / "SKILL.md").write_text(
        render_skill_markdown(
            "python-testing",
            "Write and run pytest suites for Python projects, including fixtures and mocks.",
            overview="Testing Python code.",
            steps=["Install pytest", "Write tests", "Run pytest"],
            tags=["python", "testing"],
        ),
        encoding="utf-8",
    )
    (tmp_path / "docker.skill.md").write_text(
        "---\ndescription: Build docker images and deploy containers to a registry.\ntags: [docker]\n---\n\n# Docker\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Send logs to stderr at WARNING so tool output on stdout stays parseable."""
    from skillwright.logging_utils import configure_logging

    configure_logging("WARNING")

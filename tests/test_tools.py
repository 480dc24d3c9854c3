"""Tests for the skill tools and the registry that runs them."""
import json

import pytest

from skillwright.skills.document import parse_skill_markdown
from skillwright.skills.loader import skill_id_for
from skillwright.tools import get_tool_registry
from skillwright.tools.registry import execute, get_tool_names

GIT_DESCRIPTION = "Manage git repositories, commits, branches and merge conflicts."


@pytest.fixture(autouse=True)
def use_skills_dir(monkeypatch, skills_dir):
    monkeypatch.setattr("skillwright.skills.loader.SKILLS_DIR", skills_dir)


def test_tools_registered():
    assert set(get_tool_names()) >= {
        "match_skill",
        "check_skill_conflicts",
        "analyze_description",
        "validate_skill",
        "count_skill_tokens",
        "create_skill",
        "list_skills",
        "get_skill",
    }
    for definition in get_tool_registry().get_tool_definitions():
        assert definition["type"] == "function"
        assert definition["function"]["parameters"]["type"] == "object"


def test_match_skill():
    result = json.loads(execute("match_skill", {
        "task_description": "manage git repositories branches commits",
        "min_confidence": 0.01,
    }))
    assert result["matches"][0]["name"] == "git-workflow"
    assert result["best_match"] == result["matches"][0]["skill_id"]
    assert isinstance(result["high_confidence"], bool)


def test_match_skill_no_matches():
    result = json.loads(execute("match_skill", {"task_description": "bake sourdough bread", "min_confidence": 0.5}))
    assert result == {"matches": [], "best_match": None, "high_confidence": False}


@pytest.mark.parametrize("arguments, message", [
    ({}, "Error: task_description is required and must be a string"),
    ({"task_description": "   "}, "Error: task_description cannot be empty"),
    ({"task_description": "x" * 10001}, "Error: task_description exceeds maximum length of 10000 characters"),
    ({"task_description": "git", "min_confidence": 1.5}, "Error: min_confidence must be a number between 0 and 1"),
    ({"task_description": "git", "min_confidence": "high"}, "Error: min_confidence must be a number between 0 and 1"),
])
def test_match_skill_rejects_bad_requests(arguments, message):
    assert execute("match_skill", arguments) == message


def test_check_skill_conflicts():
    result = json.loads(execute("check_skill_conflicts", {
        "name": "git-workflow",
        "description": GIT_DESCRIPTION,
        "tags": ["git", "vcs"],
    }))
    assert [c["existing_skill_name"] for c in result["conflicts"]] == ["git-workflow"]
    assert result["conflicts"][0]["overlap_score"] >= 0.95
    assert result["layer1_tokens"] > 0


def test_check_skill_conflicts_bad_tags():
    result = execute("check_skill_conflicts", {"name": "x", "description": "y", "tags": "git"})
    assert result == "Error: tags must be a list of strings"


def test_analyze_description_tool():
    result = json.loads(execute("analyze_description", {"description": "Do stuff"}))
    assert result["clarity_score"] < 0.5
    assert result["too_narrow"] is True
    assert result["suggestions"]


def test_validate_skill_by_path(skills_dir):
    path = skills_dir / "git-workflow" / "SKILL.md"
    result = json.loads(execute("validate_skill", {"path": str(path)}))
    assert result["valid"] is True
    assert result["description_analysis"]["trigger_keywords"]


def test_validate_skill_by_content():
    result = json.loads(execute("validate_skill", {"content": "no frontmatter"}))
    assert result["valid"] is False
    assert len(result["errors"]) == 2


def test_validate_skill_needs_exactly_one_source(tmp_path):
    assert execute("validate_skill", {}) == "Error: Must provide content or path"
    assert execute("validate_skill", {"content": "x", "path": "y"}) == "Error: Provide either content or path, not both"
    assert execute("validate_skill", {"path": str(tmp_path / "missing.md")}).startswith("Error: Could not read")


def test_count_skill_tokens(skills_dir):
    content = (skills_dir / "git-workflow" / "SKILL.md").read_text(encoding="utf-8")
    result = json.loads(execute("count_skill_tokens", {"content": content}))
    assert result["total"] == result["layer2"]
    assert result["body"] == result["layer2"] - result["layer1"]


def test_unknown_tool():
    assert execute("delete_everything", {}) == "Unknown tool: delete_everything"


def test_unexpected_argument_is_an_error():
    assert execute("analyze_description", {"description": "x", "color": "red"}).startswith("Error:")


def test_match_skill_logs_context(monkeypatch):
    seen = {}
    monkeypatch.setattr(
        "skillwright.tools.skill_tools.log_skill_matches",
        lambda logger, **fields: seen.update(fields),
    )
    execute("match_skill", {"task_description": "git branches", "context": {"session": "abc"}})
    assert seen["context"] == {"session": "abc"}
    assert execute("match_skill", {"task_description": "git", "context": "abc"}) == "Error: context must be an object"


def test_count_skill_tokens_by_path(skills_dir):
    path = skills_dir / "git-workflow" / "SKILL.md"
    by_path = json.loads(execute("count_skill_tokens", {"path": str(path)}))
    by_content = json.loads(execute("count_skill_tokens", {"content": path.read_text(encoding="utf-8")}))
    assert by_path == by_content


def test_undecodable_file_is_an_error(tmp_path):
    path = tmp_path / "broken.md"
    path.write_bytes(b"---\nname: \xff\xfe\n---\n")
    assert execute("count_skill_tokens", {"path": str(path)}).startswith(f"Error: Could not read {path}")
    assert execute("validate_skill", {"path": str(path)}).startswith(f"Error: Could not read {path}")


def test_create_skill(skills_dir):
    result = json.loads(execute("create_skill", {
        "name": "release-notes",
        "description": "Use this to write release notes from merged pull requests and changelog entries.",
        "overview": "Summarise what changed since the last tag.",
        "steps": ["List merged pull requests", "Group them by area", "Write the notes"],
        "tags": ["release", "docs"],
    }))
    path = skills_dir / "release-notes" / "SKILL.md"
    assert result["created"] is True
    assert result["path"] == str(path)
    assert result["skill_id"] == skill_id_for(path)
    assert result["conflicts"] == []
    assert result["token_count"]["layer2"] > result["token_count"]["layer1"] > 0

    doc = parse_skill_markdown(path.read_text(encoding="utf-8"))
    assert doc.frontmatter.name == "release-notes"
    assert doc.frontmatter.tags == ["release", "docs"]
    assert doc.body.steps == ["List merged pull requests", "Group them by area", "Write the notes"]

    listed = json.loads(execute("list_skills", {}))
    assert "release-notes" in [s["name"] for s in listed["skills"]]


def test_create_skill_reports_overlap(skills_dir):
    result = json.loads(execute("create_skill", {
        "name": "git-basics",
        "description": GIT_DESCRIPTION,
        "tags": ["git", "vcs"],
    }))
    assert result["created"] is True
    assert [c["existing_skill_name"] for c in result["conflicts"]] == ["git-workflow"]
    assert (skills_dir / "git-basics" / "SKILL.md").is_file()


@pytest.mark.parametrize("arguments, message", [
    ({"name": "Git-Workflow", "description": "Another git skill."}, "Error: Skill already exists: Git-Workflow"),
    ({"name": "../outside", "description": "x"}, "Error: name may only contain letters, digits, '.', '_' and '-'"),
    ({"name": "ok", "description": "x", "steps": "one"}, "Error: steps must be a list of strings"),
    ({"name": "ok", "description": "x", "overview": 3}, "Error: overview must be a string"),
    ({"name": "ok"}, "Error: description is required and must be a string"),
])
def test_create_skill_rejects_bad_requests(skills_dir, arguments, message):
    assert execute("create_skill", arguments) == message
    assert not (skills_dir / "ok").exists()


def test_list_skills_filters(skills_dir):
    result = json.loads(execute("list_skills", {}))
    assert result["count"] == 3
    assert [s["name"] for s in result["skills"]] == ["docker", "git-workflow", "python-testing"]

    by_search = json.loads(execute("list_skills", {"search": "PYTEST"}))
    assert [s["name"] for s in by_search["skills"]] == ["python-testing"]

    by_tag = json.loads(execute("list_skills", {"tags": ["Docker", "vcs"]}))
    assert [s["name"] for s in by_tag["skills"]] == ["docker", "git-workflow"]


def test_list_skills_include_deprecated(skills_dir):
    (skills_dir / "old.skill.md").write_text(
        "---\nname: old-git\ndescription: Old git helper.\ndeprecated: true\n---\n", encoding="utf-8"
    )
    assert json.loads(execute("list_skills", {}))["count"] == 3
    names = [s["name"] for s in json.loads(execute("list_skills", {"include_deprecated": True}))["skills"]]
    assert "old-git" in names


def test_get_skill(skills_dir):
    path = skills_dir / "git-workflow" / "SKILL.md"
    by_name = json.loads(execute("get_skill", {"name": "GIT-WORKFLOW"}))
    assert by_name["skill_id"] == skill_id_for(path)
    assert by_name["full_content"] == path.read_text(encoding="utf-8")
    assert by_name["token_counts"]["layer1"] > 0
    assert by_name["deprecated"] is False
    by_id = json.loads(execute("get_skill", {"skill_id": by_name["skill_id"]}))
    assert by_id == by_name


def test_get_skill_errors():
    assert execute("get_skill", {}) == "Error: Must provide skill_id or name"
    assert execute("get_skill", {"name": "nope"}) == "Error: Skill not found: nope"
    assert execute("get_skill", {"skill_id": "nope"}) == "Error: Skill not found: nope"

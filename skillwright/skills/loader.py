"""Load SKILL.md files from a directory tree into the metadata snapshot the matcher uses."""
import uuid
from pathlib import Path

from skillwright.config import SKILLS_DIR
from skillwright.logging_utils import get_logger, log_skills_loaded
from skillwright.skills.document import parse_skill_markdown
from skillwright.skills.models import SkillMetadata
from skillwright.skills.tokens import count_layer1_tokens, count_layer2_tokens

logger = get_logger(__name__)

SKILL_FILE_NAME = "SKILL.md"
SKILL_FILE_SUFFIX = ".skill.md"
_SKIPPED_DIRS = {"node_modules"}


def is_skill_file(path: Path) -> bool:
    return path.name == SKILL_FILE_NAME or path.name.endswith(SKILL_FILE_SUFFIX)


def find_skill_files(directory: Path) -> list[Path]:
    """Recursively find skill files, skipping hidden directories and node_modules."""
    found: list[Path] = []
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.warning("skill_dir_read_error", path=str(directory), error=str(e))
        return found
    for entry in entries:
        if entry.name.startswith(".") or entry.name in _SKIPPED_DIRS:
            continue
        if entry.is_dir():
            found.extend(find_skill_files(entry))
        elif entry.is_file() and is_skill_file(entry):
            found.append(entry)
    return found


def skill_id_for(path: Path) -> str:
    """Stable id: the same file gets the same id on every load."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, path.resolve().as_uri()))


def load_skill_file(path: Path) -> SkillMetadata | None:
    """Read and parse one skill file. Returns None (with a log warning) if it cannot be used."""
    try:
        content = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime
    except OSError as e:
        logger.warning("skill_file_read_error", path=str(path), error=str(e))
        return None
    doc = parse_skill_markdown(content)
    # SKILL.md takes its name from the directory; foo.skill.md from the file
    fallback = path.parent.name if path.name == SKILL_FILE_NAME else path.name[: -len(SKILL_FILE_SUFFIX)]
    name = doc.frontmatter.name or fallback
    if not name:
        logger.warning("skill_missing_name", path=str(path))
        return None
    description = doc.frontmatter.description
    if not description:
        logger.warning("skill_missing_description", path=str(path), name=name)
    return SkillMetadata(
        id=skill_id_for(path),
        name=name,
        description=description,
        tags=doc.frontmatter.tags,
        token_count_layer1=count_layer1_tokens(name, description),
        token_count_layer2=count_layer2_tokens(content),
        created_at=mtime,
        deprecated_at=mtime if doc.frontmatter.deprecated else None,
        path=str(path),
    )


def skills_directory(skills_dir: Path | None = None) -> Path:
    return skills_dir or SKILLS_DIR


def load_skills(skills_dir: Path | None = None) -> list[SkillMetadata]:
    """Discover skill files under skills_dir and return their metadata.
    If skills_dir does not exist, return []. Unreadable files and repeated names
    (case-insensitive; first file wins) are skipped.
    """
    directory = skills_directory(skills_dir)
    if not directory.exists() or not directory.is_dir():
        return []
    skills: list[SkillMetadata] = []
    seen: set[str] = set()
    skipped = errors = 0
    for path in find_skill_files(directory):
        skill = load_skill_file(path)
        if skill is None:
            errors += 1
            continue
        key = skill.name.lower()
        if key in seen:
            logger.info("skill_duplicate_skipped", path=str(path), name=skill.name)
            skipped += 1
            continue
        seen.add(key)
        skills.append(skill)
    log_skills_loaded(logger, str(directory), loaded=len(skills), skipped=skipped, errors=errors)
    return skills


def active_skills(skills: list[SkillMetadata]) -> list[SkillMetadata]:
    return [s for s in skills if s.is_active]


def find_skill(
    skills: list[SkillMetadata],
    skill_id: str | None = None,
    name: str | None = None,
) -> SkillMetadata | None:
    """Look a skill up by id, or by case-insensitive name when no id is given."""
    if skill_id:
        return next((s for s in skills if s.id == skill_id), None)
    if name:
        key = name.lower()
        return next((s for s in skills if s.name.lower() == key), None)
    return None


def write_skill_file(name: str, content: str, skills_dir: Path | None = None) -> Path:
    """Write content to <skills_dir>/<name>/SKILL.md. Raises FileExistsError if it is already there."""
    directory = skills_directory(skills_dir) / name
    path = directory / SKILL_FILE_NAME
    directory.mkdir(parents=True, exist_ok=True)
    with open(path, "x", encoding="utf-8") as f:
        f.write(content)
    logger.info("skill_file_written", path=str(path), name=name)
    return path

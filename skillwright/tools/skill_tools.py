"""Skill tools: match, conflicts, description analysis, validation, token counts,
and create/list/get over the skills directory.

Handlers validate the request, take a snapshot of the skills on disk where needed,
run the scoring engine and return JSON text.
"""
import json
import re
from pathlib import Path
from typing import Any

from skillwright.config import (
    CONFLICT_OVERLAP_THRESHOLD,
    HIGH_MATCH_CONFIDENCE,
    MAX_TASK_DESCRIPTION_LENGTH,
    MIN_MATCH_CONFIDENCE,
)
from skillwright.logging_utils import get_logger, log_skill_conflicts, log_skill_created, log_skill_matches
from skillwright.skills import (
    SkillDraft,
    analyze_description,
    count_layer1_tokens,
    count_layer2_tokens,
    detect_conflicts,
    load_skills,
    match_skills,
    parse_skill_markdown,
    render_skill_markdown,
    token_breakdown,
    validate_skill_markdown,
)
from skillwright.skills.loader import active_skills, find_skill, skill_id_for, write_skill_file
from skillwright.skills.models import to_dict
from skillwright.tools.base import make_tool, optional_string_list, optional_unit_float, require_string
from skillwright.tools.registry import register

logger = get_logger(__name__)

MATCH_SKILL_PARAMETERS = {
    "type": "object",
    "properties": {
        "task_description": {
            "type": "string",
            "description": "What the user wants to get done, in their own words.",
        },
        "min_confidence": {
            "type": "number",
            "description": "Minimum confidence (0-1) for a skill to be returned. Defaults to the configured threshold.",
        },
        "context": {
            "type": "object",
            "description": "Optional caller context; recorded in the skill_matches_found log event only.",
        },
    },
    "required": ["task_description"],
}

CHECK_CONFLICTS_PARAMETERS = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Name of the skill about to be created."},
        "description": {"type": "string", "description": "Its frontmatter description."},
        "tags": {"type": "array", "items": {"type": "string"}, "description": "Optional tags."},
        "overlap_threshold": {
            "type": "number",
            "description": "Overlap (0-1) at which an existing skill is reported. Defaults to 0.8.",
        },
    },
    "required": ["name", "description"],
}

ANALYZE_DESCRIPTION_PARAMETERS = {
    "type": "object",
    "properties": {
        "description": {"type": "string", "description": "Skill description to evaluate."},
        "intended_triggers": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Phrases the description is meant to be found by.",
        },
    },
    "required": ["description"],
}

VALIDATE_SKILL_PARAMETERS = {
    "type": "object",
    "properties": {
        "content": {"type": "string", "description": "Full SKILL.md text."},
        "path": {"type": "string", "description": "Path to a SKILL.md file (instead of content)."},
    },
    "required": [],
}

COUNT_TOKENS_PARAMETERS = {
    "type": "object",
    "properties": {
        "content": {"type": "string", "description": "Full SKILL.md text."},
        "path": {"type": "string", "description": "Path to a SKILL.md file (instead of content)."},
    },
    "required": [],
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

CREATE_SKILL_PARAMETERS = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Skill name; also the directory name under the skills directory."},
        "description": {"type": "string", "description": "When to use the skill. This is what matching reads."},
        "overview": {"type": "string", "description": "Short overview of the skill."},
        "prerequisites": {**_STRING_LIST, "description": "What must be in place first."},
        "steps": {**_STRING_LIST, "description": "Ordered steps."},
        "examples": {**_STRING_LIST, "description": "Examples, rendered as code blocks."},
        "error_handling": {"type": "string", "description": "What to do when a step fails."},
        "limitations": {"type": "string", "description": "What the skill does not cover."},
        "tags": {**_STRING_LIST, "description": "Optional tags."},
    },
    "required": ["name", "description"],
}

LIST_SKILLS_PARAMETERS = {
    "type": "object",
    "properties": {
        "search": {"type": "string", "description": "Only skills whose name or description contains this text."},
        "tags": {**_STRING_LIST, "description": "Only skills carrying at least one of these tags."},
        "include_deprecated": {"type": "boolean", "description": "Include deprecated skills. Defaults to false."},
    },
    "required": [],
}

GET_SKILL_PARAMETERS = {
    "type": "object",
    "properties": {
        "skill_id": {"type": "string", "description": "Skill id as returned by match_skill or list_skills."},
        "name": {"type": "string", "description": "Skill name (used when skill_id is not given)."},
    },
    "required": [],
}

# Skill names become directory names
_SKILL_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def _dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def _read_skill_source(content: str | None, path: str | None) -> str:
    """Return SKILL.md text given as content or read from path (exactly one of them)."""
    if content is not None and path is not None:
        raise ValueError("Provide either content or path, not both")
    if content is None and path is None:
        raise ValueError("Must provide content or path")
    if path is not None:
        try:
            content = Path(path).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ValueError(f"Could not read {path}: {e}") from e
    if not isinstance(content, str):
        raise ValueError("content must be a string")
    return content


def match_skill(
    task_description: str | None = None,
    min_confidence: float | None = None,
    context: dict[str, Any] | None = None,
) -> str:
    """Return skills matching the task, best first, plus the id of the best one."""
    args = {"task_description": task_description, "min_confidence": min_confidence}
    task = require_string(args, "task_description", max_length=MAX_TASK_DESCRIPTION_LENGTH)
    threshold = optional_unit_float(args, "min_confidence", MIN_MATCH_CONFIDENCE)
    if context is not None and not isinstance(context, dict):
        raise ValueError("context must be an object")

    skills = active_skills(load_skills())
    matches = match_skills(task, skills, threshold)
    best = matches[0] if matches else None
    log_skill_matches(
        logger,
        candidates=len(skills),
        matches=len(matches),
        best_match=best.name if best else None,
        min_confidence=threshold,
        context=context,
    )
    return _dumps({
        "matches": [to_dict(m) for m in matches],
        "best_match": best.skill_id if best else None,
        "high_confidence": bool(best and best.confidence >= HIGH_MATCH_CONFIDENCE),
    })


def check_skill_conflicts(
    name: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
    overlap_threshold: float | None = None,
) -> str:
    """Compare a skill about to be created against the existing ones."""
    args = {"name": name, "description": description, "tags": tags, "overlap_threshold": overlap_threshold}
    draft = SkillDraft(
        name=require_string(args, "name"),
        description=require_string(args, "description"),
        tags=optional_string_list(args, "tags"),
    )
    threshold = optional_unit_float(args, "overlap_threshold", CONFLICT_OVERLAP_THRESHOLD)

    conflicts = detect_conflicts(draft, active_skills(load_skills()), threshold)
    if conflicts:
        log_skill_conflicts(
            logger,
            skill_name=draft.name,
            conflicts=[c.existing_skill_name for c in conflicts],
            overlap_threshold=threshold,
        )
    return _dumps({
        "conflicts": [to_dict(c) for c in conflicts],
        "layer1_tokens": count_layer1_tokens(draft.name, draft.description),
    })


def analyze_description_tool(
    description: str | None = None,
    intended_triggers: list[str] | None = None,
) -> str:
    args = {"description": description, "intended_triggers": intended_triggers}
    if not isinstance(description, str):
        raise ValueError("description is required and must be a string")
    triggers = optional_string_list(args, "intended_triggers")
    return _dumps(to_dict(analyze_description(description, triggers or None)))


def validate_skill(content: str | None = None, path: str | None = None) -> str:
    """Validate SKILL.md given either as text or as a file path."""
    return _dumps(to_dict(validate_skill_markdown(_read_skill_source(content, path))))


def count_skill_tokens(content: str | None = None, path: str | None = None) -> str:
    text = require_string({"content": _read_skill_source(content, path)}, "content")
    doc = parse_skill_markdown(text)
    breakdown = token_breakdown(text, doc.frontmatter.name, doc.frontmatter.description)
    return _dumps(to_dict(breakdown))


def create_skill(
    name: str | None = None,
    description: str | None = None,
    overview: str | None = None,
    prerequisites: list[str] | None = None,
    steps: list[str] | None = None,
    examples: list[str] | None = None,
    error_handling: str | None = None,
    limitations: str | None = None,
    tags: list[str] | None = None,
) -> str:
    """Render a SKILL.md and write it under the skills directory.
    Refuses a name that is already taken; overlapping skills are reported, not blocked.
    """
    args = {
        "name": name,
        "description": description,
        "prerequisites": prerequisites,
        "steps": steps,
        "examples": examples,
        "tags": tags,
    }
    skill_name = require_string(args, "name").strip()
    if not _SKILL_NAME.match(skill_name):
        raise ValueError("name may only contain letters, digits, '.', '_' and '-'")
    skill_description = require_string(args, "description").strip()
    for key, value in (("overview", overview), ("error_handling", error_handling), ("limitations", limitations)):
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
    draft = SkillDraft(name=skill_name, description=skill_description, tags=optional_string_list(args, "tags"))

    existing = load_skills()
    if find_skill(existing, name=skill_name):
        raise ValueError(f"Skill already exists: {skill_name}")
    conflicts = detect_conflicts(draft, active_skills(existing), CONFLICT_OVERLAP_THRESHOLD)

    content = render_skill_markdown(
        skill_name,
        skill_description,
        overview=overview,
        prerequisites=optional_string_list(args, "prerequisites"),
        steps=optional_string_list(args, "steps"),
        examples=optional_string_list(args, "examples"),
        error_handling=error_handling,
        limitations=limitations,
        tags=draft.tags,
    )
    try:
        path = write_skill_file(skill_name, content)
    except FileExistsError as e:
        raise ValueError(f"Skill file already exists: {e.filename}") from e
    layer1 = count_layer1_tokens(skill_name, skill_description)
    layer2 = count_layer2_tokens(content)
    log_skill_created(
        logger,
        skill_name=skill_name,
        path=str(path),
        layer1_tokens=layer1,
        layer2_tokens=layer2,
        conflicts=[c.existing_skill_name for c in conflicts],
    )
    return _dumps({
        "skill_id": skill_id_for(path),
        "path": str(path),
        "created": True,
        "token_count": {"layer1": layer1, "layer2": layer2},
        "conflicts": [to_dict(c) for c in conflicts],
    })


def list_skills(
    search: str | None = None,
    tags: list[str] | None = None,
    include_deprecated: bool | None = None,
) -> str:
    """Layer 1 metadata of the skills on disk, optionally filtered by text and tags."""
    args = {"tags": tags}
    if search is not None and not isinstance(search, str):
        raise ValueError("search must be a string")
    if include_deprecated is not None and not isinstance(include_deprecated, bool):
        raise ValueError("include_deprecated must be a boolean")
    wanted_tags = {t.lower() for t in optional_string_list(args, "tags")}

    skills = load_skills()
    if not include_deprecated:
        skills = active_skills(skills)
    if search:
        needle = search.lower()
        skills = [s for s in skills if needle in s.name.lower() or needle in s.description.lower()]
    if wanted_tags:
        skills = [s for s in skills if wanted_tags & {t.lower() for t in s.tags}]
    return _dumps({"skills": [to_dict(s) for s in skills], "count": len(skills)})


def get_skill(skill_id: str | None = None, name: str | None = None) -> str:
    """Full SKILL.md content of one skill, by id or by name."""
    if not skill_id and not name:
        raise ValueError("Must provide skill_id or name")
    if skill_id is not None and not isinstance(skill_id, str):
        raise ValueError("skill_id must be a string")
    if name is not None and not isinstance(name, str):
        raise ValueError("name must be a string")
    skill = find_skill(load_skills(), skill_id=skill_id, name=name)
    if skill is None:
        raise ValueError(f"Skill not found: {skill_id or name}")
    try:
        content = Path(skill.path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not read {skill.path}: {e}") from e
    return _dumps({
        "skill_id": skill.id,
        "name": skill.name,
        "description": skill.description,
        "tags": skill.tags,
        "path": skill.path,
        "deprecated": not skill.is_active,
        "full_content": content,
        "token_counts": {"layer1": skill.token_count_layer1, "layer2": skill.token_count_layer2},
        "usage_count": skill.usage_count,
        "success_rate": skill.success_rate,
    })


def _register_skill_tools() -> None:
    tools = [
        make_tool(
            name="match_skill",
            description=(
                "Find skills that fit a task. Call this before starting work on a request to see whether "
                "a stored skill already describes how to do it. Returns matches with confidence and the reasons they matched."
            ),
            parameters=MATCH_SKILL_PARAMETERS,
            callable_fn=match_skill,
        ),
        make_tool(
            name="check_skill_conflicts",
            description=(
                "Check a new skill's name, description and tags against existing skills and report "
                "near-duplicates with a recommendation (update, merge, or differentiate)."
            ),
            parameters=CHECK_CONFLICTS_PARAMETERS,
            callable_fn=check_skill_conflicts,
        ),
        make_tool(
            name="analyze_description",
            description=(
                "Score a skill description for how well it will trigger matches and suggest improvements."
            ),
            parameters=ANALYZE_DESCRIPTION_PARAMETERS,
            callable_fn=analyze_description_tool,
        ),
        make_tool(
            name="validate_skill",
            description=(
                "Validate a SKILL.md: required frontmatter, recommended sections, token budgets per layer "
                "and description quality. Provide content or path."
            ),
            parameters=VALIDATE_SKILL_PARAMETERS,
            callable_fn=validate_skill,
        ),
        make_tool(
            name="count_skill_tokens",
            description="Estimate token counts per layer for a SKILL.md. Provide content or path.",
            parameters=COUNT_TOKENS_PARAMETERS,
            callable_fn=count_skill_tokens,
        ),
        make_tool(
            name="create_skill",
            description=(
                "Create a new skill: writes <skills dir>/<name>/SKILL.md from the given sections. "
                "Fails if the name is taken. Returns the id, path, token counts and any overlapping skills."
            ),
            parameters=CREATE_SKILL_PARAMETERS,
            callable_fn=create_skill,
        ),
        make_tool(
            name="list_skills",
            description="List skills (name, description, tags, token counts), optionally filtered by text or tags.",
            parameters=LIST_SKILLS_PARAMETERS,
            callable_fn=list_skills,
        ),
        make_tool(
            name="get_skill",
            description="Get the full SKILL.md content of a skill by id or name.",
            parameters=GET_SKILL_PARAMETERS,
            callable_fn=get_skill,
        ),
    ]
    for definition, fn in tools:
        register(definition, fn)


# Register on import so callers see the tools
_register_skill_tools()

"""SKILL.md documents: YAML frontmatter + Markdown body split into known sections."""
import re
from dataclasses import dataclass, field

import yaml

from skillwright.logging_utils import get_logger

logger = get_logger(__name__)

# Heading variants (case-insensitive, any level) that open each body section
SECTION_HEADINGS: dict[str, tuple[str, ...]] = {
    "overview": ("overview", "description", "about"),
    "prerequisites": ("prerequisites", "requirements", "dependencies"),
    "steps": ("steps", "procedure", "instructions", "execution"),
    "examples": ("examples", "usage", "use cases"),
    "error_handling": ("error handling", "errors", "troubleshooting", "error recovery"),
    "limitations": ("limitations", "limits", "constraints", "what this skill cannot do"),
}

_HEADING = re.compile(r"^#+\s*(.+?)\s*$")
_NUMBERED_ITEM = re.compile(r"^\d+\.\s+(.+)$", re.MULTILINE)
_BULLET_ITEM = re.compile(r"^[-*]\s+(.+)$", re.MULTILINE)
_CODE_BLOCK = re.compile(r"```\w*\n(.*?)```", re.DOTALL)


@dataclass
class SkillFrontmatter:
    name: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False


@dataclass
class SkillBody:
    raw_body: str = ""
    overview: str | None = None
    prerequisites: list[str] | None = None
    steps: list[str] | None = None
    examples: list[str] | None = None
    error_handling: str | None = None
    limitations: str | None = None


@dataclass
class SkillDocument:
    frontmatter: SkillFrontmatter
    body: SkillBody
    raw_content: str


def _split_frontmatter_and_body(content: str) -> tuple[dict, str]:
    """Split content into frontmatter dict and body. Returns ({}, content) if no valid frontmatter."""
    content = content.strip()
    if not content.startswith("---"):
        return {}, content
    parts = content.split("\n", 1)
    if len(parts) < 2:
        return {}, content
    rest = parts[1]
    idx = rest.find("\n---")
    if idx == -1:
        return {}, content
    yaml_block = rest[:idx].strip()
    body = rest[idx + 4 :].strip()
    try:
        meta = yaml.safe_load(yaml_block)
    except yaml.YAMLError as e:
        logger.warning("skill_frontmatter_parse_error", error=str(e))
        return {}, body
    if not isinstance(meta, dict):
        return {}, body
    return meta, body


def _parse_frontmatter(meta: dict) -> SkillFrontmatter:
    tags = meta.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list):
        tags = [tags]
    return SkillFrontmatter(
        name=str(meta.get("name") or ""),
        description=str(meta.get("description") or "").strip(),
        tags=[str(t) for t in tags],
        deprecated=bool(meta.get("deprecated", False)),
    )


def _split_sections(body: str) -> dict[str, str]:
    """Map each lowercased heading to the text under it (up to the next heading of any level)."""
    sections: dict[str, str] = {}
    heading: str | None = None
    lines: list[str] = []
    for line in body.splitlines():
        m = _HEADING.match(line)
        if m:
            if heading is not None and heading not in sections:
                sections[heading] = "\n".join(lines).strip()
            heading = m.group(1).lower()
            lines = []
        else:
            lines.append(line)
    if heading is not None and heading not in sections:
        sections[heading] = "\n".join(lines).strip()
    return sections


def _find_section(sections: dict[str, str], variants: tuple[str, ...]) -> str | None:
    for variant in variants:
        text = sections.get(variant)
        if text:
            return text
    return None


def _list_items(text: str) -> list[str]:
    """Numbered items, then bullet items; plain non-empty lines if there are neither."""
    items = [m.strip() for m in _NUMBERED_ITEM.findall(text)]
    items += [m.strip() for m in _BULLET_ITEM.findall(text)]
    if items:
        return items
    return [line.strip() for line in text.splitlines() if line.strip()]


def _parse_body(body: str) -> SkillBody:
    sections = _split_sections(body)
    parsed = SkillBody(raw_body=body)
    parsed.overview = _find_section(sections, SECTION_HEADINGS["overview"])
    prerequisites = _find_section(sections, SECTION_HEADINGS["prerequisites"])
    if prerequisites:
        parsed.prerequisites = _list_items(prerequisites)
    steps = _find_section(sections, SECTION_HEADINGS["steps"])
    if steps:
        parsed.steps = _list_items(steps)
    examples = _find_section(sections, SECTION_HEADINGS["examples"])
    if examples:
        blocks = [b.strip() for b in _CODE_BLOCK.findall(examples)]
        parsed.examples = blocks or [examples]
    parsed.error_handling = _find_section(sections, SECTION_HEADINGS["error_handling"])
    parsed.limitations = _find_section(sections, SECTION_HEADINGS["limitations"])
    return parsed


def parse_skill_markdown(content: str) -> SkillDocument:
    """Parse SKILL.md text. Missing or malformed frontmatter yields empty name/description."""
    meta, body = _split_frontmatter_and_body(content or "")
    return SkillDocument(
        frontmatter=_parse_frontmatter(meta),
        body=_parse_body(body),
        raw_content=content or "",
    )


def _needs_block_scalar(description: str) -> bool:
    """Plain YAML scalars cannot hold newlines, ': ', ' #' or a leading indicator character."""
    return (
        "\n" in description
        or ": " in description
        or " #" in description
        or (bool(description) and description[0] in "[]{}&*!|>'\"%@`-?,#:")
    )


def render_skill_markdown(
    name: str,
    description: str,
    *,
    overview: str | None = None,
    steps: list[str] | None = None,
    prerequisites: list[str] | None = None,
    examples: list[str] | None = None,
    error_handling: str | None = None,
    limitations: str | None = None,
    tags: list[str] | None = None,
) -> str:
    """Build SKILL.md text; parse_skill_markdown reads it back into the same fields."""
    lines = ["---", f"name: {name}"]
    if _needs_block_scalar(description):
        lines.append("description: |")
        lines.extend(f"  {line}" for line in description.split("\n"))
    else:
        lines.append(f"description: {description}")
    if tags:
        lines.append(f"tags: [{', '.join(tags)}]")
    lines += ["---", "", f"# {name}", ""]

    if overview:
        lines += ["## Overview", "", overview, ""]
    if prerequisites:
        lines += ["## Prerequisites", ""]
        lines += [f"- {p}" for p in prerequisites]
        lines.append("")
    if steps:
        lines += ["## Steps", ""]
        lines += [f"{i}. {s}" for i, s in enumerate(steps, start=1)]
        lines.append("")
    if examples:
        lines += ["## Examples", ""]
        for example in examples:
            lines += ["```", example, "```", ""]
    if error_handling:
        lines += ["## Error Handling", "", error_handling, ""]
    if limitations:
        lines += ["## Limitations", "", limitations, ""]
    return "\n".join(lines)

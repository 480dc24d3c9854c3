"""Skills: load SKILL.md files, match tasks to them, detect overlap, score descriptions."""
from skillwright.skills.analyzer import analyze_description
from skillwright.skills.conflicts import detect_conflicts
from skillwright.skills.document import SkillDocument, parse_skill_markdown, render_skill_markdown
from skillwright.skills.loader import load_skills
from skillwright.skills.matcher import match_skills
from skillwright.skills.models import (
    Conflict,
    DescriptionAnalysis,
    DisclosureCheck,
    Match,
    SkillDraft,
    SkillMetadata,
    TokenBreakdown,
    ValidationResult,
)
from skillwright.skills.text import extract_keywords, tokenize
from skillwright.skills.tokens import (
    check_progressive_disclosure,
    count_layer1_tokens,
    count_layer2_tokens,
    count_tokens,
    token_breakdown,
)
from skillwright.skills.validator import validate_skill_markdown

__all__ = [
    "Conflict",
    "DescriptionAnalysis",
    "DisclosureCheck",
    "Match",
    "SkillDocument",
    "SkillDraft",
    "SkillMetadata",
    "TokenBreakdown",
    "ValidationResult",
    "analyze_description",
    "check_progressive_disclosure",
    "count_layer1_tokens",
    "count_layer2_tokens",
    "count_tokens",
    "detect_conflicts",
    "extract_keywords",
    "load_skills",
    "match_skills",
    "parse_skill_markdown",
    "render_skill_markdown",
    "token_breakdown",
    "tokenize",
    "validate_skill_markdown",
]

"""Records shared by the matcher, conflict detector, analyzer and loader."""
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class SkillMetadata:
    """Layer 1 view of a skill: everything the matcher needs, never the full content."""

    id: str
    name: str
    description: str
    tags: list[str] = field(default_factory=list)
    token_count_layer1: int = 0
    token_count_layer2: int = 0
    usage_count: int = 0
    success_rate: float = 0.0
    created_at: float = 0.0
    deprecated_at: float | None = None
    # File the skill was loaded from; empty for skills built in memory
    path: str = ""

    @property
    def is_active(self) -> bool:
        return self.deprecated_at is None


@dataclass
class SkillDraft:
    """A skill that is about to be created; checked against existing skills for overlap."""

    name: str
    description: str
    tags: list[str] = field(default_factory=list)


@dataclass
class Match:
    skill_id: str
    name: str
    description: str
    confidence: float
    triggered_by: list[str] = field(default_factory=list)


@dataclass
class Conflict:
    existing_skill_id: str
    existing_skill_name: str
    overlap_score: float
    shared_keywords: list[str] = field(default_factory=list)
    shared_tags: list[str] = field(default_factory=list)
    recommendation: str = ""


@dataclass
class DescriptionAnalysis:
    clarity_score: float
    trigger_keywords: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    too_broad: bool = False
    too_narrow: bool = False


@dataclass
class DisclosureCheck:
    """Progressive disclosure result: one flag per layer plus the combined flag."""

    ok: bool
    layer1_ok: bool
    layer2_ok: bool
    warnings: list[str] = field(default_factory=list)


@dataclass
class TokenBreakdown:
    layer1: int
    layer2: int
    name: int
    description: int
    body: int
    total: int


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    layer1_tokens: int = 0
    layer2_tokens: int = 0
    progressive_disclosure_ok: bool = False
    description_analysis: DescriptionAnalysis | None = None


def to_dict(record: Any) -> dict[str, Any]:
    """Convert any of the records above (nested records included) to a plain dict."""
    return asdict(record)

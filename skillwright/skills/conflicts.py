"""Detect near-duplicate skills before a new one is created.

Unlike match confidence (a capped sum of bonuses), the overlap score is a weighted
average of four Jaccard similarities whose weights sum to 1.0.
"""
from typing import Iterable

from skillwright.skills.models import Conflict, SkillDraft, SkillMetadata
from skillwright.skills.text import extract_keywords, jaccard, tokenize, unique

DESCRIPTION_OVERLAP_WEIGHT = 0.4
KEYWORD_OVERLAP_WEIGHT = 0.3
TAG_OVERLAP_WEIGHT = 0.15
NAME_OVERLAP_WEIGHT = 0.15

DEFAULT_OVERLAP_THRESHOLD = 0.8
UPDATE_EXISTING_THRESHOLD = 0.95
MERGE_THRESHOLD = 0.9


class _Profile:
    """Token sets for one side of the comparison."""

    __slots__ = ("tokens", "keywords", "tags", "name_tokens")

    def __init__(self, skill: SkillDraft | SkillMetadata) -> None:
        self.tokens = tokenize(skill.description)
        self.keywords = extract_keywords(skill.description)
        self.tags = [t.lower() for t in skill.tags or []]
        self.name_tokens = tokenize(skill.name)


def overlap_score(new: _Profile, existing: _Profile) -> float:
    tag_overlap = jaccard(new.tags, existing.tags) if new.tags and existing.tags else 0.0
    return (
        jaccard(new.tokens, existing.tokens) * DESCRIPTION_OVERLAP_WEIGHT
        + jaccard(new.keywords, existing.keywords) * KEYWORD_OVERLAP_WEIGHT
        + tag_overlap * TAG_OVERLAP_WEIGHT
        + jaccard(new.name_tokens, existing.name_tokens) * NAME_OVERLAP_WEIGHT
    )


def recommend(score: float, existing_name: str) -> str:
    percent = round(score * 100)
    if score >= UPDATE_EXISTING_THRESHOLD:
        return (
            f'Very high overlap ({percent}%). Consider updating existing skill "{existing_name}" '
            "instead of creating a new one."
        )
    if score >= MERGE_THRESHOLD:
        return (
            f'High overlap ({percent}%). Consider merging with "{existing_name}" '
            "or differentiating the use cases more clearly."
        )
    return (
        f"Significant overlap ({percent}%). Ensure the skills have clearly distinct purposes "
        "to avoid matching ambiguity."
    )


def detect_conflicts(
    new_skill: SkillDraft | SkillMetadata,
    existing_skills: Iterable[SkillMetadata],
    overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD,
) -> list[Conflict]:
    """Return existing active skills whose overlap with new_skill reaches the threshold,
    highest overlap first (ties ordered by existing skill id).
    """
    threshold = max(0.0, min(1.0, overlap_threshold))
    new = _Profile(new_skill)
    conflicts: list[Conflict] = []
    for existing in existing_skills:
        if not existing.is_active:
            continue
        other = _Profile(existing)
        score = overlap_score(new, other)
        if score < threshold:
            continue
        existing_keywords, existing_tags = set(other.keywords), set(other.tags)
        conflicts.append(
            Conflict(
                existing_skill_id=existing.id,
                existing_skill_name=existing.name,
                overlap_score=round(score, 2),
                shared_keywords=unique(k for k in new.keywords if k in existing_keywords),
                shared_tags=unique(t for t in new.tags if t in existing_tags),
                recommendation=recommend(score, existing.name),
            )
        )
    conflicts.sort(key=lambda c: (-c.overlap_score, c.existing_skill_id))
    return conflicts

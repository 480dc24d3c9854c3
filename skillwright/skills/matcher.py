"""Match a task description to skills using name, description, keyword and tag signals.

Each signal adds a weighted bonus; the sum is capped at 1.0. Names dominate because a
task that mentions a skill by name almost always wants that skill.
"""
from typing import Iterable

from skillwright.skills.models import Match, SkillMetadata
from skillwright.skills.text import extract_keywords, jaccard, normalize, tokenize, unique

NAME_EXACT_WEIGHT = 0.4
NAME_ALL_TOKENS_WEIGHT = 0.3
NAME_PARTIAL_WEIGHT = 0.2
DESCRIPTION_WEIGHT = 0.3
KEYWORD_WEIGHT = 0.2
TAG_WEIGHT = 0.1

DEFAULT_MIN_CONFIDENCE = 0.3


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _contains_name(task: str, name: str) -> bool:
    # An empty string is a substring of everything; never count it as a name hit
    return bool(task) and bool(name) and name in task


def _name_score(task_description: str, task_tokens: list[str], skill: SkillMetadata) -> float:
    raw_task, raw_name = task_description.lower(), skill.name.lower()
    if _contains_name(normalize(task_description), normalize(skill.name)) or _contains_name(raw_task, raw_name):
        return NAME_EXACT_WEIGHT
    name_tokens = set(tokenize(skill.name))
    if not name_tokens:
        return 0.0
    found = len(name_tokens & set(task_tokens)) / len(name_tokens)
    if found == 1.0:
        return NAME_ALL_TOKENS_WEIGHT
    if found >= 0.5:
        return NAME_PARTIAL_WEIGHT * found
    return 0.0


def _keyword_score(task_keywords: list[str], description: str, tags: list[str]) -> float:
    """Fraction of task keywords appearing anywhere in the description or tags (substring)."""
    if not task_keywords:
        return 0.0
    tags_text = " ".join(tags)
    hits = sum(1 for k in task_keywords if k in description or k in tags_text)
    return hits / len(task_keywords)


def _tag_score(task_tokens: list[str], tags: list[str]) -> float:
    if not tags:
        return 0.0
    token_set = set(task_tokens)
    return sum(1 for t in tags if t in token_set) / len(tags)


def score_skill(
    task_description: str,
    task_tokens: list[str],
    task_keywords: list[str],
    skill: SkillMetadata,
) -> float:
    """Confidence in [0, 1] that skill fits the task."""
    description = skill.description.lower()
    tags = [t.lower() for t in skill.tags or []]
    score = _name_score(task_description, task_tokens, skill)
    score += jaccard(task_tokens, tokenize(description)) * DESCRIPTION_WEIGHT
    score += _keyword_score(task_keywords, description, tags) * KEYWORD_WEIGHT
    score += _tag_score(task_tokens, tags) * TAG_WEIGHT
    return min(1.0, score)


def find_triggers(task_tokens: list[str], task_keywords: list[str], skill: SkillMetadata) -> list[str]:
    """Human-readable reasons the skill matched, one per satisfied signal."""
    name = skill.name.lower()
    description = skill.description.lower()
    token_set = set(task_tokens)
    triggers: list[str] = []
    if any(t in name for t in task_tokens):
        triggers.append(f"name: {skill.name}")
    triggers.extend(f"keyword: {k}" for k in task_keywords if k in description)
    triggers.extend(f"tag: {t}" for t in (tag.lower() for tag in skill.tags or []) if t in token_set)
    return unique(triggers)


def match_skills(
    task_description: str,
    skills: Iterable[SkillMetadata],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> list[Match]:
    """Return matches at or above min_confidence (clamped to [0, 1]), best first.
    Deprecated skills are skipped. Equal confidences are ordered by skill id.
    """
    threshold = _clamp(min_confidence)
    task_description = task_description or ""
    task_tokens = tokenize(task_description)
    task_keywords = extract_keywords(task_description)
    matches: list[Match] = []
    for skill in skills:
        if not skill.is_active:
            continue
        confidence = score_skill(task_description, task_tokens, task_keywords, skill)
        if confidence < threshold:
            continue
        matches.append(
            Match(
                skill_id=skill.id,
                name=skill.name,
                description=skill.description,
                confidence=confidence,
                triggered_by=find_triggers(task_tokens, task_keywords, skill),
            )
        )
    matches.sort(key=lambda m: (-m.confidence, m.skill_id))
    return matches

"""Score how well a skill description will trigger matches, and suggest improvements."""
from skillwright.skills.models import DescriptionAnalysis
from skillwright.skills.text import extract_keywords

MIN_DESCRIPTION_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 500
NARROW_DESCRIPTION_LENGTH = 50

MIN_KEYWORDS = 3
RICH_KEYWORDS = 5

BASE_CLARITY = 0.5

ACTION_WORDS = ("use", "create", "build", "fix", "help", "manage", "handle", "process")
GENERIC_WORDS = ("anything", "everything", "all", "any", "general", "various")


def analyze_description(
    description: str,
    intended_triggers: list[str] | None = None,
) -> DescriptionAnalysis:
    """Clarity score in [0, 1] plus suggestions and broad/narrow flags.
    Word checks are plain substring checks on the lowercased description.
    """
    description = description or ""
    lowered = description.lower()
    keywords = extract_keywords(description)
    suggestions: list[str] = []
    score = BASE_CLARITY

    if len(description) < MIN_DESCRIPTION_LENGTH:
        score -= 0.2
        suggestions.append("Description is too short. Add more detail about when to use this skill.")
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        score -= 0.1
        suggestions.append("Description is too long. Consider being more concise.")
    else:
        score += 0.1

    if len(keywords) < MIN_KEYWORDS:
        score -= 0.1
        suggestions.append("Add more specific keywords to improve discoverability.")
    elif len(keywords) >= RICH_KEYWORDS:
        score += 0.2

    if any(w in lowered for w in ACTION_WORDS):
        score += 0.1
    else:
        suggestions.append("Consider adding action words (use, create, build, fix, etc.)")

    if intended_triggers:
        covered = [t for t in intended_triggers if t.lower() in lowered]
        coverage = len(covered) / len(intended_triggers)
        if coverage < 0.5:
            suggestions.append(
                f"Only {round(coverage * 100)}% of intended triggers are in the description"
            )
        score += coverage * 0.2

    too_broad = any(w in lowered for w in GENERIC_WORDS)
    too_narrow = len(keywords) < MIN_KEYWORDS and len(description) < NARROW_DESCRIPTION_LENGTH
    if too_broad:
        suggestions.append("Description may be too broad. Add specific use cases.")
    if too_narrow:
        suggestions.append("Description may be too narrow. Add related use cases.")

    return DescriptionAnalysis(
        clarity_score=max(0.0, min(1.0, score)),
        trigger_keywords=keywords,
        suggestions=suggestions,
        too_broad=too_broad,
        too_narrow=too_narrow,
    )

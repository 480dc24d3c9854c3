"""Validate a SKILL.md: required fields, recommended sections, token budgets, description quality."""
from skillwright.skills.analyzer import MAX_DESCRIPTION_LENGTH, MIN_DESCRIPTION_LENGTH, analyze_description
from skillwright.skills.document import SkillDocument, parse_skill_markdown
from skillwright.skills.models import ValidationResult
from skillwright.skills.tokens import check_progressive_disclosure, count_layer1_tokens, count_layer2_tokens


def check_structure(doc: SkillDocument) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) for the document's frontmatter and sections."""
    errors: list[str] = []
    warnings: list[str] = []
    description = doc.frontmatter.description
    if not doc.frontmatter.name:
        errors.append("Missing required field: name in frontmatter")
    if not description:
        errors.append("Missing required field: description in frontmatter")
    elif len(description) < MIN_DESCRIPTION_LENGTH:
        warnings.append(
            f"Description is too short ({len(description)} chars). "
            f"Recommended minimum: {MIN_DESCRIPTION_LENGTH}"
        )
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        warnings.append(
            f"Description is too long ({len(description)} chars). "
            f"Recommended maximum: {MAX_DESCRIPTION_LENGTH}"
        )
    if not doc.body.overview:
        warnings.append("Missing recommended section: Overview")
    if not doc.body.steps:
        warnings.append("Missing recommended section: Steps")
    if not doc.body.examples:
        warnings.append("Missing recommended section: Examples")
    return errors, warnings


def validate_skill_markdown(content: str) -> ValidationResult:
    doc = parse_skill_markdown(content)
    errors, warnings = check_structure(doc)
    layer1 = count_layer1_tokens(doc.frontmatter.name, doc.frontmatter.description)
    layer2 = count_layer2_tokens(content)
    disclosure = check_progressive_disclosure(layer1, layer2)
    return ValidationResult(
        valid=not errors and disclosure.ok,
        errors=errors,
        warnings=warnings + disclosure.warnings,
        layer1_tokens=layer1,
        layer2_tokens=layer2,
        progressive_disclosure_ok=disclosure.ok,
        description_analysis=analyze_description(doc.frontmatter.description),
    )

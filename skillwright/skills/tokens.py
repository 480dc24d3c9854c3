"""Token budget estimates for the two progressive disclosure layers.

No tokenizer is called: the count blends a character estimate (~4 chars per token)
with a word estimate (~1.3 tokens per word). Treat results as relative sizes.
"""
import math

from skillwright.skills.models import DisclosureCheck, TokenBreakdown

CHARS_PER_TOKEN = 4
TOKENS_PER_WORD = 1.3

# Structural YAML markers (--- delimiters, keys) around the layer 1 fields
LAYER1_OVERHEAD_TOKENS = 5

LAYER1_MAX_TOKENS = 100
LAYER2_MAX_TOKENS = 5000


def count_tokens(text: str) -> int:
    """Estimated token count; 0 for empty text."""
    if not text:
        return 0
    char_estimate = math.ceil(len(text) / CHARS_PER_TOKEN)
    word_estimate = math.ceil(len(text.split()) * TOKENS_PER_WORD)
    # Half-up rounding; round() would send 2.5 to 2
    return math.floor((char_estimate + word_estimate) / 2 + 0.5)


def count_layer1_tokens(name: str, description: str) -> int:
    """Layer 1 = name + description as they appear in the frontmatter."""
    return count_tokens(f"name: {name}\ndescription: {description}") + LAYER1_OVERHEAD_TOKENS


def count_layer2_tokens(full_content: str) -> int:
    """Layer 2 = the whole SKILL.md file."""
    return count_tokens(full_content)


def check_progressive_disclosure(layer1_tokens: int, layer2_tokens: int) -> DisclosureCheck:
    warnings: list[str] = []
    layer1_ok = layer1_tokens <= LAYER1_MAX_TOKENS
    layer2_ok = layer2_tokens <= LAYER2_MAX_TOKENS
    if not layer1_ok:
        warnings.append(
            f"Layer 1 (metadata) exceeds limit: {layer1_tokens} tokens > {LAYER1_MAX_TOKENS} max"
        )
    if not layer2_ok:
        warnings.append(
            f"Layer 2 (full content) exceeds limit: {layer2_tokens} tokens > {LAYER2_MAX_TOKENS} max"
        )
    return DisclosureCheck(
        ok=layer1_ok and layer2_ok,
        layer1_ok=layer1_ok,
        layer2_ok=layer2_ok,
        warnings=warnings,
    )


def token_breakdown(content: str, name: str, description: str) -> TokenBreakdown:
    """Per-part token counts for a skill; body is whatever layer 2 holds beyond layer 1."""
    layer1 = count_layer1_tokens(name, description)
    layer2 = count_layer2_tokens(content)
    return TokenBreakdown(
        layer1=layer1,
        layer2=layer2,
        name=count_tokens(name),
        description=count_tokens(description),
        body=max(0, layer2 - layer1),
        total=layer2,
    )

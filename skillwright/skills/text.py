"""Normalize and tokenize text into the token and keyword lists the scorers work on."""
import re

# Common English function words plus filler words that show up in task requests
STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "shall", "can", "this",
    "that", "these", "those", "it", "its", "i", "me", "my", "we", "our",
    "you", "your", "he", "him", "his", "she", "her", "they", "them", "their",
    "what", "which", "who", "when", "where", "why", "how", "all", "each",
    "every", "both", "few", "more", "most", "other", "some", "such", "no",
    "not", "only", "same", "so", "than", "too", "very", "just", "also",
    "need", "want", "like", "get", "make", "using", "use",
})

MIN_TOKEN_LENGTH = 3
MIN_KEYWORD_LENGTH = 4

_NON_WORD = re.compile(r"[^\w\s-]")


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation, split hyphenated terms, drop short words and stop-words.
    Order and duplicates are preserved.
    """
    text = _NON_WORD.sub(" ", (text or "").lower()).replace("-", " ")
    return [
        w for w in text.split()
        if len(w) >= MIN_TOKEN_LENGTH and w not in STOP_WORDS
    ]


def extract_keywords(text: str) -> list[str]:
    """Tokens long enough to count as keywords (stop-words already removed)."""
    return [t for t in tokenize(text) if len(t) >= MIN_KEYWORD_LENGTH]


def normalize(text: str) -> str:
    """Lowercase and treat hyphens/underscores as spaces so 'git-workflow' reads 'git workflow'."""
    text = (text or "").lower().replace("-", " ").replace("_", " ")
    return " ".join(text.split())


def jaccard(a, b) -> float:
    """|A & B| / |A | B| over the distinct items of a and b; 0.0 when either is empty."""
    set_a, set_b = set(a), set(b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def unique(items) -> list:
    """Drop repeats, keep first-seen order."""
    return list(dict.fromkeys(items))

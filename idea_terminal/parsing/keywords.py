"""Keyword extraction for idea submissions.

Keywords feed keyword clustering. They are intentionally noisy: a fixed
startup/tech vocabulary matched as substrings, followed by the first raw
word tokens of the text. The cluster size threshold filters the noise.
"""

import re

# Common startup/tech vocabulary, matched as substrings of the lowercased text
COMMON_KEYWORDS = [
    "ai", "artificial intelligence", "machine learning", "ml",
    "saas", "software as a service", "platform",
    "fintech", "financial technology", "payment", "banking",
    "healthtech", "healthcare", "health", "medical", "telehealth",
    "ecommerce", "marketplace", "retail",
    "education", "edtech", "learning",
    "real estate", "proptech",
    "food", "restaurant", "delivery",
    "transportation", "mobility", "logistics",
    "energy", "sustainability", "green",
    "pet", "animal", "veterinary",
    "fitness", "wellness", "sports",
]

MAX_RAW_TOKENS = 10

_TOKEN_RE = re.compile(r"\b\w{3,}\b", re.ASCII)


def extract_keywords(text: str) -> list[str]:
    """Extract deduplicated keywords from free text.

    Args:
        text: Title and description, usually already lowercased.

    Returns:
        Vocabulary hits first, then up to 10 raw tokens of 3+ characters,
        without duplicates and in order of first appearance.
    """
    if not text:
        return []

    lower_text = text.lower()
    keywords = [kw for kw in COMMON_KEYWORDS if kw in lower_text]
    keywords.extend(_TOKEN_RE.findall(text)[:MAX_RAW_TOKENS])

    # dict preserves insertion order
    return list(dict.fromkeys(keywords))

"""Headline normalization and similarity for news deduplication."""

import re

SOURCE_SEPARATOR = " - "

STOPWORDS = frozenset(
    ["the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"]
)

DEFAULT_SIMILARITY_THRESHOLD = 0.35

_STOPWORD_RE = re.compile(r"\b(?:" + "|".join(sorted(STOPWORDS)) + r")\b")
_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Reduce a headline to the words that identify the story.

    Lowercases, drops the trailing " - Publisher" part, removes stopwords and
    punctuation, and collapses whitespace.
    """
    text = title.lower().split(SOURCE_SEPARATOR)[0]
    text = _STOPWORD_RE.sub("", text)
    text = _PUNCTUATION_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def titles_similar(
    title1: str,
    title2: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> bool:
    """Whether two headlines most likely report the same story.

    True when one normalized title contains the other, or when the shared
    words exceed ``threshold`` of the larger word set.

    Note: the containment check matches any title against an empty or very
    short one, so short headlines can collapse together.
    """
    normalized1 = normalize_title(title1)
    normalized2 = normalize_title(title2)

    if normalized1 in normalized2 or normalized2 in normalized1:
        return True

    words1 = set(normalized1.split(" "))
    words2 = set(normalized2.split(" "))
    overlap = len(words1 & words2)
    return overlap / max(len(words1), len(words2)) > threshold


def extract_source_from_title(title: str) -> str:
    """Publisher name from a "Headline - Publisher" title, or ""."""
    parts = title.split(SOURCE_SEPARATOR)
    return parts[-1].strip() if len(parts) > 1 else ""

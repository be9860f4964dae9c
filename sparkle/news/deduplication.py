"""Deduplication and ordering of merged news feeds."""

import logging as std_logging
from collections.abc import Iterable
from datetime import datetime, timezone

import structlog

from sparkle.models.news import NewsItem
from sparkle.news.normalization import DEFAULT_SIMILARITY_THRESHOLD, titles_similar


def deduplicate_news(
    items: Iterable[NewsItem],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> tuple[list[NewsItem], int]:
    """Remove duplicate news items, keeping the first occurrence.

    Uses two strategies, in order:
    1. Exact link matching
    2. Headline similarity against every item already kept

    Feeds are merged in configured term order before calling this, so the
    earlier term wins when two feeds carry the same story.

    Args:
        items: News items in arrival order
        threshold: Word-overlap ratio above which two headlines match

    Returns:
        Tuple of (deduplicated items, count of duplicates removed)
    """
    seen_links: set[str] = set()
    unique_items: list[NewsItem] = []
    duplicates = 0

    for item in items:
        if item.link in seen_links:
            duplicates += 1
            continue

        if any(titles_similar(kept.title, item.title, threshold) for kept in unique_items):
            duplicates += 1
            continue

        seen_links.add(item.link)
        unique_items.append(item)

    if duplicates > 0:
        ctx = structlog.contextvars.get_contextvars()
        request_id = ctx.get("request_id", "unknown")
        std_logging.info(f"news_duplicates_removed - {duplicates} [request_id: {request_id}]")

    return unique_items, duplicates


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(item: NewsItem) -> datetime:
    published = item.published_at
    if published is None:
        return _OLDEST
    if published.tzinfo is None:
        return published.replace(tzinfo=timezone.utc)
    return published


def sort_by_recency(items: Iterable[NewsItem], limit: int | None = None) -> list[NewsItem]:
    """Most recent first; undated items go last. Truncated to ``limit``."""
    ordered = sorted(items, key=_sort_key, reverse=True)
    if limit is not None:
        return ordered[:limit]
    return ordered

"""News fetching, deduplication and caching."""

from sparkle.news.cache import NewsCache, NewsSnapshot
from sparkle.news.deduplication import deduplicate_news, sort_by_recency
from sparkle.news.normalization import extract_source_from_title, normalize_title, titles_similar
from sparkle.news.service import NewsService

__all__ = [
    "NewsCache",
    "NewsSnapshot",
    "NewsService",
    "deduplicate_news",
    "sort_by_recency",
    "normalize_title",
    "titles_similar",
    "extract_source_from_title",
]

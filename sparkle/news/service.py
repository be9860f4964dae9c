"""News listing service: fetch, merge, deduplicate and cache search feeds."""

import asyncio
from collections.abc import Sequence
from typing import Protocol

from sparkle.models.news import NewsItem, RawFeedItem
from sparkle.news.cache import NewsCache
from sparkle.news.deduplication import deduplicate_news, sort_by_recency
from sparkle.news.normalization import DEFAULT_SIMILARITY_THRESHOLD, extract_source_from_title
from sparkle.utils.exceptions import FeedFetchError, TotalRefreshFailure
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)


class FeedFetcher(Protocol):
    """Anything that can fetch the raw items of one search feed."""

    async def fetch_feed(self, term: str) -> list[RawFeedItem]: ...


def to_news_item(raw: RawFeedItem) -> NewsItem | None:
    """Convert a feed entry; entries without a link are unusable."""
    if not raw.link:
        return None
    return NewsItem(
        title=raw.title,
        link=raw.link,
        published_at=raw.published_at,
        source=raw.source_name or extract_source_from_title(raw.title),
        description=raw.summary,
    )


class NewsService:
    """Serves the latest deduplicated news, refreshing at most once per window.

    Refresh policy:
    - a fresh snapshot is returned without any fetch
    - a failing feed is skipped; the others still contribute
    - a refresh with no usable items keeps the previous snapshot
    - concurrent callers wait for the refresh already in flight
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        cache: NewsCache,
        search_terms: Sequence[str],
        max_items: int = 10,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        feed_timeout_seconds: float = 10.0,
    ):
        """Initialize news service.

        Args:
            fetcher: Feed client
            cache: Snapshot cache owned by this service
            search_terms: Search phrases; earlier terms win dedup ties
            max_items: Maximum items returned
            similarity_threshold: Headline overlap ratio for duplicates
            feed_timeout_seconds: Timeout per feed, in seconds
        """
        self.fetcher = fetcher
        self.cache = cache
        self.search_terms = list(search_terms)
        self.max_items = max_items
        self.similarity_threshold = similarity_threshold
        self.feed_timeout_seconds = feed_timeout_seconds
        self._refresh_lock = asyncio.Lock()

    async def get_news(self) -> list[NewsItem]:
        """Latest news, at most ``max_items``, most recent first.

        Never raises for feed problems: on total failure the previous snapshot
        is served, or an empty list if there never was one.
        """
        if self.cache.is_fresh():
            logger.debug("news_cache_hit", age_seconds=round(self.cache.age() or 0.0, 1))
            return self.cache.items()

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            if self.cache.is_fresh():
                return self.cache.items()

            try:
                return await self.refresh()
            except TotalRefreshFailure as e:
                logger.warning(
                    "news_refresh_failed",
                    terms=e.terms,
                    serving_stale=self.cache.is_populated,
                )
                return self.cache.items()

    async def refresh(self) -> list[NewsItem]:
        """Fetch every feed and replace the snapshot.

        Raises:
            TotalRefreshFailure: If no feed produced a usable item
        """
        results = await asyncio.gather(*(self._fetch_term(term) for term in self.search_terms))

        merged: list[NewsItem] = []
        failed_terms: list[str] = []
        for term, raw_items in zip(self.search_terms, results):
            if raw_items is None:
                failed_terms.append(term)
                continue
            merged.extend(item for item in map(to_news_item, raw_items) if item is not None)

        if not merged:
            raise TotalRefreshFailure(self.search_terms, details={"failed_terms": failed_terms})

        unique, duplicates = deduplicate_news(merged, self.similarity_threshold)
        items = sort_by_recency(unique, self.max_items)
        self.cache.replace(items)

        logger.info(
            "news_refreshed",
            fetched=len(merged),
            duplicates=duplicates,
            returned=len(items),
            failed_terms=failed_terms,
        )
        return items

    async def _fetch_term(self, term: str) -> list[RawFeedItem] | None:
        """Raw items for one term, or None if that feed failed."""
        try:
            return await asyncio.wait_for(
                self.fetcher.fetch_feed(term), timeout=self.feed_timeout_seconds
            )
        except FeedFetchError as e:
            logger.warning(
                "news_feed_failed",
                term=term,
                error=e.message,
                status_code=e.status_code,
            )
        except asyncio.TimeoutError:
            logger.warning("news_feed_timeout", term=term, timeout=self.feed_timeout_seconds)
        except Exception:
            logger.exception("news_feed_unexpected_error", term=term)
        return None

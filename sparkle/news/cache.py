"""In-process snapshot cache for the news listing."""

import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from sparkle.models.news import NewsItem


class Clock(Protocol):
    """Source of the current time in seconds."""

    def __call__(self) -> float: ...


@dataclass(frozen=True)
class NewsSnapshot:
    """Items from one successful refresh and when it completed."""

    items: tuple[NewsItem, ...]
    fetched_at: float


class NewsCache:
    """Holds the latest news snapshot and decides when it is stale.

    The snapshot is replaced as a whole, so readers always see either the old
    or the new list. There is no explicit invalidation; a snapshot lives until
    a refresh replaces it.
    """

    def __init__(self, freshness_seconds: float = 1800, clock: Clock = time.monotonic):
        """Initialize cache.

        Args:
            freshness_seconds: Maximum snapshot age before a refresh is due
            clock: Time source, injectable for tests
        """
        self.freshness_seconds = freshness_seconds
        self.clock = clock
        self._snapshot: NewsSnapshot | None = None

    @property
    def snapshot(self) -> NewsSnapshot | None:
        return self._snapshot

    @property
    def is_populated(self) -> bool:
        return self._snapshot is not None

    def age(self) -> float | None:
        """Seconds since the snapshot was taken, or None when empty."""
        if self._snapshot is None:
            return None
        return self.clock() - self._snapshot.fetched_at

    def is_fresh(self) -> bool:
        age = self.age()
        return age is not None and age < self.freshness_seconds

    def items(self) -> list[NewsItem]:
        """Items of the current snapshot, empty when nothing was cached yet."""
        if self._snapshot is None:
            return []
        return list(self._snapshot.items)

    def replace(self, items: Iterable[NewsItem]) -> NewsSnapshot:
        """Install a new snapshot stamped with the current time."""
        self._snapshot = NewsSnapshot(items=tuple(items), fetched_at=self.clock())
        return self._snapshot

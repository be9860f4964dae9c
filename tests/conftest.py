"""Pytest fixtures for testing."""

import os

# Keep tests off the on-disk catalog database; sparkle.main builds the app
# (and reads settings) at import time.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sparkle.config.settings import Settings
from sparkle.db.base import Base
from sparkle.db.models.catalog import Brand, CarbonationLevel, ModerationStatus, Product, Review
from sparkle.models.news import NewsItem, RawFeedItem
from sparkle.news.cache import NewsCache
from sparkle.news.service import NewsService
from sparkle.utils.exceptions import FeedFetchError

BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>"sparkling water" - Google News</title>
    <item>
      <title>Sparkling Water Sales Surge - Reuters</title>
      <link>https://news.example.com/articles/1</link>
      <pubDate>Mon, 02 Jun 2025 09:30:00 GMT</pubDate>
      <description>&lt;a href="https://news.example.com/articles/1"&gt;Sparkling water sales surge&lt;/a&gt;&amp;nbsp;&lt;font color="#6f6f6f"&gt;Reuters&lt;/font&gt;</description>
      <source url="https://www.reuters.com">Reuters</source>
    </item>
    <item>
      <title>New Seltzer Brand Launches Citrus Line - Food Dive</title>
      <link>https://news.example.com/articles/2</link>
      <pubDate>not a date</pubDate>
    </item>
  </channel>
</rss>
"""


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFeedFetcher:
    """Feed fetcher returning canned items per term, or failing for some terms."""

    def __init__(self, feeds: dict[str, list[RawFeedItem]] | None = None):
        self.feeds = feeds or {}
        self.failing: set[str] = set()
        self.calls: list[str] = []

    async def fetch_feed(self, term: str) -> list[RawFeedItem]:
        self.calls.append(term)
        if term in self.failing:
            raise FeedFetchError(f"feed for {term} unavailable", term=term, status_code=503)
        return list(self.feeds.get(term, []))

    def fail_all(self) -> None:
        self.failing = set(self.feeds)


def raw_item(
    title: str,
    link: str,
    hours_ago: float = 0,
    source_name: str | None = None,
) -> RawFeedItem:
    """Create a raw feed item published ``hours_ago`` before BASE_TIME."""
    return RawFeedItem(
        title=title,
        link=link,
        published_at=BASE_TIME - timedelta(hours=hours_ago),
        source_name=source_name,
    )


def news_item(title: str, link: str, hours_ago: float | None = 0) -> NewsItem:
    """Create a news item published ``hours_ago`` before BASE_TIME (None for undated)."""
    return NewsItem(
        title=title,
        link=link,
        published_at=None if hours_ago is None else BASE_TIME - timedelta(hours=hours_ago),
        source="Test Wire",
    )


SEARCH_TERMS = ["sparkling water", "mineral water", "seltzer water", "bubbly water"]


@pytest.fixture
def mock_settings():
    """Create settings for testing."""
    return Settings(
        database_url="sqlite:///:memory:",
        news_freshness_seconds=1800,
        news_max_items=10,
        debug=True,
    )


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def ten_item_feeds():
    """Four feeds carrying ten distinct stories between them."""
    topics = [
        "Seltzer startup raises funding round",
        "Mineral spring reopens after drought",
        "Bottled water tariffs hit importers",
        "Grocery chain expands private label fizz",
        "Study examines carbonation and digestion",
        "Canned cocktail makers court hard seltzer fans",
        "Recycling rules change for aluminum cans",
        "Luxury hotel bans plastic bottles",
        "Soda giant reports quarterly earnings",
        "Home carbonation gadgets sell out",
    ]
    feeds: dict[str, list[RawFeedItem]] = {term: [] for term in SEARCH_TERMS}
    for i, topic in enumerate(topics):
        term = SEARCH_TERMS[i % len(SEARCH_TERMS)]
        feeds[term].append(raw_item(f"{topic} - Outlet {i}", f"https://news.example.com/{i}", i))
    return feeds


@pytest.fixture
def fake_fetcher(ten_item_feeds):
    """Create a fake feed fetcher serving ten stories."""
    return FakeFeedFetcher(ten_item_feeds)


@pytest.fixture
def news_service(fake_fetcher, clock):
    """Create a news service over the fake fetcher and clock."""
    return NewsService(
        fetcher=fake_fetcher,
        cache=NewsCache(freshness_seconds=1800, clock=clock),
        search_terms=SEARCH_TERMS,
        max_items=10,
        feed_timeout_seconds=1.0,
    )


@pytest.fixture
def mock_news_service():
    """Create mock news service."""
    service = MagicMock(spec=NewsService)
    service.get_news = AsyncMock(return_value=[news_item("Seltzer sales rise", "https://x/1")])
    service.cache = NewsCache(freshness_seconds=1800)
    return service


@pytest_asyncio.fixture
async def db_session():
    """In-memory catalog database session."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


def _reviews(product: Product, ratings: list[int], **kwargs) -> list[Review]:
    return [
        Review(product=product, user_id=f"user-{product.slug}-{i}", overall_rating=rating, **kwargs)
        for i, rating in enumerate(ratings)
    ]


@pytest_asyncio.fixture
async def seeded_catalog(db_session):
    """Catalog with two brands, four products and a mix of moderated reviews.

    Counting ratings per product:
    - lime (strong):   [5, 5, 4, 5, 4, 5]        six rating-only reviews
    - grapefruit (medium): [4, 4, 4, 4, 4] + one approved 5 = six ratings
    - berry (light):   [5, 5, 5]                 too few for best_overall
    - plain (strong):  [3, 3, 3]; a pending 1 and a rejected 1 do not count
    """
    fizz = Brand(name="Fizz Co", slug="fizz-co")
    bubbl = Brand(name="Bubbl", slug="bubbl")

    lime = Product(brand=fizz, name="Lime", slug="lime", carbonation_level=CarbonationLevel.STRONG)
    grapefruit = Product(
        brand=fizz, name="Grapefruit", slug="grapefruit", carbonation_level=CarbonationLevel.MEDIUM
    )
    berry = Product(brand=bubbl, name="Berry", slug="berry", carbonation_level=CarbonationLevel.LIGHT)
    plain = Product(brand=bubbl, name="Plain", slug="plain", carbonation_level=CarbonationLevel.STRONG)
    retired = Product(
        brand=bubbl,
        name="Retired",
        slug="retired",
        carbonation_level=CarbonationLevel.MEDIUM,
        is_discontinued=True,
    )

    reviews = (
        _reviews(lime, [5, 5, 4, 5, 4, 5])
        + _reviews(grapefruit, [4, 4, 4, 4, 4])
        + _reviews(
            grapefruit,
            [5],
            review_text="Bright and tart",
            moderation_status=ModerationStatus.APPROVED,
        )
        + _reviews(berry, [5, 5, 5], review_text="  ")
        + _reviews(plain, [3, 3, 3])
        + _reviews(plain, [1], review_text="Flat, awful", moderation_status=ModerationStatus.PENDING)
        + _reviews(plain, [1], review_text="Spam", moderation_status=ModerationStatus.REJECTED)
        + _reviews(retired, [2, 2, 2, 2, 2])
    )

    db_session.add_all([fizz, bubbl, lime, grapefruit, berry, plain, retired, *reviews])
    await db_session.commit()

    return {
        "lime": lime,
        "grapefruit": grapefruit,
        "berry": berry,
        "plain": plain,
        "retired": retired,
    }

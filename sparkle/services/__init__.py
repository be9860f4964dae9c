"""External service clients and catalog services."""

from sparkle.services.base_client import BaseHTTPClient
from sparkle.services.catalog import CatalogService
from sparkle.services.news_feed import NewsFeedClient, parse_feed
from sparkle.services.ranking import RankingService

__all__ = [
    "BaseHTTPClient",
    "CatalogService",
    "NewsFeedClient",
    "RankingService",
    "parse_feed",
]

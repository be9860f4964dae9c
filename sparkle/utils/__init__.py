"""Utility modules."""

from sparkle.utils.exceptions import (
    ExternalServiceError,
    FeedFetchError,
    FeedParseError,
    InvalidRatingError,
    NotFoundError,
    SparkleError,
    TotalRefreshFailure,
    ValidationError,
)
from sparkle.utils.logging import get_logger, setup_logging

__all__ = [
    "SparkleError",
    "ValidationError",
    "InvalidRatingError",
    "NotFoundError",
    "ExternalServiceError",
    "FeedFetchError",
    "FeedParseError",
    "TotalRefreshFailure",
    "get_logger",
    "setup_logging",
]

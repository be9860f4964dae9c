"""Custom exceptions for the application."""


class SparkleError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(SparkleError):
    """Input validation errors."""

    def __init__(self, message: str, field: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.field = field


class InvalidRatingError(ValidationError):
    """A rating value is non-numeric or outside the rating scale."""

    def __init__(self, value: object, scale_min: float, scale_max: float, field: str | None = None):
        super().__init__(
            f"Invalid rating {value!r}: expected a number between {scale_min} and {scale_max}",
            field=field,
            details={"value": repr(value), "scale_min": scale_min, "scale_max": scale_max},
        )
        self.value = value


class NotFoundError(SparkleError):
    """Requested resource does not exist."""

    def __init__(self, message: str, resource: str, details: dict | None = None):
        super().__init__(message, details)
        self.resource = resource


class ExternalServiceError(SparkleError):
    """External service errors."""

    def __init__(
        self,
        message: str,
        service: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.service = service
        self.status_code = status_code


class FeedFetchError(ExternalServiceError):
    """A single news feed could not be fetched."""

    def __init__(
        self,
        message: str,
        term: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, service="news_feed", status_code=status_code, details=details)
        self.term = term


class FeedParseError(FeedFetchError):
    """A news feed document was malformed."""

    pass


class TotalRefreshFailure(SparkleError):
    """Every configured news feed failed during a refresh."""

    def __init__(self, terms: list[str], details: dict | None = None):
        super().__init__(f"All {len(terms)} news feeds failed", details)
        self.terms = terms

"""News search feed client (RSS)."""

from datetime import datetime

from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from lxml import etree

from sparkle.models.news import RawFeedItem
from sparkle.services.base_client import BaseHTTPClient
from sparkle.utils.exceptions import ExternalServiceError, FeedFetchError, FeedParseError
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)

SEARCH_ENDPOINT = "/rss/search"

# Locale parameters for the search endpoint
SEARCH_LOCALE = {"hl": "en-US", "gl": "US", "ceid": "US:en"}


def _text(element: etree._Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def _parse_date(value: str | None) -> datetime | None:
    """Parse an RFC 822 feed date; unparseable dates become None."""
    if not value:
        return None
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError):
        logger.debug("feed_date_unparseable", value=value)
        return None


def _strip_html(value: str | None) -> str | None:
    if not value:
        return None
    text = BeautifulSoup(value, "lxml").get_text(" ", strip=True)
    return text or None


def parse_feed(xml_text: str | bytes) -> list[RawFeedItem]:
    """Parse an RSS document into raw feed items.

    Args:
        xml_text: RSS 2.0 document

    Returns:
        Items in document order

    Raises:
        FeedParseError: If the document is not well-formed RSS
    """
    if isinstance(xml_text, str):
        xml_text = xml_text.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)
    try:
        root = etree.fromstring(xml_text, parser=parser)
    except etree.XMLSyntaxError as e:
        raise FeedParseError(f"Malformed feed document: {e}", details={"error": str(e)}) from e

    channel = root.find("channel")
    if root.tag != "rss" or channel is None:
        raise FeedParseError("Feed document is not RSS", details={"root": str(root.tag)})

    items = []
    for element in channel.iter("item"):
        items.append(
            RawFeedItem(
                title=_text(element, "title") or "",
                link=_text(element, "link"),
                published_at=_parse_date(_text(element, "pubDate")),
                source_name=_text(element, "source"),
                summary=_strip_html(_text(element, "description")),
            )
        )
    return items


class NewsFeedClient(BaseHTTPClient):
    """Client for a search-style RSS news endpoint."""

    def __init__(
        self,
        base_url: str = "https://news.google.com",
        timeout: float = 15.0,
        max_retries: int = 2,
    ):
        """Initialize news feed client.

        Args:
            base_url: Feed host base URL
            timeout: Request timeout
            max_retries: Maximum attempts per feed
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            service_name="news_feed",
        )

    def _get_headers(self) -> dict[str, str]:
        headers = super()._get_headers()
        headers["Accept"] = "application/rss+xml, application/xml;q=0.9, */*;q=0.8"
        return headers

    async def fetch_feed(self, term: str) -> list[RawFeedItem]:
        """Fetch and parse the search feed for one term.

        Raises:
            FeedFetchError: On network or HTTP failure
            FeedParseError: On a malformed document
        """
        try:
            body = await self.get_text(SEARCH_ENDPOINT, params={"q": term, **SEARCH_LOCALE})
        except ExternalServiceError as e:
            raise FeedFetchError(
                e.message, term=term, status_code=e.status_code, details=e.details
            ) from e

        try:
            items = parse_feed(body)
        except FeedParseError as e:
            e.term = term
            raise

        logger.debug("feed_fetched", term=term, items=len(items))
        return items


"""Base HTTP client with retry logic and error handling."""

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from sparkle.utils.exceptions import ExternalServiceError
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)


class BaseHTTPClient:
    """Base HTTP client with retry logic and error handling."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        max_retries: int = 2,
        service_name: str = "http_client",
    ):
        """Initialize the HTTP client.

        Args:
            base_url: Base URL for all requests
            timeout: Request timeout in seconds
            max_retries: Maximum attempts per request
            service_name: Name for logging and errors
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.service_name = service_name

        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> dict[str, str]:
        """Get default headers. Override in subclasses."""
        return {
            "Accept": "*/*",
            "User-Agent": "SparkleNews/1.0",
        }

    def _error(self, message: str, status_code: int | None = None, **details: Any) -> Exception:
        """Build the exception raised for a failed request."""
        return ExternalServiceError(
            message=message,
            service=self.service_name,
            status_code=status_code,
            details=details,
        )

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: Endpoint path (without base URL)
            params: Query parameters
            headers: Additional headers

        Returns:
            Successful HTTP response

        Raises:
            ExternalServiceError: On transport failure or error status
        """
        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        @retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type((httpx.TransportError, httpx.TimeoutException)),
            reraise=True,
        )
        async def _execute_request() -> httpx.Response:
            return await self.client.request(
                method=method,
                url=url,
                params=params,
                headers=request_headers,
            )

        try:
            response = await _execute_request()
        except httpx.TimeoutException as e:
            logger.error("request_timeout", service=self.service_name, url=url)
            raise self._error(
                f"Request timeout to {self.service_name}", url=url, error=str(e)
            ) from e
        except httpx.TransportError as e:
            logger.error("transport_error", service=self.service_name, url=url, error=str(e))
            raise self._error(
                f"Connection error to {self.service_name}", url=url, error=str(e)
            ) from e
        except httpx.HTTPError as e:
            # Redirect loops, undecodable bodies
            logger.error("request_failed", service=self.service_name, url=url, error=str(e))
            raise self._error(
                f"Request to {self.service_name} failed", url=url, error=str(e)
            ) from e

        if response.status_code >= 400:
            logger.error(
                "api_error_response",
                service=self.service_name,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise self._error(
                f"{self.service_name} error: {response.status_code}",
                status_code=response.status_code,
                response=response.text[:500],
            )

        return response

    async def get_text(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Make a GET request and return the body as text."""
        response = await self._request("GET", endpoint, params=params, headers=headers)
        return response.text


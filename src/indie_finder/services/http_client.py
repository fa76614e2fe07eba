"""HTTP client service for the upstream metadata API."""

from typing import Any

import httpx
import structlog

from .errors import UpstreamError
from .query_builder import redact

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Async HTTP client that performs exactly one attempt per request.

    Failures are reported as ``UpstreamError`` and never retried; callers
    decide what a failed upstream call means for their response.
    """

    def __init__(
        self,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds (None waits indefinitely)
            transport: Optional transport override, used by tests
        """
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "Indie-Game-Finder/0.1",
                "Accept": "application/json",
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            transport=transport,
        )

        log.info("HTTP client service initialized", timeout=timeout)

    async def get_json(self, url: str) -> Any:
        """Make a GET request and decode the JSON body.

        Args:
            url: The fully resolved URL to request

        Returns:
            The decoded JSON payload

        Raises:
            UpstreamError: If the request fails, the status is not 2xx,
                or the body is not valid JSON
        """
        safe_url = redact(url)
        log.debug("Making HTTP GET request", url=safe_url)

        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            log.warning(
                "HTTP GET request failed",
                url=safe_url,
                error=str(e),
                error_type=type(e).__name__
            )
            raise UpstreamError(
                "Unable to reach the metadata service",
                original_error=e,
                url=safe_url,
            ) from e

        if not response.is_success:
            log.warning(
                "HTTP GET request returned an error status",
                url=safe_url,
                status_code=response.status_code,
                reason=response.reason_phrase
            )
            raise UpstreamError(
                f"API Error: {response.status_code} {response.reason_phrase}",
                url=safe_url,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            log.warning("HTTP GET response is not valid JSON", url=safe_url, error=str(e))
            raise UpstreamError(
                "The metadata service returned an unreadable response",
                original_error=e,
                url=safe_url,
                status_code=response.status_code,
            ) from e

        log.debug(
            "HTTP GET request successful",
            url=safe_url,
            status_code=response.status_code,
            content_length=len(response.content)
        )
        return payload

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

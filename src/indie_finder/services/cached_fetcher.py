"""Cache-fronted access to the upstream metadata API."""

from typing import Any

import structlog

from .http_client import HttpClientService
from .query_builder import redact
from .response_cache import ResponseCache

log = structlog.stdlib.get_logger()


class CachedFetcher:
    """Resolves upstream URLs, reusing fresh cached payloads.

    A fresh entry is returned without any network I/O. On a miss (or a stale
    entry) the request is sent; a failure propagates as ``UpstreamError``
    and leaves the cache untouched, a success overwrites the entry.
    """

    def __init__(self, http_client: HttpClientService, cache: ResponseCache) -> None:
        self.http_client = http_client
        self.cache = cache

    async def resolve(self, url: str) -> Any:
        """Return the decoded payload for ``url``."""
        entry = self.cache.get(url)
        if entry is not None:
            log.debug("Cache hit", url=redact(url))
            return entry.payload

        log.debug("Cache miss", url=redact(url))
        payload = await self.http_client.get_json(url)
        self.cache.put(url, payload)
        return payload

"""Application context: owns the services and their lifecycle."""

from pathlib import Path

import httpx
import structlog

from .models import AppConfig
from .services.cached_fetcher import CachedFetcher
from .services.config import ConfigurationService
from .services.errors import ErrorHandlingService
from .services.game_catalog import GameCatalogService
from .services.http_client import HttpClientService
from .services.query_builder import RawgQueryBuilder
from .services.response_cache import ResponseCache

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services and state.

    The context is built once when the server starts, handed to every
    request handler, and closed when the server shuts down. Services are
    created lazily on first access.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        config_path: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the application context.

        Args:
            config: Explicit configuration (skips loading from disk)
            config_path: Path to configuration file
            transport: Optional HTTP transport for the upstream client
        """
        self._config: AppConfig | None = config
        self._config_path: Path | None = config_path
        self._transport = transport

        # Services (initialized lazily)
        self._config_service: ConfigurationService | None = None
        self._http_client: HttpClientService | None = None
        self._cache: ResponseCache | None = None
        self._fetcher: CachedFetcher | None = None
        self._query_builder: RawgQueryBuilder | None = None
        self._catalog: GameCatalogService | None = None
        self._error_service: ErrorHandlingService | None = None

    @property
    def config_service(self) -> ConfigurationService:
        """Get the configuration service (lazy initialization)."""
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Get the current application configuration."""
        if self._config is None:
            self._config = self.config_service.load_config()
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        """Get the HTTP client service (lazy initialization)."""
        if self._http_client is None:
            self._http_client = HttpClientService(
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._http_client

    @property
    def cache(self) -> ResponseCache:
        """Get the response cache (lazy initialization)."""
        if self._cache is None:
            self._cache = ResponseCache(
                ttl_seconds=self.config.cache_ttl_seconds,
                max_entries=self.config.cache_max_entries,
            )
        return self._cache

    @property
    def fetcher(self) -> CachedFetcher:
        if self._fetcher is None:
            self._fetcher = CachedFetcher(http_client=self.http_client, cache=self.cache)
        return self._fetcher

    @property
    def query_builder(self) -> RawgQueryBuilder:
        if self._query_builder is None:
            self._query_builder = RawgQueryBuilder(
                base_url=self.config.api_base_url,
                api_key=self.config.api_key,
                mandatory_genre=self.config.mandatory_genre,
            )
        return self._query_builder

    @property
    def catalog(self) -> GameCatalogService:
        """Get the game catalog service (lazy initialization)."""
        if self._catalog is None:
            self._catalog = GameCatalogService(
                fetcher=self.fetcher,
                query_builder=self.query_builder,
            )
        return self._catalog

    @property
    def error_service(self) -> ErrorHandlingService:
        if self._error_service is None:
            self._error_service = ErrorHandlingService()
        return self._error_service

    async def cleanup(self) -> None:
        """Clean up resources and close connections."""
        log.info("Cleaning up application resources")

        if self._cache is not None:
            self._cache.clear()

        if self._http_client is not None:
            await self._http_client.close()
            self._http_client = None
            self._fetcher = None
            self._catalog = None

        log.info("Application cleanup complete")

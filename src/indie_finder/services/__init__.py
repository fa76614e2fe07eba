"""Service layer for business logic and external integrations."""

from .cached_fetcher import CachedFetcher
from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NotFoundError,
    UpstreamError,
    UserFriendlyError,
    ValidationError,
)
from .game_catalog import GameCatalogService
from .http_client import HttpClientService
from .query_builder import RawgQueryBuilder, redact
from .random_picker import RANDOM_ORDERINGS, RANDOM_PAGES, RandomGamePicker
from .response_cache import ResponseCache
from .similar_games import SimilarGamesResolver

__all__ = [
    "AppError",
    "CachedFetcher",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "GameCatalogService",
    "HttpClientService",
    "NotFoundError",
    "RANDOM_ORDERINGS",
    "RANDOM_PAGES",
    "RandomGamePicker",
    "RawgQueryBuilder",
    "ResponseCache",
    "SimilarGamesResolver",
    "UpstreamError",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "redact",
]

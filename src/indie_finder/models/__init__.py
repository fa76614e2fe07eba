"""Data models for the Indie Game Finder application."""

from .cache import CacheEntry
from .config import AppConfig
from .filter import GameFilter, default_filter, with_mandatory_genre
from .game import GameDetail, GameListPage, GameSummary, GenreRef, PlatformRef

__all__ = [
    "AppConfig",
    "CacheEntry",
    "GameDetail",
    "GameFilter",
    "GameListPage",
    "GameSummary",
    "GenreRef",
    "PlatformRef",
    "default_filter",
    "with_mandatory_genre",
]

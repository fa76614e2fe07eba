"""Similar game lookup: same series first, shared genres as a fallback."""

from typing import Any

import structlog

from ..models import GameListPage
from .cached_fetcher import CachedFetcher
from .query_builder import RawgQueryBuilder

log = structlog.stdlib.get_logger()

# Fewer series entries than this triggers the genre fallback
MIN_SERIES_RESULTS = 3
MAX_EXTRA_GENRES = 2


class SimilarGamesResolver:
    """Finds games related to a given game."""

    def __init__(self, fetcher: CachedFetcher, query_builder: RawgQueryBuilder) -> None:
        self.fetcher = fetcher
        self.query_builder = query_builder

    async def resolve(self, game_id: int | str) -> GameListPage:
        """Return games related to ``game_id``.

        The series lookup is returned as-is when it has enough entries, or
        when the game has no genres to fall back on. Otherwise a genre query
        is issued and the game itself is removed from its results.
        """
        series = await self.fetcher.resolve(self.query_builder.game_series_url(game_id))
        if len(series.get("results") or []) >= MIN_SERIES_RESULTS:
            return series

        detail = await self.fetcher.resolve(self.query_builder.game_detail_url(game_id))
        genres = detail.get("genres") or []
        if not genres:
            log.debug("Game has no genres, keeping series lookup", game_id=game_id)
            return series

        genre_slugs = self.fallback_genres(genres, self.query_builder.mandatory_genre)
        log.info("Falling back to genre similarity", game_id=game_id, genres=genre_slugs)

        similar = await self.fetcher.resolve(self.query_builder.similar_games_url(genre_slugs))
        if similar.get("results") is None:
            return similar

        # Copy: the payload object is shared with the cache
        return {
            **similar,
            "results": [game for game in similar["results"] if not _is_same_game(game, game_id)],
        }

    @staticmethod
    def fallback_genres(genres: list[dict[str, Any]], mandatory_genre: str) -> list[str]:
        """Mandatory tag first, then up to two other distinct genre slugs in source order."""
        slugs = dict.fromkeys(genre.get("slug") for genre in genres)
        others = [slug for slug in slugs if slug and slug != mandatory_genre]
        return [mandatory_genre, *others[:MAX_EXTRA_GENRES]]


def _is_same_game(game: dict[str, Any], game_id: int | str) -> bool:
    requested = str(game_id)
    return str(game.get("id")) == requested or game.get("slug") == requested

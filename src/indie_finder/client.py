"""Async client for the game discovery API.

This is what a front end talks to. It owns the client-side half of the
mandatory genre rule: list and random requests always carry the tag in
their genre list, whatever the caller selected.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
import structlog

from .models import GameDetail, GameFilter, GameListPage, with_mandatory_genre
from .services.errors import UpstreamError

log = structlog.stdlib.get_logger()


def build_query_string(game_filter: GameFilter) -> str:
    """Encode a filter as the query string the API expects."""
    params: list[tuple[str, Any]] = []

    for genre in game_filter.genres or []:
        params.append(("genres", genre))

    if game_filter.min_rating is not None:
        params.append(("minRating", game_filter.min_rating))

    if game_filter.min_reviews is not None:
        params.append(("minReviews", game_filter.min_reviews))

    if game_filter.year_start is not None:
        params.append(("yearStart", game_filter.year_start))

    if game_filter.year_end is not None:
        params.append(("yearEnd", game_filter.year_end))

    for platform in game_filter.platforms or []:
        params.append(("platforms", platform))

    if game_filter.ordering is not None:
        params.append(("ordering", game_filter.ordering))

    if game_filter.search is not None:
        params.append(("search", game_filter.search))

    params.append(("page", game_filter.page))
    params.append(("page_size", game_filter.page_size))

    return urlencode(params)


class IndieFinderClient:
    """Client for the ``/api`` routes of an Indie Game Finder server."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        mandatory_genre: str = "indie",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.mandatory_genre = mandatory_genre
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def get_games(self, game_filter: GameFilter | None = None) -> GameListPage:
        game_filter = with_mandatory_genre(game_filter or GameFilter(), self.mandatory_genre)
        query = build_query_string(game_filter)
        return await self._get_json(f"/api/games?{query}", "Failed to fetch games")

    async def get_random_game(self, game_filter: GameFilter | None = None) -> GameDetail | None:
        """Ask for a random game; None when nothing matches the filter."""
        game_filter = with_mandatory_genre(game_filter or GameFilter(), self.mandatory_genre)
        query = build_query_string(game_filter)

        response = await self._client.get(f"/api/games/random?{query}")
        if response.status_code == 404:
            log.info("No random game matches the filter")
            return None
        return self._decode(response, "Failed to fetch random game")

    async def get_game(self, game_id: int | str) -> GameDetail:
        return await self._get_json(f"/api/games/{game_id}", "Failed to fetch game details")

    async def get_similar_games(self, game_id: int | str) -> GameListPage:
        return await self._get_json(f"/api/games/{game_id}/similar", "Failed to fetch similar games")

    async def get_genres(self) -> dict[str, Any]:
        return await self._get_json("/api/genres", "Failed to fetch genres")

    async def get_platforms(self) -> dict[str, Any]:
        return await self._get_json("/api/platforms", "Failed to fetch platforms")

    async def _get_json(self, path: str, failure_message: str) -> Any:
        response = await self._client.get(path)
        return self._decode(response, failure_message)

    @staticmethod
    def _decode(response: httpx.Response, failure_message: str) -> Any:
        if not response.is_success:
            raise UpstreamError(
                failure_message,
                url=str(response.request.url),
                status_code=response.status_code,
            )
        return response.json()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "IndieFinderClient":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()

"""Game catalog service: the operations exposed by the HTTP API."""

from typing import Any

from ..models import GameDetail, GameFilter, GameListPage
from .cached_fetcher import CachedFetcher
from .query_builder import RawgQueryBuilder
from .random_picker import RandomGamePicker
from .similar_games import SimilarGamesResolver


class GameCatalogService:
    """Facade over the query builder, the cached fetcher and the pickers."""

    def __init__(
        self,
        fetcher: CachedFetcher,
        query_builder: RawgQueryBuilder,
        random_picker: RandomGamePicker | None = None,
        similar_resolver: SimilarGamesResolver | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.query_builder = query_builder
        self.random_picker = random_picker or RandomGamePicker(fetcher, query_builder)
        self.similar_resolver = similar_resolver or SimilarGamesResolver(fetcher, query_builder)

    async def list_games(self, game_filter: GameFilter) -> GameListPage:
        return await self.fetcher.resolve(self.query_builder.games_url(game_filter))

    async def get_game(self, game_id: int | str) -> GameDetail:
        return await self.fetcher.resolve(self.query_builder.game_detail_url(game_id))

    async def random_game(self, game_filter: GameFilter) -> GameDetail:
        return await self.random_picker.pick(game_filter)

    async def similar_games(self, game_id: int | str) -> GameListPage:
        return await self.similar_resolver.resolve(game_id)

    async def list_genres(self) -> dict[str, Any]:
        return await self.fetcher.resolve(self.query_builder.genres_url())

    async def list_platforms(self) -> dict[str, Any]:
        return await self.fetcher.resolve(self.query_builder.platforms_url())

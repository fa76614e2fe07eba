"""Random game selection over a filtered game list."""

import random

import structlog

from ..models import GameDetail, GameFilter
from .cached_fetcher import CachedFetcher
from .errors import NotFoundError
from .query_builder import RawgQueryBuilder

log = structlog.stdlib.get_logger()

# RAWG has no random endpoint: a page is sampled from one of these orderings
RANDOM_ORDERINGS = (
    "-rating",
    "-released",
    "-added",
    "-created",
    "-updated",
    "-metacritic",
    "-name",
)
RANDOM_PAGES = (1, 2, 3, 4, 5)


class RandomGamePicker:
    """Picks one game matching a filter and resolves its full details.

    The pick is uniform over a single oversized page drawn from a random
    (ordering, page) pair, not over every game matching the filter.
    """

    def __init__(
        self,
        fetcher: CachedFetcher,
        query_builder: RawgQueryBuilder,
        rng: random.Random | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.query_builder = query_builder
        self._rng = rng or random.Random()

    async def pick(self, game_filter: GameFilter) -> GameDetail:
        """Return the details of a randomly chosen matching game.

        Raises:
            NotFoundError: If the sampled page holds no games
            UpstreamError: If either upstream call fails
        """
        ordering = self._rng.choice(RANDOM_ORDERINGS)
        page = self._rng.choice(RANDOM_PAGES)
        url = self.query_builder.random_games_url(game_filter, ordering, page)

        data = await self.fetcher.resolve(url)
        results = (data or {}).get("results") or []

        if not results:
            log.info("No random game candidates", ordering=ordering, page=page)
            raise NotFoundError(
                "No games found matching the criteria",
                criteria={"ordering": ordering, "page": page},
            )

        index = int(self._rng.random() * len(results))
        chosen = results[index]

        log.info(
            "Random game picked",
            game_id=chosen.get("id"),
            ordering=ordering,
            page=page,
            pool_size=len(results),
        )

        return await self.fetcher.resolve(self.query_builder.game_detail_url(chosen["id"]))

"""Translation of game filters into RAWG API URLs.

Everything here is a pure function of its inputs: no network access and no
caching. The URLs produced are also the cache keys, so the clause order is
stable for a given filter.
"""

import re
from urllib.parse import quote

from ..models import GameFilter
from ..models.filter import MAX_YEAR, MIN_YEAR

# Pool size requested when sampling a random game
RANDOM_POOL_PAGE_SIZE = 40
SIMILAR_GAMES_PAGE_SIZE = 6

# Proxy ordering used when a minimum review count is asked for;
# RAWG has no review-count filter
MOST_REVIEWED_ORDERING = "-ratings_count"

# RFC 2396 marks left unescaped in search terms
_URI_COMPONENT_SAFE = "!*'()"

_KEY_PARAM = re.compile(r"([?&]key=)[^&]*")


class RawgQueryBuilder:
    """Builds upstream URLs for the RAWG metadata API."""

    def __init__(self, base_url: str, api_key: str, mandatory_genre: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.mandatory_genre = mandatory_genre

    def games_url(self, game_filter: GameFilter) -> str:
        """URL of a filtered, paginated game list."""
        params = [
            ("key", self.api_key),
            ("genres", self.genre_clause(game_filter.genres)),
        ]

        if game_filter.min_rating is not None:
            params.append(("metacritic", self.rating_clause(game_filter.min_rating)))

        if game_filter.min_reviews is not None and not game_filter.ordering:
            params.append(("ordering", MOST_REVIEWED_ORDERING))

        dates = self.date_clause(game_filter.year_start, game_filter.year_end)
        if dates:
            params.append(("dates", dates))

        if game_filter.platforms:
            params.append(("parent_platforms", self.platform_clause(game_filter.platforms)))

        if game_filter.ordering:
            params.append(("ordering", game_filter.ordering))

        if game_filter.search:
            params.append(("search", quote(game_filter.search, safe=_URI_COMPONENT_SAFE)))

        params.append(("page", str(game_filter.page)))
        params.append(("page_size", str(game_filter.page_size)))

        return self._url("games", params)

    def random_games_url(self, game_filter: GameFilter, ordering: str, page: int) -> str:
        """URL of the oversized page a random game is sampled from.

        Only the genre, rating, date and platform parts of the filter apply;
        ordering and page are chosen by the caller.
        """
        params = [
            ("key", self.api_key),
            ("page_size", str(RANDOM_POOL_PAGE_SIZE)),
            ("genres", self.genre_clause(game_filter.genres)),
        ]

        if game_filter.min_rating is not None:
            params.append(("metacritic", self.rating_clause(game_filter.min_rating)))

        dates = self.date_clause(game_filter.year_start, game_filter.year_end)
        if dates:
            params.append(("dates", dates))

        if game_filter.platforms:
            params.append(("parent_platforms", self.platform_clause(game_filter.platforms)))

        params.append(("ordering", ordering))
        params.append(("page", str(page)))

        return self._url("games", params)

    def similar_games_url(self, genre_slugs: list[str]) -> str:
        """URL of a small genre-matched list, excluding DLC and other additions."""
        return self._url("games", [
            ("key", self.api_key),
            ("genres", ",".join(genre_slugs)),
            ("exclude_additions", "true"),
            ("page_size", str(SIMILAR_GAMES_PAGE_SIZE)),
        ])

    def game_detail_url(self, game_id: int | str) -> str:
        return self._url(f"games/{game_id}", [("key", self.api_key)])

    def game_series_url(self, game_id: int | str) -> str:
        return self._url(f"games/{game_id}/game-series", [("key", self.api_key)])

    def genres_url(self) -> str:
        return self._url("genres", [("key", self.api_key)])

    def platforms_url(self) -> str:
        return self._url("platforms/lists/parents", [("key", self.api_key)])

    def genre_clause(self, genres: list[str] | None) -> str:
        """Selected genres verbatim, or the mandatory tag when none are selected."""
        if genres:
            return ",".join(genres)
        return self.mandatory_genre

    @staticmethod
    def rating_clause(min_rating: int | float) -> str:
        return f"{_format_number(min_rating)},100"

    @staticmethod
    def date_clause(year_start: int | None, year_end: int | None) -> str | None:
        """Release date range; an open bound falls back to the supported year range."""
        if year_start and year_end:
            return f"{year_start}-01-01,{year_end}-12-31"
        if year_start:
            return f"{year_start}-01-01,{MAX_YEAR}-12-31"
        if year_end:
            return f"{MIN_YEAR}-01-01,{year_end}-12-31"
        return None

    @staticmethod
    def platform_clause(platforms: list[int]) -> str:
        return ",".join(str(platform) for platform in platforms)

    def _url(self, path: str, params: list[tuple[str, str]]) -> str:
        # Values are pre-formatted; commas in ranges and lists must stay literal
        query = "&".join(f"{name}={value}" for name, value in params)
        return f"{self.base_url}/{path}?{query}"


def redact(url: str) -> str:
    """Hide the API key of an upstream URL so it can be logged."""
    return _KEY_PARAM.sub(r"\1***", url)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

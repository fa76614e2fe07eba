"""Game-related payload shapes.

These mirror what the RAWG API returns. They are only used for typing:
payloads are passed through to callers exactly as received.
"""

from typing import TypedDict


class GenreRef(TypedDict):
    id: int
    name: str
    slug: str


class PlatformRef(TypedDict):
    id: int
    name: str
    slug: str


class PlatformAssociation(TypedDict):
    platform: PlatformRef


class GameSummary(TypedDict, total=False):
    id: int
    name: str
    slug: str
    background_image: str | None
    released: str | None
    metacritic: int | None
    rating: float | None
    ratings_count: int
    genres: list[GenreRef]
    platforms: list[PlatformAssociation] | None
    parent_platforms: list[PlatformAssociation] | None


class GameDetail(GameSummary, total=False):
    description: str | None
    description_raw: str | None
    developers: list[GenreRef] | None
    publishers: list[GenreRef] | None


class GameListPage(TypedDict, total=False):
    count: int
    next: str | None
    previous: str | None
    results: list[GameSummary]

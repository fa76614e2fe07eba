"""Game filter data models."""

from dataclasses import dataclass, replace
from datetime import date

MIN_YEAR = 1980
MAX_YEAR = 2030
MAX_PAGE_SIZE = 40
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class GameFilter:
    """Filter applied to a game list query."""
    genres: list[str] | None = None
    min_rating: int | float | None = None  # 0-100 critic score
    min_reviews: int | None = None
    year_start: int | None = None
    year_end: int | None = None
    platforms: list[int] | None = None  # Parent platform ids
    ordering: str | None = None
    search: str | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def constraint_violations(self) -> list[str]:
        """Return a description of every range constraint this filter breaks."""
        errors = []

        if self.min_rating is not None and not 0 <= self.min_rating <= 100:
            errors.append("minRating must be between 0 and 100")

        if self.min_reviews is not None and self.min_reviews < 0:
            errors.append("minReviews must be a non-negative number")

        # No ordering is enforced between the two bounds
        for name, year in (("yearStart", self.year_start), ("yearEnd", self.year_end)):
            if year is not None and not MIN_YEAR <= year <= MAX_YEAR:
                errors.append(f"{name} must be between {MIN_YEAR} and {MAX_YEAR}")

        if self.page < 1:
            errors.append("page must be at least 1")

        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            errors.append(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

        return errors


def with_mandatory_genre(game_filter: GameFilter, mandatory_genre: str) -> GameFilter:
    """Return a copy of the filter whose genres include the mandatory tag.

    This is the client-side default: the tag is appended to whatever the
    user selected. The server applies its own, separate fallback only when
    no genres are sent at all.
    """
    genres = list(game_filter.genres or [])
    if mandatory_genre not in genres:
        genres.append(mandatory_genre)
    return replace(game_filter, genres=genres)


def default_filter(mandatory_genre: str, today: date | None = None) -> GameFilter:
    """Initial filter state shown to a new visitor."""
    today = today or date.today()
    return GameFilter(
        genres=[mandatory_genre],
        min_rating=0,
        min_reviews=0,
        year_start=2000,
        year_end=today.year,
        page=1,
    )

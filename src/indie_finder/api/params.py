"""Parsing of inbound query parameters into game filters."""

import math

from fastapi.datastructures import QueryParams

from ..models import GameFilter
from ..models.filter import DEFAULT_PAGE_SIZE
from ..services.errors import ValidationError


def parse_filter(params: QueryParams, list_options: bool = True) -> GameFilter:
    """Build a validated ``GameFilter`` from request query parameters.

    Repeated ``genres``/``platforms`` parameters (or their ``[]`` spellings)
    form lists; blank values count as absent. With ``list_options`` off, the
    ordering, search and pagination parameters are ignored entirely.

    Raises:
        ValidationError: If a value is not a number or is out of range
    """
    platforms = [_whole_number(value, "platforms") for value in _values(params, "platforms")]

    fields = {
        "genres": _values(params, "genres") or None,
        "min_rating": _number(params.get("minRating"), "minRating"),
        "min_reviews": _number(params.get("minReviews"), "minReviews"),
        "year_start": _optional_whole_number(params.get("yearStart"), "yearStart"),
        "year_end": _optional_whole_number(params.get("yearEnd"), "yearEnd"),
        "platforms": platforms or None,
    }

    if list_options:
        page = _optional_whole_number(params.get("page"), "page")
        page_size = _optional_whole_number(params.get("page_size"), "page_size")
        fields.update(
            ordering=params.get("ordering") or None,
            search=params.get("search") or None,
            page=1 if page is None else page,
            page_size=DEFAULT_PAGE_SIZE if page_size is None else page_size,
        )

    game_filter = GameFilter(**fields)
    violations = game_filter.constraint_violations()
    if violations:
        raise ValidationError(
            "Invalid filter parameters",
            value=str(params),
            constraints=violations,
        )

    return game_filter


def _values(params: QueryParams, name: str) -> list[str]:
    raw = params.getlist(name) + params.getlist(f"{name}[]")
    return [value for value in (item.strip() for item in raw) if value]


def _number(raw: str | None, name: str) -> int | float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number", field=name, value=raw) from None
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number", field=name, value=raw)
    return int(value) if value.is_integer() else value


def _optional_whole_number(raw: str | None, name: str) -> int | None:
    if raw is None or not raw.strip():
        return None
    return _whole_number(raw, name)


def _whole_number(raw: str, name: str) -> int:
    value = _number(raw, name)
    if not isinstance(value, int):
        raise ValidationError(f"{name} must be a whole number", field=name, value=raw)
    return value

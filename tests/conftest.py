"""Shared fixtures: a fake RAWG upstream served through httpx.MockTransport."""

from typing import Any

import httpx
import pytest

from indie_finder.context import ApplicationContext
from indie_finder.models import AppConfig

BASE_URL = "https://rawg.test/api"
API_KEY = "test-key"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Canned RAWG responses keyed by request path, recording every request."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.routes[f"/api/{path.lstrip('/')}"] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, payload = self.routes.get(request.url.path, (404, {"detail": "Not found."}))
        return httpx.Response(status_code, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == f"/api/{path.lstrip('/')}"]


def make_game(game_id: int, name: str | None = None, genres: list[str] | None = None) -> dict[str, Any]:
    """Minimal RAWG game payload."""
    return {
        "id": game_id,
        "name": name or f"Game {game_id}",
        "slug": f"game-{game_id}",
        "background_image": None,
        "released": "2018-05-01",
        "metacritic": 80,
        "rating": 4.2,
        "ratings_count": 120,
        "genres": [
            {"id": index, "name": slug.title(), "slug": slug}
            for index, slug in enumerate(genres or ["indie"], start=1)
        ],
    }


def make_page(games: list[dict[str, Any]]) -> dict[str, Any]:
    return {"count": len(games), "next": None, "previous": None, "results": games}


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(api_base_url=BASE_URL, api_key=API_KEY)


@pytest.fixture
def app_context(app_config: AppConfig, upstream: FakeUpstream) -> ApplicationContext:
    return ApplicationContext(config=app_config, transport=upstream.transport)

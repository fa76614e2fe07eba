"""Tests for the async API client."""

import httpx
import pytest

from indie_finder.api import create_app
from indie_finder.client import IndieFinderClient, build_query_string
from indie_finder.context import ApplicationContext
from indie_finder.models import GameFilter
from indie_finder.services.errors import UpstreamError

from conftest import FakeUpstream, make_game, make_page


class RecordingServer:
    """Stands in for the API server, answering every path with one response."""

    def __init__(self, status_code: int = 200, payload: object = None) -> None:
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> IndieFinderClient:
        return IndieFinderClient(base_url="http://finder.test", transport=httpx.MockTransport(self.handler))


def test_query_string_repeats_list_parameters() -> None:
    query = build_query_string(GameFilter(genres=["indie", "rpg"], platforms=[1, 7], min_rating=70))

    assert query == "genres=indie&genres=rpg&minRating=70&platforms=1&platforms=7&page=1&page_size=20"


def test_query_string_encodes_search() -> None:
    query = build_query_string(GameFilter(search="a & b"))

    assert "search=a+%26+b" in query


@pytest.mark.asyncio
async def test_random_game_always_carries_mandatory_genre() -> None:
    server = RecordingServer(payload=make_game(3))

    async with server.client() as client:
        game = await client.get_random_game(GameFilter(genres=["action"]))

    assert game == make_game(3)
    request = server.requests[0]
    assert request.url.path == "/api/games/random"
    assert request.url.params.get_list("genres") == ["action", "indie"]


@pytest.mark.asyncio
async def test_random_game_not_found_returns_none() -> None:
    server = RecordingServer(status_code=404, payload={"message": "No games found matching the criteria"})

    async with server.client() as client:
        assert await client.get_random_game() is None


@pytest.mark.asyncio
async def test_game_list_carries_mandatory_genre() -> None:
    server = RecordingServer(payload=make_page([]))

    async with server.client() as client:
        await client.get_games(GameFilter(genres=["action"], page=3))
        await client.get_games(GameFilter(genres=["indie", "rpg"]))
        await client.get_games()

    assert [request.url.params.get_list("genres") for request in server.requests] == [
        ["action", "indie"],
        ["indie", "rpg"],
        ["indie"],
    ]
    assert server.requests[0].url.params["page"] == "3"


@pytest.mark.asyncio
async def test_resource_paths() -> None:
    server = RecordingServer()

    async with server.client() as client:
        await client.get_game(12)
        await client.get_similar_games("12")
        await client.get_genres()
        await client.get_platforms()

    assert [request.url.path for request in server.requests] == [
        "/api/games/12",
        "/api/games/12/similar",
        "/api/genres",
        "/api/platforms",
    ]


@pytest.mark.asyncio
async def test_server_error_raises_upstream_error() -> None:
    server = RecordingServer(status_code=500, payload={"message": "Failed to fetch genres"})

    async with server.client() as client:
        with pytest.raises(UpstreamError) as exc_info:
            await client.get_genres()

    assert exc_info.value.message == "Failed to fetch genres"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_client_against_app(app_context: ApplicationContext, upstream: FakeUpstream) -> None:
    upstream.add("games", make_page([make_game(5)]))
    app = create_app(app_context)
    # ASGITransport does not run the lifespan
    app.state.context = app_context

    client = IndieFinderClient(base_url="http://finder.test", transport=httpx.ASGITransport(app=app))
    try:
        page = await client.get_games(GameFilter(genres=["indie", "puzzle"], year_start=2012))
    finally:
        await client.close()
        await app_context.cleanup()

    assert page["results"][0]["id"] == 5
    params = upstream.requests[0].url.params
    assert params["genres"] == "indie,puzzle"
    assert params["dates"] == "2012-01-01,2030-12-31"

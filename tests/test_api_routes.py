"""Tests for the HTTP routes of the discovery API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from indie_finder.api import create_app
from indie_finder.context import ApplicationContext
from indie_finder.models import AppConfig

from conftest import API_KEY, BASE_URL, FakeUpstream, make_game, make_page


@pytest.fixture
def client(app_context: ApplicationContext) -> Iterator[TestClient]:
    with TestClient(create_app(app_context)) as test_client:
        yield test_client


class TestGameList:
    """Tests for GET /api/games."""

    def test_returns_upstream_payload(self, client: TestClient, upstream: FakeUpstream) -> None:
        page = make_page([make_game(1), make_game(2)])
        upstream.add("games", page)

        response = client.get("/api/games", params={"genres": "action", "yearStart": "2015", "page": "2"})

        assert response.status_code == 200
        assert response.json() == page
        params = upstream.requests[0].url.params
        assert params["key"] == API_KEY
        assert params["genres"] == "action"
        assert params["dates"] == "2015-01-01,2030-12-31"
        assert params["page"] == "2"

    def test_bracketed_list_parameters(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([]))

        response = client.get("/api/games?genres[]=action&genres[]=puzzle&platforms[]=1&platforms[]=7")

        assert response.status_code == 200
        params = upstream.requests[0].url.params
        assert params["genres"] == "action,puzzle"
        assert params["parent_platforms"] == "1,7"

    def test_no_genres_falls_back_to_mandatory_tag(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([]))

        client.get("/api/games")

        assert upstream.requests[0].url.params["genres"] == "indie"

    def test_repeated_request_is_served_from_cache(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([make_game(1)]))

        first = client.get("/api/games", params={"genres": "rpg"})
        second = client.get("/api/games", params={"genres": "rpg"})

        assert first.json() == second.json()
        assert len(upstream.requests) == 1

    def test_upstream_failure_is_a_static_500(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", {"error": "The API key is invalid"}, status_code=401)

        response = client.get("/api/games")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch games"}

    def test_invalid_filter_is_a_500_by_default(self, client: TestClient, upstream: FakeUpstream) -> None:
        response = client.get("/api/games", params={"minRating": "lots"})

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch games"}
        assert upstream.requests == []

    def test_invalid_filter_can_be_a_400(self, upstream: FakeUpstream) -> None:
        config = AppConfig(api_base_url=BASE_URL, api_key=API_KEY, validation_errors_as_client_errors=True)
        context = ApplicationContext(config=config, transport=upstream.transport)

        with TestClient(create_app(context)) as client:
            response = client.get("/api/games", params={"yearStart": "1900"})

        assert response.status_code == 400
        assert response.json() == {"message": "Failed to fetch games"}


class TestRandomGame:
    """Tests for GET /api/games/random."""

    def test_returns_game_detail(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([make_game(77)]))
        upstream.add("games/77", {**make_game(77), "description": "Only candidate"})

        response = client.get("/api/games/random", params={"genres": "indie", "minRating": "60"})

        assert response.status_code == 200
        assert response.json()["description"] == "Only candidate"
        list_params = upstream.calls_to("games")[0].url.params
        assert list_params["page_size"] == "40"
        assert list_params["metacritic"] == "60,100"

    def test_list_options_are_ignored(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([make_game(77)]))
        upstream.add("games/77", make_game(77))

        client.get("/api/games/random", params={"search": "cave", "page": "9", "page_size": "3"})

        list_params = upstream.calls_to("games")[0].url.params
        assert "search" not in list_params
        assert list_params["page_size"] == "40"
        assert int(list_params["page"]) <= 5

    def test_empty_pool_is_a_404(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", make_page([]))

        response = client.get("/api/games/random")

        assert response.status_code == 404
        assert response.json() == {"message": "No games found matching the criteria"}

    def test_upstream_failure_is_a_500(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games", {}, status_code=502)

        response = client.get("/api/games/random")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to get random game"}


class TestGameResources:
    """Tests for the per-game and reference data routes."""

    def test_game_detail(self, client: TestClient, upstream: FakeUpstream) -> None:
        upstream.add("games/42", make_game(42))

        response = client.get("/api/games/42")

        assert response.status_code == 200
        assert response.json()["id"] == 42

    def test_unknown_game_is_a_500(self, client: TestClient, upstream: FakeUpstream) -> None:
        response = client.get("/api/games/999999")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch game details"}

    def test_similar_games(self, client: TestClient, upstream: FakeUpstream) -> None:
        series = make_page([make_game(2), make_game(3), make_game(4)])
        upstream.add("games/1/game-series", series)

        response = client.get("/api/games/1/similar")

        assert response.status_code == 200
        assert response.json() == series

    def test_similar_games_failure(self, client: TestClient, upstream: FakeUpstream) -> None:
        response = client.get("/api/games/1/similar")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch similar games"}

    def test_genres(self, client: TestClient, upstream: FakeUpstream) -> None:
        genres = {"count": 1, "results": [{"id": 51, "name": "Indie", "slug": "indie"}]}
        upstream.add("genres", genres)

        response = client.get("/api/genres")

        assert response.json() == genres

    def test_platforms(self, client: TestClient, upstream: FakeUpstream) -> None:
        platforms = {"count": 1, "results": [{"id": 1, "name": "PC", "slug": "pc"}]}
        upstream.add("platforms/lists/parents", platforms)

        response = client.get("/api/platforms")

        assert response.json() == platforms

    def test_reference_data_failures(self, client: TestClient, upstream: FakeUpstream) -> None:
        assert client.get("/api/genres").json() == {"message": "Failed to fetch genres"}
        assert client.get("/api/platforms").json() == {"message": "Failed to fetch platforms"}


def test_health_reports_cache_and_errors(client: TestClient, upstream: FakeUpstream) -> None:
    upstream.add("genres", {"results": []})
    client.get("/api/genres")
    client.get("/api/platforms")

    response = client.get("/health")

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "ok"
    assert body["cache"]["total_entries"] == 1
    assert body["cache"]["misses"] == 2
    assert body["errors"] == {"upstream": 1}

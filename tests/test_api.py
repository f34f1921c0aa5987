"""Tests for the HTTP endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from manaforge.config import settings
from manaforge.main import app

MONO_DECK = {
    "size": 40,
    "categories": [{"kind": "land", "colors": "R", "count": 17}],
}

TINY_DECK = {
    "size": 4,
    "categories": [{"kind": "land", "colors": "G", "count": 2}],
}


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestHandEndpoints:
    async def test_count(self, client: AsyncClient) -> None:
        response = await client.post("/hands/count", json={"deck": MONO_DECK, "hand_size": 7})

        assert response.status_code == 200
        data = response.json()
        assert data == {"deck_size": 40, "hand_size": 7, "distinct_hands": 8}

    async def test_count_defaults_hand_size(self, client: AsyncClient) -> None:
        response = await client.post("/hands/count", json={"deck": MONO_DECK})

        assert response.json()["hand_size"] == settings.default_hand_size

    async def test_distribution(self, client: AsyncClient) -> None:
        response = await client.post(
            "/hands/distribution", json={"deck": TINY_DECK, "hand_size": 2}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["categories"] == ["G land", "spell"]
        by_counts = {
            (o["counts"]["G land"], o["counts"]["spell"]): o["probability"]
            for o in data["outcomes"]
        }
        assert by_counts[(1, 1)]["exact"] == "2/3"
        assert by_counts[(2, 0)]["exact"] == "1/6"
        assert sum(p["value"] for p in by_counts.values()) == pytest.approx(1.0)

    async def test_invalid_deck_is_classified(self, client: AsyncClient) -> None:
        deck = {"size": 5, "categories": [{"kind": "land", "colors": "W", "count": 10}]}

        response = await client.post("/hands/count", json={"deck": deck, "hand_size": 2})

        assert response.status_code == 422
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "validation_failed"

    async def test_unknown_color_is_classified(self, client: AsyncClient) -> None:
        deck = {"size": 40, "categories": [{"kind": "land", "colors": "X", "count": 1}]}

        response = await client.post("/hands/count", json={"deck": deck})

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "validation_failed"

    async def test_overdraw_is_domain_violation(self, client: AsyncClient) -> None:
        response = await client.post("/hands/count", json={"deck": TINY_DECK, "hand_size": 5})

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "domain_violation"

    async def test_support_bound_is_resource_error(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "max_support_size", 3)

        response = await client.post(
            "/hands/distribution", json={"deck": MONO_DECK, "hand_size": 7}
        )

        assert response.status_code == 413
        data = response.json()
        assert data["failure"]["kind"] == "resource_exceeded"
        assert data["failure"]["detail"] == "support size: 8/3"


class TestDrawEndpoints:
    async def test_tree_distribution(self, client: AsyncClient) -> None:
        response = await client.post(
            "/draws/distribution",
            json={"deck": TINY_DECK, "turns": 2, "statistic": "lands"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["leaf_count"] == 4
        assert [m["value"] for m in data["masses"]] == [0, 1, 2]
        assert [m["probability"]["exact"] for m in data["masses"]] == ["1/6", "2/3", "1/6"]
        assert data["expected_value"] == pytest.approx(1.0)

    async def test_color_statistic(self, client: AsyncClient) -> None:
        response = await client.post(
            "/draws/distribution",
            json={
                "deck": TINY_DECK,
                "turns": 1,
                "statistic": "color_sources",
                "color": "G",
            },
        )

        assert response.status_code == 200
        exact = [m["probability"]["exact"] for m in response.json()["masses"]]
        assert exact == ["1/2", "1/2"]

    async def test_unknown_statistic(self, client: AsyncClient) -> None:
        response = await client.post(
            "/draws/distribution",
            json={"deck": TINY_DECK, "turns": 1, "statistic": "power"},
        )

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "validation_failed"

    async def test_game_turn(self, client: AsyncClient) -> None:
        response = await client.post(
            "/draws/turn",
            json={"deck": MONO_DECK, "turn": 2, "statistic": "lands"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["turn"] == 2
        assert [m["value"] for m in data["masses"]] == list(range(9))
        total = sum(m["probability"]["value"] for m in data["masses"])
        assert total == pytest.approx(1.0)


class TestSourceEndpoints:
    async def test_minimum_sources(self, client: AsyncClient) -> None:
        response = await client.post(
            "/sources/minimum",
            json={"deck_size": 40, "needed": 1, "turn": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["land_count"] == 17
        assert len(data["table"]) == 18
        minimum = data["minimum_sources"]
        assert minimum is not None
        assert data["table"][minimum]["probability"]["value"] >= 0.9

    async def test_unknown_deck_size(self, client: AsyncClient) -> None:
        response = await client.post(
            "/sources/minimum",
            json={"deck_size": 45, "needed": 1, "turn": 3},
        )

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "validation_failed"

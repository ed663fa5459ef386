import csv
from datetime import datetime, timezone
from io import StringIO

import pytest
from httpx import ASGITransport, AsyncClient

from pyffa.api import create_app
from pyffa.config import Settings
from pyffa.export import RECOMMENDATION_HEADERS
from pyffa.persistence import PlayerStore

from tests.factories import make_player, make_samples


@pytest.fixture
def store(tmp_path):
    store = PlayerStore(tmp_path / "api.sqlite")
    store.upsert_players([
        make_player("p1", "Patrick Mahomes", position="QB"),
        make_player("p2", "Travis Kelce", position="TE", injury_status="Questionable"),
    ])
    store.upsert_samples(
        make_samples(
            [20, 24, 28],
            opponent="BUF",
            season=2023,
            start=datetime(2023, 9, 10, tzinfo=timezone.utc),
        )
        + make_samples(
            [25, 27],
            opponent="DEN",
            season=2024,
            start=datetime(2024, 9, 8, tzinfo=timezone.utc),
        )
        + make_samples(
            [10, 12],
            player_id="p2",
            opponent="LV",
            season=2024,
            start=datetime(2024, 9, 8, tzinfo=timezone.utc),
        )
    )
    return store


@pytest.fixture
async def client(store, tmp_path):
    app = create_app(store, settings=Settings(current_season=2024, db_path=tmp_path / "api.sqlite"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_search_ranks_exact_match_first(client):
    response = await client.get("/players/search", params={"q": "Patrick Mahomes"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["query"] == "Patrick Mahomes"
    top = payload["results"][0]
    assert top["player"]["player_id"] == "p1"
    assert top["relevance_score"] == 100
    assert top["match_type"] == "exact_name"


@pytest.mark.anyio
async def test_search_records_history(client):
    await client.get("/players/search", params={"q": "patrick mahomes"})

    response = await client.get("/history/suggestions", params={"q": "pat"})
    assert response.status_code == 200
    assert response.json()["suggestions"] == ["patrick mahomes"]

    cleared = await client.delete("/history")
    assert cleared.json() == {"status": "cleared"}
    response = await client.get("/history/suggestions", params={"q": "pat"})
    assert response.json()["suggestions"] == []


@pytest.mark.anyio
async def test_suggest(client):
    response = await client.get("/players/suggest", params={"q": "tra"})
    assert response.status_code == 200
    assert response.json()["suggestions"] == ["Travis Kelce", "Travis"]

    response = await client.get("/players/suggest", params={"q": "t"})
    assert response.json()["suggestions"] == []


@pytest.mark.anyio
async def test_get_player_not_found(client):
    response = await client.get("/players/ghost")
    assert response.status_code == 404
    assert "ghost" in response.json()["detail"]


@pytest.mark.anyio
async def test_matchup_analysis(client):
    response = await client.get("/players/p1/matchups/BUF")
    assert response.status_code == 200
    payload = response.json()
    assert payload["player_name"] == "Patrick Mahomes"
    assert payload["sample_size"] == 3
    assert payload["average_fantasy_points"] == pytest.approx(24.0)
    assert payload["projected_points"] == pytest.approx(24.0)
    assert payload["confidence_level"] == pytest.approx(0.6)
    assert payload["comparison_to_season_average"] == pytest.approx((24 - 26) / 26 * 100)
    assert payload["performance_trend"] == "improving"
    assert [game["fantasy_points"] for game in payload["historical_games"]] == [28, 24, 20]


@pytest.mark.anyio
async def test_matchup_without_history_is_empty(client):
    response = await client.get("/players/p1/matchups/NE")
    assert response.status_code == 200
    payload = response.json()
    assert payload["sample_size"] == 0
    assert payload["performance_trend"] == "insufficient_data"
    assert payload["historical_games"] == []


@pytest.mark.anyio
async def test_projection_falls_back_to_season_average(client):
    response = await client.get("/players/p1/projection/NE")
    assert response.status_code == 200
    assert response.json()["projected_points"] == pytest.approx(26.0)


@pytest.mark.anyio
async def test_season_average(client):
    response = await client.get("/players/p2/season-average/2024")
    assert response.status_code == 200
    assert response.json() == {
        "player_id": "p2",
        "season": 2024,
        "average_fantasy_points": pytest.approx(11.0),
    }


@pytest.mark.anyio
async def test_recommendations_skip_unknown_players(client):
    response = await client.post("/recommendations", json={"player_ids": ["p2", "ghost", "p1"]})
    assert response.status_code == 200
    payload = response.json()
    assert payload["requested"] == 3
    recs = payload["recommendations"]
    assert [rec["player"]["player_id"] for rec in recs] == ["p1", "p2"]
    assert [rec["rank"] for rec in recs] == [1, 2]
    assert recs[0]["projected_points"] == pytest.approx(26.0)
    assert recs[1]["injury_impact"] == "minor"


@pytest.mark.anyio
async def test_recommendations_export_csv(client):
    response = await client.post("/recommendations/export.csv", json={"player_ids": ["p1", "p2"]})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(StringIO(response.text)))
    assert tuple(rows[0]) == RECOMMENDATION_HEADERS
    assert [row[1] for row in rows[1:]] == ["p1", "p2"]


@pytest.mark.anyio
async def test_recommendations_reject_oversized_batch(client):
    response = await client.post("/recommendations", json={"player_ids": [f"p{i}" for i in range(201)]})
    assert response.status_code == 422


@pytest.mark.anyio
async def test_projection_blends_matchup_history(client):
    response = await client.get("/players/p1/projection/BUF")
    assert response.status_code == 200
    assert response.json() == {
        "player_id": "p1",
        "opponent_team": "BUF",
        "projected_points": pytest.approx(24.0),
    }


@pytest.mark.anyio
@pytest.mark.parametrize(
    "path",
    [
        "/players/ghost/projection/BUF",
        "/players/ghost/matchups/BUF",
        "/players/ghost/season-average/2024",
    ],
)
async def test_player_routes_reject_unknown_player(client, path):
    response = await client.get(path)
    assert response.status_code == 404
    assert "ghost" in response.json()["detail"]


@pytest.mark.anyio
async def test_history_suggestions_short_query_returns_recent(client):
    await client.get("/players/search", params={"q": "kelce"})
    await client.get("/players/search", params={"q": "mahomes"})

    response = await client.get("/history/suggestions", params={"q": "k"})
    assert response.status_code == 200
    assert response.json() == {"query": "k", "suggestions": ["mahomes", "kelce"]}

    response = await client.get("/history/suggestions", params={"q": "kel", "limit": 1})
    assert response.json()["suggestions"] == ["kelce"]


@pytest.mark.anyio
async def test_clear_history(client):
    await client.get("/players/search", params={"q": "kelce"})

    response = await client.delete("/history")
    assert response.status_code == 200
    assert response.json() == {"status": "cleared"}
    assert client.app.state.history_store.list_history() == []

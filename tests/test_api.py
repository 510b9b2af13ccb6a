import pytest
from httpx import ASGITransport, AsyncClient

from pitchside.api import create_app
from pitchside.persistence import LineupSaveError, LineupStore


COACH = {"X-Viewer-Role": "COACH"}
PLAYER = {"X-Viewer-Role": "PLAYER"}


@pytest.fixture
async def client(tmp_path, monkeypatch):
    monkeypatch.setenv("PITCHSIDE_DB_PATH", str(tmp_path / "api.sqlite"))
    app = create_app(LineupStore(tmp_path / "unused.sqlite"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _slot(lineup: dict, code: str) -> dict:
    return next(slot for slot in lineup["slots"] if slot["position"]["code"] == code)


async def _seed_demo(client: AsyncClient, fixture_id: str = "g1") -> dict:
    resp = await client.put(f"/fixtures/{fixture_id}/roster", json={"use_demo": True}, headers=COACH)
    resp.raise_for_status()
    return resp.json()


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_positions_endpoint(client: AsyncClient):
    resp = await client.get("/positions")
    assert resp.status_code == 200
    payload = resp.json()
    assert len(payload) == 10
    assert payload[-1] == {"code": "gk", "label": "GK", "name": "Goalkeeper", "x": 50.0, "y": 85.0, "zone": "goalkeeper"}


@pytest.mark.anyio
async def test_seed_roster_and_view(client: AsyncClient):
    payload = await _seed_demo(client)
    lineup = payload["lineup"]
    assert lineup["starters_count"] == 10
    assert lineup["target"] == 11
    assert lineup["can_edit"] is True
    assert payload["report"]["loaded_players"] == 13

    resp = await client.get("/fixtures/g1/lineup", headers=PLAYER)
    assert resp.status_code == 200
    assert resp.json()["can_edit"] is False


@pytest.mark.anyio
async def test_roster_payload_is_normalized(client: AsyncClient):
    players = [
        {"player_id": "a", "name": "Ann Lee", "number": 5, "position": "gk", "is_starter": False},
        {"player_id": "b", "name": "Bo Chan", "number": 6, "position": "gk", "is_starter": True},
        {"player_id": "c", "name": "Cy Dunn", "number": 9, "position": "sweeper"},
    ]
    resp = await client.put("/fixtures/g2/roster", json={"players": players}, headers=COACH)
    assert resp.status_code == 200
    report = resp.json()["report"]
    assert report["promoted_to_starter"] == ["a"]
    assert report["displaced_from_position"] == ["b"]
    assert report["cleared_unknown_positions"] == ["c"]


@pytest.mark.anyio
async def test_assign_bench_save_and_reset(client: AsyncClient):
    await _seed_demo(client)

    resp = await client.post("/fixtures/g1/lineup/assign", json={"player_id": "12", "position": "gk"}, headers=COACH)
    assert resp.status_code == 200
    body = resp.json()
    assert body["outcome"] == "swapped"
    assert _slot(body["lineup"], "gk")["player"]["player_id"] == "12"
    assert any(p["player_id"] == "2" for p in body["lineup"]["reserves"])
    assert body["lineup"]["has_changes"] is True

    resp = await client.post("/fixtures/g1/lineup/save", headers=COACH)
    assert resp.status_code == 200
    assert resp.json()["has_changes"] is False

    resp = await client.post("/fixtures/g1/lineup/bench", json={"player_id": "1"}, headers=COACH)
    assert resp.json()["outcome"] == "benched"
    assert _slot(resp.json()["lineup"], "cf")["player"] is None

    resp = await client.post("/fixtures/g1/lineup/reset", headers=COACH)
    assert resp.status_code == 200
    lineup = resp.json()
    assert _slot(lineup, "cf")["player"]["player_id"] == "1"
    assert _slot(lineup, "gk")["player"]["player_id"] == "12"

    # A fresh app over the same store sees the saved lineup.
    fresh = create_app(client.app.state.lineup_store)
    async with AsyncClient(transport=ASGITransport(app=fresh), base_url="http://testserver") as other:
        resp = await other.get("/fixtures/g1/lineup", headers=PLAYER)
        assert _slot(resp.json(), "gk")["player"]["player_id"] == "12"


@pytest.mark.anyio
async def test_player_role_cannot_edit(client: AsyncClient):
    await _seed_demo(client)
    resp = await client.post("/fixtures/g1/lineup/assign", json={"player_id": "12", "position": "gk"}, headers=PLAYER)
    assert resp.status_code == 403
    resp = await client.post("/fixtures/g1/lineup/bench", json={"player_id": "1"}, headers=PLAYER)
    assert resp.status_code == 403
    resp = await client.put("/fixtures/g3/roster", json={"use_demo": True}, headers=PLAYER)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_unknown_fixture_position_and_player(client: AsyncClient):
    resp = await client.get("/fixtures/missing/lineup", headers=COACH)
    assert resp.status_code == 404

    await _seed_demo(client)
    resp = await client.post("/fixtures/g1/lineup/assign", json={"player_id": "12", "position": "sweeper"}, headers=COACH)
    assert resp.status_code == 400

    resp = await client.post("/fixtures/g1/lineup/assign", json={"player_id": "99", "position": "gk"}, headers=COACH)
    assert resp.status_code == 200
    assert resp.json()["outcome"] == "player_not_found"
    assert resp.json()["lineup"]["has_changes"] is False


@pytest.mark.anyio
async def test_candidates_endpoint(client: AsyncClient):
    await _seed_demo(client)
    resp = await client.get("/fixtures/g1/lineup/candidates", params={"position": "lw", "query": ""}, headers=PLAYER)
    assert resp.status_code == 200
    body = resp.json()
    assert [p["player_id"] for p in body["recommended"]] == ["3", "12"]
    assert len(body["others"]) == 11

    resp = await client.get("/fixtures/g1/lineup/candidates", params={"position": "gk", "query": "zzz"}, headers=PLAYER)
    assert resp.json()["message"] == "No players found"


@pytest.mark.anyio
async def test_export_csv(client: AsyncClient):
    await _seed_demo(client)
    resp = await client.get("/fixtures/g1/lineup/export.csv", headers=PLAYER)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("slot,position,player_id")
    assert len(lines) == 1 + 10 + 1 + 2


class _UnavailableStore(LineupStore):
    def save_lineup(self, fixture_id, roster):
        raise LineupSaveError("database unavailable")


@pytest.mark.anyio
async def test_failed_save_returns_503_and_keeps_edits(tmp_path, monkeypatch):
    monkeypatch.setenv("PITCHSIDE_DB_PATH", str(tmp_path / "failing.sqlite"))
    app = create_app(_UnavailableStore(tmp_path / "unused.sqlite"))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        await _seed_demo(client)
        resp = await client.post("/fixtures/g1/lineup/bench", json={"player_id": "1"}, headers=COACH)
        assert resp.json()["outcome"] == "benched"

        resp = await client.post("/fixtures/g1/lineup/save", headers=COACH)
        assert resp.status_code == 503

        resp = await client.get("/fixtures/g1/lineup", headers=COACH)
        lineup = resp.json()
        assert lineup["has_changes"] is True
        assert _slot(lineup, "cf")["player"] is None
        assert lineup["starters_count"] == 9


@pytest.mark.anyio
async def test_delete_fixture_evicts_cached_session(client: AsyncClient):
    await _seed_demo(client)
    await client.post("/fixtures/g1/lineup/bench", json={"player_id": "1"}, headers=COACH)

    resp = await client.delete("/fixtures/g1", headers=PLAYER)
    assert resp.status_code == 403

    resp = await client.delete("/fixtures/g1", headers=COACH)
    assert resp.status_code == 204
    assert "g1" not in client.app.state.sessions

    resp = await client.get("/fixtures/g1/lineup", headers=COACH)
    assert resp.status_code == 404
    resp = await client.delete("/fixtures/g1", headers=COACH)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_replacing_roster_replaces_session(client: AsyncClient):
    await _seed_demo(client)
    await client.post("/fixtures/g1/lineup/bench", json={"player_id": "1"}, headers=COACH)

    players = [{"player_id": "x", "name": "Xan Ray", "number": 4, "position": "gk", "is_starter": True}]
    resp = await client.put("/fixtures/g1/roster", json={"players": players}, headers=COACH)
    assert resp.status_code == 200

    lineup = (await client.get("/fixtures/g1/lineup", headers=COACH)).json()
    assert lineup["has_changes"] is False
    assert _slot(lineup, "gk")["player"]["player_id"] == "x"
    assert lineup["starters_count"] == 1

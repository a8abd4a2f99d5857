"""
HTTP route and MCP tool registration tests.

Routes are mounted on a bare Starlette app so no MCP session manager is
started.
"""

from __future__ import annotations

import asyncio

import pytest
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from sports_scores import server
from sports_scores.core.clients import espn
from sports_scores.core.errors import UpstreamError
from sports_scores.entrypoints import ENTRYPOINTS

from conftest import three_game_board


@pytest.fixture
def client():
    app = Starlette(routes=[
        Route("/health", server.health, methods=["GET"]),
        Route("/entrypoints", server.list_entrypoints, methods=["GET"]),
        Route("/entrypoints/{key}/invoke", server.invoke_entrypoint, methods=["POST"]),
    ])
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


def test_manifest_lists_every_entrypoint(client):
    r = client.get("/entrypoints")
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "sports-scores-agent"
    keys = [ep["key"] for ep in data["entrypoints"]]
    assert keys == list(ENTRYPOINTS)
    overview = data["entrypoints"][0]
    assert overview["price"] == {"amount": 0, "display": "free"}
    assert overview["input_schema"]["type"] == "object"


def test_invoke_returns_output_envelope(client, fake_leagues):
    fake_leagues({"nfl": three_game_board()})

    r = client.post("/entrypoints/league/invoke", json={"input": {"league": "nfl"}})

    assert r.status_code == 200
    output = r.json()["output"]
    assert output["league_key"] == "nfl"
    assert len(output["events"]) == 3
    assert "fetched_at" in output


def test_invoke_with_empty_body(client, fake_leagues):
    fake_leagues({"nfl": three_game_board()})
    r = client.post("/entrypoints/overview/invoke")
    assert r.status_code == 200
    assert r.json()["output"]["summary"][0]["league_key"] == "nfl"


def test_invoke_unknown_entrypoint(client):
    r = client.post("/entrypoints/cricket/invoke", json={})
    assert r.status_code == 404
    assert r.json()["error"] == "unknown_entrypoint"


def test_invoke_malformed_json(client):
    r = client.post("/entrypoints/league/invoke", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_json"

    r = client.post("/entrypoints/league/invoke", json=[1, 2])
    assert r.status_code == 400


def test_invoke_validation_error(client):
    r = client.post("/entrypoints/dashboard/invoke", json={"input": {"leagues": ["nfl", "curling"]}})
    assert r.status_code == 400
    data = r.json()
    assert data["error"] == "validation_error"
    assert data["details"]


def test_invoke_upstream_error(client, fake_leagues):
    fake_leagues({"nba": UpstreamError("ESPN API error: 500", league="nba", status_code=500)})

    r = client.post("/entrypoints/nba/invoke")

    assert r.status_code == 502
    data = r.json()
    assert data["error"] == "upstream_error"
    assert data["league"] == "nba"
    assert data["upstream_status"] == 500


def test_invoke_whitespace_body_uses_defaults(client, fake_leagues):
    fake_leagues({"nfl": three_game_board()})
    r = client.post("/entrypoints/overview/invoke", content=b"  \n", headers={"content-type": "application/json"})
    assert r.status_code == 200


def test_invoke_undecodable_body(client):
    r = client.post("/entrypoints/league/invoke", content=b"\xff\xfe{", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_json"


def test_invoke_unusable_upstream_payload(client, monkeypatch):
    async def fetch_league(league_key, client=None, day=None):
        return three_game_board()

    def broken(data, league, fetched_at=None):
        raise TypeError("unhashable type: 'list'")

    monkeypatch.setattr(espn, "fetch_league", fetch_league)
    monkeypatch.setattr(espn, "normalize_scoreboard", broken)

    r = client.post("/entrypoints/nba/invoke")

    assert r.status_code == 502
    data = r.json()
    assert data["error"] == "upstream_error"
    assert data["league"] == "nba"
    assert data["upstream_status"] is None


def test_tools_registered_for_every_entrypoint():
    tools = asyncio.run(server.mcp.list_tools())
    names = {t.name for t in tools}
    expected = {"sports_" + key.replace("-", "_") for key in ENTRYPOINTS}
    assert expected <= names


def test_tool_wraps_entrypoint(fake_leagues):
    fake_leagues({"nfl": three_game_board(), "nba": three_game_board()})
    result = asyncio.run(server.sports_search("kc", leagues=["nfl"], status="in_progress"))
    assert [e["id"] for e in result["output"]["results"]] == ["401"]


def test_main_uses_configured_transport(monkeypatch):
    ran = {}
    monkeypatch.setenv("MCP_TRANSPORT", "streamable-http")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setattr(server.mcp, "run", lambda transport: ran.setdefault("transport", transport))

    server.main()

    assert ran["transport"] == "streamable-http"
    assert server.mcp.settings.port == 8080


def test_main_rejects_unknown_transport(monkeypatch):
    monkeypatch.setenv("MCP_TRANSPORT", "carrier-pigeon")
    with pytest.raises(ValueError):
        server.main()

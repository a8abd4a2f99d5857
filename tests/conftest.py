"""
Shared fixtures: ESPN-shaped payload builders and upstream fakes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
import pytest

from sports_scores.core.clients import espn
from sports_scores.core.errors import UpstreamError
from sports_scores.core.leagues import get_league
from sports_scores.core.normalize import normalize_scoreboard

STATE_DETAIL = {"pre": "Sun, January 14th at 1:00 PM EST", "in": "3rd Quarter", "post": "Final"}


def make_competitor(name: str, abbreviation: str, side: str, score: Optional[str] = None, winner=None, record="10-3") -> dict:
    competitor = {
        "homeAway": side,
        "team": {
            "displayName": name,
            "abbreviation": abbreviation,
            "logo": f"https://a.espncdn.com/i/teamlogos/{abbreviation.lower()}.png",
        },
        "records": [{"name": "overall", "summary": record}],
    }
    if score is not None:
        competitor["score"] = score
    if winner is not None:
        competitor["winner"] = winner
    return competitor


def make_event(
    event_id: str,
    state: str = "pre",
    date: str = "2024-01-14T18:00Z",
    home: tuple = ("Kansas City Chiefs", "KC"),
    away: tuple = ("Buffalo Bills", "BUF"),
    scores: Optional[tuple] = None,
    venue: Optional[str] = "Arrowhead Stadium",
) -> dict:
    home_score, away_score = scores if scores else (None, None)
    competition = {
        "status": {
            "displayClock": "8:42" if state == "in" else "0:00",
            "period": 3 if state == "in" else 0,
            "type": {"state": state, "detail": STATE_DETAIL[state], "description": state},
        },
        "competitors": [
            make_competitor(*home, side="home", score=home_score),
            make_competitor(*away, side="away", score=away_score),
        ],
    }
    if venue:
        competition["venue"] = {"fullName": venue}
    return {
        "id": event_id,
        "name": f"{away[0]} at {home[0]}",
        "shortName": f"{away[1]} @ {home[1]}",
        "date": date,
        "competitions": [competition],
    }


def make_scoreboard(*events: dict, day: str = "2024-01-14") -> dict:
    return {"day": {"date": day}, "events": list(events)}


def three_game_board() -> dict:
    """One live game and two scheduled ones."""
    return make_scoreboard(
        make_event("401", state="in", scores=("17", "14")),
        make_event("402", date="2024-01-14T21:30Z", home=("Detroit Lions", "DET"), away=("Los Angeles Rams", "LAR")),
        make_event("403", date="2024-01-14T18:00Z", home=("Dallas Cowboys", "DAL"), away=("Green Bay Packers", "GB")),
    )


def mock_client(routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.AsyncClient:
    """AsyncClient whose responses are chosen by a substring of the request path."""

    def handler(request: httpx.Request) -> httpx.Response:
        for fragment, respond in routes.items():
            if fragment in request.url.path:
                return respond(request)
        return httpx.Response(404, json={"error": "not found"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def json_response(payload: dict) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json=payload)


def status_response(status: int) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, text="upstream failure")


@pytest.fixture
def fake_leagues(monkeypatch):
    """Replace ESPN lookups with canned scoreboards.

    Call with {league_key: scoreboard_dict or Exception}. Leagues not listed
    fail with a 503 UpstreamError. Returns the list of requested keys.
    """
    calls: list[str] = []

    def install(boards: dict) -> list[str]:
        async def fake_get_league_scores(league_key, client=None, day=None):
            league = get_league(league_key)
            calls.append(league.key.value)
            data = boards.get(league.key.value)
            if data is None:
                raise UpstreamError("ESPN API error: 503", league=league.key.value, status_code=503)
            if isinstance(data, Exception):
                raise data
            return normalize_scoreboard(data, league, fetched_at=datetime(2024, 1, 14, tzinfo=timezone.utc))

        monkeypatch.setattr(espn, "get_league_scores", fake_get_league_scores)
        return calls

    return install

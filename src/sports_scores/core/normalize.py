"""Reshape ESPN scoreboard JSON into NormalizedEvent records.

ESPN payloads differ between sports and between the pre-game, live and
final stages of a game, so every field below is optional on the way in.
Missing data becomes None or an empty value; nothing here raises on an
absent key.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    EventState,
    EventStatus,
    HomeAway,
    LeagueConfig,
    LeagueScoreboard,
    NormalizedEvent,
    Participant,
)

STATE_MAP = {
    "pre": EventState.SCHEDULED,
    "in": EventState.IN_PROGRESS,
    "post": EventState.COMPLETED,
}


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _first(value: Any) -> dict:
    if isinstance(value, list) and value:
        return _dict(value[0])
    return {}


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ESPN timestamps such as '2024-01-14T18:00Z'."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_score(value: Any) -> Optional[int]:
    # Some sports wrap the score: {"value": 3.0, "displayValue": "3"}
    if isinstance(value, dict):
        value = value.get("displayValue", value.get("value"))
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_period(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_status(raw: Any) -> EventStatus:
    status = _dict(raw)
    status_type = _dict(status.get("type"))
    state = status_type.get("state")
    return EventStatus(
        state=STATE_MAP.get(state, EventState.UNKNOWN) if isinstance(state, str) else EventState.UNKNOWN,
        detail=_str(status_type.get("detail")) or _str(status_type.get("description")) or "",
        clock=_str(status.get("displayClock")),
        period=_parse_period(status.get("period")),
    )


def _parse_participant(competitor: dict) -> Participant:
    team = _dict(competitor.get("team"))
    side = competitor.get("homeAway")
    winner = competitor.get("winner")
    return Participant(
        name=_str(team.get("displayName")) or _str(team.get("name")) or _str(team.get("shortDisplayName")) or "",
        abbreviation=_str(team.get("abbreviation")),
        score=_parse_score(competitor.get("score")),
        winner=winner if isinstance(winner, bool) else None,
        home_away=HomeAway(side) if side in ("home", "away") else None,
        logo=_str(team.get("logo")),
        record=_str(_first(competitor.get("records")).get("summary")),
    )


def normalize_event(raw: dict, league_name: str) -> NormalizedEvent:
    """Map one upstream event onto NormalizedEvent."""
    raw = _dict(raw)
    comp = _first(raw.get("competitions"))
    competitors = comp.get("competitors") if isinstance(comp.get("competitors"), list) else []

    event_id = raw.get("id")
    return NormalizedEvent(
        id=str(event_id) if event_id is not None else "",
        name=_str(raw.get("shortName")) or _str(raw.get("name")) or "",
        league=league_name,
        start_time=_parse_datetime(raw.get("date") or comp.get("date")),
        status=_parse_status(comp.get("status") or raw.get("status")),
        venue=_str(_dict(comp.get("venue")).get("fullName")),
        participants=[_parse_participant(c) for c in competitors if isinstance(c, dict)],
    )


def normalize_scoreboard(data: dict, league: LeagueConfig, fetched_at: Optional[datetime] = None) -> LeagueScoreboard:
    """Normalize a full scoreboard response for one league."""
    events = data.get("events") if isinstance(data.get("events"), list) else []
    return LeagueScoreboard(
        league=league.name,
        league_key=league.key,
        sport=league.sport,
        fetched_at=fetched_at or datetime.now(timezone.utc),
        day=_str(_dict(data.get("day")).get("date")),
        events=[normalize_event(e, league.name) for e in events if isinstance(e, dict)],
    )

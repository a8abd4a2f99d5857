"""ESPN site API client.

Scoreboard endpoint: {base}/{sport}/{league}/scoreboard
No authentication required. Undocumented, public.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from ...config import get_espn_api_base
from ..errors import UpstreamError
from ..leagues import get_league
from ..models import LeagueKey, LeagueScoreboard
from ..normalize import normalize_scoreboard

logger = logging.getLogger(__name__)


def scoreboard_url(path: str) -> str:
    return f"{get_espn_api_base()}/{path}/scoreboard"


async def _get_json(client: httpx.AsyncClient, url: str, params: dict, league: str) -> dict:
    logger.debug("GET %s %s", url, params)
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise UpstreamError(f"ESPN API error: {status}", league=league, status_code=status, url=url) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(f"ESPN API request failed: {exc}", league=league, url=url) from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise UpstreamError("ESPN API returned invalid JSON", league=league, status_code=response.status_code, url=url) from exc
    if not isinstance(data, dict):
        raise UpstreamError("ESPN API returned an unexpected payload", league=league, status_code=response.status_code, url=url)
    return data


async def fetch_league(
    league_key: Union[str, LeagueKey],
    client: Optional[httpx.AsyncClient] = None,
    day: Optional[date] = None,
) -> dict:
    """Fetch the raw scoreboard JSON for one league.

    Args:
        league_key: Supported league key, e.g. 'nba'.
        client: Shared client. A short-lived one is opened when omitted.
        day: Scoreboard date. Defaults to ESPN's current scoreboard.
    """
    league = get_league(league_key)
    url = scoreboard_url(league.path)
    params = {"dates": day.strftime("%Y%m%d")} if day else {}

    if client is not None:
        return await _get_json(client, url, params, league.key.value)
    async with httpx.AsyncClient() as owned:
        return await _get_json(owned, url, params, league.key.value)


async def get_league_scores(
    league_key: Union[str, LeagueKey],
    client: Optional[httpx.AsyncClient] = None,
    day: Optional[date] = None,
) -> LeagueScoreboard:
    """Fetch and normalize one league's scoreboard."""
    league = get_league(league_key)
    data = await fetch_league(league.key, client=client, day=day)
    try:
        board = normalize_scoreboard(data, league, fetched_at=datetime.now(timezone.utc))
    except (PydanticValidationError, TypeError, ValueError, OverflowError) as exc:
        raise UpstreamError(
            "ESPN API returned an unusable response",
            league=league.key.value,
            url=scoreboard_url(league.path),
        ) from exc
    logger.debug("%s: %d events", league.name, len(board.events))
    return board

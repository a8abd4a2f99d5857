"""Multi-league fan-out.

One upstream request per league, issued concurrently over a shared client.
A league whose request fails is logged and left out; the remaining leagues
are still returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Union

import httpx

from .clients import espn
from .errors import UpstreamError
from .leagues import get_league
from .models import LeagueKey, LeagueScoreboard, NormalizedEvent

logger = logging.getLogger(__name__)


def dedupe_leagues(league_keys: Iterable[Union[str, LeagueKey]]) -> list[LeagueKey]:
    """Resolve keys to LeagueKey, dropping repeats but keeping first-seen order."""
    seen: list[LeagueKey] = []
    for key in league_keys:
        resolved = get_league(key).key
        if resolved not in seen:
            seen.append(resolved)
    return seen


async def fetch_scoreboards(
    league_keys: Iterable[Union[str, LeagueKey]],
    client: Optional[httpx.AsyncClient] = None,
) -> list[LeagueScoreboard]:
    """Fetch several leagues in parallel, isolating per-league upstream failures.

    Results keep the order of the requested keys. Only UpstreamError is
    isolated; anything else is a bug and propagates.
    """
    keys = dedupe_leagues(league_keys)
    if not keys:
        return []

    if client is None:
        async with httpx.AsyncClient() as owned:
            return await _gather(keys, owned)
    return await _gather(keys, client)


async def _gather(keys: list[LeagueKey], client: httpx.AsyncClient) -> list[LeagueScoreboard]:
    results = await asyncio.gather(
        *(espn.get_league_scores(key, client=client) for key in keys),
        return_exceptions=True,
    )

    boards = []
    for key, result in zip(keys, results):
        if isinstance(result, UpstreamError):
            logger.warning("Skipping %s: %s", key.value, result)
            continue
        if isinstance(result, BaseException):
            raise result
        boards.append(result)
    return boards


async def aggregate_all(
    league_keys: Iterable[Union[str, LeagueKey]],
    client: Optional[httpx.AsyncClient] = None,
) -> list[NormalizedEvent]:
    """All events from every league that could be fetched, in league order."""
    boards = await fetch_scoreboards(league_keys, client=client)
    return [event for board in boards for event in board.events]

"""Sports Scores Agent server.

FastMCP server with one tool per entrypoint, plus plain HTTP routes for
listing and invoking entrypoints when served over sse or streamable-http.
Run: sports-scores-agent
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse

from . import __version__, config
from .core.errors import UnknownEntrypointError, UpstreamError, ValidationError
from .core.leagues import LEAGUES
from .entrypoints import ENTRYPOINTS, get_entrypoint, invoke

logger = logging.getLogger(__name__)

SERVICE_NAME = "sports-scores-agent"
SERVICE_DESCRIPTION = "Live sports scores aggregator - NFL, NBA, Premier League, and more. Real-time data from ESPN APIs."

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and announce the supported leagues."""
    logging.basicConfig(level=config.get_log_level(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.info("Supported leagues: %s", ", ".join(k.value for k in LEAGUES))
    yield


mcp = FastMCP(
    "Sports Scores",
    instructions=SERVICE_DESCRIPTION,
    lifespan=lifespan,
)


def _meta(key: str) -> dict:
    return {"price": {"amount": ENTRYPOINTS[key].price}}


# ─── Free: Overview ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY, meta=_meta("overview"))
async def sports_overview() -> dict:
    """Free overview of live/recent games across NFL, NBA, and Premier League.

    Returns game counts, live counts, and a two-game sample per league.
    """
    return await invoke("overview")


# ─── Single league ───────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY, meta=_meta("nfl"))
async def sports_nfl() -> dict:
    """Current NFL scoreboard with all games, scores, and status."""
    return await invoke("nfl")


@mcp.tool(annotations=READ_ONLY, meta=_meta("nba"))
async def sports_nba() -> dict:
    """Current NBA scoreboard with all games, scores, and status."""
    return await invoke("nba")


@mcp.tool(annotations=READ_ONLY, meta=_meta("premier-league"))
async def sports_premier_league() -> dict:
    """Current Premier League scoreboard with all games, scores, and status."""
    return await invoke("premier-league")


@mcp.tool(annotations=READ_ONLY, meta=_meta("league"))
async def sports_league(league: str, day: Optional[date] = None) -> dict:
    """Scoreboard for any supported league.

    Args:
        league: One of nfl, nba, premier-league, la-liga, mlb, nhl,
                college-football, college-basketball.
        day: Scoreboard date (YYYY-MM-DD). Defaults to today's scoreboard.
    """
    return await invoke("league", {"league": league, "day": day})


# ─── Multi league ────────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY, meta=_meta("sport"))
async def sports_sport(sport: str) -> dict:
    """Every league of one sport in a single call.

    Args:
        sport: football, basketball, soccer, baseball, or hockey.
    """
    return await invoke("sport", {"sport": sport})


@mcp.tool(annotations=READ_ONLY, meta=_meta("search"))
async def sports_search(
    query: str,
    leagues: Optional[list[str]] = None,
    status: Optional[str] = None,
    limit: int = 25,
) -> dict:
    """Find games by team name or abbreviation.

    Args:
        query: Team name or abbreviation, e.g. 'Lakers' or 'KC'. Case-insensitive.
        leagues: Leagues to search. Default all.
        status: Optional filter: scheduled, in_progress, or completed.
        limit: Maximum number of results (1-100). Default 25.
    """
    payload: dict = {"query": query, "status": status, "limit": limit}
    if leagues:
        payload["leagues"] = leagues
    return await invoke("search", payload)


@mcp.tool(annotations=READ_ONLY, meta=_meta("schedule"))
async def sports_schedule(leagues: Optional[list[str]] = None, limit: int = 10) -> dict:
    """Upcoming games across leagues, soonest first.

    Args:
        leagues: Leagues to include. Default all.
        limit: Maximum number of games (1-50). Default 10.
    """
    payload: dict = {"limit": limit}
    if leagues:
        payload["leagues"] = leagues
    return await invoke("schedule", payload)


@mcp.tool(annotations=READ_ONLY, meta=_meta("dashboard"))
async def sports_dashboard(leagues: Optional[list[str]] = None) -> dict:
    """Live dashboard across up to four leagues in one call.

    Args:
        leagues: 1-4 leagues. Default nfl, nba, premier-league.
    """
    return await invoke("dashboard", {"leagues": leagues} if leagues else {})


@mcp.tool(annotations=READ_ONLY, meta=_meta("report"))
async def sports_report(leagues: Optional[list[str]] = None) -> dict:
    """Full report with status totals, per-league counts, live games, next kickoffs, latest results.

    Args:
        leagues: Leagues to include. Default all.
    """
    return await invoke("report", {"leagues": leagues} if leagues else {})


# ─── HTTP routes ─────────────────────────────────────────────────────────────


def _error(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse({"error": error, "message": message, **extra}, status_code=status_code)


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})


@mcp.custom_route("/entrypoints", methods=["GET"])
async def list_entrypoints(request: Request) -> JSONResponse:
    """Service manifest with every entrypoint, its price and input schema."""
    return JSONResponse({
        "name": SERVICE_NAME,
        "version": __version__,
        "description": SERVICE_DESCRIPTION,
        "entrypoints": [ep.describe() for ep in ENTRYPOINTS.values()],
    })


@mcp.custom_route("/entrypoints/{key}/invoke", methods=["POST"])
async def invoke_entrypoint(request: Request) -> JSONResponse:
    """Invoke an entrypoint. Body: {"input": {...}}, may be empty."""
    key = request.path_params["key"]
    try:
        ep = get_entrypoint(key)
    except UnknownEntrypointError as exc:
        return _error(404, "unknown_entrypoint", str(exc))

    payload: dict = {}
    if (await request.body()).strip():
        try:
            data = await request.json()
        except ValueError:
            return _error(400, "invalid_json", "Request body is not valid JSON")
        if not isinstance(data, dict):
            return _error(400, "invalid_json", "Request body must be a JSON object")
        payload = data.get("input") or {}

    try:
        result = await ep.invoke(payload)
    except ValidationError as exc:
        return _error(400, "validation_error", str(exc), details=exc.errors)
    except UpstreamError as exc:
        logger.warning("Entrypoint %s failed upstream: %s", key, exc)
        return _error(502, "upstream_error", str(exc), league=exc.league, upstream_status=exc.status_code)
    return JSONResponse(result)


def main():
    """Entry point for the CLI command."""
    transport = config.get_transport()
    mcp.settings.host = config.get_host()
    mcp.settings.port = config.get_port()
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()

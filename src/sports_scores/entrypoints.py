"""Priced entrypoints: typed input, a handler, and an `output` envelope.

Each entrypoint is registered once here and exposed twice by the server:
as an MCP tool and as an HTTP route. Prices are in micro-units of USD
(1000 = $0.001) and are published only; nothing here enforces payment.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .core import aggregator, filters
from .core.clients import espn
from .core.errors import UnknownEntrypointError, ValidationError
from .core.leagues import ALL_LEAGUES, LEAGUES, OVERVIEW_LEAGUES, leagues_for_sport
from .core.models import EventState, LeagueKey, LeagueScoreboard, Sport

logger = logging.getLogger(__name__)

DATA_SOURCE = "ESPN (live)"
SAMPLE_SIZE = 2
REPORT_UPCOMING_LIMIT = 10
REPORT_RESULTS_LIMIT = 10

Handler = Callable[[Any], Awaitable[dict]]


class Entrypoint(BaseModel):
    """A callable operation with a validated input model and a published price."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    description: str
    price: int = Field(ge=0, description="Price in micro-units of USD")
    input_model: type[BaseModel]
    handler: Handler

    @property
    def is_free(self) -> bool:
        return self.price == 0

    def describe(self) -> dict:
        return {
            "key": self.key,
            "description": self.description,
            "price": {"amount": self.price, "display": format_price(self.price)},
            "input_schema": self.input_model.model_json_schema(),
        }

    async def invoke(self, payload: Optional[dict] = None) -> dict:
        """Validate `payload`, run the handler, and wrap the result."""
        try:
            params = self.input_model.model_validate(payload or {})
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid input for '{self.key}'",
                errors=exc.errors(include_url=False, include_context=False),
            ) from exc
        logger.info("Invoking %s", self.key)
        return {"output": await self.handler(params)}


ENTRYPOINTS: dict[str, Entrypoint] = {}


def entrypoint(key: str, description: str, price: int, input_model: type[BaseModel]):
    """Register the decorated coroutine as an entrypoint handler."""

    def decorator(fn: Handler) -> Handler:
        if key in ENTRYPOINTS:
            raise ValueError(f"Entrypoint '{key}' already registered")
        ENTRYPOINTS[key] = Entrypoint(
            key=key, description=description, price=price, input_model=input_model, handler=fn,
        )
        return fn

    return decorator


def get_entrypoint(key: str) -> Entrypoint:
    try:
        return ENTRYPOINTS[key]
    except KeyError:
        raise UnknownEntrypointError(key) from None


async def invoke(key: str, payload: Optional[dict] = None) -> dict:
    return await get_entrypoint(key).invoke(payload)


def format_price(amount: int) -> str:
    if amount == 0:
        return "free"
    return f"${amount / 1_000_000:.3f}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dump_events(events) -> list[dict]:
    return [e.model_dump(mode="json") for e in events]


def _totals(boards: list[LeagueScoreboard]) -> tuple[int, int]:
    total = sum(len(b.events) for b in boards)
    live = sum(b.live_count for b in boards)
    return total, live


# ─── Input models ────────────────────────────────────────────────────────────


class EmptyInput(BaseModel):
    pass


class LeagueInput(BaseModel):
    league: LeagueKey
    day: Optional[date] = Field(None, description="Scoreboard date (YYYY-MM-DD). Defaults to today's scoreboard.")


class SportInput(BaseModel):
    sport: Sport


class SearchInput(BaseModel):
    query: str = Field(min_length=1, max_length=100, description="Team name or abbreviation to look for")
    leagues: list[LeagueKey] = Field(default_factory=lambda: list(ALL_LEAGUES), min_length=1)
    status: Optional[EventState] = None
    limit: int = Field(25, ge=1, le=100)


class ScheduleInput(BaseModel):
    leagues: list[LeagueKey] = Field(default_factory=lambda: list(ALL_LEAGUES), min_length=1)
    limit: int = Field(10, ge=1, le=50)


class DashboardInput(BaseModel):
    leagues: list[LeagueKey] = Field(
        default_factory=lambda: list(OVERVIEW_LEAGUES),
        min_length=1,
        max_length=4,
    )


class ReportInput(BaseModel):
    leagues: list[LeagueKey] = Field(default_factory=lambda: list(ALL_LEAGUES), min_length=1)


# ─── Free: Overview ──────────────────────────────────────────────────────────


@entrypoint(
    "overview",
    "Free overview of live/recent games across major leagues. Try before you buy.",
    price=0,
    input_model=EmptyInput,
)
async def overview(params: EmptyInput) -> dict:
    boards = await aggregator.fetch_scoreboards(OVERVIEW_LEAGUES)
    summary = [
        {
            "league": b.league,
            "league_key": b.league_key.value,
            "total_games": len(b.events),
            "live_games": b.live_count,
            "sample": [
                {"name": e.name, "status": e.status.detail, "score": e.score_line()}
                for e in b.events[:SAMPLE_SIZE]
            ],
        }
        for b in boards
    ]
    return {
        "fetched_at": _now(),
        "data_source": DATA_SOURCE,
        "supported_leagues": [k.value for k in LEAGUES],
        "summary": summary,
        "hint": "Use paid endpoints for full game data with scores, venues, and team details.",
    }


# ─── Single league ───────────────────────────────────────────────────────────


async def _single_league(key: LeagueKey, day: Optional[date] = None) -> dict:
    board = await espn.get_league_scores(key, day=day)
    return board.model_dump(mode="json")


def _fixed_league(key: LeagueKey, name: str) -> None:
    async def handler(params: EmptyInput) -> dict:
        return await _single_league(key)

    entrypoint(
        key.value,
        f"Get current {name} scoreboard with all games, scores, and status",
        price=1000,
        input_model=EmptyInput,
    )(handler)


for _key in (LeagueKey.NFL, LeagueKey.NBA, LeagueKey.PREMIER_LEAGUE):
    _fixed_league(_key, LEAGUES[_key].name)


@entrypoint(
    "league",
    "Get scoreboard for any supported league (" + ", ".join(k.value for k in LEAGUES) + ")",
    price=2000,
    input_model=LeagueInput,
)
async def league(params: LeagueInput) -> dict:
    return await _single_league(params.league, day=params.day)


# ─── Multi league ────────────────────────────────────────────────────────────


@entrypoint(
    "sport",
    "Every league of one sport in a single call (football, basketball, soccer, baseball, hockey)",
    price=2000,
    input_model=SportInput,
)
async def sport(params: SportInput) -> dict:
    boards = await aggregator.fetch_scoreboards(leagues_for_sport(params.sport))
    total, live = _totals(boards)
    return {
        "fetched_at": _now(),
        "sport": params.sport.value,
        "total_games": total,
        "live_games": live,
        "leagues": [b.model_dump(mode="json") for b in boards],
    }


@entrypoint(
    "search",
    "Find games by team name or abbreviation across leagues, optionally filtered by status",
    price=2000,
    input_model=SearchInput,
)
async def search(params: SearchInput) -> dict:
    events = await aggregator.aggregate_all(params.leagues)
    matches = filters.search_events(filters.filter_by_state(events, params.status), params.query)
    results = filters.sort_by_start(matches, limit=params.limit)
    return {
        "fetched_at": _now(),
        "query": params.query,
        "status": params.status.value if params.status else None,
        "count": len(results),
        "total_matches": len(matches),
        "results": _dump_events(results),
    }


@entrypoint(
    "schedule",
    "Upcoming games across leagues, soonest first",
    price=2000,
    input_model=ScheduleInput,
)
async def schedule(params: ScheduleInput) -> dict:
    events = await aggregator.aggregate_all(params.leagues)
    games = filters.sort_by_start(filters.upcoming(events), limit=params.limit)
    return {
        "fetched_at": _now(),
        "count": len(games),
        "upcoming": _dump_events(games),
    }


@entrypoint(
    "dashboard",
    "Live dashboard across multiple leagues in one call. Get all live and recent games.",
    price=3000,
    input_model=DashboardInput,
)
async def dashboard(params: DashboardInput) -> dict:
    boards = await aggregator.fetch_scoreboards(params.leagues)
    total, live = _totals(boards)
    return {
        "fetched_at": _now(),
        "total_games": total,
        "live_games": live,
        "leagues": [b.model_dump(mode="json") for b in boards],
    }


@entrypoint(
    "report",
    "Full report: status totals, per-league counts, live games, next kickoffs, and latest results",
    price=5000,
    input_model=ReportInput,
)
async def report(params: ReportInput) -> dict:
    boards = await aggregator.fetch_scoreboards(params.leagues)
    events = [e for b in boards for e in b.events]
    totals = filters.count_by_state(events)

    per_league = []
    for b in boards:
        counts = filters.count_by_state(b.events)
        per_league.append({"league": b.league, "league_key": b.league_key.value, **counts})

    requested = aggregator.dedupe_leagues(params.leagues)
    missing = [k.value for k in requested if k not in {b.league_key for b in boards}]

    return {
        "fetched_at": _now(),
        "leagues_requested": [k.value for k in requested],
        "leagues_unavailable": missing,
        "totals": totals,
        "per_league": per_league,
        "live": _dump_events(filters.live(events)),
        "upcoming": _dump_events(filters.sort_by_start(filters.upcoming(events), limit=REPORT_UPCOMING_LIMIT)),
        "results": _dump_events(filters.sort_by_start(filters.completed(events), limit=REPORT_RESULTS_LIMIT, descending=True)),
        "summary": (
            f"{totals['total']} games across {len(boards)} leagues: "
            f"{totals[EventState.IN_PROGRESS.value]} live, "
            f"{totals[EventState.SCHEDULED.value]} upcoming, "
            f"{totals[EventState.COMPLETED.value]} final."
        ),
    }

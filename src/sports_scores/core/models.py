"""Pydantic data models: the shared business objects.

Every model here is rebuilt from the upstream payload on each request.
Nothing is persisted.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Sport(str, Enum):
    """Sports covered by the supported leagues."""

    FOOTBALL = "football"
    BASKETBALL = "basketball"
    SOCCER = "soccer"
    BASEBALL = "baseball"
    HOCKEY = "hockey"


class LeagueKey(str, Enum):
    """Short identifiers accepted by the entrypoints."""

    NFL = "nfl"
    NBA = "nba"
    PREMIER_LEAGUE = "premier-league"
    LA_LIGA = "la-liga"
    MLB = "mlb"
    NHL = "nhl"
    COLLEGE_FOOTBALL = "college-football"
    COLLEGE_BASKETBALL = "college-basketball"


class EventState(str, Enum):
    """Lifecycle state of a game."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


class HomeAway(str, Enum):
    HOME = "home"
    AWAY = "away"


class LeagueConfig(BaseModel):
    """Static description of an upstream scoreboard."""

    model_config = ConfigDict(frozen=True)

    key: LeagueKey
    path: str = Field(description="Upstream path segment, e.g. 'basketball/nba'")
    name: str = Field(description="Display name, e.g. 'NBA'")
    sport: Sport


class EventStatus(BaseModel):
    state: EventState = EventState.UNKNOWN
    detail: str = ""
    clock: Optional[str] = None
    period: Optional[int] = None


class Participant(BaseModel):
    """One side of a game."""

    name: str
    abbreviation: Optional[str] = None
    score: Optional[int] = None
    winner: Optional[bool] = None
    home_away: Optional[HomeAway] = None
    logo: Optional[str] = None
    record: Optional[str] = Field(None, description="Overall record summary, e.g. '10-3'")


class NormalizedEvent(BaseModel):
    """A single game, match or fight in the common shape."""

    id: str
    name: str
    league: str
    start_time: Optional[datetime] = None
    status: EventStatus = Field(default_factory=EventStatus)
    venue: Optional[str] = None
    participants: list[Participant] = Field(default_factory=list)

    @property
    def home(self) -> Optional[Participant]:
        return next((p for p in self.participants if p.home_away == HomeAway.HOME), None)

    @property
    def away(self) -> Optional[Participant]:
        return next((p for p in self.participants if p.home_away == HomeAway.AWAY), None)

    @property
    def is_live(self) -> bool:
        return self.status.state == EventState.IN_PROGRESS

    def score_line(self) -> str:
        """Away score first, missing scores shown as 0."""
        home, away = self.home, self.away
        if home is None or away is None:
            return "TBD"
        return f"{away.score or 0} - {home.score or 0}"


class LeagueScoreboard(BaseModel):
    """All events currently on one league's scoreboard."""

    league: str
    league_key: LeagueKey
    sport: Sport
    fetched_at: datetime
    day: Optional[str] = Field(None, description="Upstream scoreboard day label")
    events: list[NormalizedEvent] = Field(default_factory=list)

    @property
    def live_count(self) -> int:
        return sum(1 for e in self.events if e.is_live)

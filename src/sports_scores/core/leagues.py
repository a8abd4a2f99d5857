"""Supported leagues and their upstream scoreboard paths."""

from __future__ import annotations

from typing import Union

from .errors import ValidationError
from .models import LeagueConfig, LeagueKey, Sport

LEAGUES: dict[LeagueKey, LeagueConfig] = {
    LeagueKey.NFL: LeagueConfig(key=LeagueKey.NFL, path="football/nfl", name="NFL", sport=Sport.FOOTBALL),
    LeagueKey.NBA: LeagueConfig(key=LeagueKey.NBA, path="basketball/nba", name="NBA", sport=Sport.BASKETBALL),
    LeagueKey.PREMIER_LEAGUE: LeagueConfig(key=LeagueKey.PREMIER_LEAGUE, path="soccer/eng.1", name="Premier League", sport=Sport.SOCCER),
    LeagueKey.LA_LIGA: LeagueConfig(key=LeagueKey.LA_LIGA, path="soccer/esp.1", name="La Liga", sport=Sport.SOCCER),
    LeagueKey.MLB: LeagueConfig(key=LeagueKey.MLB, path="baseball/mlb", name="MLB", sport=Sport.BASEBALL),
    LeagueKey.NHL: LeagueConfig(key=LeagueKey.NHL, path="hockey/nhl", name="NHL", sport=Sport.HOCKEY),
    LeagueKey.COLLEGE_FOOTBALL: LeagueConfig(key=LeagueKey.COLLEGE_FOOTBALL, path="football/college-football", name="College Football", sport=Sport.FOOTBALL),
    LeagueKey.COLLEGE_BASKETBALL: LeagueConfig(key=LeagueKey.COLLEGE_BASKETBALL, path="basketball/mens-college-basketball", name="College Basketball", sport=Sport.BASKETBALL),
}

ALL_LEAGUES = list(LEAGUES)
OVERVIEW_LEAGUES = [LeagueKey.NFL, LeagueKey.NBA, LeagueKey.PREMIER_LEAGUE]


def get_league(key: Union[str, LeagueKey]) -> LeagueConfig:
    """Look up a league by key, accepting either the enum or its string value."""
    try:
        return LEAGUES[LeagueKey(key)]
    except ValueError:
        supported = ", ".join(k.value for k in LEAGUES)
        raise ValidationError(f"Unknown league '{key}'. Supported: {supported}") from None


def leagues_for_sport(sport: Union[str, Sport]) -> list[LeagueKey]:
    sport = Sport(sport)
    return [key for key, cfg in LEAGUES.items() if cfg.sport == sport]

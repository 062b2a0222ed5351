"""
Response models for the analytics endpoints.

Services return dataclasses; routes convert them with dataclasses.asdict
and FastAPI validates the result against these models.
"""
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ==================== SHARED ====================

class LeagueResponse(BaseModel):
    """League available for filtering."""
    id: str
    name: str
    country: Optional[str] = None
    season: Optional[str] = None


class TeamSummary(BaseModel):
    """Team search hit."""
    id: str
    name: str


# ==================== TEAM STATS ====================

class TeamStatsResponse(BaseModel):
    """Halftime stats for one team in one venue role."""
    team: str
    games_played: int
    avg_points: float = Field(..., description="Average halftime points scored")
    avg_conceded: float = Field(..., description="Average halftime points conceded")
    above_threshold: int
    above_threshold_pct: float
    conceded_above_threshold: int
    conceded_above_threshold_pct: float
    wins: int
    losses: int


# ==================== ODDS DISTRIBUTION ====================

class OddsDistributionResponse(BaseModel):
    below_line: int
    equal_to_line: int
    above_line: int
    no_odds_available: int
    total_games: int
    analyzed_games: int
    fallback_below_140: bool = Field(..., description="Some lines were resolved from prices below 1.40")


class TeamOddsRecurrenceResponse(BaseModel):
    team: str
    home_occurrences: int
    home_games: int
    home_percentage: float
    away_occurrences: int
    away_games: int
    away_percentage: float
    total_occurrences: int


class OddsAnalysisResponse(BaseModel):
    distribution: OddsDistributionResponse
    team_recurrences: List[TeamOddsRecurrenceResponse]


# ==================== MATCHUP ====================

class GameLogEntryResponse(BaseModel):
    date: date
    opponent: str
    halftime_total: int
    team_halftime: int
    opp_halftime: int
    odds_line: Optional[float] = None
    went_over: bool
    result: Literal["win", "loss", "draw"]


class TeamMatchupStatsResponse(BaseModel):
    team: str
    location: Literal["home", "away"]
    games_played: int
    avg_halftime_points: float
    avg_halftime_conceded: float
    over_odds_count: int
    over_odds_percentage: float
    wins: int
    losses: int
    game_log: List[GameLogEntryResponse]


class HeadToHeadGameResponse(BaseModel):
    date: date
    home_team: str
    away_team: str
    home_halftime: int
    away_halftime: int
    halftime_total: int
    odds_line: Optional[float] = None
    went_over: bool


class MatchupAnalysisResponse(BaseModel):
    home_team: TeamMatchupStatsResponse
    away_team: TeamMatchupStatsResponse
    head_to_head_history: List[HeadToHeadGameResponse]


# ==================== ENVELOPES ====================

class StatsFilters(BaseModel):
    league_id: Optional[str] = None
    threshold: float
    last_n_games: Optional[int] = None
    start_date: Optional[date] = None
    end_date: date
    min_odds: float
    max_odds: float


class StatsData(BaseModel):
    home_stats: List[TeamStatsResponse]
    away_stats: List[TeamStatsResponse]
    odds_analysis: Optional[OddsAnalysisResponse] = None


class StatsEnvelope(BaseModel):
    success: bool = True
    data: StatsData
    leagues: List[LeagueResponse]
    filters: StatsFilters


class OddsFilters(BaseModel):
    league_id: Optional[str] = None
    min_odds: float
    max_odds: float
    start_date: Optional[date] = None
    end_date: date


class OddsEnvelope(BaseModel):
    success: bool = True
    data: OddsAnalysisResponse
    filters: OddsFilters


class MatchupEnvelope(BaseModel):
    success: bool = True
    data: MatchupAnalysisResponse


class TeamSearchEnvelope(BaseModel):
    success: bool = True
    teams: List[TeamSummary]

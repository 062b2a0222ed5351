"""
Matchup Analyzer.

Compares two teams ahead of a fixture:

- the home team's recent HOME games and the away team's recent AWAY games,
  each with a per-game log (resolved line, over/under, result)
- up to HEAD_TO_HEAD_LIMIT most recent meetings between them, in either
  arrangement

The head-to-head list ignores `last_n_games`; it is always the latest
meetings regardless of the window applied to the single-team histories.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core import metrics
from app.core.config import settings
from app.models import Team
from app.repositories import GameRepository, TeamRepository
from app.services.analytics.errors import TeamNotFoundError
from app.services.analytics.outcome import count_resolution_tiers, evaluate_game
from app.services.analytics.records import GameRecord

logger = logging.getLogger(__name__)

HOME = "home"
AWAY = "away"


@dataclass
class GameLogEntry:
    date: date
    opponent: str
    halftime_total: int
    team_halftime: int
    opp_halftime: int
    odds_line: Optional[float]
    went_over: bool
    result: str  # "win" | "loss" | "draw"


@dataclass
class TeamMatchupStats:
    team: str
    location: str  # "home" | "away"
    games_played: int = 0
    avg_halftime_points: float = 0.0
    avg_halftime_conceded: float = 0.0
    over_odds_count: int = 0
    over_odds_percentage: float = 0.0
    wins: int = 0
    losses: int = 0
    game_log: List[GameLogEntry] = field(default_factory=list)


@dataclass
class HeadToHeadGame:
    date: date
    home_team: str
    away_team: str
    home_halftime: int
    away_halftime: int
    halftime_total: int
    odds_line: Optional[float]
    went_over: bool


@dataclass
class MatchupAnalysisResult:
    home_team: TeamMatchupStats
    away_team: TeamMatchupStats
    head_to_head_history: List[HeadToHeadGame] = field(default_factory=list)


def summarize_team_games(
    team: str,
    location: str,
    games: Iterable[GameRecord],
    min_odds: float,
    max_odds: float,
) -> TeamMatchupStats:
    """
    Summarize one team's venue-filtered history.

    Args:
        team: Team name as stored
        location: HOME or AWAY; the team's role in every game passed
        games: Games newest first; the log keeps this order
        min_odds: Lowest acceptable over price (inclusive)
        max_odds: Highest acceptable over price (inclusive)
    """
    stats = TeamMatchupStats(team=team, location=location)
    scored = conceded = 0

    for game in games:
        side = game.side(is_home=location == HOME)
        evaluation = evaluate_game(game, min_odds, max_odds)

        scored += side.halftime
        conceded += side.opp_halftime
        if evaluation.went_over:
            stats.over_odds_count += 1

        result = side.result
        if result == "win":
            stats.wins += 1
        elif result == "loss":
            stats.losses += 1

        stats.game_log.append(GameLogEntry(
            date=game.date,
            opponent=side.opponent,
            halftime_total=game.halftime_total,
            team_halftime=side.halftime,
            opp_halftime=side.opp_halftime,
            odds_line=evaluation.line,
            went_over=evaluation.went_over,
            result=result,
        ))

    stats.games_played = len(stats.game_log)
    if stats.games_played:
        stats.avg_halftime_points = scored / stats.games_played
        stats.avg_halftime_conceded = conceded / stats.games_played
        stats.over_odds_percentage = stats.over_odds_count / stats.games_played * 100

    return stats


def build_head_to_head(
    games: Iterable[GameRecord], min_odds: float, max_odds: float
) -> List[HeadToHeadGame]:
    """Head-to-head entries in input order (newest first)."""
    history = []
    for game in games:
        evaluation = evaluate_game(game, min_odds, max_odds)
        history.append(HeadToHeadGame(
            date=game.date,
            home_team=game.home_team,
            away_team=game.away_team,
            home_halftime=game.home_halftime,
            away_halftime=game.away_halftime,
            halftime_total=game.halftime_total,
            odds_line=evaluation.line,
            went_over=evaluation.went_over,
        ))
    return history


class MatchupAnalyzer:
    """Looks up both teams, fetches their histories and builds the comparison."""

    def __init__(self, db: Session, head_to_head_limit: Optional[int] = None):
        self.db = db
        self.games = GameRepository(db)
        self.teams = TeamRepository(db)
        self.head_to_head_limit = head_to_head_limit or settings.HEAD_TO_HEAD_LIMIT

    def _find_team(self, league_id: str, name: str) -> Team:
        team = self.teams.find_by_name(league_id, name)
        if team is None:
            metrics.record_team_lookup_failure()
            logger.warning(f"Matchup team not found: '{name}' (league={league_id})")
            raise TeamNotFoundError(name, league_id)
        return team

    def analyze_matchup(
        self,
        home_team_name: str,
        away_team_name: str,
        league_id: str,
        min_odds: float = 1.70,
        max_odds: float = 1.79,
        last_n_games: Optional[int] = None,
    ) -> MatchupAnalysisResult:
        """
        Analyze a fixture between two teams of a league.

        Raises:
            TeamNotFoundError: naming the home team if it is missing,
                otherwise the away team
        """
        started = time.perf_counter()

        home_team = self._find_team(league_id, home_team_name)
        away_team = self._find_team(league_id, away_team_name)

        home_games = self.games.to_records(self.games.find_home_games(home_team.id, league_id, last_n_games))
        away_games = self.games.to_records(self.games.find_away_games(away_team.id, league_id, last_n_games))
        meetings = self.games.to_records(
            self.games.find_head_to_head(home_team.id, away_team.id, league_id, self.head_to_head_limit)
        )

        result = MatchupAnalysisResult(
            home_team=summarize_team_games(home_team.name, HOME, home_games, min_odds, max_odds),
            away_team=summarize_team_games(away_team.name, AWAY, away_games, min_odds, max_odds),
            head_to_head_history=build_head_to_head(meetings, min_odds, max_odds),
        )

        metrics.record_analysis("matchup", len(home_games) + len(away_games) + len(meetings))
        metrics.record_resolutions(count_resolution_tiers(home_games + away_games + meetings, min_odds, max_odds))
        metrics.analytics_duration_seconds.labels(analysis="matchup").observe(time.perf_counter() - started)
        logger.info(
            f"Matchup {home_team.name} vs {away_team.name}: {len(home_games)} home games, "
            f"{len(away_games)} away games, {len(meetings)} meetings"
        )
        return result

    def search_teams(self, league_id: str, query: str) -> List[Team]:
        """Teams in the league whose name contains `query` (autocomplete)."""
        return self.teams.search(league_id, query)

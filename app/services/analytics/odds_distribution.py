"""
Odds Distribution Aggregator.

For every game in scope the qualifying line is resolved and the halftime
total classified against it. The batch produces:

- a distribution (below / equal / above / no odds) over all games
- per-team recurrence: how often a team's games went over the line, split
  by whether the team was at home or away

Every game counts towards both teams' games played in their role, even
when no line resolved; only ABOVE outcomes count as occurrences.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core import metrics
from app.repositories import GameFilter, GameRepository
from app.services.analytics.outcome import Outcome, count_resolution_tiers, evaluate_game
from app.services.analytics.records import GameRecord

logger = logging.getLogger(__name__)


@dataclass
class OddsDistribution:
    below_line: int = 0
    equal_to_line: int = 0
    above_line: int = 0
    no_odds_available: int = 0
    total_games: int = 0
    analyzed_games: int = 0
    # True if any game in the batch only resolved via a sub-1.40 price
    fallback_below_140: bool = False


@dataclass
class TeamOddsRecurrence:
    team: str
    home_occurrences: int = 0
    home_games: int = 0
    home_percentage: float = 0.0
    away_occurrences: int = 0
    away_games: int = 0
    away_percentage: float = 0.0
    total_occurrences: int = 0


@dataclass
class OddsAnalysisResult:
    distribution: OddsDistribution = field(default_factory=OddsDistribution)
    team_recurrences: List[TeamOddsRecurrence] = field(default_factory=list)


def _percentage(occurrences: int, games: int) -> float:
    return occurrences / games * 100 if games > 0 else 0.0


def analyze_odds_performance(
    games: Iterable[GameRecord], min_odds: float, max_odds: float
) -> OddsAnalysisResult:
    """
    Build the odds distribution and team recurrence table for a batch.

    Args:
        games: Games in scope with their odds lines attached
        min_odds: Lowest acceptable over price (inclusive)
        max_odds: Highest acceptable over price (inclusive)

    Returns:
        OddsAnalysisResult; team recurrences sorted by total occurrences descending
    """
    distribution = OddsDistribution()
    recurrences: Dict[str, TeamOddsRecurrence] = {}

    for game in games:
        distribution.total_games += 1

        home = recurrences.setdefault(game.home_team_id, TeamOddsRecurrence(team=game.home_team))
        away = recurrences.setdefault(game.away_team_id, TeamOddsRecurrence(team=game.away_team))
        home.home_games += 1
        away.away_games += 1

        evaluation = evaluate_game(game, min_odds, max_odds)
        if evaluation.resolution.used_sub_floor:
            distribution.fallback_below_140 = True

        if evaluation.outcome is Outcome.UNRESOLVED:
            distribution.no_odds_available += 1
            continue

        distribution.analyzed_games += 1
        if evaluation.outcome is Outcome.BELOW:
            distribution.below_line += 1
        elif evaluation.outcome is Outcome.EQUAL:
            distribution.equal_to_line += 1
        else:
            distribution.above_line += 1
            home.home_occurrences += 1
            away.away_occurrences += 1

    for row in recurrences.values():
        row.home_percentage = _percentage(row.home_occurrences, row.home_games)
        row.away_percentage = _percentage(row.away_occurrences, row.away_games)
        row.total_occurrences = row.home_occurrences + row.away_occurrences

    team_recurrences = sorted(recurrences.values(), key=lambda row: (-row.total_occurrences, row.team))
    return OddsAnalysisResult(distribution=distribution, team_recurrences=team_recurrences)


class OddsAnalysisService:
    """Fetches games in scope and runs the odds distribution aggregator."""

    def __init__(self, db: Session):
        self.db = db
        self.games = GameRepository(db)

    def analyze(
        self,
        league_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        min_odds: float = 1.70,
        max_odds: float = 1.79,
    ) -> OddsAnalysisResult:
        """Odds distribution for games up to `end_date` (default today), oldest first."""
        started = time.perf_counter()
        game_filter = GameFilter(
            league_id=league_id,
            start_date=start_date,
            end_date=end_date or date.today(),
        )
        records = self.games.to_records(self.games.find_matching(game_filter))

        result = analyze_odds_performance(records, min_odds, max_odds)

        distribution = result.distribution
        metrics.record_analysis("odds_distribution", distribution.total_games)
        metrics.record_resolutions(count_resolution_tiers(records, min_odds, max_odds))
        metrics.analytics_duration_seconds.labels(analysis="odds_distribution").observe(time.perf_counter() - started)
        logger.info(
            f"Odds distribution {min_odds}-{max_odds}: {distribution.analyzed_games}/{distribution.total_games} "
            f"games analyzed, {distribution.above_line} over, {distribution.no_odds_available} without odds"
        )
        if distribution.fallback_below_140:
            logger.info("Odds distribution includes sub-1.40 fallback resolutions")
        return result

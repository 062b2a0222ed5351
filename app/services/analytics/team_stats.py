"""
Team Stats Aggregator.

Splits a league's games into per-team home and away views and summarizes
halftime scoring in each:

- average halftime points scored / conceded
- games where the team scored (or conceded) more than `threshold` at halftime
- wins and losses on full-game points (draws count as neither)

`last_n_games` is a per-team, per-role recency window: each view is sorted
newest first and cut to N independently, so teams with different game
counts are windowed separately.
"""
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core import metrics
from app.repositories import GameFilter, GameRepository, TeamRepository
from app.services.analytics.records import GameRecord, TeamSide

logger = logging.getLogger(__name__)


@dataclass
class TeamStats:
    """Halftime summary for one team in one venue role."""
    team: str
    games_played: int = 0
    avg_points: float = 0.0
    avg_conceded: float = 0.0
    above_threshold: int = 0
    above_threshold_pct: float = 0.0
    conceded_above_threshold: int = 0
    conceded_above_threshold_pct: float = 0.0
    wins: int = 0
    losses: int = 0


@dataclass
class TeamStatsResult:
    home_stats: List[TeamStats] = field(default_factory=list)
    away_stats: List[TeamStats] = field(default_factory=list)


def summarize_sides(team: str, sides: List[TeamSide], threshold: float) -> TeamStats:
    """Summarize one team's games; no games gives an all-zero row."""
    played = len(sides)
    if played == 0:
        return TeamStats(team=team)

    above = sum(1 for s in sides if s.halftime > threshold)
    conceded_above = sum(1 for s in sides if s.opp_halftime > threshold)

    return TeamStats(
        team=team,
        games_played=played,
        avg_points=sum(s.halftime for s in sides) / played,
        avg_conceded=sum(s.opp_halftime for s in sides) / played,
        above_threshold=above,
        above_threshold_pct=above / played * 100,
        conceded_above_threshold=conceded_above,
        conceded_above_threshold_pct=conceded_above / played * 100,
        wins=sum(1 for s in sides if s.result == "win"),
        losses=sum(1 for s in sides if s.result == "loss"),
    )


def _window(entries: List[tuple], last_n_games: Optional[int]) -> List[TeamSide]:
    # entries are (date, side); newest first, stable for same-day games
    entries = sorted(entries, key=lambda entry: entry[0], reverse=True)
    if last_n_games is not None and last_n_games > 0:
        entries = entries[:last_n_games]
    return [side for _, side in entries]


def _rank(rows: List[TeamStats]) -> List[TeamStats]:
    return sorted(rows, key=lambda row: (-row.avg_points, row.team))


def compute_team_stats(
    games: Iterable[GameRecord],
    threshold: float,
    last_n_games: Optional[int] = None,
    teams: Optional[Iterable[str]] = None,
) -> TeamStatsResult:
    """
    Compute home and away halftime stats for every team.

    Args:
        games: Games in scope (any order)
        threshold: Halftime points threshold for the "above" counters
        last_n_games: Per-team recency window; None or non-positive = all games
        teams: Extra team names to report even without games (zero rows)

    Returns:
        TeamStatsResult with both lists sorted by avg_points descending
    """
    names: Dict[str, str] = {}
    home_games: Dict[str, List[tuple]] = defaultdict(list)
    away_games: Dict[str, List[tuple]] = defaultdict(list)

    for game in games:
        home, away = game.side(is_home=True), game.side(is_home=False)
        names[home.team_id] = home.team
        names[away.team_id] = away.team
        home_games[home.team_id].append((game.date, home))
        away_games[away.team_id].append((game.date, away))

    # Placeholder rows keyed by name so they never collide with real ids
    known_names = set(names.values())
    for team_name in teams or ():
        if team_name not in known_names:
            names[f"name:{team_name}"] = team_name
            known_names.add(team_name)

    result = TeamStatsResult()
    for team_id, team_name in names.items():
        result.home_stats.append(
            summarize_sides(team_name, _window(home_games.get(team_id, []), last_n_games), threshold)
        )
        result.away_stats.append(
            summarize_sides(team_name, _window(away_games.get(team_id, []), last_n_games), threshold)
        )

    result.home_stats = _rank(result.home_stats)
    result.away_stats = _rank(result.away_stats)
    return result


class TeamStatsService:
    """Fetches a league's games and runs the team stats aggregator."""

    def __init__(self, db: Session):
        self.db = db
        self.games = GameRepository(db)
        self.teams = TeamRepository(db)

    def calculate(
        self,
        league_id: Optional[str] = None,
        threshold: float = 40,
        last_n_games: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> TeamStatsResult:
        """
        Team stats for games up to `end_date` (default today).

        When a league is given, every team in it gets a row even if it has
        no games in the date range.
        """
        started = time.perf_counter()
        game_filter = GameFilter(
            league_id=league_id,
            start_date=start_date,
            end_date=end_date or date.today(),
        )
        records = self.games.to_records(self.games.find_matching(game_filter, newest_first=True))
        league_teams = [t.name for t in self.teams.find_by_league(league_id)] if league_id else None

        result = compute_team_stats(records, threshold, last_n_games, teams=league_teams)

        metrics.record_analysis("team_stats", len(records))
        metrics.analytics_duration_seconds.labels(analysis="team_stats").observe(time.perf_counter() - started)
        logger.info(
            f"Team stats: {len(records)} games, {len(result.home_stats)} teams "
            f"(league={league_id or 'all'}, threshold={threshold}, last_n={last_n_games})"
        )
        return result

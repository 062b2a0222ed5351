"""
Game Repository for game and odds-line data access.

This is the query side of the analytics engine: every aggregator fetches
its games through here, with both team names and the odds lines attached,
and receives them as immutable GameRecords.

Usage:
    repo = GameRepository(db)
    games = repo.find_matching(GameFilter(league_id=league.id, end_date=date.today()))
    records = repo.to_records(games)
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import and_, desc, or_
from sqlalchemy.orm import Query, joinedload, selectinload

from app.models import Game
from app.repositories.base import BaseRepository
from app.services.analytics.records import GameRecord, OddsLineRecord


@dataclass(frozen=True)
class GameFilter:
    """
    Game selection shared by the league-wide analyses.

    Attributes:
        league_id: Restrict to one league (None = all leagues)
        start_date: Inclusive lower bound on game date (optional)
        end_date: Inclusive upper bound on game date (optional)
    """
    league_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class GameRepository(BaseRepository[Game]):
    """Repository for game data access."""

    def __init__(self, db):
        super().__init__(Game, db)

    def _with_relations(self) -> Query:
        return self.query().options(
            joinedload(Game.home_team),
            joinedload(Game.away_team),
            selectinload(Game.odds_lines),
        )

    # ========================================================================
    # League-wide Queries
    # ========================================================================

    def find_matching(self, game_filter: GameFilter, newest_first: bool = False) -> List[Game]:
        """
        Find games matching a filter.

        Args:
            game_filter: League and date bounds
            newest_first: Order by date descending instead of ascending

        Returns:
            Games with teams and odds lines loaded
        """
        query = self._with_relations()

        if game_filter.league_id:
            query = query.filter(Game.league_id == game_filter.league_id)
        if game_filter.start_date is not None:
            query = query.filter(Game.date >= game_filter.start_date)
        if game_filter.end_date is not None:
            query = query.filter(Game.date <= game_filter.end_date)

        if newest_first:
            query = query.order_by(desc(Game.date), Game.id)
        else:
            query = query.order_by(Game.date, Game.id)

        return query.all()

    # ========================================================================
    # Team-based Queries (most recent first)
    # ========================================================================

    def find_home_games(
        self,
        team_id: str,
        league_id: str,
        limit: Optional[int] = None
    ) -> List[Game]:
        """Find games the team played at home, newest first."""
        return self._recent(
            self._with_relations().filter(Game.home_team_id == team_id, Game.league_id == league_id),
            limit,
        )

    def find_away_games(
        self,
        team_id: str,
        league_id: str,
        limit: Optional[int] = None
    ) -> List[Game]:
        """Find games the team played away, newest first."""
        return self._recent(
            self._with_relations().filter(Game.away_team_id == team_id, Game.league_id == league_id),
            limit,
        )

    def find_head_to_head(
        self,
        team_a_id: str,
        team_b_id: str,
        league_id: str,
        limit: Optional[int] = 5
    ) -> List[Game]:
        """
        Find games between two teams, newest first.

        Handles both orderings (either team may have been at home).
        """
        query = self._with_relations().filter(
            or_(
                and_(Game.home_team_id == team_a_id, Game.away_team_id == team_b_id),
                and_(Game.home_team_id == team_b_id, Game.away_team_id == team_a_id),
            ),
            Game.league_id == league_id,
        )
        return self._recent(query, limit)

    @staticmethod
    def _recent(query: Query, limit: Optional[int]) -> List[Game]:
        query = query.order_by(desc(Game.date), Game.id)
        if limit is not None and limit > 0:
            query = query.limit(limit)
        return query.all()

    # ========================================================================
    # Record Mapping
    # ========================================================================

    @staticmethod
    def to_record(game: Game) -> GameRecord:
        """Map a loaded Game row to an immutable GameRecord."""
        odds_lines = sorted(
            (
                OddsLineRecord(line=o.line, over_odd=o.over_odd, under_odd=o.under_odd)
                for o in game.odds_lines
            ),
            key=lambda o: o.line,
        )
        return GameRecord(
            id=game.id,
            date=game.date,
            league_id=game.league_id,
            home_team_id=game.home_team_id,
            home_team=game.home_team.name,
            away_team_id=game.away_team_id,
            away_team=game.away_team.name,
            home_first=game.home_first,
            home_second=game.home_second,
            home_third=game.home_third,
            home_fourth=game.home_fourth,
            home_total_points=game.home_total_points,
            away_first=game.away_first,
            away_second=game.away_second,
            away_third=game.away_third,
            away_fourth=game.away_fourth,
            away_total_points=game.away_total_points,
            odds_lines=tuple(odds_lines),
        )

    def to_records(self, games: Iterable[Game]) -> List[GameRecord]:
        """Map loaded Game rows to GameRecords, keeping their order."""
        return [self.to_record(game) for game in games]

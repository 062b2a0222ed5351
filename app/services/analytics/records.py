"""
Immutable game and odds-line records consumed by the analytics engine.

Repositories map ORM rows into these so the aggregators stay pure
functions over plain data (and can be tested without a database).
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Tuple


@dataclass(frozen=True)
class OddsLineRecord:
    """A published halftime-total line with decimal prices."""
    line: float
    over_odd: float
    under_odd: float


@dataclass(frozen=True)
class GameRecord:
    """A finalized game with team names and its odds lines attached."""
    id: str
    date: date
    league_id: str
    home_team_id: str
    home_team: str
    away_team_id: str
    away_team: str
    home_first: int
    home_second: int
    home_third: int
    home_fourth: int
    home_total_points: int
    away_first: int
    away_second: int
    away_third: int
    away_fourth: int
    away_total_points: int
    # Sorted by line ascending (repository contract)
    odds_lines: Tuple[OddsLineRecord, ...] = field(default_factory=tuple)

    @property
    def home_halftime(self) -> int:
        return self.home_first + self.home_second

    @property
    def away_halftime(self) -> int:
        return self.away_first + self.away_second

    @property
    def halftime_total(self) -> int:
        return self.home_halftime + self.away_halftime

    def side(self, is_home: bool) -> "TeamSide":
        """View of the game from one team's perspective."""
        if is_home:
            return TeamSide(
                team_id=self.home_team_id,
                team=self.home_team,
                opponent=self.away_team,
                halftime=self.home_halftime,
                opp_halftime=self.away_halftime,
                total_points=self.home_total_points,
                opp_total_points=self.away_total_points,
            )
        return TeamSide(
            team_id=self.away_team_id,
            team=self.away_team,
            opponent=self.home_team,
            halftime=self.away_halftime,
            opp_halftime=self.home_halftime,
            total_points=self.away_total_points,
            opp_total_points=self.home_total_points,
        )


@dataclass(frozen=True)
class TeamSide:
    """One team's scores in a game next to its opponent's."""
    team_id: str
    team: str
    opponent: str
    halftime: int
    opp_halftime: int
    total_points: int
    opp_total_points: int

    @property
    def result(self) -> str:
        """'win', 'loss' or 'draw' on full-game points."""
        if self.total_points > self.opp_total_points:
            return "win"
        if self.total_points < self.opp_total_points:
            return "loss"
        return "draw"

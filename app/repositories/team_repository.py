"""
Team Repository for league-scoped team lookups.

Team names are unique within a league and matched case-insensitively.
Names are folded with str.casefold rather than the database's lower(),
which on SQLite only folds ASCII ("Žalgiris", "Ülker").
"""
from typing import List, Optional

from app.models import Team
from app.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for team data access."""

    def __init__(self, db):
        super().__init__(Team, db)

    def find_by_name(self, league_id: str, name: str) -> Optional[Team]:
        """Find a team by exact name (case-insensitive) within a league."""
        wanted = name.casefold()
        for team in self.find_by_league(league_id):
            if team.name.casefold() == wanted:
                return team
        return None

    def search(self, league_id: str, query: str, limit: Optional[int] = None) -> List[Team]:
        """
        Find teams in a league whose name contains the query (case-insensitive).

        An empty query returns every team in the league.
        """
        needle = query.strip().casefold()
        teams = [team for team in self.find_by_league(league_id) if needle in team.name.casefold()]
        if limit:
            teams = teams[:limit]
        return teams

    def find_by_league(self, league_id: str) -> List[Team]:
        """All teams in a league, by name."""
        return self.query().filter(Team.league_id == league_id).order_by(Team.name).all()

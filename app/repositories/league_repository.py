"""League Repository."""
from typing import List, Optional

from app.models import League
from app.repositories.base import BaseRepository


class LeagueRepository(BaseRepository[League]):
    """Repository for league data access."""

    def __init__(self, db):
        super().__init__(League, db)

    def find_by_name(self, name: str) -> Optional[League]:
        """Find a league by its unique name."""
        return self.where_first(League.name == name)

    def find_all_ordered(self) -> List[League]:
        """All leagues ordered by name (filter panel order)."""
        return self.find_all(order_by="name")

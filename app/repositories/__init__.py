"""
Repository layer for data access.

The analytics engine never queries the database itself; it consumes
GameRecords fetched through these repositories.

Usage:
    from app.repositories import GameRepository, GameFilter
    from app.core.database import SessionLocal

    db = SessionLocal()
    repo = GameRepository(db)
    records = repo.to_records(repo.find_matching(GameFilter(league_id=league_id)))
    db.close()
"""

from app.repositories.base import BaseRepository
from app.repositories.game_repository import GameRepository, GameFilter
from app.repositories.league_repository import LeagueRepository
from app.repositories.team_repository import TeamRepository

__all__ = [
    "BaseRepository",
    "GameFilter",
    "GameRepository",
    "LeagueRepository",
    "TeamRepository",
]

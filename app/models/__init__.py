"""
ORM models for the halftime analytics API.

Usage:
    from app.models import League, Team, Game, OddsLine
"""

from app.models.models import (
    Base,
    League,
    Team,
    Game,
    OddsLine,
)

__all__ = [
    "Base",
    "League",
    "Team",
    "Game",
    "OddsLine",
]

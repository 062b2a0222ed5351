"""
Database models for the halftime analytics API.

Leagues own teams and games; games own their halftime-total odds lines.
Rows are written by the ingestion pipeline and treated as read-only here.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Float, Integer, DateTime, Date, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class League(Base):
    """A named competition/season grouping (e.g. 'Euroleague 2025-26')."""
    __tablename__ = "leagues"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), unique=True, nullable=False, index=True)
    country = Column(String(100), nullable=True)
    season = Column(String(20), nullable=True)  # Season label, e.g. "2025-26"
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    teams = relationship("Team", back_populates="league", cascade="all, delete-orphan")
    games = relationship("Game", back_populates="league", cascade="all, delete-orphan")


class Team(Base):
    """Team within a league. Names are unique per league; lookups ignore case."""
    __tablename__ = "teams"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False, index=True)
    league_id = Column(String(36), ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    league = relationship("League", back_populates="teams")

    __table_args__ = (
        UniqueConstraint('league_id', 'name', name='uq_teams_league_name'),
    )


class Game(Base):
    """
    Finalized game with per-quarter scores.

    Half-time score per side is first + second quarter. Totals are stored
    redundantly by ingestion and are expected to equal the quarter sum.
    """
    __tablename__ = "games"

    id = Column(String(36), primary_key=True, default=_uuid)
    league_id = Column(String(36), ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)  # Calendar day, no time of day
    home_team_id = Column(String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    away_team_id = Column(String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)

    # Home quarter scores
    home_first = Column(Integer, nullable=False, default=0)
    home_second = Column(Integer, nullable=False, default=0)
    home_third = Column(Integer, nullable=False, default=0)
    home_fourth = Column(Integer, nullable=False, default=0)
    home_total_points = Column(Integer, nullable=False, default=0)

    # Away quarter scores
    away_first = Column(Integer, nullable=False, default=0)
    away_second = Column(Integer, nullable=False, default=0)
    away_third = Column(Integer, nullable=False, default=0)
    away_fourth = Column(Integer, nullable=False, default=0)
    away_total_points = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    league = relationship("League", back_populates="games")
    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
    odds_lines = relationship(
        "OddsLine",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="OddsLine.line",
    )

    __table_args__ = (
        Index('ix_games_league_date', 'league_id', 'date'),
        Index('ix_games_home_team_date', 'home_team_id', 'date'),
        Index('ix_games_away_team_date', 'away_team_id', 'date'),
    )


class OddsLine(Base):
    """One published halftime-total line with decimal over/under prices."""
    __tablename__ = "odds_lines"

    id = Column(String(36), primary_key=True, default=_uuid)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    line = Column(Float, nullable=False)  # e.g. 80.5 (half lines) or 81 (whole lines)
    over_odd = Column(Float, nullable=False)  # Decimal odds, e.g. 1.73
    under_odd = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    game = relationship("Game", back_populates="odds_lines")

    __table_args__ = (
        UniqueConstraint('game_id', 'line', name='uq_odds_lines_game_line'),
    )

"""Shared pytest fixtures for the halftime analytics API tests."""
import os
import sys
from pathlib import Path
from datetime import date
from typing import Generator, Iterable, Sequence, Tuple
import uuid

# Test settings must be in place before app modules read them
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

Quarters = Tuple[int, int, int, int]
OddsTuple = Tuple[float, float, float]  # (line, over_odd, under_odd)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create fresh test database session with an isolated in-memory database."""
    from app.models import Base

    # StaticPool keeps one connection so every session sees the same in-memory data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(bind=engine)
    session = TestSessionLocal()

    yield session

    session.close()
    engine.dispose()


# =============================================================================
# RECORD FACTORY (pure engine tests, no database)
# =============================================================================

@pytest.fixture
def make_game():
    """
    Build GameRecords for engine tests.

    Usage:
        game = make_game(home="A", away="B", day=date(2025, 1, 1),
                         home_q=(20, 20, 20, 20), away_q=(18, 15, 20, 20),
                         odds=[(40.5, 1.75, 2.05)])

    Full-game totals default to the quarter sums.
    """
    from app.services.analytics.records import GameRecord, OddsLineRecord

    def _make_game(
        home: str = "A",
        away: str = "B",
        day: date = date(2025, 1, 1),
        home_q: Quarters = (20, 20, 20, 20),
        away_q: Quarters = (18, 15, 20, 20),
        odds: Iterable[OddsTuple] = (),
        home_total: int | None = None,
        away_total: int | None = None,
        game_id: str | None = None,
    ) -> GameRecord:
        return GameRecord(
            id=game_id or str(uuid.uuid4()),
            date=day,
            league_id="league-1",
            home_team_id=f"team-{home}",
            home_team=home,
            away_team_id=f"team-{away}",
            away_team=away,
            home_first=home_q[0],
            home_second=home_q[1],
            home_third=home_q[2],
            home_fourth=home_q[3],
            home_total_points=sum(home_q) if home_total is None else home_total,
            away_first=away_q[0],
            away_second=away_q[1],
            away_third=away_q[2],
            away_fourth=away_q[3],
            away_total_points=sum(away_q) if away_total is None else away_total,
            odds_lines=tuple(OddsLineRecord(line, over, under) for line, over, under in odds),
        )

    return _make_game


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def add_game(db_session: Session):
    """Insert a Game (and its odds lines) for the given league and teams."""
    from app.models import Game, OddsLine

    def _add_game(
        league,
        home_team,
        away_team,
        day: date,
        home_q: Quarters,
        away_q: Quarters,
        odds: Sequence[OddsTuple] = (),
    ):
        game = Game(
            id=str(uuid.uuid4()),
            league_id=league.id,
            date=day,
            home_team_id=home_team.id,
            away_team_id=away_team.id,
            home_first=home_q[0],
            home_second=home_q[1],
            home_third=home_q[2],
            home_fourth=home_q[3],
            home_total_points=sum(home_q),
            away_first=away_q[0],
            away_second=away_q[1],
            away_third=away_q[2],
            away_fourth=away_q[3],
            away_total_points=sum(away_q),
        )
        # Insert odds out of line order; reads must come back sorted
        for line, over, under in reversed(list(odds)):
            game.odds_lines.append(OddsLine(id=str(uuid.uuid4()), line=line, over_odd=over, under_odd=under))
        db_session.add(game)
        db_session.commit()
        return game

    return _add_game


@pytest.fixture
def sample_league_data(db_session: Session, add_game):
    """
    One league with three teams and five games.

    Halftime totals / lines under the default 1.70-1.79 band:
    - 2025-01-01 Lions 40-33 Tigers  line 40.5 (primary)   -> above
    - 2025-01-05 Tigers 30-42 Lions  line 75.5 (primary)   -> below
    - 2025-01-10 Lions 50-40 Bears   no odds               -> unresolved
    - 2025-01-15 Bears 40-40 Tigers  line 79.5 (sub-floor) -> above (draw)
    - 2025-01-20 Lions 20-30 Tigers  line 49.5 (cascade)   -> above
    """
    from app.models import League, Team

    league = League(id=str(uuid.uuid4()), name="Test League", country="Greece", season="2024-25")
    other = League(id=str(uuid.uuid4()), name="Another League", country="Spain", season="2024-25")
    db_session.add_all([league, other])
    db_session.commit()

    lions = Team(id=str(uuid.uuid4()), name="Lions", league_id=league.id)
    tigers = Team(id=str(uuid.uuid4()), name="Tigers", league_id=league.id)
    bears = Team(id=str(uuid.uuid4()), name="Bears", league_id=league.id)
    db_session.add_all([lions, tigers, bears])
    db_session.commit()

    games = [
        add_game(league, lions, tigers, date(2025, 1, 1), (20, 20, 20, 20), (18, 15, 20, 20),
                 [(40.5, 1.75, 2.05)]),
        add_game(league, tigers, lions, date(2025, 1, 5), (15, 15, 20, 20), (20, 22, 20, 20),
                 [(75.5, 1.72, 2.10), (80.5, 1.45, 2.60)]),
        add_game(league, lions, bears, date(2025, 1, 10), (25, 25, 20, 20), (20, 20, 20, 20)),
        add_game(league, bears, tigers, date(2025, 1, 15), (20, 20, 20, 20), (20, 20, 20, 20),
                 [(79.5, 1.35, 3.00)]),
        add_game(league, lions, tigers, date(2025, 1, 20), (10, 10, 20, 20), (15, 15, 20, 20),
                 [(49.5, 1.62, 2.20), (50.5, 1.85, 1.95)]),
    ]

    return {
        "league": league,
        "other_league": other,
        "lions": lions,
        "tigers": tigers,
        "bears": bears,
        "games": games,
    }


@pytest.fixture(scope="function")
def test_client(db_session):
    """
    Create FastAPI TestClient backed by the test database session.

    Note: We don't use the context manager (with TestClient) so the
    application lifespan does not run against the configured database.
    """
    from fastapi.testclient import TestClient
    from app.main import app
    from app.core.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()

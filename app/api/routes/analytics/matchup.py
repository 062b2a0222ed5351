"""
Matchup API Routes.

Provides endpoints for:
- Two-team matchup analysis (venue-filtered histories + head-to-head)
- Team search within a league (autocomplete for the matchup form)
"""
import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.api.routes.analytics.schemas import MatchupEnvelope, TeamSearchEnvelope
from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import rate_limit_analytics
from app.services.analytics.errors import (
    InvalidRangeError,
    TeamNotFoundError,
    validate_odds_band,
    validate_positive,
)
from app.services.analytics.matchup import MatchupAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics/matchup", tags=["analytics-matchup"])


@router.get("", response_model=MatchupEnvelope)
@rate_limit_analytics
async def get_matchup(
    request: Request,
    home_team: str = Query(..., min_length=1, description="Home team name (case-insensitive)"),
    away_team: str = Query(..., min_length=1, description="Away team name (case-insensitive)"),
    league_id: str = Query(..., description="League both teams play in"),
    min_odds: float = Query(settings.DEFAULT_MIN_ODDS, description="Lowest acceptable over price"),
    max_odds: float = Query(settings.DEFAULT_MAX_ODDS, description="Highest acceptable over price"),
    last_n_games: Optional[int] = Query(None, description="Most recent home/away games per team"),
    db: Session = Depends(get_db)
):
    """
    Analyze a fixture.

    Returns the home team's home history, the away team's away history
    (both limited to `last_n_games` when set) and the last meetings
    between the two teams. Responds 404 when either team is unknown.
    """
    try:
        validate_odds_band(min_odds, max_odds)
        validate_positive("last_n_games", last_n_games)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = MatchupAnalyzer(db).analyze_matchup(
            home_team_name=home_team,
            away_team_name=away_team,
            league_id=league_id,
            min_odds=min_odds,
            max_odds=max_odds,
            last_n_games=last_n_games,
        )
    except TeamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error analyzing matchup {home_team} vs {away_team}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": asdict(result)}


@router.get("/teams", response_model=TeamSearchEnvelope)
async def search_teams(
    league_id: str = Query(..., description="League to search in"),
    query: str = Query("", description="Name fragment (case-insensitive)"),
    db: Session = Depends(get_db)
):
    """Search teams in a league by name fragment."""
    teams = MatchupAnalyzer(db).search_teams(league_id, query)
    return {
        "success": True,
        "teams": [{"id": team.id, "name": team.name} for team in teams],
    }

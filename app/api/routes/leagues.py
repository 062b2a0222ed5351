"""
League API Routes.

Lists the leagues available for filtering analytics.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.routes.analytics.schemas import LeagueResponse
from app.core.database import get_db
from app.repositories import LeagueRepository

router = APIRouter(prefix="/leagues", tags=["leagues"])


@router.get("", response_model=List[LeagueResponse])
async def list_leagues(db: Session = Depends(get_db)):
    """Get all leagues ordered by name."""
    leagues = LeagueRepository(db).find_all_ordered()
    return [
        {"id": league.id, "name": league.name, "country": league.country, "season": league.season}
        for league in leagues
    ]

"""
Team Stats API Routes.

Provides the dashboard's main analytics payload:
- Per-team home and away halftime stats (threshold counters, win/loss)
- Optionally the odds distribution for the same league and dates
- The league list for the filter panel
"""
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.api.routes.analytics.schemas import StatsEnvelope
from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import rate_limit_analytics
from app.repositories import LeagueRepository
from app.services.analytics.errors import InvalidRangeError, validate_odds_band, validate_positive
from app.services.analytics.odds_distribution import OddsAnalysisService
from app.services.analytics.team_stats import TeamStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics-stats"])


@router.get("/stats", response_model=StatsEnvelope)
@rate_limit_analytics
async def get_team_stats(
    request: Request,
    league_id: Optional[str] = Query(None, description="Restrict to one league"),
    threshold: float = Query(settings.DEFAULT_THRESHOLD, description="Halftime points threshold"),
    last_n_games: Optional[int] = Query(None, description="Per-team window of most recent games"),
    start_date: Optional[date] = Query(None, description="First game date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Last game date (YYYY-MM-DD, default: today)"),
    include_odds: bool = Query(True, description="Include the odds distribution"),
    min_odds: float = Query(settings.DEFAULT_MIN_ODDS, description="Lowest acceptable over price"),
    max_odds: float = Query(settings.DEFAULT_MAX_ODDS, description="Highest acceptable over price"),
    db: Session = Depends(get_db)
):
    """
    Get home/away halftime stats per team.

    Example: `/api/v1/analytics/stats?league_id=...&threshold=40&last_n_games=5`

    Each team appears in both lists; a team without games in a role gets
    an all-zero row. Lists are sorted by average halftime points.
    """
    try:
        if threshold <= 0:
            raise InvalidRangeError(f"threshold must be positive (got {threshold})")
        validate_positive("last_n_games", last_n_games)
        if include_odds:
            validate_odds_band(min_odds, max_odds)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    end_date = end_date or date.today()

    try:
        stats = TeamStatsService(db).calculate(
            league_id=league_id,
            threshold=threshold,
            last_n_games=last_n_games,
            start_date=start_date,
            end_date=end_date,
        )
        data = asdict(stats)

        if include_odds:
            odds = OddsAnalysisService(db).analyze(
                league_id=league_id,
                start_date=start_date,
                end_date=end_date,
                min_odds=min_odds,
                max_odds=max_odds,
            )
            data["odds_analysis"] = asdict(odds)

        leagues = LeagueRepository(db).find_all_ordered()
    except Exception as e:
        logger.error(f"Error calculating team stats: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "success": True,
        "data": data,
        "leagues": [
            {"id": l.id, "name": l.name, "country": l.country, "season": l.season}
            for l in leagues
        ],
        "filters": {
            "league_id": league_id,
            "threshold": threshold,
            "last_n_games": last_n_games,
            "start_date": start_date,
            "end_date": end_date,
            "min_odds": min_odds,
            "max_odds": max_odds,
        },
    }

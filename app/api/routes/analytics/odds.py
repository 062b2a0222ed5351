"""
Odds Distribution API Routes.

How often halftime totals landed below / on / above the qualifying line
for a price band, and which teams go over most often at home and away.
"""
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.api.routes.analytics.schemas import OddsEnvelope
from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import rate_limit_analytics
from app.services.analytics.errors import InvalidRangeError, validate_odds_band
from app.services.analytics.odds_distribution import OddsAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics-odds"])


@router.get("/odds-distribution", response_model=OddsEnvelope)
@rate_limit_analytics
async def get_odds_distribution(
    request: Request,
    league_id: Optional[str] = Query(None, description="Restrict to one league"),
    start_date: Optional[date] = Query(None, description="First game date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Last game date (YYYY-MM-DD, default: today)"),
    min_odds: float = Query(settings.DEFAULT_MIN_ODDS, description="Lowest acceptable over price"),
    max_odds: float = Query(settings.DEFAULT_MAX_ODDS, description="Highest acceptable over price"),
    db: Session = Depends(get_db)
):
    """
    Get the halftime odds distribution.

    Example response:
    ```json
    {
        "distribution": {
            "below_line": 41, "equal_to_line": 0, "above_line": 52,
            "no_odds_available": 7, "total_games": 100, "analyzed_games": 93,
            "fallback_below_140": false
        },
        "team_recurrences": [
            {"team": "Olympiacos", "home_occurrences": 6, "home_games": 8, "home_percentage": 75.0, ...}
        ]
    }
    ```

    Bands matching one of the canonical 0.10-wide bands (2.00-2.09 down to
    1.40-1.49) fall back to lower bands when no line is priced in range.
    """
    try:
        validate_odds_band(min_odds, max_odds)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    end_date = end_date or date.today()

    try:
        result = OddsAnalysisService(db).analyze(
            league_id=league_id,
            start_date=start_date,
            end_date=end_date,
            min_odds=min_odds,
            max_odds=max_odds,
        )
    except Exception as e:
        logger.error(f"Error analyzing odds distribution: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "success": True,
        "data": asdict(result),
        "filters": {
            "league_id": league_id,
            "min_odds": min_odds,
            "max_odds": max_odds,
            "start_date": start_date,
            "end_date": end_date,
        },
    }

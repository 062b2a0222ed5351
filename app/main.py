"""
Main FastAPI application for the Halftime Odds Analytics API.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.orm import Session

# Load environment variables from .env file
from dotenv import load_dotenv
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from app.core.config import settings
from app.core.database import get_db, init_db
from app.core.logging import configure_logging, get_logger
from app.core.middleware import CorrelationIdMiddleware
from app.core.rate_limit import limiter
from app.core import metrics
from app.api.routes import leagues
from app.api.routes.analytics import matchup as analytics_matchup, odds as analytics_odds, stats as analytics_stats

# Configure structured logging (JSON in production, colored in development)
configure_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    # Local SQLite databases are created on first start; elsewhere tables come from migrations
    if settings.is_development() and settings.is_sqlite():
        init_db()
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Halftime scoring and over/under analytics for basketball leagues",
    lifespan=lifespan
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add correlation ID middleware (must be added before CORS for proper header handling)
app.add_middleware(CorrelationIdMiddleware)

# Prometheus instrumentation must be registered before routes are included
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
logger.info("Prometheus metrics initialized at /metrics")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# ROUTE REGISTRATION
# ============================================================================
# All routes are versioned under /api/v1:
#   /api/v1/leagues
#   /api/v1/analytics/stats
#   /api/v1/analytics/odds-distribution
#   /api/v1/analytics/matchup, /api/v1/analytics/matchup/teams
# ============================================================================

app.include_router(leagues.router, prefix="/api/v1")
app.include_router(analytics_stats.router, prefix="/api/v1")
app.include_router(analytics_odds.router, prefix="/api/v1")
app.include_router(analytics_matchup.router, prefix="/api/v1")


@app.get("/")
@limiter.limit("60/minute")
async def root(request: Request):
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": {
            "api_version": "v1",
            "leagues": "/api/v1/leagues",
            "analytics": {
                "stats": "/api/v1/analytics/stats",
                "odds_distribution": "/api/v1/analytics/odds-distribution",
                "matchup": "/api/v1/analytics/matchup",
                "team_search": "/api/v1/analytics/matchup/teams"
            },
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics"
        }
    }


@app.get("/health")
@limiter.limit("120/minute")  # Higher limit for health checks
async def health_check(request: Request):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


@app.get("/api/health")
@limiter.limit("60/minute")
async def api_health(request: Request, db: Session = Depends(get_db)):
    """Detailed API health check with component-level status."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "components": {}
    }

    try:
        from app.models import Game, League, OddsLine, Team

        db.execute(text("SELECT 1"))
        health_status["components"]["database"] = {
            "status": "connected",
            "counts": {
                "leagues": db.query(League).count(),
                "teams": db.query(Team).count(),
                "games": db.query(Game).count(),
                "odds_lines": db.query(OddsLine).count(),
            }
        }
        metrics.update_db_pool_metrics()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "error": str(e)
        }
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503

    return JSONResponse(
        status_code=status_code,
        content=health_status
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

"""
Prometheus metrics for the halftime analytics API.

Metrics exposed:
- Analytics request counters and latency histograms (per analysis type)
- Games processed per analysis type
- Odds-line resolutions by fallback tier
- Team lookup failures in the matchup analyzer
- Database connection pool gauges
"""
from typing import Dict

from prometheus_client import Counter, Gauge, Histogram

# Analytics Metrics
analytics_requests_total = Counter(
    "analytics_requests_total",
    "Total analytics computations",
    ["analysis"]
)

analytics_duration_seconds = Histogram(
    "analytics_duration_seconds",
    "Time spent fetching and aggregating an analysis",
    ["analysis"]
)

analytics_games_processed_total = Counter(
    "analytics_games_processed_total",
    "Total games run through an aggregator",
    ["analysis"]
)

odds_line_resolutions_total = Counter(
    "odds_line_resolutions_total",
    "Qualifying odds-line resolutions by tier (none = no line found)",
    ["tier"]
)

team_lookup_failures_total = Counter(
    "team_lookup_failures_total",
    "Matchup requests naming a team that does not exist in the league"
)

# Database Metrics
db_pool_connections = Gauge(
    "db_pool_connections",
    "Number of database connections in the pool"
)

db_pool_connections_checked_out = Gauge(
    "db_pool_connections_checked_out",
    "Number of checked out database connections"
)

db_pool_connections_overflow = Gauge(
    "db_pool_connections_overflow",
    "Number of overflow database connections"
)


def update_db_pool_metrics():
    """Update database connection pool metrics (no-op for pools without sizing)."""
    from app.core.database import engine

    pool = engine.pool
    if not hasattr(pool, "size"):
        return

    db_pool_connections.set(pool.size())
    db_pool_connections_checked_out.set(pool.checkedout())
    db_pool_connections_overflow.set(pool.overflow())


def record_analysis(analysis: str, games: int):
    """Record one completed analysis and the number of games it covered."""
    analytics_requests_total.labels(analysis=analysis).inc()
    analytics_games_processed_total.labels(analysis=analysis).inc(games)


def record_resolutions(tier_counts: Dict[str, int]):
    """Record how many games each resolver tier produced a line for."""
    for tier, count in tier_counts.items():
        odds_line_resolutions_total.labels(tier=tier).inc(count)


def record_team_lookup_failure():
    """Record a failed matchup team lookup."""
    team_lookup_failures_total.inc()

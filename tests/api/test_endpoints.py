"""
HTTP endpoint integration tests for the halftime odds analytics API.

These tests verify that FastAPI endpoints:
- Return correct HTTP status codes
- Validate request parameters (400 on invalid ranges)
- Map unknown teams to 404
- Serialize the analytics payloads in the documented envelopes

Uses FastAPI TestClient for in-memory HTTP testing.
"""
import httpx
import pytest
from fastapi.testclient import TestClient


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

class TestRootAndHealthEndpoints:
    """Test root and health check endpoints."""

    def test_root_endpoint(self, test_client: TestClient):
        """Test root endpoint returns API information."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "running"
        assert "name" in data
        assert "version" in data
        assert data["endpoints"]["analytics"]["matchup"] == "/api/v1/analytics/matchup"

    def test_health_endpoint(self, test_client: TestClient):
        """Test basic health check endpoint."""
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_api_health_endpoint(self, test_client: TestClient, sample_league_data):
        """Test detailed health check reports table counts."""
        response = test_client.get("/api/health")

        assert response.status_code == 200
        database = response.json()["components"]["database"]
        assert database["status"] == "connected"
        assert database["counts"]["leagues"] == 2
        assert database["counts"]["games"] == 5

    @pytest.mark.asyncio
    async def test_health_over_async_client(self):
        """Test the ASGI app directly with an async HTTP client."""
        from app.main import app

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"]

    def test_correlation_id_echoed(self, test_client: TestClient):
        """Test correlation ID header is returned."""
        response = test_client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_metrics_endpoint(self, test_client: TestClient):
        """Test Prometheus metrics are exposed."""
        test_client.get("/health")

        response = test_client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text


# =============================================================================
# LEAGUES
# =============================================================================

class TestLeaguesEndpoint:
    """Test league listing."""

    def test_list_leagues(self, test_client: TestClient, sample_league_data):
        response = test_client.get("/api/v1/leagues")

        assert response.status_code == 200
        leagues = response.json()
        assert [league["name"] for league in leagues] == ["Another League", "Test League"]
        assert leagues[1]["country"] == "Greece"

    def test_list_leagues_empty(self, test_client: TestClient):
        response = test_client.get("/api/v1/leagues")

        assert response.status_code == 200
        assert response.json() == []


# =============================================================================
# TEAM STATS
# =============================================================================

class TestStatsEndpoint:
    """Test /api/v1/analytics/stats."""

    def test_stats_with_odds(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get("/api/v1/analytics/stats", params={"league_id": league.id})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True

        data = body["data"]
        assert [row["team"] for row in data["home_stats"]] == ["Bears", "Lions", "Tigers"]
        assert len(data["away_stats"]) == 3
        assert data["odds_analysis"]["distribution"]["total_games"] == 5
        assert data["odds_analysis"]["distribution"]["fallback_below_140"] is True

        assert [league["name"] for league in body["leagues"]] == ["Another League", "Test League"]
        assert body["filters"]["threshold"] == 40
        assert body["filters"]["min_odds"] == 1.70

    def test_stats_without_odds(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/stats",
            params={"league_id": league.id, "include_odds": "false"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["odds_analysis"] is None

    def test_stats_last_n_games(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/stats",
            params={"league_id": league.id, "last_n_games": 2, "include_odds": "false"},
        )

        assert response.status_code == 200
        lions = next(row for row in response.json()["data"]["home_stats"] if row["team"] == "Lions")
        assert lions["games_played"] == 2
        assert lions["avg_points"] == 35

    def test_stats_date_range(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/stats",
            params={"league_id": league.id, "start_date": "2025-01-01", "end_date": "2025-01-05"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["filters"]["end_date"] == "2025-01-05"
        assert body["data"]["odds_analysis"]["distribution"]["total_games"] == 2

    @pytest.mark.parametrize("params", [
        {"threshold": 0},
        {"threshold": -5},
        {"last_n_games": 0},
        {"min_odds": 1.9, "max_odds": 1.7},
        {"min_odds": 0, "max_odds": 1.7},
    ])
    def test_stats_invalid_parameters(self, test_client: TestClient, params):
        response = test_client.get("/api/v1/analytics/stats", params=params)

        assert response.status_code == 400

    def test_reversed_band_ignored_without_odds(self, test_client: TestClient):
        response = test_client.get(
            "/api/v1/analytics/stats",
            params={"min_odds": 1.9, "max_odds": 1.7, "include_odds": "false"},
        )

        assert response.status_code == 200

    def test_malformed_date(self, test_client: TestClient):
        response = test_client.get("/api/v1/analytics/stats", params={"start_date": "yesterday"})

        assert response.status_code == 422


# =============================================================================
# ODDS DISTRIBUTION
# =============================================================================

class TestOddsDistributionEndpoint:
    """Test /api/v1/analytics/odds-distribution."""

    def test_distribution(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get("/api/v1/analytics/odds-distribution", params={"league_id": league.id})

        assert response.status_code == 200
        body = response.json()
        distribution = body["data"]["distribution"]
        assert distribution["above_line"] == 3
        assert distribution["below_line"] == 1
        assert distribution["equal_to_line"] == 0
        assert distribution["no_odds_available"] == 1
        assert [row["team"] for row in body["data"]["team_recurrences"]] == ["Tigers", "Lions", "Bears"]
        assert body["filters"]["max_odds"] == 1.79

    def test_distribution_custom_band(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/odds-distribution",
            params={"league_id": league.id, "min_odds": 1.80, "max_odds": 1.89},
        )

        assert response.status_code == 200
        assert response.json()["data"]["distribution"]["below_line"] == 2

    def test_distribution_reversed_band(self, test_client: TestClient):
        response = test_client.get(
            "/api/v1/analytics/odds-distribution",
            params={"min_odds": 1.79, "max_odds": 1.70},
        )

        assert response.status_code == 400
        assert "cannot exceed" in response.json()["detail"]


# =============================================================================
# MATCHUP
# =============================================================================

class TestMatchupEndpoint:
    """Test /api/v1/analytics/matchup and team search."""

    def test_matchup(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup",
            params={"home_team": "lions", "away_team": "tigers", "league_id": league.id},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["home_team"]["team"] == "Lions"
        assert data["home_team"]["location"] == "home"
        assert data["home_team"]["game_log"][0]["date"] == "2025-01-20"
        assert data["home_team"]["game_log"][1]["odds_line"] is None
        assert data["away_team"]["location"] == "away"
        assert data["away_team"]["over_odds_percentage"] == 100.0
        assert len(data["head_to_head_history"]) == 3

    def test_matchup_last_n_games(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup",
            params={"home_team": "Lions", "away_team": "Tigers", "league_id": league.id, "last_n_games": 1},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["home_team"]["games_played"] == 1
        assert len(data["head_to_head_history"]) == 3

    def test_matchup_unknown_team(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup",
            params={"home_team": "Unknown Team", "away_team": "Tigers", "league_id": league.id},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Team not found: Unknown Team"

    def test_matchup_missing_team_param(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup",
            params={"home_team": "Lions", "league_id": league.id},
        )

        assert response.status_code == 422

    def test_matchup_invalid_band(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup",
            params={
                "home_team": "Lions",
                "away_team": "Tigers",
                "league_id": league.id,
                "min_odds": 2.0,
                "max_odds": 1.5,
            },
        )

        assert response.status_code == 400

    def test_team_search(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup/teams",
            params={"league_id": league.id, "query": "i"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [team["name"] for team in body["teams"]] == ["Lions", "Tigers"]
        assert all("id" in team for team in body["teams"])

    def test_team_search_no_match(self, test_client: TestClient, sample_league_data):
        league = sample_league_data["league"]

        response = test_client.get(
            "/api/v1/analytics/matchup/teams",
            params={"league_id": league.id, "query": "zzz"},
        )

        assert response.status_code == 200
        assert response.json()["teams"] == []

"""Error types for analytics flows."""


class AnalyticsError(RuntimeError):
    """Base error for analytics operations."""


class TeamNotFoundError(AnalyticsError):
    """A matchup named a team that does not exist in the league."""

    def __init__(self, team_name: str, league_id: str | None = None):
        self.team_name = team_name
        self.league_id = league_id
        super().__init__(f"Team not found: {team_name}")


class InvalidRangeError(AnalyticsError, ValueError):
    """Request parameters outside their valid range."""


def validate_odds_band(min_odds: float, max_odds: float) -> None:
    """Reject reversed or non-positive price bands."""
    if min_odds <= 0 or max_odds <= 0:
        raise InvalidRangeError(f"Odds must be positive (got min_odds={min_odds}, max_odds={max_odds})")
    if min_odds > max_odds:
        raise InvalidRangeError(f"min_odds ({min_odds}) cannot exceed max_odds ({max_odds})")


def validate_positive(name: str, value: int | None) -> None:
    """Reject a non-positive optional integer parameter."""
    if value is not None and value <= 0:
        raise InvalidRangeError(f"{name} must be positive (got {value})")

"""
Outcome classification of a halftime total against a resolved line.
"""
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

from app.services.analytics.odds_resolver import LineResolution, resolve_line
from app.services.analytics.records import GameRecord


class Outcome(str, Enum):
    """Where a halftime total landed relative to the qualifying line."""
    UNRESOLVED = "unresolved"
    BELOW = "below"
    # Unreachable for half-point lines, kept for whole-point lines
    EQUAL = "equal"
    ABOVE = "above"


def classify(halftime_total: float, resolved_line: Optional[float]) -> Outcome:
    """Compare a halftime total with a resolved line (None -> UNRESOLVED)."""
    if resolved_line is None:
        return Outcome.UNRESOLVED
    if halftime_total < resolved_line:
        return Outcome.BELOW
    if halftime_total == resolved_line:
        return Outcome.EQUAL
    return Outcome.ABOVE


@dataclass(frozen=True)
class GameEvaluation:
    """A game's resolved line and how its halftime total compared."""
    resolution: LineResolution
    outcome: Outcome

    @property
    def line(self) -> Optional[float]:
        return self.resolution.line

    @property
    def went_over(self) -> bool:
        return self.outcome is Outcome.ABOVE


def evaluate_game(game: GameRecord, min_odds: float, max_odds: float) -> GameEvaluation:
    """
    Resolve and classify one game.

    Every odds-aware aggregator goes through here, so a game gets the same
    line and outcome no matter which analysis asks.
    """
    resolution = resolve_line(game.odds_lines, min_odds, max_odds)
    return GameEvaluation(resolution, classify(game.halftime_total, resolution.line))


def count_resolution_tiers(
    games: Iterable[GameRecord], min_odds: float, max_odds: float
) -> Dict[str, int]:
    """Games per resolver tier for a band ("none" when no line qualified)."""
    tiers = Counter()
    for game in games:
        tier = resolve_line(game.odds_lines, min_odds, max_odds).tier
        tiers[tier.value if tier else "none"] += 1
    return dict(tiers)

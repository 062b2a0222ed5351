"""
Qualifying odds-line resolution.

Bookmakers do not always publish a halftime total at the price a user is
looking for, so a game's "qualifying" line is chosen with a fixed cascade:

1. PRIMARY:   first half-point line whose over price is inside the band.
2. CASCADE:   only when the band is one of CANONICAL_BANDS, walk the
              canonical bands below it (descending) and take the first
              half-point line priced inside the first band that has one.
3. SUB_FLOOR: when min_odds >= 1.40, the first half-point line priced
              under 1.40.

Only half-point lines (x.5) are ever eligible. Within a tier the first
line in input order wins, so callers pass lines sorted by line ascending.

This is the only implementation of the cascade; the odds distribution,
matchup and head-to-head builders all call it so a game resolves to the
same line everywhere.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from app.services.analytics.records import OddsLineRecord

logger = logging.getLogger(__name__)

# (min_odds, max_odds), highest prices first
CANONICAL_BANDS: Tuple[Tuple[float, float], ...] = (
    (2.00, 2.09),
    (1.90, 1.99),
    (1.80, 1.89),
    (1.70, 1.79),
    (1.60, 1.69),
    (1.50, 1.59),
    (1.40, 1.49),
)

SUB_FLOOR_PRICE = 1.40


class ResolutionTier(str, Enum):
    """Which step of the cascade produced a line."""
    PRIMARY = "primary"
    CASCADE = "cascade"
    SUB_FLOOR = "sub_floor"


@dataclass(frozen=True)
class LineResolution:
    """Resolved line (None when nothing qualified) and the tier that found it."""
    line: Optional[float] = None
    tier: Optional[ResolutionTier] = None

    @property
    def resolved(self) -> bool:
        return self.line is not None

    @property
    def used_sub_floor(self) -> bool:
        return self.tier is ResolutionTier.SUB_FLOOR


UNRESOLVED = LineResolution()


def is_half_point_line(line: float) -> bool:
    """True for x.5 lines, the only lines without a push."""
    return line % 1 == 0.5


def canonical_band_index(min_odds: float, max_odds: float) -> Optional[int]:
    """Position of an exactly matching canonical band, or None."""
    for index, band in enumerate(CANONICAL_BANDS):
        if band == (min_odds, max_odds):
            return index
    return None


def _first_priced_between(
    candidates: Sequence[OddsLineRecord], low: float, high: float
) -> Optional[float]:
    for odds_line in candidates:
        if low <= odds_line.over_odd <= high:
            return odds_line.line
    return None


def resolve_line(
    odds_lines: Iterable[OddsLineRecord], min_odds: float, max_odds: float
) -> LineResolution:
    """
    Resolve a game's qualifying line for the [min_odds, max_odds] band.

    Args:
        odds_lines: The game's odds lines, sorted by line ascending
        min_odds: Lowest acceptable over price (inclusive)
        max_odds: Highest acceptable over price (inclusive)

    Returns:
        LineResolution with the line and tier, or UNRESOLVED
    """
    candidates = [odds_line for odds_line in odds_lines if is_half_point_line(odds_line.line)]
    if not candidates:
        return UNRESOLVED

    line = _first_priced_between(candidates, min_odds, max_odds)
    if line is not None:
        return LineResolution(line, ResolutionTier.PRIMARY)

    # Non-canonical bands get no cascade
    band_index = canonical_band_index(min_odds, max_odds)
    if band_index is not None:
        for low, high in CANONICAL_BANDS[band_index + 1:]:
            line = _first_priced_between(candidates, low, high)
            if line is not None:
                logger.debug(f"Cascaded from {min_odds}-{max_odds} to {low}-{high}: line {line}")
                return LineResolution(line, ResolutionTier.CASCADE)

    if min_odds >= SUB_FLOOR_PRICE:
        for odds_line in candidates:
            if odds_line.over_odd < SUB_FLOOR_PRICE:
                logger.debug(f"Sub-floor fallback for {min_odds}-{max_odds}: line {odds_line.line} @ {odds_line.over_odd}")
                return LineResolution(odds_line.line, ResolutionTier.SUB_FLOOR)

    return UNRESOLVED


def resolve_qualifying_line(
    odds_lines: Iterable[OddsLineRecord], min_odds: float, max_odds: float
) -> Optional[float]:
    """Qualifying line value for the band, or None if no tier yields one."""
    return resolve_line(odds_lines, min_odds, max_odds).line

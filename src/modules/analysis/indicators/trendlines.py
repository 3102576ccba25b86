"""Trendline pairing: two-point lines through same-kind pivots.

Every pair of pivots yields one line, so k pivots produce k*(k-1)/2
candidates. The fixed pivot window keeps k in the tens for typical
lookbacks.
"""

from collections.abc import Sequence
from itertools import combinations

from src.modules.analysis.errors import InvalidParameterError
from src.modules.analysis.types import LevelKind, PivotPoint, Trendline

DEFAULT_MAX_TRENDLINES = 10

TIME_SPAN_WEIGHT = 0.4
PRICE_SPAN_WEIGHT = 0.3
RECENCY_WEIGHT = 0.3
# A line spanning half the sequence scores full time credit
TIME_SPAN_NORMALIZATION = 0.5
# A 10% move between the two points scores full price credit
PRICE_SPAN_SCALE = 10


def trendline_strength(point1: PivotPoint, point2: PivotPoint, total_bars: int) -> float:
    """Score a line by time span, relative price span and recency.

    Returns:
        Unrounded strength in [0, 1] for positive prices.
    """
    time_span = point2.index - point1.index
    time_factor = min(time_span / (total_bars * TIME_SPAN_NORMALIZATION), 1.0)

    price_span = abs(point2.price - point1.price)
    avg_price = (point1.price + point2.price) / 2
    price_factor = min((price_span / avg_price) * PRICE_SPAN_SCALE, 1.0) if avg_price else 0.0

    recency_factor = point2.index / total_bars

    return (
        time_factor * TIME_SPAN_WEIGHT
        + price_factor * PRICE_SPAN_WEIGHT
        + recency_factor * RECENCY_WEIGHT
    )


def build_trendline(point1: PivotPoint, point2: PivotPoint, kind: LevelKind, total_bars: int) -> Trendline:
    """Build the line through two pivots, point1 before point2."""
    slope = (point2.price - point1.price) / (point2.index - point1.index)
    intercept = point1.price - slope * point1.index

    return Trendline(
        kind=kind,
        point1=point1,
        point2=point2,
        slope=round(slope, 6),
        intercept=round(intercept, 6),
        strength=round(trendline_strength(point1, point2, total_bars), 3),
    )


def find_trendlines(
    pivots: Sequence[PivotPoint],
    kind: LevelKind,
    total_bars: int,
    max_trendlines: int = DEFAULT_MAX_TRENDLINES,
) -> list[Trendline]:
    """Connect every pair of pivots and keep the strongest lines.

    Args:
        pivots: Same-kind pivots in bar order (highs for resistance,
            lows for support).
        kind: Kind of line being built.
        total_bars: Length of the bar sequence the pivots came from.
        max_trendlines: Number of lines to keep.

    Returns:
        Up to `max_trendlines` lines, strongest first.

    Raises:
        InvalidParameterError: If max_trendlines < 0 or total_bars < 1.
    """
    if max_trendlines < 0:
        raise InvalidParameterError(f"Max trendlines must be >= 0, got {max_trendlines}")
    if total_bars < 1:
        raise InvalidParameterError(f"Total bars must be >= 1, got {total_bars}")

    lines = [
        build_trendline(point1, point2, kind, total_bars)
        for point1, point2 in combinations(pivots, 2)
    ]

    lines.sort(key=lambda line: line.strength, reverse=True)
    return lines[:max_trendlines]

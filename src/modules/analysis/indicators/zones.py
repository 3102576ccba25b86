"""Support/Resistance zone clustering.

Pivot highs count as resistance touches, pivot lows as support touches.
Each touch joins the first existing zone within tolerance, or opens a new
zone at its own price.
"""

from collections.abc import Iterable

from src.modules.analysis.errors import InvalidParameterError
from src.modules.analysis.types import LevelKind, PivotPoint, Zone

DEFAULT_TOLERANCE = 0.005
MAX_ZONES = 10

# Touches beyond this count no longer add strength
TOUCH_SATURATION = 10
TOUCH_WEIGHT = 0.7
RECENCY_WEIGHT = 0.3


def zone_strength(total_touches: int, last_index: int, total_bars: int) -> float:
    """Blend touch frequency and recency of the latest touch into [0, 1]."""
    touch_factor = min(total_touches / TOUCH_SATURATION, 1.0)
    recency_factor = last_index / total_bars
    return round(touch_factor * TOUCH_WEIGHT + recency_factor * RECENCY_WEIGHT, 3)


def _within(level: float, price: float, tolerance: float) -> bool:
    if level == 0:
        return price == 0
    return abs(level - price) / abs(level) <= tolerance


def _touch(
    zones: list[Zone],
    pivot: PivotPoint,
    kind: LevelKind,
    tolerance: float,
    total_bars: int,
) -> None:
    zone = next((z for z in zones if _within(z.anchor, pivot.price, tolerance)), None)
    if zone is None:
        zone = Zone(level=round(pivot.price, 6), anchor=pivot.price)
        zones.append(zone)

    if kind is LevelKind.SUPPORT:
        zone.support_count += 1
    else:
        zone.resistance_count += 1

    zone.strength = zone_strength(zone.total_touches, pivot.index, total_bars)


def cluster_zones(
    pivot_highs: Iterable[PivotPoint],
    pivot_lows: Iterable[PivotPoint],
    total_bars: int,
    tolerance: float = DEFAULT_TOLERANCE,
    max_zones: int = MAX_ZONES,
) -> list[Zone]:
    """Cluster pivots into support/resistance zones.

    All highs are processed before all lows, each list in bar order. A
    touch merges into the earliest-created zone satisfying
    |anchor - price| / anchor <= tolerance, where the anchor is the
    unrounded price of the zone's first touch.

    Args:
        pivot_highs: Pivot highs (resistance touches).
        pivot_lows: Pivot lows (support touches).
        total_bars: Length of the bar sequence the pivots came from.
        tolerance: Relative merge distance (default 0.5%).
        max_zones: Number of zones to keep.

    Returns:
        Up to `max_zones` zones, strongest first. Equal strengths keep
        creation order.

    Raises:
        InvalidParameterError: If tolerance < 0 or total_bars < 1.
    """
    if tolerance < 0:
        raise InvalidParameterError(f"Tolerance must be >= 0, got {tolerance}")
    if total_bars < 1:
        raise InvalidParameterError(f"Total bars must be >= 1, got {total_bars}")

    zones: list[Zone] = []
    for pivot in pivot_highs:
        _touch(zones, pivot, LevelKind.RESISTANCE, tolerance, total_bars)
    for pivot in pivot_lows:
        _touch(zones, pivot, LevelKind.SUPPORT, tolerance, total_bars)

    zones.sort(key=lambda z: z.strength, reverse=True)
    return zones[:max_zones]

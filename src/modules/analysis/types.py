"""Value types produced by the indicator engine.

Detector and clustering outputs (PivotPoint, Zone, Trendline) and the
per-indicator result records. Results are built fresh on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import pandas as pd

from src.modules.data.protocols import Interval


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RSISignal(Enum):
    """RSI interpretation band."""

    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"


class LevelKind(Enum):
    """Side of the market a price level or trendline acts on."""

    SUPPORT = "support"
    RESISTANCE = "resistance"


class ExtremesWindow(Enum):
    """History window an extremes scan covered."""

    ALL_TIME = "all_time"
    WEEK_52 = "52_week"


@dataclass(frozen=True)
class PivotPoint:
    """A local price extremum over a symmetric bar window."""

    index: int
    price: float
    timestamp: pd.Timestamp


@dataclass
class Zone:
    """A clustered support/resistance price level.

    Grows by merging further pivot touches; never split.
    """

    level: float
    support_count: int = 0
    resistance_count: int = 0
    strength: float = 0.0
    # Unrounded price of the first touch; tolerance is measured against it
    anchor: float | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.anchor is None:
            self.anchor = self.level

    @property
    def total_touches(self) -> int:
        return self.support_count + self.resistance_count


@dataclass(frozen=True)
class Trendline:
    """A line through exactly two same-kind pivots."""

    kind: LevelKind
    point1: PivotPoint
    point2: PivotPoint
    slope: float
    intercept: float
    strength: float

    def price_at(self, index: int) -> float:
        """Project the line to a bar index."""
        return self.slope * index + self.intercept


@dataclass(frozen=True)
class FloorPivotLevels:
    """Classic floor-trader levels derived from one completed bar."""

    pivot_point: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float
    previous_high: float
    previous_low: float
    previous_close: float


@dataclass(frozen=True)
class PriceExtremes:
    """Highest high and lowest low with their first occurrence."""

    high: float
    high_date: pd.Timestamp
    low: float
    low_date: pd.Timestamp


@dataclass(frozen=True)
class ATRResult:
    symbol: str
    interval: Interval
    period: int
    atr: float
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class EMAResult:
    symbol: str
    interval: Interval
    period: int
    ema: float
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class RSIResult:
    symbol: str
    interval: Interval
    period: int
    rsi: float
    signal: RSISignal
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class MACDResult:
    symbol: str
    interval: Interval
    fast_period: int
    slow_period: int
    signal_period: int
    macd: float
    signal: float
    histogram: float
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class PivotPointsResult:
    symbol: str
    interval: Interval
    levels: FloorPivotLevels
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class SupportResistanceResult:
    """Top zones, strongest first."""

    symbol: str
    interval: Interval
    zones: list[Zone]
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class TrendlineResult:
    """Support and resistance trendlines, each strongest first."""

    symbol: str
    interval: Interval
    support: list[Trendline]
    resistance: list[Trendline]
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class HighLowResult:
    symbol: str
    window: ExtremesWindow
    extremes: PriceExtremes
    timestamp: datetime = field(default_factory=_utc_now)

"""Technical indicators for the indicator engine.

All indicators are pure functions: Series in, latest value out.
No state, no side effects, no I/O.
"""

from src.modules.analysis.indicators.levels import floor_pivot_levels, price_extremes
from src.modules.analysis.indicators.momentum import rsi, rsi_signal
from src.modules.analysis.indicators.pivots import (
    detect_pivots,
    find_pivot_highs,
    find_pivot_lows,
)
from src.modules.analysis.indicators.trend import ema, macd, wilder
from src.modules.analysis.indicators.trendlines import find_trendlines
from src.modules.analysis.indicators.volatility import atr, true_range
from src.modules.analysis.indicators.zones import cluster_zones

__all__ = [
    "ema",
    "wilder",
    "macd",
    "atr",
    "true_range",
    "rsi",
    "rsi_signal",
    "floor_pivot_levels",
    "price_extremes",
    "find_pivot_highs",
    "find_pivot_lows",
    "detect_pivots",
    "cluster_zones",
    "find_trendlines",
]

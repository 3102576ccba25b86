"""Indicator Engine: computes technical indicators from provider bars.

Volatility (ATR), trend (EMA, MACD), momentum (RSI) and structural price
levels (floor pivots, support/resistance zones, trendlines, extremes).
"""

from src.modules.analysis.engine import IndicatorEngine

__all__ = ["IndicatorEngine"]

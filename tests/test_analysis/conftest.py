"""Shared fixtures for indicator tests.

All data is static and deterministic. No network calls, no randomness.
"""

from collections.abc import Callable, Sequence
from unittest.mock import MagicMock

import numpy as np
import pandas as pd
import pytest

from src.shared.config import Config

BarFactory = Callable[..., pd.DataFrame]


def _make_bars(
    close: Sequence[float],
    high: Sequence[float] | None = None,
    low: Sequence[float] | None = None,
    start: str = "2024-01-02",
    freq: str = "D",
) -> pd.DataFrame:
    """Build a bar frame; high/low default to close +/- 1."""
    close_s = pd.Series(close, dtype=float)
    high_s = pd.Series(high, dtype=float) if high is not None else close_s + 1.0
    low_s = pd.Series(low, dtype=float) if low is not None else close_s - 1.0
    index = pd.date_range(start=start, periods=len(close_s), freq=freq, name="timestamp")

    return pd.DataFrame(
        {
            "open": close_s.values,
            "high": high_s.values,
            "low": low_s.values,
            "close": close_s.values,
            "volume": [1_000_000.0] * len(close_s),
        },
        index=index,
    )


@pytest.fixture
def make_bars() -> BarFactory:
    """Factory for bar frames from close (and optional high/low) lists."""
    return _make_bars


@pytest.fixture
def sample_bars() -> pd.DataFrame:
    """60 days of a gradual uptrend with an alternating up/down pattern."""
    move = [0.5, 0.8, -0.3, 1.0, 0.0, 0.6, -0.7, 0.4, 1.2, -0.5]
    close = [100.0]
    for i in range(1, 60):
        close.append(close[-1] + move[i % len(move)])
    return _make_bars(close, high=[c + 0.5 for c in close], low=[c - 0.5 for c in close])


@pytest.fixture
def trending_up_bars() -> pd.DataFrame:
    """60 days where close rises by exactly 1 every day."""
    return _make_bars([100.0 + i for i in range(60)])


@pytest.fixture
def wave_bars() -> pd.DataFrame:
    """100 days of a sine wave with period 20 around 100.

    Peaks land on bars 5, 25, 45, 65, 85 and troughs on 15, 35, 55, 75, 95.
    """
    i = np.arange(100)
    close = 100.0 + 10.0 * np.sin(2 * np.pi * i / 20)
    return _make_bars(close)


@pytest.fixture
def config() -> Config:
    """Engine configuration with the documented defaults."""
    return Config(
        log_level="INFO",
        sr_tolerance=0.005,
        sr_lookback_periods=100,
        trendline_lookback_periods=100,
        max_trendlines=10,
        all_time_lookback_years=20,
    )


@pytest.fixture
def provider() -> MagicMock:
    """Bar provider mock; set `get_bars.return_value` per test."""
    mock = MagicMock()
    mock.name = "Mock"
    return mock

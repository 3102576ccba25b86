"""Configuration loader for the indicator engine.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """Engine configuration loaded from environment variables.

    Attributes:
        log_level: Logging level name for engine loggers.
        sr_tolerance: Relative distance under which a pivot joins an
            existing support/resistance zone.
        sr_lookback_periods: Bars of history requested for zone clustering.
        trendline_lookback_periods: Bars of history requested for trendlines.
        max_trendlines: Cap on trendlines returned per kind.
        all_time_lookback_years: Years of daily history scanned for
            all-time extremes.
    """

    log_level: str
    sr_tolerance: float
    sr_lookback_periods: int
    trendline_lookback_periods: int
    max_trendlines: int
    all_time_lookback_years: int


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        Config object with all settings.

    Raises:
        ValueError: If a numeric environment variable cannot be parsed.
    """
    return Config(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        sr_tolerance=float(os.getenv("SR_TOLERANCE", "0.005")),
        sr_lookback_periods=int(os.getenv("SR_LOOKBACK_PERIODS", "100")),
        trendline_lookback_periods=int(os.getenv("TRENDLINE_LOOKBACK_PERIODS", "100")),
        max_trendlines=int(os.getenv("MAX_TRENDLINES", "10")),
        all_time_lookback_years=int(os.getenv("ALL_TIME_LOOKBACK_YEARS", "20")),
    )

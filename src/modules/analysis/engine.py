"""Indicator Engine: fetches bars and assembles indicator results.

One provider fetch per call (one per batch for multiple EMAs), then pure
computation over the fetched frame. Provider errors propagate unchanged.
"""

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

import pandas as pd

from src.modules.analysis.errors import (
    InsufficientDataError,
    InvalidParameterError,
    NoDataError,
)
from src.modules.analysis.indicators.levels import floor_pivot_levels, price_extremes
from src.modules.analysis.indicators.momentum import rsi, rsi_signal
from src.modules.analysis.indicators.pivots import detect_pivots
from src.modules.analysis.indicators.trend import check_period, ema, macd
from src.modules.analysis.indicators.trendlines import find_trendlines
from src.modules.analysis.indicators.volatility import atr
from src.modules.analysis.indicators.zones import cluster_zones
from src.modules.analysis.types import (
    ATRResult,
    EMAResult,
    ExtremesWindow,
    HighLowResult,
    LevelKind,
    MACDResult,
    PivotPointsResult,
    RSIResult,
    SupportResistanceResult,
    TrendlineResult,
)
from src.modules.data.lookback import WEEK_52_DAYS, days_needed, pivot_window_days
from src.modules.data.protocols import BarProvider, Interval
from src.shared.config import Config, load_config
from src.shared.logger import get_logger

logger = get_logger(__name__)

# Required columns in a provider frame
REQUIRED_COLUMNS = {"open", "high", "low", "close", "volume"}

# Zone clustering and trendlines need enough bars for several pivot windows
MIN_STRUCTURE_BARS = 20

# Intervals with meaningful pivot structure
STRUCTURE_INTERVALS = {Interval.DAILY, Interval.HOURLY}

# Safety multipliers over the bare bar requirement
WILDER_MULTIPLIER = 2
EMA_MULTIPLIER = 3


def _to_interval(interval: Interval | str) -> Interval:
    try:
        return Interval(interval)
    except ValueError:
        raise InvalidParameterError(f"Unsupported interval: {interval!r}") from None


class IndicatorEngine:
    """Computes technical indicators for a symbol from provider bars.

    Usage:
        engine = IndicatorEngine(YahooProvider())
        result = engine.calculate_rsi("AAPL", period=14)
    """

    def __init__(self, provider: BarProvider, config: Config | None = None) -> None:
        """Initialize IndicatorEngine.

        Args:
            provider: Bar sequence provider.
            config: Engine configuration (default: loaded from environment).
        """
        self._provider = provider
        self._config = config or load_config()
        logger.setLevel(self._config.log_level)

    def calculate_atr(
        self,
        symbol: str,
        interval: Interval | str = Interval.DAILY,
        period: int = 14,
    ) -> ATRResult:
        """Calculate Average True Range.

        Raises:
            InvalidParameterError: If period < 1 or interval is unknown.
            InsufficientDataError: If fewer than period + 1 bars.
            ProviderError: If the provider fails.
        """
        interval = _to_interval(interval)
        check_period("ATR", period)

        bars = self._fetch(symbol, interval, days_needed(interval, period, WILDER_MULTIPLIER))
        value = atr(bars["high"], bars["low"], bars["close"], period=period)

        logger.info(f"ATR({period}) for {symbol}: {value}", extra={"symbol": symbol})
        return ATRResult(symbol=symbol, interval=interval, period=period, atr=value)

    def calculate_ema(
        self,
        symbol: str,
        period: int,
        interval: Interval | str = Interval.DAILY,
    ) -> EMAResult:
        """Calculate Exponential Moving Average of closes.

        Raises:
            InvalidParameterError: If period < 1 or interval is unknown.
            InsufficientDataError: If fewer than `period` bars.
            ProviderError: If the provider fails.
        """
        return self.calculate_emas(symbol, [period], interval)[0]

    def calculate_emas(
        self,
        symbol: str,
        periods: Sequence[int],
        interval: Interval | str = Interval.DAILY,
    ) -> list[EMAResult]:
        """Calculate several EMAs from a single fetch.

        Args:
            symbol: Asset symbol.
            periods: EMA periods (e.g., [9, 20, 50, 200]).
            interval: Bar interval.

        Returns:
            One EMAResult per period, in input order, sharing a timestamp.

        Raises:
            InvalidParameterError: If periods is empty, any period < 1, or
                interval is unknown.
            InsufficientDataError: If fewer than max(periods) bars.
            ProviderError: If the provider fails.
        """
        interval = _to_interval(interval)
        if not periods:
            raise InvalidParameterError("At least one EMA period is required")
        for period in periods:
            check_period("EMA", period)

        max_period = max(periods)
        bars = self._fetch(symbol, interval, days_needed(interval, max_period, EMA_MULTIPLIER))
        if len(bars) < max_period:
            raise InsufficientDataError("EMA", max_period, len(bars))

        timestamp = datetime.now(timezone.utc)
        results = [
            EMAResult(
                symbol=symbol,
                interval=interval,
                period=period,
                ema=round(ema(bars["close"], period), 6),
                timestamp=timestamp,
            )
            for period in periods
        ]

        logger.info(
            f"Computed {len(results)} EMAs for {symbol}",
            extra={"symbol": symbol, "periods": list(periods)},
        )
        return results

    def calculate_rsi(
        self,
        symbol: str,
        period: int = 14,
        interval: Interval | str = Interval.DAILY,
    ) -> RSIResult:
        """Calculate Relative Strength Index with its signal band.

        Raises:
            InvalidParameterError: If period < 1 or interval is unknown.
            InsufficientDataError: If fewer than period + 1 bars.
            ProviderError: If the provider fails.
        """
        interval = _to_interval(interval)
        check_period("RSI", period)

        bars = self._fetch(symbol, interval, days_needed(interval, period, EMA_MULTIPLIER))
        value = rsi(bars["close"], period=period)
        signal = rsi_signal(value)

        logger.info(
            f"RSI({period}) for {symbol}: {value} ({signal.value})",
            extra={"symbol": symbol},
        )
        return RSIResult(
            symbol=symbol, interval=interval, period=period, rsi=value, signal=signal
        )

    def calculate_macd(
        self,
        symbol: str,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        interval: Interval | str = Interval.DAILY,
    ) -> MACDResult:
        """Calculate MACD line, signal line and histogram.

        Raises:
            InvalidParameterError: If fast_period >= slow_period, any
                period < 1, or interval is unknown.
            InsufficientDataError: If fewer than slow + signal bars.
            ProviderError: If the provider fails.
        """
        interval = _to_interval(interval)
        for name, period in (("Fast", fast_period), ("Slow", slow_period), ("Signal", signal_period)):
            check_period(name, period)
        if fast_period >= slow_period:
            raise InvalidParameterError(
                f"Fast period must be less than slow period, "
                f"got fast={fast_period}, slow={slow_period}"
            )

        bars = self._fetch(
            symbol,
            interval,
            days_needed(interval, slow_period + signal_period, EMA_MULTIPLIER),
        )
        macd_line, signal_line, histogram = macd(
            bars["close"], fast=fast_period, slow=slow_period, signal=signal_period
        )

        logger.info(
            f"MACD({fast_period},{slow_period},{signal_period}) for {symbol}: {histogram}",
            extra={"symbol": symbol},
        )
        return MACDResult(
            symbol=symbol,
            interval=interval,
            fast_period=fast_period,
            slow_period=slow_period,
            signal_period=signal_period,
            macd=macd_line,
            signal=signal_line,
            histogram=histogram,
        )

    def calculate_pivot_points(
        self,
        symbol: str,
        interval: Interval | str = Interval.DAILY,
    ) -> PivotPointsResult:
        """Calculate floor-trader pivot levels from the last completed bar.

        Raises:
            InvalidParameterError: If interval is unknown.
            InsufficientDataError: If fewer than 2 bars.
            ProviderError: If the provider fails.
        """
        interval = _to_interval(interval)

        bars = self._fetch(symbol, interval, pivot_window_days(interval))
        levels = floor_pivot_levels(bars["high"], bars["low"], bars["close"])

        logger.info(f"Pivot point for {symbol}: {levels.pivot_point}", extra={"symbol": symbol})
        return PivotPointsResult(symbol=symbol, interval=interval, levels=levels)

    def calculate_support_resistance(
        self,
        symbol: str,
        interval: Interval | str = Interval.DAILY,
        lookback_periods: int | None = None,
        tolerance: float | None = None,
    ) -> SupportResistanceResult:
        """Identify clustered support and resistance zones.

        Args:
            symbol: Asset symbol.
            interval: Bar interval (1d or 1h only).
            lookback_periods: Bars of history to request (default: config).
            tolerance: Relative zone merge distance (default: config).

        Returns:
            Up to 10 zones, strongest first.

        Raises:
            InvalidParameterError: If interval is not 1d/1h or the lookback
                is < 1.
            InsufficientDataError: If fewer than 20 bars.
            ProviderError: If the provider fails.
        """
        interval = self._structure_interval(interval, "Support/Resistance")
        if lookback_periods is None:
            lookback_periods = self._config.sr_lookback_periods
        tolerance = self._config.sr_tolerance if tolerance is None else tolerance
        check_period("Lookback", lookback_periods)

        bars = self._fetch(
            symbol, interval, days_needed(interval, lookback_periods, WILDER_MULTIPLIER)
        )
        if len(bars) < MIN_STRUCTURE_BARS:
            raise InsufficientDataError("support/resistance", MIN_STRUCTURE_BARS, len(bars))

        highs, lows = detect_pivots(bars)
        zones = cluster_zones(highs, lows, total_bars=len(bars), tolerance=tolerance)

        logger.info(
            f"Found {len(zones)} zones for {symbol}",
            extra={"symbol": symbol, "pivot_highs": len(highs), "pivot_lows": len(lows)},
        )
        return SupportResistanceResult(symbol=symbol, interval=interval, zones=zones)

    def calculate_trendlines(
        self,
        symbol: str,
        interval: Interval | str = Interval.DAILY,
        lookback_periods: int | None = None,
        max_trendlines: int | None = None,
    ) -> TrendlineResult:
        """Build two-point support and resistance trendlines.

        Args:
            symbol: Asset symbol.
            interval: Bar interval (1d or 1h only).
            lookback_periods: Bars of history to request (default: config).
            max_trendlines: Lines kept per kind (default: config).

        Returns:
            Support and resistance lines, each strongest first.

        Raises:
            InvalidParameterError: If interval is not 1d/1h, the lookback
                is < 1 or max_trendlines < 0.
            InsufficientDataError: If fewer than 20 bars.
            ProviderError: If the provider fails.
        """
        interval = self._structure_interval(interval, "Trendline")
        if lookback_periods is None:
            lookback_periods = self._config.trendline_lookback_periods
        if max_trendlines is None:
            max_trendlines = self._config.max_trendlines
        check_period("Lookback", lookback_periods)
        if max_trendlines < 0:
            raise InvalidParameterError(f"Max trendlines must be >= 0, got {max_trendlines}")

        bars = self._fetch(
            symbol, interval, days_needed(interval, lookback_periods, WILDER_MULTIPLIER)
        )
        if len(bars) < MIN_STRUCTURE_BARS:
            raise InsufficientDataError("trendline", MIN_STRUCTURE_BARS, len(bars))

        highs, lows = detect_pivots(bars)
        support = find_trendlines(lows, LevelKind.SUPPORT, len(bars), max_trendlines)
        resistance = find_trendlines(highs, LevelKind.RESISTANCE, len(bars), max_trendlines)

        logger.info(
            f"Found {len(support)} support and {len(resistance)} resistance trendlines for {symbol}",
            extra={"symbol": symbol},
        )
        return TrendlineResult(
            symbol=symbol, interval=interval, support=support, resistance=resistance
        )

    def calculate_all_time_high_low(
        self,
        symbol: str,
        lookback_years: int | None = None,
    ) -> HighLowResult:
        """Find the highest high and lowest low over many years of daily bars.

        Raises:
            InvalidParameterError: If lookback_years < 1.
            NoDataError: If the provider returns no bars.
            ProviderError: If the provider fails.
        """
        if lookback_years is None:
            lookback_years = self._config.all_time_lookback_years
        check_period("Lookback years", lookback_years)

        today = date.today()
        start = (pd.Timestamp(today) - pd.DateOffset(years=lookback_years)).date()
        return self._high_low(symbol, ExtremesWindow.ALL_TIME, (today - start).days)

    def calculate_52_week_high_low(self, symbol: str) -> HighLowResult:
        """Find the highest high and lowest low of the last 52 weeks.

        Raises:
            NoDataError: If the provider returns no bars.
            ProviderError: If the provider fails.
        """
        return self._high_low(symbol, ExtremesWindow.WEEK_52, WEEK_52_DAYS)

    def _high_low(self, symbol: str, window: ExtremesWindow, days: int) -> HighLowResult:
        bars = self._fetch(symbol, Interval.DAILY, days)
        if bars.empty:
            raise NoDataError(symbol)

        extremes = price_extremes(bars["high"], bars["low"])

        logger.info(
            f"{window.value} high/low for {symbol}: {extremes.high}/{extremes.low}",
            extra={"symbol": symbol},
        )
        return HighLowResult(symbol=symbol, window=window, extremes=extremes)

    def _structure_interval(self, interval: Interval | str, name: str) -> Interval:
        interval = _to_interval(interval)
        if interval not in STRUCTURE_INTERVALS:
            raise InvalidParameterError(
                f"{name} calculation only supports 1d and 1h intervals, got {interval.value}"
            )
        return interval

    def _fetch(
        self,
        symbol: str,
        interval: Interval,
        days: int,
    ) -> pd.DataFrame:
        """Fetch `days` calendar days of bars ending today.

        Args:
            symbol: Asset symbol.
            interval: Bar interval.
            days: Calendar days to look back.

        Returns:
            Provider DataFrame, unmodified. An empty response comes back as
            an empty frame with the bar columns, so length checks report it.

        Raises:
            ProviderError: If the provider fails (propagated unchanged).
            ValueError: If the frame is missing columns or out of order.
        """
        end_date = date.today()
        start_date = end_date - timedelta(days=days)

        logger.info(
            f"Fetching {symbol}",
            extra={
                "provider": self._provider.name,
                "interval": interval.value,
                "start": str(start_date),
                "end": str(end_date),
            },
        )

        bars = self._provider.get_bars(symbol, start_date, end_date, interval)
        if bars.empty:
            return pd.DataFrame(columns=sorted(REQUIRED_COLUMNS), dtype=float)

        self._validate_bars(bars)
        return bars

    def _validate_bars(self, bars: pd.DataFrame) -> None:
        """Validate the bar frame has required columns and ascending timestamps.

        Raises:
            ValueError: If columns are missing or timestamps are not
                strictly increasing.
        """
        missing = REQUIRED_COLUMNS - set(bars.columns)
        if missing:
            raise ValueError(f"Missing required columns: {sorted(missing)}")

        if not (bars.index.is_monotonic_increasing and bars.index.is_unique):
            raise ValueError("Bars must be in strictly ascending timestamp order")

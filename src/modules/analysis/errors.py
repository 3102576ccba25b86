"""Indicator error taxonomy.

All validation errors derive from ValueError so callers that already guard
indicator calls with `except ValueError` keep working.
"""


class IndicatorError(ValueError):
    """Base class for indicator validation failures."""


class InsufficientDataError(IndicatorError):
    """Fewer bars than the indicator's minimum requirement."""

    def __init__(self, indicator: str, required: int, actual: int) -> None:
        """Initialize InsufficientDataError.

        Args:
            indicator: Human-readable indicator name (e.g., 'ATR').
            required: Minimum number of data points needed.
            actual: Number of data points available.
        """
        self.indicator = indicator
        self.required = required
        self.actual = actual
        super().__init__(
            f"Insufficient data for {indicator} calculation. "
            f"Need at least {required} data points, got {actual}"
        )


class NoDataError(IndicatorError):
    """The provider returned zero bars."""

    def __init__(self, symbol: str | None = None) -> None:
        self.symbol = symbol
        if symbol:
            super().__init__(f"No historical data found for {symbol}")
        else:
            super().__init__("No historical data to scan")


class InvalidParameterError(IndicatorError):
    """A parameter is outside what the indicator supports."""

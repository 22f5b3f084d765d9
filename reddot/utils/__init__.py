"""Utils: timeframes, bar loading and tabular export (reddot.utils.data)."""

from reddot.utils.timeframes import timeframe_minutes, validate_timeframe, SUPPORTED_TIMEFRAMES

__all__ = ["timeframe_minutes", "validate_timeframe", "SUPPORTED_TIMEFRAMES"]

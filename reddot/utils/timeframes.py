"""Supported chart timeframes and their length in minutes."""

SUPPORTED_TIMEFRAMES = ("1m", "2m", "5m", "15m", "30m", "1H")


def timeframe_minutes(tf: str) -> int:
    """Convert a timeframe label ('5m', '1H', '1d') to minutes. Hours accept either case."""
    tf = tf.strip()
    if tf.endswith("m"):
        return int(tf[:-1])
    if tf[-1:] in ("h", "H"):
        return int(tf[:-1]) * 60
    if tf.endswith("d"):
        return int(tf[:-1]) * 60 * 24
    raise ValueError(f"Unsupported timeframe: {tf}")


def validate_timeframe(tf: str) -> str:
    """Return the canonical label for a supported timeframe, else raise ValueError."""
    minutes = timeframe_minutes(tf)
    for label in SUPPORTED_TIMEFRAMES:
        if timeframe_minutes(label) == minutes:
            return label
    raise ValueError(f"Unsupported timeframe: {tf} (choose from {', '.join(SUPPORTED_TIMEFRAMES)})")

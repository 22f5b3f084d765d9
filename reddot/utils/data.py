"""
Bar loading and tabular export with pandas.

Loaders clean the input the way the core expects it: zero or missing OHLC rows
dropped, millisecond timestamps, time ascending.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from reddot.core.types import HistoricalTrade, IndicatorBar, PriceBar

logger = logging.getLogger("reddot.data")

PRICE_COLUMNS = ["open", "high", "low", "close"]
REQUIRED_COLUMNS = ["time"] + PRICE_COLUMNS


def _to_millis(times: pd.Series, time_unit: str) -> pd.Series:
    if pd.api.types.is_numeric_dtype(times):
        times = times.astype("int64")
        return times * 1000 if time_unit == "s" else times
    stamps = pd.to_datetime(times, utc=True)
    return (stamps - pd.Timestamp("1970-01-01", tz="UTC")) // pd.Timedelta(milliseconds=1)


def bars_from_frame(df: pd.DataFrame, time_unit: str = "ms") -> List[PriceBar]:
    """Convert an OHLC DataFrame (columns: time, open, high, low, close) to PriceBars."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Bar data is missing column(s): {', '.join(missing)}")
    df = df[REQUIRED_COLUMNS].dropna(subset=["time"]).copy()
    df[PRICE_COLUMNS] = df[PRICE_COLUMNS].astype(float)
    df["time"] = _to_millis(df["time"], time_unit)
    prices = df[PRICE_COLUMNS]
    valid = prices.notna().all(axis=1) & (prices != 0).all(axis=1)
    dropped = int((~valid).sum())
    if dropped:
        logger.info("Dropped %d bar(s) with zero or missing prices", dropped)
    df = df[valid].sort_values("time", kind="stable")
    return [
        PriceBar(time=int(r.time), open=float(r.open), high=float(r.high), low=float(r.low), close=float(r.close))
        for r in df.itertuples(index=False)
    ]


def load_bars_csv(path: Union[str, Path], time_unit: str = "ms") -> List[PriceBar]:
    """Read OHLC bars from CSV. time_unit is 'ms' or 's' for numeric timestamps."""
    df = pd.read_csv(path)
    bars = bars_from_frame(df, time_unit=time_unit)
    logger.info("Loaded %d bars from %s", len(bars), path)
    return bars


def indicator_frame(bars: Sequence[IndicatorBar]) -> pd.DataFrame:
    """Annotated bars as a table. Missing EMA values become NaN here, at the display edge."""
    rows = [
        {
            "time": b.time,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "ema_fast": b.ema_fast,
            "ema_slow": b.ema_slow,
            "ema_trend": b.ema_trend,
            "signal": b.signal.value if b.signal is not None else None,
        }
        for b in bars
    ]
    df = pd.DataFrame(rows, columns=["time", "open", "high", "low", "close", "ema_fast", "ema_slow", "ema_trend", "signal"])
    df[["ema_fast", "ema_slow", "ema_trend"]] = df[["ema_fast", "ema_slow", "ema_trend"]].astype(float)
    df["datetime"] = pd.to_datetime(df["time"], unit="ms")
    return df


def trades_frame(trades: Sequence[HistoricalTrade]) -> pd.DataFrame:
    """Trade history as a table. The open trade has empty exit time and reason."""
    columns = [
        "direction", "entry_time", "entry_price", "exit_time", "exit_price",
        "position_size_base", "position_size_usd", "stop_loss_at_entry",
        "profit_or_loss", "profit_or_loss_pct", "exit_reason", "is_open",
    ]
    rows = [
        {
            "direction": t.direction.value,
            "entry_time": pd.to_datetime(t.entry_bar.time, unit="ms"),
            "entry_price": t.entry_price,
            "exit_time": pd.to_datetime(t.exit_bar.time, unit="ms") if t.exit_bar is not None else pd.NaT,
            "exit_price": t.exit_price,
            "position_size_base": t.position_size_base,
            "position_size_usd": t.position_size_usd,
            "stop_loss_at_entry": t.stop_loss_at_entry,
            "profit_or_loss": t.profit_or_loss,
            "profit_or_loss_pct": t.profit_or_loss_percentage,
            "exit_reason": t.exit_reason.value if t.exit_reason is not None else None,
            "is_open": t.is_open,
        }
        for t in trades
    ]
    return pd.DataFrame(rows, columns=columns)

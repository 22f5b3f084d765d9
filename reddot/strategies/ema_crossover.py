"""
Dual EMA crossover with momentum confirmation (13 / 48, plus a 200 trend line).

A cross of the fast EMA over the slow EMA on bar i-1 only becomes a signal on
bar i, and only if the fast/slow spread keeps widening in the cross direction.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from reddot.core.types import IndicatorBar, PriceBar, Signal
from reddot.strategies.base import BaseStrategy

logger = logging.getLogger("reddot.strategy")

EMA_PERIOD_FAST = 13
EMA_PERIOD_SLOW = 48
EMA_PERIOD_TREND = 200


def compute_ema(series: Sequence[float], period: int) -> List[Optional[float]]:
    """
    EMA seeded with the SMA of the first `period` values.
    Entries before index period-1 are None; all None when the series is shorter than period.
    """
    n = len(series)
    ema: List[Optional[float]] = [None] * n
    if period <= 0 or n < period:
        return ema
    k = 2.0 / (period + 1)
    ema[period - 1] = sum(series[:period]) / period
    for i in range(period, n):
        ema[i] = series[i] * k + ema[i - 1] * (1 - k)
    return ema


def crossover_signal(prev_prev: IndicatorBar, prev: IndicatorBar, current: IndicatorBar) -> Optional[Signal]:
    """BUY/SELL for `current` when `prev` crossed and `current` confirms; None otherwise."""
    if not (prev_prev.has_cross_emas and prev.has_cross_emas and current.has_cross_emas):
        return None
    cross_up = prev_prev.ema_fast <= prev_prev.ema_slow and prev.ema_fast > prev.ema_slow
    cross_down = prev_prev.ema_fast >= prev_prev.ema_slow and prev.ema_fast < prev.ema_slow
    if cross_up and current.spread > prev.spread:
        return Signal.BUY
    if cross_down and current.spread < prev.spread:
        return Signal.SELL
    return None


class EmaCrossoverStrategy(BaseStrategy):
    """
    BUY: fast crossed above slow on the previous bar and the spread widened on this bar.
    SELL: fast crossed below slow on the previous bar and the spread widened downward.
    The trend EMA is carried for display and not used in the signal.
    """

    def __init__(
        self,
        ema_fast: int = EMA_PERIOD_FAST,
        ema_slow: int = EMA_PERIOD_SLOW,
        ema_trend: int = EMA_PERIOD_TREND,
    ):
        self.ema_fast = ema_fast
        self.ema_slow = ema_slow
        self.ema_trend = ema_trend

    def annotate(self, bars: Sequence[PriceBar]) -> List[IndicatorBar]:
        if len(bars) < self.ema_trend:
            logger.warning(
                "Only %d bars, fewer than the trend EMA period (%d); trend values stay empty",
                len(bars), self.ema_trend,
            )
        closes = [b.close for b in bars]
        fast = compute_ema(closes, self.ema_fast)
        slow = compute_ema(closes, self.ema_slow)
        trend = compute_ema(closes, self.ema_trend)
        annotated = [
            IndicatorBar(
                time=b.time, open=b.open, high=b.high, low=b.low, close=b.close,
                ema_fast=fast[i], ema_slow=slow[i], ema_trend=trend[i],
            )
            for i, b in enumerate(bars)
        ]
        for i in range(2, len(annotated)):
            signal = crossover_signal(annotated[i - 2], annotated[i - 1], annotated[i])
            if signal is not None:
                annotated[i] = replace(annotated[i], signal=signal)
        return annotated


def annotate(bars: Sequence[PriceBar]) -> List[IndicatorBar]:
    """Annotate with the default 13 / 48 / 200 periods."""
    return EmaCrossoverStrategy().annotate(bars)

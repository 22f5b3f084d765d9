"""Abstract strategy: indicators + signal generation."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence

from reddot.core.types import IndicatorBar, PriceBar, Signal


class BaseStrategy(ABC):
    """Strategy annotates a bar series with indicators and per-bar signals."""

    @abstractmethod
    def annotate(self, bars: Sequence[PriceBar]) -> List[IndicatorBar]:
        """Return one IndicatorBar per input bar. No lookahead: bar i uses bars[:i+1] only."""
        pass

    def get_signal(self, bars: Sequence[IndicatorBar]) -> Signal:
        """Signal on the latest bar, HOLD when it carries none."""
        if not bars or bars[-1].signal is None:
            return Signal.HOLD
        return bars[-1].signal

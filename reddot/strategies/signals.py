"""Latest-signal status, stop-loss markers and new-signal alerts over annotated bars."""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from reddot.core.types import IndicatorBar, RiskConfig, TradePlan, TradeSetup
from reddot.risk.sizing import plan_for_config


def _actionable(bar: IndicatorBar) -> bool:
    return bar.signal is not None and bar.signal.is_actionable


def last_signal(bars: Sequence[IndicatorBar]) -> Optional[IndicatorBar]:
    """Most recent bar carrying BUY or SELL, or None (awaiting crossover)."""
    for bar in reversed(bars):
        if _actionable(bar):
            return bar
    return None


def signal_stop_levels(bars: Sequence[IndicatorBar], config: RiskConfig) -> List[Tuple[IndicatorBar, TradePlan]]:
    """Trade plan sized at each signal bar's close. Bars with no valid plan are left out."""
    levels = []
    for bar in bars:
        if not _actionable(bar):
            continue
        plan = plan_for_config(bar.close, bar.signal, config)
        if plan is not None:
            levels.append((bar, plan))
    return levels


def pending_alert(bars: Sequence[IndicatorBar], config: RiskConfig) -> Optional[TradeSetup]:
    """
    A TradeSetup when the latest bar has a BUY/SELL that differs from the previous
    bar's signal, sized at the latest close. None otherwise.
    """
    if len(bars) < 2:
        return None
    latest, previous = bars[-1], bars[-2]
    if not _actionable(latest) or latest.signal == previous.signal:
        return None
    plan = plan_for_config(latest.close, latest.signal, config)
    if plan is None:
        return None
    return TradeSetup(bar=latest, direction=latest.signal, plan=plan)

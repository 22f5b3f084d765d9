"""
Performance summary of a trade history: win rate, profit factor, expectancy, drawdown.
Realized statistics use closed trades only; the trailing open trade is reported apart.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from reddot.core.types import HistoricalTrade


@dataclass
class PerformanceMetrics:
    """Aggregate performance metrics."""
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    profit_factor: float
    expectancy: float
    avg_win: float
    avg_loss: float
    realized_pnl: float
    total_return_pct: float
    max_drawdown_pct: float
    unrealized_pnl: float = 0.0


def max_drawdown(equity_curve: List[float]) -> float:
    """Max drawdown in percent of the running peak (negative, e.g. -15.0)."""
    if not equity_curve:
        return 0.0
    arr = np.array(equity_curve, dtype=float)
    peak = np.maximum.accumulate(arr)
    dd = (arr - peak) / np.where(peak != 0, peak, 1)
    return float(np.min(dd)) * 100.0


def win_rate(pnls: List[float]) -> float:
    """Fraction of trades with positive PnL."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: List[float]) -> float:
    """Gross profit / gross loss. inf with wins and no losses, 0 with neither."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: List[float]) -> float:
    """Average PnL per trade."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def summarize(trades: Sequence[HistoricalTrade], initial_capital: float) -> PerformanceMetrics:
    """
    Summarize a trade history. The equity curve is initial_capital plus cumulative
    realized P/L, one point per closed trade.
    """
    closed = [t for t in trades if not t.is_open]
    unrealized = sum(t.profit_or_loss for t in trades if t.is_open)
    pnls = [t.profit_or_loss for t in closed]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    realized = sum(pnls)

    equity = [initial_capital]
    for p in pnls:
        equity.append(equity[-1] + p)
    total_return_pct = realized / initial_capital * 100.0 if initial_capital > 0 else 0.0

    return PerformanceMetrics(
        total_trades=len(closed),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=win_rate(pnls),
        profit_factor=profit_factor(pnls),
        expectancy=expectancy(pnls),
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=sum(losses) / len(losses) if losses else 0.0,
        realized_pnl=realized,
        total_return_pct=total_return_pct,
        max_drawdown_pct=max_drawdown(equity),
        unrealized_pnl=unrealized,
    )

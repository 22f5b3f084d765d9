"""Analytics: trade history performance (win rate, profit factor, expectancy, drawdown)."""

from reddot.analytics.metrics import (
    PerformanceMetrics,
    summarize,
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
)

__all__ = [
    "PerformanceMetrics",
    "summarize",
    "max_drawdown",
    "win_rate",
    "profit_factor",
    "expectancy",
]

"""Backtesting: bar-by-bar position simulation with trend, stop and reversal exits."""

from reddot.backtesting.engine import BacktestEngine, BacktestResult, simulate_trades

__all__ = ["BacktestEngine", "BacktestResult", "simulate_trades"]

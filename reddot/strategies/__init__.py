"""Strategies: base interface, EMA crossover and signal reporting."""

from reddot.strategies.base import BaseStrategy
from reddot.strategies.ema_crossover import EmaCrossoverStrategy, annotate, compute_ema
from reddot.strategies.signals import last_signal, pending_alert, signal_stop_levels

__all__ = [
    "BaseStrategy",
    "EmaCrossoverStrategy",
    "annotate",
    "compute_ema",
    "last_signal",
    "pending_alert",
    "signal_stop_levels",
]

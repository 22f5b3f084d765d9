"""EMA crossover signal engine with risk-sized backtesting."""

__version__ = "0.1.0"

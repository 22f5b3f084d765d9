"""
Logging setup for the reddot logger tree. Console + optional file.

Every record carries a `market` tag (e.g. "BTC/USD 1H") so backtests over several
pairs or timeframes can share one log file.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "reddot"


class MarketFilter(logging.Filter):
    """Stamps records with the market being evaluated."""

    def __init__(self, market: str = "-"):
        super().__init__()
        self.market = market

    def filter(self, record: logging.LogRecord) -> bool:
        record.market = self.market
        return True


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    market: str = "-",
) -> logging.Logger:
    """Configure the package logger: stdout and, when log_dir and log_file are set, a file."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(market)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    market_filter = MarketFilter(market)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(market_filter)
        root.addHandler(handler)
    return root

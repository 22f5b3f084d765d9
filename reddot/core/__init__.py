"""Core: config, types, logging."""

from reddot.core.config import load_config, Config
from reddot.core.types import (
    Signal,
    RiskModel,
    TradeType,
    ExitReason,
    PriceBar,
    IndicatorBar,
    RiskConfig,
    TradePlan,
    OpenPosition,
    HistoricalTrade,
    TradeSetup,
)
from reddot.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "Signal",
    "RiskModel",
    "TradeType",
    "ExitReason",
    "PriceBar",
    "IndicatorBar",
    "RiskConfig",
    "TradePlan",
    "OpenPosition",
    "HistoricalTrade",
    "TradeSetup",
    "setup_logging",
]

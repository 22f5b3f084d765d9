"""
Load configuration from config.yaml and .env. Environment values override YAML.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from reddot.core.types import RiskConfig, RiskModel, TradeType
from reddot.utils.timeframes import validate_timeframe

logger = logging.getLogger("reddot.config")

LEVERAGE_OPTIONS: dict[TradeType, tuple[int, ...]] = {
    TradeType.SPOT: (1,),
    TradeType.MARGIN: (3, 5, 10),
    TradeType.CONTRACTS: (20, 50, 100),
}


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def _parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {key}: {value!r} (choose from {choices})") from None


def _num(cast, value: Any, fallback, key: str):
    """cast(value), or fallback with a warning. int settings reject fractional values."""
    if value is None:
        return fallback
    try:
        number = float(value)
        if cast is int:
            if not number.is_integer():
                raise ValueError(value)
            return int(number)
        return number
    except (TypeError, ValueError):
        logger.warning("Invalid %s: %r, using %s", key, value, fallback)
        return fallback


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: Any = "") -> str:
        return os.getenv(key, str(default) if default is not None else "").strip()

    def env_bool(key: str, default: bool = False) -> bool:
        return os.getenv(key, str(default)).lower() in ("true", "1", "yes")

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    market = data.get("market", {})
    strategy = data.get("strategy", {})
    risk = data.get("risk", {})
    bars = data.get("data", {})
    logging_cfg = data.get("logging", {})

    trade_type = _parse_enum(TradeType, env("TRADE_TYPE", risk.get("trade_type", "contracts")), "trade_type")
    leverage = env_int("LEVERAGE", _num(int, risk.get("leverage"), 100, "leverage"))
    if leverage not in LEVERAGE_OPTIONS[trade_type]:
        logger.warning(
            "Leverage %sx is not a standard %s option %s",
            leverage, trade_type.value, LEVERAGE_OPTIONS[trade_type],
        )

    bars_csv = env("BARS_CSV", bars.get("bars_csv", ""))

    return Config(
        symbol=env("SYMBOL", market.get("symbol", "BTC/USD")).upper(),
        timeframe=validate_timeframe(env("TIMEFRAME", market.get("timeframe", "1H"))),
        # Strategy
        ema_fast=env_int("EMA_FAST", _num(int, strategy.get("ema_fast"), 13, "ema_fast")),
        ema_slow=env_int("EMA_SLOW", _num(int, strategy.get("ema_slow"), 48, "ema_slow")),
        ema_trend=env_int("EMA_TREND", _num(int, strategy.get("ema_trend"), 200, "ema_trend")),
        # Risk
        capital=env_float("CAPITAL", _num(float, risk.get("capital"), 24000.0, "capital")),
        margin_per_trade=env_float("MARGIN_PER_TRADE", _num(float, risk.get("margin_per_trade"), 6000.0, "margin_per_trade")),
        risk_model=_parse_enum(RiskModel, env("RISK_MODEL", risk.get("risk_model", "fixed")), "risk_model"),
        risk_percentage=env_float("RISK_PERCENTAGE", _num(float, risk.get("risk_percentage"), 1.0, "risk_percentage")),
        fixed_risk_amount=env_float("FIXED_RISK_AMOUNT", _num(float, risk.get("fixed_risk_amount"), 1500.0, "fixed_risk_amount")),
        trade_type=trade_type,
        leverage=leverage,
        trailing_stop_enabled=env_bool("TRAILING_STOP_ENABLED", risk.get("trailing_stop_enabled", True)),
        trailing_stop_activation=env_float("TRAILING_STOP_ACTIVATION", _num(float, risk.get("trailing_stop_activation"), 1500.0, "trailing_stop_activation")),
        trailing_stop_distance=env_float("TRAILING_STOP_DISTANCE", _num(float, risk.get("trailing_stop_distance"), 500.0, "trailing_stop_distance")),
        # Data
        bars_csv=Path(bars_csv) if bars_csv else None,
        time_unit=env("TIME_UNIT", bars.get("time_unit", "ms")).lower(),
        # Logging
        log_level=logging_cfg.get("level", "INFO"),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "reddot.log"),
    )


class Config:
    """Unified configuration. Read-only after load."""

    __slots__ = (
        "symbol", "timeframe",
        "ema_fast", "ema_slow", "ema_trend",
        "capital", "margin_per_trade", "risk_model", "risk_percentage", "fixed_risk_amount",
        "trade_type", "leverage",
        "trailing_stop_enabled", "trailing_stop_activation", "trailing_stop_distance",
        "bars_csv", "time_unit",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        symbol: str = "BTC/USD",
        timeframe: str = "1H",
        ema_fast: int = 13,
        ema_slow: int = 48,
        ema_trend: int = 200,
        capital: float = 24000.0,
        margin_per_trade: float = 6000.0,
        risk_model: RiskModel = RiskModel.FIXED,
        risk_percentage: float = 1.0,
        fixed_risk_amount: float = 1500.0,
        trade_type: TradeType = TradeType.CONTRACTS,
        leverage: int = 100,
        trailing_stop_enabled: bool = True,
        trailing_stop_activation: float = 1500.0,
        trailing_stop_distance: float = 500.0,
        bars_csv: Optional[Path] = None,
        time_unit: str = "ms",
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "reddot.log",
    ):
        log_dir = Path(log_dir) if log_dir else Path("logs")
        values = locals()
        for name in self.__slots__:
            object.__setattr__(self, name, values[name])

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Config is read-only (tried to set {name})")

    def risk_config(self) -> RiskConfig:
        """Snapshot of the risk settings for one simulation pass."""
        return RiskConfig(
            capital=self.capital,
            margin_per_trade=self.margin_per_trade,
            risk_model=self.risk_model,
            risk_percentage=self.risk_percentage,
            fixed_risk_amount=self.fixed_risk_amount,
            leverage=self.leverage,
            trade_type=self.trade_type,
            trailing_stop_enabled=self.trailing_stop_enabled,
            trailing_stop_activation=self.trailing_stop_activation,
            trailing_stop_distance=self.trailing_stop_distance,
        )

"""
Core data types for bars, signals, risk settings, trade plans and trade history.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Signal(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    @property
    def is_actionable(self) -> bool:
        return self is not Signal.HOLD

    @property
    def opposite(self) -> "Signal":
        if self is Signal.BUY:
            return Signal.SELL
        if self is Signal.SELL:
            return Signal.BUY
        return Signal.HOLD


class RiskModel(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class TradeType(str, Enum):
    SPOT = "spot"
    MARGIN = "margin"
    CONTRACTS = "contracts"


class ExitReason(str, Enum):
    TREND_EXIT = "Trend Exit"
    STOP_LOSS = "Stop Loss"
    TRAILING_STOP = "Trailing Stop"
    REVERSAL = "Reversal"


@dataclass(frozen=True)
class PriceBar:
    """OHLC candle. time is a millisecond epoch timestamp."""
    time: int
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class IndicatorBar(PriceBar):
    """PriceBar with EMA values (None during warm-up) and an optional signal."""
    ema_fast: Optional[float] = None
    ema_slow: Optional[float] = None
    ema_trend: Optional[float] = None
    signal: Optional[Signal] = None

    @property
    def has_cross_emas(self) -> bool:
        return self.ema_fast is not None and self.ema_slow is not None

    @property
    def spread(self) -> Optional[float]:
        """Fast minus slow EMA, or None while either is warming up."""
        if not self.has_cross_emas:
            return None
        return self.ema_fast - self.ema_slow


@dataclass(frozen=True)
class RiskConfig:
    """Capital, leverage and risk policy. One immutable snapshot per simulation pass."""
    capital: float
    margin_per_trade: float
    risk_model: RiskModel = RiskModel.FIXED
    risk_percentage: float = 1.0
    fixed_risk_amount: float = 0.0
    leverage: int = 1
    trade_type: TradeType = TradeType.MARGIN
    trailing_stop_enabled: bool = False
    trailing_stop_activation: float = 0.0
    trailing_stop_distance: float = 0.0

    @property
    def effective_leverage(self) -> int:
        # Spot never borrows, whatever leverage value is stored.
        if self.trade_type == TradeType.SPOT:
            return 1
        return self.leverage

    @property
    def notional_capital(self) -> float:
        return max(0.0, self.margin_per_trade * self.effective_leverage)

    @property
    def risk_value(self) -> float:
        """Percentage or USD amount, depending on the risk model."""
        if self.risk_model == RiskModel.PERCENTAGE:
            return self.risk_percentage
        return self.fixed_risk_amount


@dataclass(frozen=True)
class TradePlan:
    """Sized trade: stop, target and position size for one entry."""
    stop_loss: float
    take_profit: float
    position_size_base: float
    position_size_usd: float
    risk_amount_usd: float
    leverage: int

    @property
    def margin_usd(self) -> float:
        """Capital actually committed (notional / leverage)."""
        if self.leverage <= 0:
            return 0.0
        return self.position_size_usd / self.leverage


@dataclass
class OpenPosition:
    """Position state owned by a single simulation pass."""
    direction: Signal
    entry_bar: IndicatorBar
    plan: TradePlan
    current_stop_loss: float
    peak_price: float

    @property
    def entry_price(self) -> float:
        return self.entry_bar.close

    def pnl_at(self, price: float) -> float:
        """P/L in USD if the whole position were closed at price."""
        per_unit = price - self.entry_price if self.direction == Signal.BUY else self.entry_price - price
        return per_unit * self.plan.position_size_base


@dataclass(frozen=True)
class HistoricalTrade:
    """Closed trade, or the still-open trade at the end of the series (exit_bar is None)."""
    direction: Signal
    entry_bar: IndicatorBar
    exit_bar: Optional[IndicatorBar]
    exit_price: float
    position_size_base: float
    position_size_usd: float
    profit_or_loss: float
    profit_or_loss_percentage: float
    stop_loss_at_entry: float
    exit_reason: Optional[ExitReason] = None

    @property
    def is_open(self) -> bool:
        return self.exit_bar is None

    @property
    def entry_price(self) -> float:
        return self.entry_bar.close


@dataclass(frozen=True)
class TradeSetup:
    """A fresh signal on the latest bar together with its sized plan."""
    bar: IndicatorBar
    direction: Signal
    plan: TradePlan

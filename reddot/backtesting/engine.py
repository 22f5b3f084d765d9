"""
Backtest engine: single pass over annotated bars, at most one open position.

Per bar, an open position is checked against the exit rules in priority order
(trend exit, stop / trailing stop, reversal); the first rule that fires closes it.
A flat book then opens on the bar's BUY/SELL signal, so a stop-and-reverse can
happen within one bar. A position still open at the last bar is reported with
P/L marked to the last close and no exit bar.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from reddot.core.types import (
    ExitReason,
    HistoricalTrade,
    IndicatorBar,
    OpenPosition,
    PriceBar,
    RiskConfig,
    Signal,
)
from reddot.strategies.base import BaseStrategy
from reddot.risk.sizing import plan_for_config
from reddot.risk.trailing import update_trailing_stop
from reddot.analytics.metrics import PerformanceMetrics, summarize

logger = logging.getLogger("reddot.backtest")

Exit = Tuple[float, ExitReason]
ExitRule = Callable[[OpenPosition, IndicatorBar, IndicatorBar, RiskConfig], Optional[Exit]]


def _trend_exit(pos: OpenPosition, prev: IndicatorBar, bar: IndicatorBar, config: RiskConfig) -> Optional[Exit]:
    """Fast EMA crosses back through slow EMA against the position (no confirmation bar)."""
    if not (prev.has_cross_emas and bar.has_cross_emas):
        return None
    if pos.direction == Signal.BUY and prev.ema_fast >= prev.ema_slow and bar.ema_fast < bar.ema_slow:
        return bar.close, ExitReason.TREND_EXIT
    if pos.direction == Signal.SELL and prev.ema_fast <= prev.ema_slow and bar.ema_fast > bar.ema_slow:
        return bar.close, ExitReason.TREND_EXIT
    return None


def _stop_exit(pos: OpenPosition, prev: IndicatorBar, bar: IndicatorBar, config: RiskConfig) -> Optional[Exit]:
    """Bar range touches the current stop; fills at the stop level."""
    stop = pos.current_stop_loss
    if pos.direction == Signal.BUY and bar.low <= stop:
        locked_profit = config.trailing_stop_enabled and stop > pos.entry_price
    elif pos.direction == Signal.SELL and bar.high >= stop:
        locked_profit = config.trailing_stop_enabled and stop < pos.entry_price
    else:
        return None
    return stop, ExitReason.TRAILING_STOP if locked_profit else ExitReason.STOP_LOSS


def _reversal_exit(pos: OpenPosition, prev: IndicatorBar, bar: IndicatorBar, config: RiskConfig) -> Optional[Exit]:
    if bar.signal is not None and bar.signal.is_actionable and bar.signal != pos.direction:
        return bar.close, ExitReason.REVERSAL
    return None


EXIT_RULES: Tuple[ExitRule, ...] = (_trend_exit, _stop_exit, _reversal_exit)


def _close_trade(pos: OpenPosition, price: float, exit_bar: Optional[IndicatorBar], reason: Optional[ExitReason]) -> HistoricalTrade:
    pnl = pos.pnl_at(price)
    margin = pos.plan.margin_usd
    return HistoricalTrade(
        direction=pos.direction,
        entry_bar=pos.entry_bar,
        exit_bar=exit_bar,
        exit_price=price,
        position_size_base=pos.plan.position_size_base,
        position_size_usd=pos.plan.position_size_usd,
        profit_or_loss=pnl,
        profit_or_loss_percentage=(pnl / margin) * 100 if margin > 0 else 0.0,
        stop_loss_at_entry=pos.plan.stop_loss,
        exit_reason=reason,
    )


def simulate_trades(bars: Sequence[IndicatorBar], config: RiskConfig) -> List[HistoricalTrade]:
    """
    Turn an annotated bar series into a trade history. Deterministic and side-effect free:
    bars and config are only read. The last element is the open trade, if any.
    """
    if len(bars) < 2:
        return []
    trades: List[HistoricalTrade] = []
    pos: Optional[OpenPosition] = None

    for i in range(1, len(bars)):
        prev, bar = bars[i - 1], bars[i]

        if pos is not None:
            if config.trailing_stop_enabled:
                update_trailing_stop(pos, bar, config.trailing_stop_activation, config.trailing_stop_distance)
            for rule in EXIT_RULES:
                exit_ = rule(pos, prev, bar, config)
                if exit_ is not None:
                    price, reason = exit_
                    trade = _close_trade(pos, price, bar, reason)
                    logger.debug(
                        "Closed %s @ %.6f (%s) pnl=%.2f",
                        pos.direction.value, price, reason.value, trade.profit_or_loss,
                    )
                    trades.append(trade)
                    pos = None
                    break

        if pos is None and bar.signal is not None and bar.signal.is_actionable:
            plan = plan_for_config(bar.close, bar.signal, config)
            if plan is None:
                # Signal cannot be acted on under this config; stay flat
                continue
            pos = OpenPosition(
                direction=bar.signal,
                entry_bar=bar,
                plan=plan,
                current_stop_loss=plan.stop_loss,
                peak_price=bar.high if bar.signal == Signal.BUY else bar.low,
            )
            logger.debug(
                "Opened %s @ %.6f size=%.6f stop=%.6f",
                bar.signal.value, bar.close, plan.position_size_base, plan.stop_loss,
            )

    if pos is not None:
        trades.append(_close_trade(pos, bars[-1].close, None, None))
    return trades


@dataclass
class BacktestResult:
    """Backtest output: annotated bars, trade history and metrics."""
    bars: List[IndicatorBar] = field(default_factory=list)
    trades: List[HistoricalTrade] = field(default_factory=list)
    metrics: Optional[PerformanceMetrics] = None

    @property
    def open_trade(self) -> Optional[HistoricalTrade]:
        if self.trades and self.trades[-1].is_open:
            return self.trades[-1]
        return None


class BacktestEngine:
    """Annotates price bars with the strategy, simulates trades under a risk config, summarizes."""

    def __init__(self, strategy: BaseStrategy, risk_config: RiskConfig):
        self.strategy = strategy
        self.risk_config = risk_config

    def run(self, bars: Sequence[PriceBar], symbol: str = "BTC/USD") -> BacktestResult:
        """Run a full pass over bars (time ascending)."""
        annotated = self.strategy.annotate(bars)
        trades = simulate_trades(annotated, self.risk_config)
        metrics = summarize(trades, self.risk_config.capital)
        logger.info(
            "%s backtest: %d bars, %d closed trades, realized %.2f, open=%s",
            symbol, len(annotated), metrics.total_trades, metrics.realized_pnl,
            bool(trades and trades[-1].is_open),
        )
        return BacktestResult(bars=annotated, trades=trades, metrics=metrics)

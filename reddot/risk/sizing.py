"""
Trade sizing: position size from notional capital, stop distance from the risk budget.

Position size = notional / entry. Stop distance = risk_usd / position size, so the
loss at the stop equals the risk budget. Take-profit sits RISK_REWARD_RATIO stop
distances away on the other side.
"""

from __future__ import annotations
import logging
from typing import Optional

from reddot.core.types import RiskConfig, RiskModel, Signal, TradePlan

logger = logging.getLogger("reddot.risk")

RISK_REWARD_RATIO = 2.0


def calculate_trade_plan(
    entry_price: float,
    direction: Signal,
    notional_capital: float,
    real_capital: float,
    risk_model: RiskModel,
    risk_value: float,
    leverage: int,
) -> Optional[TradePlan]:
    """
    Size a BUY or SELL entry. Returns None when the inputs cannot produce a valid trade:
    non-positive capital, risk, notional, entry price or leverage, zero position size,
    or a stop-loss at or below zero.
    """
    if real_capital <= 0 or risk_value <= 0 or notional_capital <= 0 or entry_price <= 0 or leverage <= 0:
        logger.debug(
            "No plan: capital=%.2f risk=%.2f notional=%.2f entry=%.6f leverage=%s",
            real_capital, risk_value, notional_capital, entry_price, leverage,
        )
        return None
    if direction not in (Signal.BUY, Signal.SELL):
        return None

    if risk_model == RiskModel.PERCENTAGE:
        # Percentage of notional, not of account capital
        risk_usd = notional_capital * (risk_value / 100.0)
    else:
        risk_usd = risk_value

    if risk_usd > real_capital:
        logger.warning(
            "Risk amount %.2f exceeds real capital %.2f; capping at capital",
            risk_usd, real_capital,
        )
        risk_usd = real_capital

    size_base = notional_capital / entry_price
    if size_base == 0:
        return None
    stop_distance = risk_usd / size_base

    if direction == Signal.BUY:
        stop = entry_price - stop_distance
        tp = entry_price + stop_distance * RISK_REWARD_RATIO
    else:
        stop = entry_price + stop_distance
        tp = entry_price - stop_distance * RISK_REWARD_RATIO

    if stop <= 0:
        logger.warning("Stop loss %.6f is zero or negative for entry %.6f; no trade", stop, entry_price)
        return None

    return TradePlan(
        stop_loss=stop,
        take_profit=tp,
        position_size_base=size_base,
        position_size_usd=notional_capital,
        risk_amount_usd=risk_usd,
        leverage=leverage,
    )


def plan_for_config(entry_price: float, direction: Signal, config: RiskConfig) -> Optional[TradePlan]:
    """calculate_trade_plan with capital, leverage and risk taken from a RiskConfig."""
    return calculate_trade_plan(
        entry_price=entry_price,
        direction=direction,
        notional_capital=config.notional_capital,
        real_capital=config.capital,
        risk_model=config.risk_model,
        risk_value=config.risk_value,
        leverage=config.effective_leverage,
    )

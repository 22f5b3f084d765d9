"""
Trailing stop: once the best price reached is worth `activation_usd` of profit,
keep the stop `distance_usd` (converted to a price distance) behind that price.
The stop only ever tightens.
"""

from __future__ import annotations

from reddot.core.types import IndicatorBar, OpenPosition, Signal


def update_trailing_stop(
    position: OpenPosition,
    bar: IndicatorBar,
    activation_usd: float,
    distance_usd: float,
) -> float:
    """Advance the position's peak with this bar and ratchet its stop. Returns the current stop."""
    size = position.plan.position_size_base
    if size <= 0:
        return position.current_stop_loss

    if position.direction == Signal.BUY:
        position.peak_price = max(position.peak_price, bar.high)
        if position.pnl_at(position.peak_price) >= activation_usd:
            new_stop = position.peak_price - distance_usd / size
            if new_stop > position.current_stop_loss:
                position.current_stop_loss = new_stop
    else:
        position.peak_price = min(position.peak_price, bar.low)
        if position.pnl_at(position.peak_price) >= activation_usd:
            new_stop = position.peak_price + distance_usd / size
            if new_stop < position.current_stop_loss:
                position.current_stop_loss = new_stop
    return position.current_stop_loss

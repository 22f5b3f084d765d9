"""Risk: trade sizing (stop, target, position size) and trailing stops."""

from reddot.risk.sizing import calculate_trade_plan, plan_for_config, RISK_REWARD_RATIO
from reddot.risk.trailing import update_trailing_stop

__all__ = ["calculate_trade_plan", "plan_for_config", "RISK_REWARD_RATIO", "update_trailing_stop"]

"""Unit tests for risk.sizing and the RiskConfig derived values."""

import pytest
from reddot.core.types import RiskConfig, RiskModel, Signal, TradeType
from reddot.risk.sizing import RISK_REWARD_RATIO, calculate_trade_plan, plan_for_config


def _plan(**overrides):
    params = dict(
        entry_price=100.0,
        direction=Signal.BUY,
        notional_capital=1000.0,
        real_capital=10000.0,
        risk_model=RiskModel.FIXED,
        risk_value=100.0,
        leverage=1,
    )
    params.update(overrides)
    return calculate_trade_plan(**params)


@pytest.mark.parametrize(
    "field",
    ["entry_price", "notional_capital", "real_capital", "risk_value", "leverage"],
)
def test_non_positive_inputs_rejected(field):
    assert _plan(**{field: 0}) is None
    assert _plan(**{field: -1}) is None


def test_fixed_risk_buy():
    # size = 1000 / 100 = 10 units, stop distance = 100 / 10 = 10
    p = _plan()
    assert p.position_size_base == pytest.approx(10.0)
    assert p.position_size_usd == pytest.approx(1000.0)
    assert p.risk_amount_usd == pytest.approx(100.0)
    assert p.stop_loss == pytest.approx(90.0)
    assert p.take_profit == pytest.approx(120.0)
    assert p.leverage == 1


def test_fixed_risk_sell_mirrored():
    p = _plan(direction=Signal.SELL)
    assert p.stop_loss == pytest.approx(110.0)
    assert p.take_profit == pytest.approx(80.0)


def test_take_profit_is_reward_multiple_of_stop():
    p = _plan(entry_price=27350.5)
    assert p.stop_loss < 27350.5
    assert p.take_profit == pytest.approx(27350.5 + RISK_REWARD_RATIO * (27350.5 - p.stop_loss))


def test_percentage_risk_of_notional():
    p = _plan(risk_model=RiskModel.PERCENTAGE, risk_value=2.0)
    assert p.risk_amount_usd == pytest.approx(20.0)
    assert p.stop_loss == pytest.approx(98.0)


def test_risk_clamped_to_real_capital():
    p = _plan(notional_capital=10000.0, real_capital=1000.0, risk_value=5000.0)
    assert p is not None
    assert p.risk_amount_usd == 1000.0
    # size 100 units -> stop distance 10
    assert p.stop_loss == pytest.approx(90.0)


def test_percentage_risk_clamped_to_real_capital():
    p = _plan(notional_capital=100000.0, real_capital=500.0, risk_model=RiskModel.PERCENTAGE, risk_value=5.0)
    assert p.risk_amount_usd == 500.0


def test_stop_at_or_below_zero_rejected():
    # Risking the whole notional puts a BUY stop at 0
    assert _plan(risk_value=1000.0) is None
    assert _plan(risk_value=1500.0) is None
    # The same risk on a SELL gives a stop above entry
    p = _plan(risk_value=1000.0, direction=Signal.SELL)
    assert p.stop_loss == pytest.approx(200.0)


def test_hold_is_not_sized():
    assert _plan(direction=Signal.HOLD) is None


def test_leverage_passed_through():
    assert _plan(leverage=50).leverage == 50


def test_notional_capital_from_margin_and_leverage():
    cfg = RiskConfig(capital=10000.0, margin_per_trade=1000.0, leverage=5, trade_type=TradeType.MARGIN)
    assert cfg.effective_leverage == 5
    assert cfg.notional_capital == pytest.approx(5000.0)


def test_spot_ignores_stored_leverage():
    cfg = RiskConfig(
        capital=10000.0,
        margin_per_trade=1000.0,
        leverage=50,
        trade_type=TradeType.SPOT,
        fixed_risk_amount=100.0,
    )
    assert cfg.effective_leverage == 1
    assert cfg.notional_capital == pytest.approx(1000.0)
    p = plan_for_config(100.0, Signal.BUY, cfg)
    assert p.position_size_usd == pytest.approx(1000.0)
    assert p.leverage == 1


def test_plan_for_config_uses_risk_model():
    cfg = RiskConfig(
        capital=10000.0,
        margin_per_trade=1000.0,
        risk_model=RiskModel.PERCENTAGE,
        risk_percentage=1.0,
        fixed_risk_amount=999.0,
        leverage=10,
        trade_type=TradeType.MARGIN,
    )
    p = plan_for_config(100.0, Signal.BUY, cfg)
    # 1% of 10000 notional
    assert p.risk_amount_usd == pytest.approx(100.0)
    assert p.position_size_base == pytest.approx(100.0)
    assert p.stop_loss == pytest.approx(99.0)


def test_plan_for_config_invalid_capital():
    cfg = RiskConfig(capital=0.0, margin_per_trade=1000.0, fixed_risk_amount=100.0)
    assert plan_for_config(100.0, Signal.BUY, cfg) is None

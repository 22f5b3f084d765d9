"""Unit tests for strategies.signals."""

import pytest
from reddot.core.types import IndicatorBar, RiskConfig, Signal
from reddot.strategies.signals import last_signal, pending_alert, signal_stop_levels

T0 = 1_700_000_000_000
HOUR = 3_600_000
CONFIG = RiskConfig(capital=10000.0, margin_per_trade=1000.0, fixed_risk_amount=100.0)


def _bar(i, close, signal=None):
    return IndicatorBar(time=T0 + i * HOUR, open=close, high=close, low=close, close=close, signal=signal)


def test_last_signal_none_when_no_signals():
    assert last_signal([]) is None
    assert last_signal([_bar(0, 100.0), _bar(1, 101.0, Signal.HOLD)]) is None


def test_last_signal_most_recent():
    bars = [_bar(0, 100.0, Signal.BUY), _bar(1, 101.0), _bar(2, 99.0, Signal.SELL), _bar(3, 98.0)]
    found = last_signal(bars)
    assert found is bars[2]
    assert found.signal == Signal.SELL


def test_signal_stop_levels():
    bars = [_bar(0, 100.0, Signal.BUY), _bar(1, 101.0), _bar(2, 200.0, Signal.SELL)]
    levels = signal_stop_levels(bars, CONFIG)
    assert [b.time for b, _ in levels] == [bars[0].time, bars[2].time]
    assert levels[0][1].stop_loss == pytest.approx(90.0)
    assert levels[1][1].stop_loss == pytest.approx(220.0)


def test_signal_stop_levels_skip_invalid_plans():
    bars = [_bar(0, 100.0, Signal.BUY)]
    assert signal_stop_levels(bars, RiskConfig(capital=0.0, margin_per_trade=1000.0, fixed_risk_amount=100.0)) == []


def test_pending_alert_on_new_signal():
    bars = [_bar(0, 100.0), _bar(1, 100.0, Signal.BUY)]
    setup = pending_alert(bars, CONFIG)
    assert setup is not None
    assert setup.direction == Signal.BUY
    assert setup.bar is bars[1]
    assert setup.plan.take_profit == pytest.approx(120.0)


def test_pending_alert_requires_changed_signal():
    bars = [_bar(0, 100.0, Signal.BUY), _bar(1, 100.0, Signal.BUY)]
    assert pending_alert(bars, CONFIG) is None


def test_pending_alert_none_without_signal_or_history():
    assert pending_alert([_bar(0, 100.0, Signal.BUY)], CONFIG) is None
    assert pending_alert([_bar(0, 100.0, Signal.BUY), _bar(1, 100.0)], CONFIG) is None


def test_pending_alert_none_when_plan_rejected():
    bars = [_bar(0, 100.0), _bar(1, 100.0, Signal.SELL)]
    cfg = RiskConfig(capital=10000.0, margin_per_trade=0.0, fixed_risk_amount=100.0)
    assert pending_alert(bars, cfg) is None

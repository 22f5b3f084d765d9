"""Unit tests for analytics.metrics."""

import pytest
from reddot.analytics.metrics import (
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
    summarize,
)
from reddot.core.types import ExitReason, HistoricalTrade, IndicatorBar, Signal

BAR = IndicatorBar(time=0, open=100.0, high=100.0, low=100.0, close=100.0)


def _trade(pnl, is_open=False):
    return HistoricalTrade(
        direction=Signal.BUY,
        entry_bar=BAR,
        exit_bar=None if is_open else BAR,
        exit_price=100.0,
        position_size_base=1.0,
        position_size_usd=100.0,
        profit_or_loss=pnl,
        profit_or_loss_percentage=pnl,
        stop_loss_at_entry=90.0,
        exit_reason=None if is_open else ExitReason.REVERSAL,
    )


def test_win_rate():
    assert win_rate([1, -1, 1, 1]) == 0.75
    assert win_rate([]) == 0.0


def test_profit_factor():
    assert profit_factor([10, -5, 10, -5]) == 2.0
    assert profit_factor([10, 10]) == float("inf")
    assert profit_factor([-5, -5]) == 0.0
    assert profit_factor([]) == 0.0


def test_expectancy():
    assert expectancy([10, -5, 5]) == pytest.approx(10 / 3)
    assert expectancy([]) == 0.0


def test_max_drawdown():
    # equity 1 -> 1.2 -> 1.0 -> 1.1  =>  peak 1.2, dd (1.0-1.2)/1.2 = -16.67%
    assert max_drawdown([1.0, 1.2, 1.0, 1.1]) == pytest.approx(-16.666, rel=0.01)
    assert max_drawdown([]) == 0.0
    assert max_drawdown([1.0, 2.0, 3.0]) == 0.0


def test_summarize_empty():
    m = summarize([], 1000.0)
    assert m.total_trades == 0
    assert m.realized_pnl == 0.0
    assert m.max_drawdown_pct == 0.0
    assert m.unrealized_pnl == 0.0


def test_summarize_separates_open_trade():
    trades = [_trade(100.0), _trade(-50.0), _trade(30.0), _trade(20.0, is_open=True)]
    m = summarize(trades, 1000.0)
    assert m.total_trades == 3
    assert m.winning_trades == 2
    assert m.losing_trades == 1
    assert m.realized_pnl == pytest.approx(80.0)
    assert m.total_return_pct == pytest.approx(8.0)
    assert m.profit_factor == pytest.approx(2.6)
    assert m.expectancy == pytest.approx(80.0 / 3)
    assert m.avg_win == pytest.approx(65.0)
    assert m.avg_loss == pytest.approx(-50.0)
    # equity 1000 -> 1100 -> 1050 -> 1080
    assert m.max_drawdown_pct == pytest.approx(-50.0 / 1100 * 100)
    assert m.unrealized_pnl == pytest.approx(20.0)

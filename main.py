#!/usr/bin/env python3
"""
RedDot CLI: backtest | signal
Usage:
  python main.py backtest [--config config.yaml] [--data bars.csv] [--export trades.csv]
  python main.py signal [--config config.yaml] [--data bars.csv]
"""

from __future__ import annotations
import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reddot.core.config import Config, load_config
from reddot.core.logger import setup_logging
from reddot.core.types import PriceBar
from reddot.strategies.ema_crossover import EmaCrossoverStrategy
from reddot.strategies.signals import last_signal, pending_alert
from reddot.backtesting.engine import BacktestEngine
from reddot.utils.data import load_bars_csv, trades_frame

logger = logging.getLogger("reddot")


def _load(config_path: Optional[Path], data_path: Optional[Path]) -> tuple[Config, Optional[List[PriceBar]]]:
    config = load_config(config_path, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, market=f"{config.symbol} {config.timeframe}")
    path = data_path or config.bars_csv
    if path is None:
        logger.error("No bar data. Pass --data or set data.bars_csv / BARS_CSV")
        return config, None
    return config, load_bars_csv(path, time_unit=config.time_unit)


def _strategy(config: Config) -> EmaCrossoverStrategy:
    return EmaCrossoverStrategy(
        ema_fast=config.ema_fast,
        ema_slow=config.ema_slow,
        ema_trend=config.ema_trend,
    )


def _fmt_time(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def run_backtest(config_path: Optional[Path], data_path: Optional[Path], export_path: Optional[Path]) -> int:
    """Annotate bars, simulate trades and print the summary."""
    config, bars = _load(config_path, data_path)
    if bars is None:
        return 1
    engine = BacktestEngine(strategy=_strategy(config), risk_config=config.risk_config())
    result = engine.run(bars, symbol=config.symbol)
    m = result.metrics
    if m:
        print(f"\n--- Backtest Results ({config.symbol} {config.timeframe}) ---")
        print(f"Closed trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
        print(f"Realized P/L: {m.realized_pnl:.2f} USD ({m.total_return_pct:.2f}%)")
        print(f"Max drawdown: {m.max_drawdown_pct:.2f}%")
        print(f"Win rate: {m.win_rate*100:.1f}%")
        print(f"Profit factor: {m.profit_factor:.2f}")
        print(f"Expectancy: {m.expectancy:.2f} USD/trade")
    open_trade = result.open_trade
    if open_trade is not None:
        print(
            f"Open {open_trade.direction.value} since {_fmt_time(open_trade.entry_bar.time)} "
            f"@ {open_trade.entry_price:.2f}: unrealized {open_trade.profit_or_loss:.2f} USD "
            f"({open_trade.profit_or_loss_percentage:.2f}%)"
        )
    if export_path:
        trades_frame(result.trades).to_csv(export_path, index=False)
        logger.info("Wrote %d trades to %s", len(result.trades), export_path)
    return 0


def run_signal(config_path: Optional[Path], data_path: Optional[Path]) -> int:
    """Print the current signal status and the plan for a new signal on the latest bar."""
    config, bars = _load(config_path, data_path)
    if bars is None:
        return 1
    annotated = _strategy(config).annotate(bars)
    latest = last_signal(annotated)
    if latest is None:
        print(f"{config.symbol} {config.timeframe}: HOLD (awaiting crossover)")
        return 0
    print(f"{config.symbol} {config.timeframe}: {latest.signal.value} at {_fmt_time(latest.time)} @ {latest.close:.2f}")
    setup = pending_alert(annotated, config.risk_config())
    if setup is not None:
        p = setup.plan
        print(f"New {setup.direction.value} on latest bar, leverage {p.leverage}x")
        print(f"Entry ~{setup.bar.close:.2f} | TP {p.take_profit:.2f} | SL {p.stop_loss:.2f}")
        print(f"Size {p.position_size_base:.6f} (~{p.position_size_usd:.2f} USD), risk {p.risk_amount_usd:.2f} USD")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="RedDot EMA crossover signals and backtest")
    parser.add_argument("mode", choices=["backtest", "signal"], help="Run backtest or show latest signal")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--data", type=Path, default=None, help="OHLC CSV (time, open, high, low, close)")
    parser.add_argument("--export", type=Path, default=None, help="Write trade history CSV (backtest only)")
    args = parser.parse_args()
    if args.mode == "backtest":
        return run_backtest(args.config, args.data, args.export)
    return run_signal(args.config, args.data)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Strategy preview CLI.

Generates the synthetic chart series for a strategy name, runs the strategy
rules and prints the signal log with the simulated P&L.

Usage:
    python -m cli.preview "RSI Scalper" --strategy-type scalping
    python -m cli.preview "Golden Cross" --shape candle --json
    python -m cli.preview "My Swing" --config configs/tight_swing.yaml --verbose
"""
import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from synthmarket.shared.types import SeriesShape, StrategyType
from synthmarket.signals.config import PRESET_CONFIGS, get_preset
from synthmarket.signals.config_loader import load_config_from_yaml
from synthmarket.indicators.technical import TechnicalIndicators
from synthmarket.evaluation.trade_analysis import (
    aggregate_trades_by_entry_reason,
    trades_to_dataframe,
)
from synthmarket.preview import StrategyPreview, build_strategy_preview, DEFAULT_TIMEFRAME

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, stream=None):
    """
    Setup logging to stdout (or the given stream).

    Args:
        verbose: If True, use DEBUG level, otherwise INFO
        stream: Handler stream; JSON output logs to stderr so stdout stays parseable
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Synthetic strategy preview: chart series, signals and simulated P&L"
    )
    parser.add_argument("name", help="Strategy display name (seeds the series)")
    parser.add_argument(
        "--strategy-type",
        type=str,
        default=StrategyType.MOMENTUM.value,
        help="Strategy rules: " + ", ".join(s.value for s in StrategyType)
             + " (unknown values use swing; default: momentum)"
    )
    parser.add_argument(
        "--shape",
        choices=[s.value for s in SeriesShape],
        default=SeriesShape.LINE.value,
        help="line (preview card) or candle (detailed chart) (default: line)"
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Number of bars (default: 60 line, 40 compact line, 180 candle)"
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Use the compact line length"
    )
    parser.add_argument(
        "--timeframe",
        type=str,
        default=DEFAULT_TIMEFRAME,
        help=f"Timeframe label shown with the chart (default: {DEFAULT_TIMEFRAME})"
    )
    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a signal config YAML file"
    )
    config_group.add_argument(
        "--preset",
        choices=list(PRESET_CONFIGS.keys()),
        default=None,
        help="Signal config preset (default: matches --shape)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full preview as JSON"
    )
    parser.add_argument(
        "--trades-csv",
        type=str,
        default=None,
        help="Also write the trade ledger to this CSV file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )
    return parser


def print_preview(preview: StrategyPreview):
    """Print a human-readable report."""
    summary = preview.summary
    print("=" * 80)
    print(f"{preview.strategy_name} | {preview.strategy_type.value} | {preview.timeframe}")
    print("=" * 80)
    print(f"  Seed: {preview.seed}  Shape: {preview.shape.value}  "
          f"Bars: {len(preview.series)}  Config: {preview.config_name}")
    print(f"  Signals: {summary.buy_count} buy / {summary.sell_count} sell")
    print(f"  Trades: {summary.total_trades}  Wins: {summary.win_count}  "
          f"Losses: {summary.loss_count}")
    print(f"  Simulated P&L: {summary.total_pnl:+.2f}  Win rate: {summary.win_rate_pct:.1f}%")

    last = TechnicalIndicators().get_indicators_at(preview.series, len(preview.series) - 1)
    if last is not None:
        line = (f"  Last bar: close {last.price:.2f}  RSI {last.rsi:.1f}  "
                f"EMA {last.ema_short:.2f}/{last.ema_long:.2f}")
        if last.bb_lower is not None:
            line += f"  Band {last.bb_lower:.2f}-{last.bb_upper:.2f}"
        print(line)
    print()

    print("SIGNALS:")
    print("-" * 80)
    for s in preview.signals:
        print(f"  {s.time:>10}  {s.signal_type.value.upper():<4}  {s.price:>9.2f}  {s.reasoning}")
    print()

    if preview.trades:
        print("TRADES:")
        print("-" * 80)
        for t in preview.trades:
            print(f"  {t.entry_time:>10} -> {t.exit_time:<10}  {t.entry_price:>9.2f} -> "
                  f"{t.exit_price:<9.2f}  {t.pnl:+8.2f} ({t.pnl_pct:+.2f}%)")
        print()

        print("BY ENTRY REASON:")
        print("-" * 80)
        by_reason = aggregate_trades_by_entry_reason(trades_to_dataframe(preview.trades))
        for reason, stats in by_reason.items():
            print(f"  {reason:<40}  {stats['count']:>3} trades  "
                  f"win {stats['win_rate_pct']:5.1f}%  avg {stats['avg_pnl_pct']:+.2f}%")
        print()


def main(argv: Optional[List[str]] = None) -> int:
    """Run one preview and print it."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, stream=sys.stderr if args.json else None)

    try:
        config = None
        if args.config:
            config = load_config_from_yaml(Path(args.config))
            logger.info(f"Loaded signal config '{config.name}' from {args.config}")
        elif args.preset:
            config = get_preset(args.preset)

        preview = build_strategy_preview(
            args.name,
            strategy_type=args.strategy_type,
            length=args.length,
            shape=args.shape,
            config=config,
            timeframe=args.timeframe,
            compact=args.compact,
        )

        if args.trades_csv:
            csv_path = Path(args.trades_csv)
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            trades_to_dataframe(preview.trades).to_csv(csv_path, index=False)
            logger.info(f"Wrote {len(preview.trades)} trades to {csv_path}")
    except (ValueError, TypeError, KeyError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(preview.to_dict(), indent=2))
    else:
        print_preview(preview)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Parameter reference CLI.

Shows all configurable parameters, their defaults, and the preset rule values.
"""
import sys

from synthmarket.shared.types import StrategyType
from synthmarket.shared.defaults import (
    RSI_PERIOD, RSI_NEUTRAL, RSI_ZERO_LOSS_RS,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    BAND_SPREAD_BASE, BAND_SPREAD_RANGE,
    INDICATOR_WARMUP_PERIOD, MIN_SIGNALS,
    FALLBACK_BUY_REASON, FALLBACK_SELL_REASON,
    LINE_LENGTH, LINE_COMPACT_LENGTH, CANDLE_LENGTH, CANDLE_START_DATE,
)
from synthmarket.data.generator import SHAPE_PRESETS
from synthmarket.signals.config import PRESET_CONFIGS, SHAPE_DEFAULT_CONFIGS


def print_generator_params():
    print("SERIES GENERATOR")
    print("-" * 80)
    print()
    print("  Seed: sum of the character codes of the strategy name")
    print(f"  Default length: {LINE_LENGTH} line bars ({LINE_COMPACT_LENGTH} compact), "
          f"{CANDLE_LENGTH} candles")
    print(f"  Candle dates: business days from {CANDLE_START_DATE}")
    print(f"  Band spread: {BAND_SPREAD_BASE:g}-{BAND_SPREAD_BASE + BAND_SPREAD_RANGE:g} price units")
    print()
    for shape, params in SHAPE_PRESETS.items():
        print(f"  {shape.value}:")
        print(f"    start price   {params.start_base:g} + seed % {params.start_modulus}")
        print(f"    price floor   {params.price_floor:g}")
        print(f"    drift         (noise - {params.drift_bias:g}) * {params.noise_scale:g}"
              f" + sin(i / {params.wave_period:g}) * {params.wave_amplitude:g}")
        print(f"    volume        {params.volume_base:g} + noise * {params.volume_range:g}")
        if params.spike_bonus:
            print(f"    volume spike  +{params.spike_bonus:g} when |change| > {params.spike_threshold:g}")
        if params.wick_scale:
            print(f"    wicks         up to {params.wick_scale:g} beyond open/close")
        print()


def print_indicator_params():
    print("TECHNICAL INDICATORS")
    print("-" * 80)
    print()
    print(f"  RSI period: {RSI_PERIOD} (Wilder smoothing)")
    print(f"    Reads {RSI_NEUTRAL:g} until {RSI_PERIOD} bars have elapsed;"
          f" RS = {RSI_ZERO_LOSS_RS:g} when average loss is zero")
    print(f"  EMA periods: {EMA_SHORT_PERIOD} (short) / {EMA_LONG_PERIOD} (long)")
    print("    Seeded with the first close; long period must be > short period")
    print("  Envelope: short EMA +/- band spread")
    print()


def print_rule_params():
    print("SIGNAL RULES")
    print("-" * 80)
    print()
    print(f"  Scan starts at bar {INDICATOR_WARMUP_PERIOD}; caps apply per side")
    print(f"  Fewer than {MIN_SIGNALS} signals: fallback buy at len//3 "
          f"('{FALLBACK_BUY_REASON}') and sell at 2*(len//3) ('{FALLBACK_SELL_REASON}')")
    print("  Unknown strategy types use swing rules")
    print()
    defaults_by_name = {cfg.name: shape.value for shape, cfg in SHAPE_DEFAULT_CONFIGS.items()}
    for name, config in PRESET_CONFIGS.items():
        shape = defaults_by_name.get(name)
        suffix = f" (default for {shape} series)" if shape else ""
        print(f"  Preset '{name}'{suffix}: trailing bars {config.trailing_bars}")
        for strategy in StrategyType:
            rule = config.rule_for(strategy)
            print(f"    {strategy.value:<15} cap {rule.max_signals_per_side:<3}"
                  f" RSI {rule.rsi_oversold:g}/{rule.rsi_overbought:g}"
                  f"  volume > {rule.volume_threshold:g}  lookback {rule.lookback}")
            print(f"    {'':<15} buy:  {rule.buy_reason}")
            print(f"    {'':<15} sell: {rule.sell_reason}")
        print()


def main():
    """Print all configurable parameters with their defaults."""

    print("=" * 80)
    print("SYNTHETIC PREVIEW PARAMETER REFERENCE")
    print("=" * 80)
    print()

    print_generator_params()
    print_indicator_params()
    print_rule_params()

    print("=" * 80)
    print()
    print("USAGE EXAMPLES:")
    print("-" * 80)
    print()
    print("  # Line preview for a momentum strategy")
    print("  python -m cli.preview 'Golden Cross' --strategy-type momentum")
    print()
    print("  # Detailed candle chart as JSON")
    print("  python -m cli.preview 'Golden Cross' --shape candle --json")
    print()
    print("  # Custom rule thresholds from YAML")
    print("  python -m cli.preview 'My Swing' --strategy-type swing --config configs/tight_swing.yaml")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

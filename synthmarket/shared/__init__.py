"""
Shared types and defaults for the preview engine.

This module provides:
- SignalType, SeriesShape and StrategyType enums and the TradingSignal dataclass
- Centralized default values for generator, indicator and rule parameters
"""
from .types import SignalType, SeriesShape, StrategyType, TradingSignal
from .defaults import (
    RSI_PERIOD, RSI_NEUTRAL, RSI_ZERO_LOSS_RS,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    INDICATOR_WARMUP_PERIOD, MIN_SIGNALS,
    LINE_LENGTH, LINE_COMPACT_LENGTH, CANDLE_LENGTH,
    CANDLE_START_DATE,
)

__all__ = [
    'SignalType',
    'SeriesShape',
    'StrategyType',
    'TradingSignal',
    'RSI_PERIOD', 'RSI_NEUTRAL', 'RSI_ZERO_LOSS_RS',
    'EMA_SHORT_PERIOD', 'EMA_LONG_PERIOD',
    'INDICATOR_WARMUP_PERIOD', 'MIN_SIGNALS',
    'LINE_LENGTH', 'LINE_COMPACT_LENGTH', 'CANDLE_LENGTH',
    'CANDLE_START_DATE',
]

"""
Indicator calculation module.

Provides the technical indicators used by the strategy rules:
- EMA (seeded with the first price)
- RSI (Wilder's smoothing, neutral warm-up)
- Band envelope around the short EMA
"""
from .technical import TechnicalIndicators, IndicatorValues

__all__ = [
    'TechnicalIndicators',
    'IndicatorValues',
]

"""
Synthetic data module.

Provides the deterministic series generator used in place of market data.
"""
from .generator import (
    SeriesShapeParams,
    SHAPE_PRESETS,
    seed_from_name,
    noise,
    generate_series,
)

__all__ = [
    'SeriesShapeParams',
    'SHAPE_PRESETS',
    'seed_from_name',
    'noise',
    'generate_series',
]

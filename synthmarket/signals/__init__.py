"""
Signal generation module.

Rule-based signal detector for the five strategy types (momentum,
mean-reversion, breakout, scalping, swing). Indicators calculate values;
each strategy rule interprets them, and the detector applies caps, the
fallback round trip and ordering.
"""
from .detector import SignalDetector
from .config import (
    RuleConfig,
    SignalConfig,
    PREVIEW_CONFIG,
    DETAILED_CONFIG,
    PRESET_CONFIGS,
    get_preset,
    default_config_for,
)
from .config_loader import load_config_from_yaml, save_config_to_yaml
from .detector_filters import filter_signals_by_type, sort_signals, ensure_round_trip
from .rules import (
    SignalRule,
    MomentumRule,
    MeanReversionRule,
    BreakoutRule,
    ScalpingRule,
    SwingRule,
    get_strategy_rule,
)

__all__ = [
    'SignalDetector',
    'RuleConfig',
    'SignalConfig',
    'PREVIEW_CONFIG',
    'DETAILED_CONFIG',
    'PRESET_CONFIGS',
    'get_preset',
    'default_config_for',
    'load_config_from_yaml',
    'save_config_to_yaml',
    'filter_signals_by_type',
    'sort_signals',
    'ensure_round_trip',
    'SignalRule',
    'MomentumRule',
    'MeanReversionRule',
    'BreakoutRule',
    'ScalpingRule',
    'SwingRule',
    'get_strategy_rule',
]

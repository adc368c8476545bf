"""
Signal rule configuration.

Contains per-strategy rule settings, the signal profile that groups them, and
the two presets (preview line charts, detailed candle charts).
Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional, Union

from ..shared.types import SeriesShape, StrategyType
from ..shared.defaults import (
    RSI_PERIOD, EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    INDICATOR_WARMUP_PERIOD, PREVIEW_TRAILING_BARS, DETAILED_TRAILING_BARS,
    MIN_SIGNALS,
    BREAKOUT_VOLUME_THRESHOLD, SCALPING_VOLUME_THRESHOLD,
    SWING_RSI_OVERSOLD, SWING_RSI_OVERBOUGHT,
)


def _validate_rule(
    *,
    max_signals_per_side: int,
    rsi_oversold: float,
    rsi_overbought: float,
    volume_threshold: float,
    lookback: int,
) -> None:
    """Validate rule parameters. Raises ValueError with clear message on failure."""
    if max_signals_per_side < MIN_SIGNALS:
        raise ValueError(
            f"max_signals_per_side must be >= {MIN_SIGNALS}, got {max_signals_per_side}"
        )
    if not (0 <= rsi_oversold <= 100) or not (0 <= rsi_overbought <= 100):
        raise ValueError(
            f"RSI thresholds must be in [0, 100], got {rsi_oversold}/{rsi_overbought}"
        )
    if rsi_oversold >= rsi_overbought:
        raise ValueError(
            f"RSI oversold ({rsi_oversold}) must be less than overbought ({rsi_overbought})"
        )
    if volume_threshold < 0:
        raise ValueError(f"volume_threshold must be >= 0, got {volume_threshold}")
    if lookback < 1:
        raise ValueError(f"lookback must be >= 1, got {lookback}")


@dataclass
class RuleConfig:
    """Settings for one strategy rule set."""
    max_signals_per_side: int
    buy_reason: str
    sell_reason: str
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    volume_threshold: float = 0.0  # Volume must exceed this (rules that use volume)
    lookback: int = 10  # Trailing bars for support/resistance (breakout)

    def __post_init__(self) -> None:
        _validate_rule(
            max_signals_per_side=self.max_signals_per_side,
            rsi_oversold=self.rsi_oversold,
            rsi_overbought=self.rsi_overbought,
            volume_threshold=self.volume_threshold,
            lookback=self.lookback,
        )


@dataclass
class SignalConfig:
    """Signal profile: scan window, indicator periods and one RuleConfig per strategy type."""
    name: str
    rules: Dict[StrategyType, RuleConfig]
    description: str = ""
    warmup_bars: int = INDICATOR_WARMUP_PERIOD
    trailing_bars: int = PREVIEW_TRAILING_BARS

    # Indicator periods (from shared.defaults)
    rsi_period: int = RSI_PERIOD
    ema_short_period: int = EMA_SHORT_PERIOD
    ema_long_period: int = EMA_LONG_PERIOD

    def __post_init__(self) -> None:
        if self.warmup_bars < 1:
            raise ValueError(f"warmup_bars must be >= 1, got {self.warmup_bars}")
        if self.trailing_bars < 0:
            raise ValueError(f"trailing_bars must be >= 0, got {self.trailing_bars}")
        if self.ema_short_period >= self.ema_long_period:
            raise ValueError(
                f"EMA short_period ({self.ema_short_period}) must be less than "
                f"long_period ({self.ema_long_period})"
            )
        if StrategyType.SWING not in self.rules:
            raise ValueError(f"Signal config '{self.name}' must define swing rules (fallback)")

    def rule_for(self, strategy_type: Union[StrategyType, str, None]) -> RuleConfig:
        """Rule settings for a strategy type; unknown or missing types use swing."""
        return self.rules.get(StrategyType.parse(strategy_type), self.rules[StrategyType.SWING])

    def with_rule(self, strategy_type: Union[StrategyType, str], **overrides) -> "SignalConfig":
        """Copy of this config with one rule's fields replaced."""
        strategy = StrategyType.parse(strategy_type)
        rules = dict(self.rules)
        rules[strategy] = replace(self.rule_for(strategy), **overrides)
        return replace(self, rules=rules)


PREVIEW_CONFIG = SignalConfig(
    name="preview",
    description="Line-chart previews on strategy cards",
    trailing_bars=PREVIEW_TRAILING_BARS,
    rules={
        StrategyType.MOMENTUM: RuleConfig(
            max_signals_per_side=4,
            buy_reason="EMA 20 crosses above EMA 50",
            sell_reason="EMA 20 crosses below EMA 50",
        ),
        StrategyType.MEAN_REVERSION: RuleConfig(
            max_signals_per_side=6,
            buy_reason="Price below Bollinger Band + RSI oversold",
            sell_reason="Price above Bollinger Band + RSI overbought",
            rsi_oversold=35.0,
            rsi_overbought=65.0,
        ),
        StrategyType.BREAKOUT: RuleConfig(
            max_signals_per_side=6,
            buy_reason="Breakout above resistance + volume surge",
            sell_reason="Breakdown below support + volume surge",
            volume_threshold=BREAKOUT_VOLUME_THRESHOLD,
            lookback=10,
        ),
        StrategyType.SCALPING: RuleConfig(
            max_signals_per_side=8,
            buy_reason="RSI oversold + volume spike",
            sell_reason="RSI overbought + volume spike",
            rsi_oversold=30.0,
            rsi_overbought=70.0,
            volume_threshold=SCALPING_VOLUME_THRESHOLD,
        ),
        StrategyType.SWING: RuleConfig(
            max_signals_per_side=6,
            buy_reason="Pullback to EMA 50 + RSI reversal",
            sell_reason="RSI divergence at resistance",
            rsi_oversold=SWING_RSI_OVERSOLD,
            rsi_overbought=SWING_RSI_OVERBOUGHT,
        ),
    },
)

DETAILED_CONFIG = SignalConfig(
    name="detailed",
    description="Candlestick chart with calendar-dated bars",
    trailing_bars=DETAILED_TRAILING_BARS,
    rules={
        StrategyType.MOMENTUM: RuleConfig(
            max_signals_per_side=5,
            buy_reason="EMA 20/50 Golden Cross",
            sell_reason="EMA 20/50 Death Cross",
        ),
        StrategyType.MEAN_REVERSION: RuleConfig(
            max_signals_per_side=8,
            buy_reason="RSI oversold + price below lower band",
            sell_reason="RSI overbought + price above upper band",
            rsi_oversold=30.0,
            rsi_overbought=70.0,
        ),
        StrategyType.BREAKOUT: RuleConfig(
            max_signals_per_side=4,
            buy_reason="Breakout above 15-bar resistance",
            sell_reason="Breakdown below 15-bar support",
            volume_threshold=BREAKOUT_VOLUME_THRESHOLD,
            lookback=15,
        ),
        StrategyType.SCALPING: RuleConfig(
            max_signals_per_side=10,
            buy_reason="RSI extreme oversold + volume spike",
            sell_reason="RSI extreme overbought + volume spike",
            rsi_oversold=28.0,
            rsi_overbought=72.0,
            volume_threshold=SCALPING_VOLUME_THRESHOLD,
        ),
        StrategyType.SWING: RuleConfig(
            max_signals_per_side=4,
            buy_reason="Pullback to EMA 50 + RSI reversal",
            sell_reason="RSI divergence near resistance",
            rsi_oversold=SWING_RSI_OVERSOLD,
            rsi_overbought=SWING_RSI_OVERBOUGHT,
        ),
    },
)

PRESET_CONFIGS: Dict[str, SignalConfig] = {
    "preview": PREVIEW_CONFIG,
    "detailed": DETAILED_CONFIG,
}

SHAPE_DEFAULT_CONFIGS: Dict[SeriesShape, SignalConfig] = {
    SeriesShape.LINE: PREVIEW_CONFIG,
    SeriesShape.CANDLE: DETAILED_CONFIG,
}


def get_preset(name: str) -> SignalConfig:
    """Get a preset configuration by name."""
    if name not in PRESET_CONFIGS:
        available = ", ".join(PRESET_CONFIGS.keys())
        raise ValueError(f"Unknown preset: {name}. Available: {available}")
    return PRESET_CONFIGS[name]


def default_config_for(shape: Union[SeriesShape, str], config: Optional[SignalConfig] = None) -> SignalConfig:
    """Return config if given, else the preset that matches the series shape."""
    if config is not None:
        return config
    return SHAPE_DEFAULT_CONFIGS[SeriesShape.parse(shape)]

"""
Strategy rules for signal generation.

Each strategy type has one rule class. A rule looks at the current and previous
indicator rows and returns buy/sell reason strings; the detector turns reasons
into TradingSignals and enforces caps. New strategies can be added without
changing detector logic.
"""
from typing import Dict, List, Tuple, Protocol

import pandas as pd

from ..shared.types import StrategyType
from .config import RuleConfig


class SignalRule(Protocol):
    """Protocol for a rule that evaluates one row and returns buy/sell reason strings."""

    def prepare(self, data: pd.DataFrame, config: RuleConfig) -> pd.DataFrame:
        """Return a copy of data with any extra columns the rule needs."""
        ...

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        """
        Evaluate rule at this row.

        Args:
            row: Current indicator row
            prev_row: Previous row (for crossovers and RSI turns)
            config: RuleConfig for the strategy type

        Returns:
            (buy_reasons, sell_reasons); either list may be empty
        """
        ...


class _BaseRule:
    """Rules that need nothing beyond the indicator columns."""

    required_columns: Tuple[str, ...] = ()

    def prepare(self, data: pd.DataFrame, config: RuleConfig) -> pd.DataFrame:
        missing = [c for c in self.required_columns if c not in data.columns]
        if missing:
            raise KeyError(f"{type(self).__name__} requires columns: {', '.join(missing)}")
        return data


class MomentumRule(_BaseRule):
    """Short EMA crossing the long EMA."""

    required_columns = ("ema_short", "ema_long")

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        prev_short, prev_long = prev_row["ema_short"], prev_row["ema_long"]
        curr_short, curr_long = row["ema_short"], row["ema_long"]
        if prev_short <= prev_long and curr_short > curr_long:
            buy_reasons.append(config.buy_reason)
        if prev_short >= prev_long and curr_short < curr_long:
            sell_reasons.append(config.sell_reason)
        return buy_reasons, sell_reasons


class MeanReversionRule(_BaseRule):
    """Close outside the envelope with RSI at an extreme."""

    required_columns = ("Close", "rsi", "bb_upper", "bb_lower")

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        if row["Close"] < row["bb_lower"] and row["rsi"] < config.rsi_oversold:
            buy_reasons.append(config.buy_reason)
        if row["Close"] > row["bb_upper"] and row["rsi"] > config.rsi_overbought:
            sell_reasons.append(config.sell_reason)
        return buy_reasons, sell_reasons


class BreakoutRule(_BaseRule):
    """Close beyond the trailing high/low range on above-threshold volume."""

    required_columns = ("Close", "Volume")

    def prepare(self, data: pd.DataFrame, config: RuleConfig) -> pd.DataFrame:
        super().prepare(data, config)
        return add_support_resistance(data, config.lookback)

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        if pd.isna(row.get("resistance")) or row["Volume"] <= config.volume_threshold:
            return buy_reasons, sell_reasons
        if row["Close"] > row["resistance"]:
            buy_reasons.append(config.buy_reason)
        if row["Close"] < row["support"]:
            sell_reasons.append(config.sell_reason)
        return buy_reasons, sell_reasons


class ScalpingRule(_BaseRule):
    """RSI at an extreme on a volume spike."""

    required_columns = ("rsi", "Volume")

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        if row["Volume"] <= config.volume_threshold:
            return buy_reasons, sell_reasons
        if row["rsi"] < config.rsi_oversold:
            buy_reasons.append(config.buy_reason)
        if row["rsi"] > config.rsi_overbought:
            sell_reasons.append(config.sell_reason)
        return buy_reasons, sell_reasons


class SwingRule(_BaseRule):
    """Pullback below the long EMA with RSI turning up; stretch above the short EMA with RSI rolling over."""

    required_columns = ("Close", "rsi", "ema_short", "ema_long")

    def evaluate(
        self,
        row: pd.Series,
        prev_row: pd.Series,
        config: RuleConfig,
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        rsi, prev_rsi = row["rsi"], prev_row["rsi"]
        if row["Close"] < row["ema_long"] and rsi < config.rsi_oversold and rsi >= prev_rsi:
            buy_reasons.append(config.buy_reason)
        if row["Close"] > row["ema_short"] and rsi > config.rsi_overbought and rsi <= prev_rsi:
            sell_reasons.append(config.sell_reason)
        return buy_reasons, sell_reasons


def add_support_resistance(data: pd.DataFrame, lookback: int) -> pd.DataFrame:
    """
    Add trailing resistance/support columns.

    resistance[i] = max High over bars [i - lookback, i - 1], support[i] = min Low
    over the same bars; the window is truncated at the start and the first bar has
    neither. Series without High/Low (line shape) use Close for both.
    """
    df = data.copy()
    highs = df["High"] if "High" in df.columns else df["Close"]
    lows = df["Low"] if "Low" in df.columns else df["Close"]
    df["resistance"] = highs.shift(1).rolling(lookback, min_periods=1).max()
    df["support"] = lows.shift(1).rolling(lookback, min_periods=1).min()
    return df


STRATEGY_RULES: Dict[StrategyType, type] = {
    StrategyType.MOMENTUM: MomentumRule,
    StrategyType.MEAN_REVERSION: MeanReversionRule,
    StrategyType.BREAKOUT: BreakoutRule,
    StrategyType.SCALPING: ScalpingRule,
    StrategyType.SWING: SwingRule,
}


def get_strategy_rule(strategy_type) -> SignalRule:
    """Return the rule for a strategy type (enum or tag); unknown tags get SwingRule."""
    return STRATEGY_RULES[StrategyType.parse(strategy_type)]()

"""
Rule-based signal detector.

Runs the strategy rule for one strategy type over a generated series:
- Indicators are calculated from the bars (or reused when already present)
- The rule is evaluated bar by bar inside the scan window
- Per-side caps, the fallback round trip and ordering are applied afterwards
"""
import logging
from typing import List, Optional, Tuple, Union

import pandas as pd

from ..shared.types import SignalType, StrategyType, TradingSignal
from ..indicators.technical import TechnicalIndicators
from .config import SignalConfig, PREVIEW_CONFIG
from .detector_filters import ensure_round_trip, filter_signals_by_type, sort_signals
from .rules import get_strategy_rule

logger = logging.getLogger(__name__)

INDICATOR_COLUMNS = ("ema_short", "ema_long", "rsi")


class SignalDetector:
    """
    Signal detector for the five strategy types.

    One detector holds one SignalConfig; the strategy type is chosen per call.
    """

    def __init__(self, config: Optional[SignalConfig] = None):
        """
        Initialize the signal detector.

        Args:
            config: SignalConfig with scan window, indicator periods and rules
                (default: the preview preset)
        """
        self.config = config or PREVIEW_CONFIG
        self.technical_indicators = TechnicalIndicators(
            rsi_period=self.config.rsi_period,
            ema_short_period=self.config.ema_short_period,
            ema_long_period=self.config.ema_long_period,
        )

    def detect_signals(
        self,
        data: Union[pd.DataFrame, pd.Series],
        strategy_type: Union[StrategyType, str, None] = StrategyType.MOMENTUM,
        signal_types: str = "all",
    ) -> List[TradingSignal]:
        """
        Detect trading signals for a strategy type.

        Args:
            data: Generated series (indicator columns are added when missing)
            strategy_type: Strategy enum or tag; unknown tags use swing rules
            signal_types: "buy", "sell", or "all"

        Returns:
            Signals ordered by bar position
        """
        signals, _ = self.detect_signals_with_indicators(data, strategy_type, signal_types)
        return signals

    def detect_signals_with_indicators(
        self,
        data: Union[pd.DataFrame, pd.Series],
        strategy_type: Union[StrategyType, str, None] = StrategyType.MOMENTUM,
        signal_types: str = "all",
    ) -> Tuple[List[TradingSignal], pd.DataFrame]:
        """
        Detect trading signals and return them with the indicator dataframe.

        Returns:
            Tuple of (signals list, indicator dataframe)
        """
        indicator_df = self._with_indicators(data)
        strategy = StrategyType.parse(strategy_type)

        signals = self._get_rule_signals(indicator_df, strategy)
        logger.debug(
            f"{strategy.value} rules produced {len(signals)} signal(s) on "
            f"{len(indicator_df)} bars ({self.config.name} config)"
        )

        signals = ensure_round_trip(signals, indicator_df)
        signals = sort_signals(signals)
        signals = filter_signals_by_type(signals, signal_types)
        return signals, indicator_df

    def scan_range(self, length: int) -> range:
        """Bar positions the rules are evaluated on."""
        return range(self.config.warmup_bars, length - self.config.trailing_bars)

    def _with_indicators(self, data: Union[pd.DataFrame, pd.Series]) -> pd.DataFrame:
        if isinstance(data, pd.DataFrame) and all(c in data.columns for c in INDICATOR_COLUMNS):
            return data
        return self.technical_indicators.calculate_all(data)

    def _get_rule_signals(
        self,
        indicator_df: pd.DataFrame,
        strategy: StrategyType,
    ) -> List[TradingSignal]:
        """Evaluate the strategy rule in the scan window, capping each side."""
        rule_config = self.config.rule_for(strategy)
        rule = get_strategy_rule(strategy)
        df = rule.prepare(indicator_df, rule_config)
        cap = rule_config.max_signals_per_side

        signals: List[TradingSignal] = []
        buy_count = 0
        sell_count = 0
        for position in self.scan_range(len(df)):
            row = df.iloc[position]
            prev_row = df.iloc[position - 1]
            buy_reasons, sell_reasons = rule.evaluate(row, prev_row, rule_config)

            if buy_reasons and buy_count < cap:
                signals.append(self._make_signal(SignalType.BUY, position, row, buy_reasons))
                buy_count += 1
            if sell_reasons and sell_count < cap:
                signals.append(self._make_signal(SignalType.SELL, position, row, sell_reasons))
                sell_count += 1
        return signals

    @staticmethod
    def _make_signal(
        signal_type: SignalType,
        position: int,
        row: pd.Series,
        reasons: List[str],
    ) -> TradingSignal:
        return TradingSignal(
            signal_type=signal_type,
            position=position,
            time=str(row["time"]) if "time" in row.index else str(position + 1),
            price=float(row["Close"]),
            reasoning=" | ".join(reasons),
            source="rule",
            rsi_value=float(row["rsi"]),
            ema_short=float(row["ema_short"]),
            ema_long=float(row["ema_long"]),
        )

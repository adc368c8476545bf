"""
Signal post-processing for the detector pipeline.

Pure functions: filter by type, add the fallback round trip when the rules
produced too little to show, and order signals for display and pairing.
Used by SignalDetector after rule evaluation.
"""
import logging
from typing import List

import pandas as pd

from ..shared.types import SignalType, TradingSignal
from ..shared.defaults import MIN_SIGNALS, FALLBACK_BUY_REASON, FALLBACK_SELL_REASON

logger = logging.getLogger(__name__)


def filter_signals_by_type(
    signals: List[TradingSignal],
    signal_types: str,
) -> List[TradingSignal]:
    """
    Keep only signals of the requested type.

    Args:
        signals: List of trading signals
        signal_types: "buy", "sell", or "all"

    Returns:
        Filtered list (same list if signal_types == "all")
    """
    if signal_types == "buy":
        return [s for s in signals if s.signal_type == SignalType.BUY]
    if signal_types == "sell":
        return [s for s in signals if s.signal_type == SignalType.SELL]
    return signals


def sort_signals(signals: List[TradingSignal]) -> List[TradingSignal]:
    """Stable sort by bar position; a buy stays ahead of a sell on the same bar."""
    return sorted(signals, key=lambda s: (s.position, 0 if s.is_buy else 1))


def _optional_float(row: pd.Series, column: str):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return float(value)


def _fallback_signal(data: pd.DataFrame, signal_type: SignalType, position: int) -> TradingSignal:
    row = data.iloc[position]
    return TradingSignal(
        signal_type=signal_type,
        position=position,
        time=str(row["time"]) if "time" in data.columns else str(position + 1),
        price=float(row["Close"]),
        reasoning=FALLBACK_BUY_REASON if signal_type == SignalType.BUY else FALLBACK_SELL_REASON,
        source="fallback",
        rsi_value=_optional_float(row, "rsi"),
        ema_short=_optional_float(row, "ema_short"),
        ema_long=_optional_float(row, "ema_long"),
    )


def ensure_round_trip(
    signals: List[TradingSignal],
    data: pd.DataFrame,
    min_signals: int = MIN_SIGNALS,
) -> List[TradingSignal]:
    """
    Guarantee at least one buy and one sell.

    With fewer than min_signals signals, a buy at len // 3 and a sell at
    2 * (len // 3) are appended. Otherwise only a missing side gets its synthetic
    signal. Fallback signals carry source="fallback" and the generic reasons.

    Args:
        signals: Rule signals (not modified)
        data: Series the signals were detected on (indicator columns optional)
        min_signals: Threshold below which the full round trip is added

    Returns:
        New list; unsorted
    """
    if len(data) == 0:
        return list(signals)

    buy_position = len(data) // 3
    sell_position = 2 * (len(data) // 3)
    has_buy = any(s.signal_type == SignalType.BUY for s in signals)
    has_sell = any(s.signal_type == SignalType.SELL for s in signals)

    out = list(signals)
    if len(signals) < min_signals:
        out.append(_fallback_signal(data, SignalType.BUY, buy_position))
        out.append(_fallback_signal(data, SignalType.SELL, sell_position))
        logger.debug(
            f"Only {len(signals)} rule signal(s), added fallback round trip "
            f"at bars {buy_position}/{sell_position}"
        )
        return out

    if not has_buy:
        out.append(_fallback_signal(data, SignalType.BUY, buy_position))
        logger.debug(f"No buy signals, added fallback buy at bar {buy_position}")
    if not has_sell:
        out.append(_fallback_signal(data, SignalType.SELL, sell_position))
        logger.debug(f"No sell signals, added fallback sell at bar {sell_position}")
    return out

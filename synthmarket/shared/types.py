"""
Shared types for the preview engine.

This module consolidates the enums and the TradingSignal dataclass that are
used across the generator, the detector and the trade evaluator.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union, Dict, Any

logger = logging.getLogger(__name__)


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"


class SeriesShape(Enum):
    """Output shape of a generated series."""
    LINE = "line"  # index labels, single close price
    CANDLE = "candle"  # business-day dates, open/high/low/close

    @classmethod
    def parse(cls, value: Union["SeriesShape", str]) -> "SeriesShape":
        """Return the shape for an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown series shape: {value!r}. Valid: {valid}") from None


class StrategyType(Enum):
    """Closed set of strategy rule sets. SWING is the fallback."""
    MOMENTUM = "momentum"
    MEAN_REVERSION = "mean-reversion"
    BREAKOUT = "breakout"
    SCALPING = "scalping"
    SWING = "swing"

    @classmethod
    def parse(cls, value: Union["StrategyType", str, None]) -> "StrategyType":
        """
        Return the strategy type for a tag.

        Matching is case-insensitive and accepts "_" for "-". Unrecognized
        tags (and None) map to SWING.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.SWING
        tag = str(value).strip().lower().replace("_", "-")
        for member in cls:
            if member.value == tag:
                return member
        logger.debug(f"Unrecognized strategy type {value!r}, using swing rules")
        return cls.SWING


@dataclass
class TradingSignal:
    """
    Represents a buy/sell annotation on one bar of a generated series.

    position is the integer bar position used for ordering and pairing;
    time is the display label (bar number or ISO date).
    """
    signal_type: SignalType
    position: int
    time: str
    price: float
    reasoning: str = ""
    source: str = "rule"  # "rule" or "fallback"

    # Indicator values at signal time (for display)
    rsi_value: Optional[float] = None
    ema_short: Optional[float] = None
    ema_long: Optional[float] = None

    @property
    def is_buy(self) -> bool:
        return self.signal_type == SignalType.BUY

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-serialisable representation."""
        return {
            "type": self.signal_type.value,
            "position": self.position,
            "time": self.time,
            "price": self.price,
            "reason": self.reasoning,
            "source": self.source,
            "rsi": self.rsi_value,
            "ema_short": self.ema_short,
            "ema_long": self.ema_long,
        }

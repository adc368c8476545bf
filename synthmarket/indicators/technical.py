"""
Technical indicators for synthetic series.

Provides EMA, Wilder RSI and the band envelope used by the strategy rules.
Every function is a single pass over the input and returns one value per bar
(no leading NaNs), so rules can be evaluated from the first bar onwards.
"""
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import pandas as pd

from ..shared.defaults import (
    RSI_PERIOD, RSI_NEUTRAL, RSI_ZERO_LOSS_RS,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
)


@dataclass
class IndicatorValues:
    """Container for indicator values at a specific bar."""
    position: int
    price: float
    rsi: Optional[float] = None
    ema_short: Optional[float] = None
    ema_long: Optional[float] = None
    bb_upper: Optional[float] = None
    bb_lower: Optional[float] = None


def _validate_periods(rsi_period: int, ema_short_period: int, ema_long_period: int) -> None:
    """Raise ValueError with a clear message on invalid periods."""
    for name, value in (
        ("rsi_period", rsi_period),
        ("ema_short_period", ema_short_period),
        ("ema_long_period", ema_long_period),
    ):
        if value < 1:
            raise ValueError(f"{name} must be >= 1, got {value}")
    if ema_short_period >= ema_long_period:
        raise ValueError(
            f"EMA short_period ({ema_short_period}) must be less than long_period ({ema_long_period})"
        )


class TechnicalIndicators:
    """Calculates technical indicators from price data."""

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,  # From shared.defaults
        ema_short_period: int = EMA_SHORT_PERIOD,  # From shared.defaults
        ema_long_period: int = EMA_LONG_PERIOD,  # From shared.defaults
    ):
        """
        Initialize indicator calculator.

        Args:
            rsi_period: Period for RSI calculation (default: shared.defaults.RSI_PERIOD)
            ema_short_period: Short EMA period (default: shared.defaults.EMA_SHORT_PERIOD)
            ema_long_period: Long EMA period (default: shared.defaults.EMA_LONG_PERIOD)
        """
        _validate_periods(rsi_period, ema_short_period, ema_long_period)
        self.rsi_period = rsi_period
        self.ema_short_period = ema_short_period
        self.ema_long_period = ema_long_period

    def calculate_ema(self, prices: pd.Series, period: int) -> pd.Series:
        """
        Calculate Exponential Moving Average.

        The first value is the first price; afterwards
        ema[i] = price[i] * k + ema[i-1] * (1 - k) with k = 2 / (period + 1).
        """
        return prices.ewm(span=period, adjust=False).mean()

    def calculate_rsi(self, prices: pd.Series) -> pd.Series:
        """
        Calculate Relative Strength Index (RSI) with Wilder's smoothing.

        RSI = 100 - (100 / (1 + RS))
        RS = Average Gain / Average Loss

        Average gain/loss start as straight averages over the first `period`
        changes and are then smoothed with (avg * (period - 1) + current) / period.
        Bars before `period` read RSI_NEUTRAL. A zero average loss uses
        RS = RSI_ZERO_LOSS_RS, so the output is always finite and in [0, 100].
        """
        period = self.rsi_period
        values = prices.to_numpy(dtype=np.float64)
        rsi = np.full(len(values), RSI_NEUTRAL)

        avg_gain = 0.0
        avg_loss = 0.0
        for i in range(1, len(values)):
            diff = values[i] - values[i - 1]
            gain = diff if diff > 0 else 0.0
            loss = -diff if diff < 0 else 0.0
            if i <= period:
                avg_gain += gain / period
                avg_loss += loss / period
            else:
                avg_gain = (avg_gain * (period - 1) + gain) / period
                avg_loss = (avg_loss * (period - 1) + loss) / period
            if i >= period:
                rs = RSI_ZERO_LOSS_RS if avg_loss == 0 else avg_gain / avg_loss
                rsi[i] = 100.0 - 100.0 / (1.0 + rs)

        return pd.Series(rsi, index=prices.index, name="rsi")

    def calculate_envelope(self, ema: pd.Series, spread: pd.Series) -> pd.DataFrame:
        """
        Calculate the band envelope around an EMA.

        Known simplification: spread is the generator's pseudo-random band
        width (4-7 price units), not a rolling standard deviation.

        Returns:
            DataFrame with bb_upper and bb_lower columns
        """
        return pd.DataFrame(
            {"bb_upper": ema + spread, "bb_lower": ema - spread},
            index=ema.index,
        )

    def calculate_all(self, data: Union[pd.Series, pd.DataFrame]) -> pd.DataFrame:
        """
        Calculate all indicators and return them alongside the bars.

        Args:
            data: Close price Series, or a generated series DataFrame
                (Close and band_spread columns required for the envelope)

        Returns:
            Copy of the bars with ema_short, ema_long, rsi, bb_upper, bb_lower
            columns added. The input is not modified.
        """
        if isinstance(data, pd.Series):
            df = pd.DataFrame({"Close": data})
        else:
            if "Close" not in data.columns:
                raise KeyError("series is missing the 'Close' column")
            df = data.copy()
        prices = df["Close"]

        df["ema_short"] = self.calculate_ema(prices, self.ema_short_period)
        df["ema_long"] = self.calculate_ema(prices, self.ema_long_period)
        df["rsi"] = self.calculate_rsi(prices)

        if "band_spread" in df.columns:
            envelope = self.calculate_envelope(df["ema_short"], df["band_spread"])
            df["bb_upper"] = envelope["bb_upper"]
            df["bb_lower"] = envelope["bb_lower"]
        return df

    def get_indicators_at(self, data: pd.DataFrame, position: int) -> Optional[IndicatorValues]:
        """
        Get indicator values at a bar position.

        Args:
            data: Generated series (indicators are calculated if missing)
            position: Bar position (0-based)

        Returns:
            IndicatorValues at the position, or None if out of range
        """
        if position < 0 or position >= len(data):
            return None
        df = data if "rsi" in data.columns else self.calculate_all(data)
        row = df.iloc[position]
        return IndicatorValues(
            position=position,
            price=float(row["Close"]),
            rsi=float(row["rsi"]),
            ema_short=float(row["ema_short"]),
            ema_long=float(row["ema_long"]),
            bb_upper=float(row["bb_upper"]) if "bb_upper" in df.columns else None,
            bb_lower=float(row["bb_lower"]) if "bb_lower" in df.columns else None,
        )

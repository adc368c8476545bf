"""
Deterministic synthetic price series.

Series are driven by a trigonometric hash of (seed, step) instead of a random
number generator, so the same (length, seed, shape) always produces identical
bars. Two shapes are produced from the same driver:

- line: bar labels "1".."n" with a single close price
- candle: consecutive business days with open/high/low/close

Each bar also carries a volume and a pseudo-random band spread that the
indicator engine turns into an envelope around the short EMA.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Union

import numpy as np
import pandas as pd

from ..shared.types import SeriesShape
from ..shared.defaults import (
    NOISE_SEED_FACTOR, NOISE_STEP_FACTOR,
    WICK_HIGH_OFFSET, WICK_LOW_OFFSET, VOLUME_OFFSET, SPREAD_OFFSET,
    BAND_SPREAD_BASE, BAND_SPREAD_RANGE,
    LINE_START_BASE, LINE_START_MODULUS, LINE_PRICE_FLOOR, LINE_DRIFT_BIAS,
    LINE_NOISE_SCALE, LINE_WAVE_PERIOD, LINE_WAVE_AMPLITUDE,
    LINE_VOLUME_BASE, LINE_VOLUME_RANGE, LINE_SPIKE_THRESHOLD, LINE_SPIKE_BONUS,
    CANDLE_START_BASE, CANDLE_START_MODULUS, CANDLE_PRICE_FLOOR, CANDLE_DRIFT_BIAS,
    CANDLE_NOISE_SCALE, CANDLE_WAVE_PERIOD, CANDLE_WAVE_AMPLITUDE, CANDLE_WICK_SCALE,
    CANDLE_VOLUME_BASE, CANDLE_VOLUME_RANGE, CANDLE_START_DATE,
)

logger = logging.getLogger(__name__)

LINE_COLUMNS = ["time", "Close", "Volume", "band_spread"]
CANDLE_COLUMNS = ["time", "Open", "High", "Low", "Close", "Volume", "band_spread"]


@dataclass(frozen=True)
class SeriesShapeParams:
    """Generator constants for one output shape."""
    start_base: float
    start_modulus: int
    price_floor: float
    drift_bias: float
    noise_scale: float
    wave_period: float
    wave_amplitude: float
    volume_base: float
    volume_range: float
    spike_threshold: float = 0.0
    spike_bonus: float = 0.0
    wick_scale: float = 0.0

    def start_price(self, seed: int) -> float:
        return self.start_base + seed % self.start_modulus


SHAPE_PRESETS: Dict[SeriesShape, SeriesShapeParams] = {
    SeriesShape.LINE: SeriesShapeParams(
        start_base=LINE_START_BASE,
        start_modulus=LINE_START_MODULUS,
        price_floor=LINE_PRICE_FLOOR,
        drift_bias=LINE_DRIFT_BIAS,
        noise_scale=LINE_NOISE_SCALE,
        wave_period=LINE_WAVE_PERIOD,
        wave_amplitude=LINE_WAVE_AMPLITUDE,
        volume_base=LINE_VOLUME_BASE,
        volume_range=LINE_VOLUME_RANGE,
        spike_threshold=LINE_SPIKE_THRESHOLD,
        spike_bonus=LINE_SPIKE_BONUS,
    ),
    SeriesShape.CANDLE: SeriesShapeParams(
        start_base=CANDLE_START_BASE,
        start_modulus=CANDLE_START_MODULUS,
        price_floor=CANDLE_PRICE_FLOOR,
        drift_bias=CANDLE_DRIFT_BIAS,
        noise_scale=CANDLE_NOISE_SCALE,
        wave_period=CANDLE_WAVE_PERIOD,
        wave_amplitude=CANDLE_WAVE_AMPLITUDE,
        volume_base=CANDLE_VOLUME_BASE,
        volume_range=CANDLE_VOLUME_RANGE,
        wick_scale=CANDLE_WICK_SCALE,
    ),
}


def seed_from_name(name: str) -> int:
    """Seed for a strategy display name: the sum of its character codes."""
    return sum(ord(c) for c in name)


def noise(seed: int, steps: np.ndarray, offset: int = 0) -> np.ndarray:
    """
    Pseudo-random values in [0, 1] for each step.

    Args:
        seed: Series seed (any integer, negative allowed)
        steps: Driver step for each bar (bar index or calendar-day offset)
        offset: Stream offset; different offsets give independent-looking streams

    Returns:
        Array of the same length as steps
    """
    steps = np.asarray(steps, dtype=np.float64)
    return np.sin(seed * NOISE_SEED_FACTOR + (steps + offset) * NOISE_STEP_FACTOR) * 0.5 + 0.5


def _validate_inputs(length: int, seed: int) -> None:
    """Raise on a malformed seed or a non-positive length."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise TypeError(f"seed must be an integer, got {type(seed).__name__}")
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        raise TypeError(f"length must be an integer, got {type(length).__name__}")
    if length < 1:
        raise ValueError(f"length must be >= 1, got {length}")


def _driver_steps(length: int, shape: SeriesShape, start_date: str):
    """Return (steps, labels) for the requested shape."""
    if shape == SeriesShape.LINE:
        steps = np.arange(length)
        labels = [str(i + 1) for i in range(length)]
        return steps, labels

    # Weekends are skipped but still advance the driver, like calendar days
    start = pd.Timestamp(start_date)
    dates = pd.bdate_range(start=start, periods=length)
    steps = (dates - start).days.to_numpy()
    labels = [d.strftime("%Y-%m-%d") for d in dates]
    return steps, labels


def generate_series(
    length: int,
    seed: int,
    shape: Union[SeriesShape, str] = SeriesShape.LINE,
    start_date: str = CANDLE_START_DATE,
    params: SeriesShapeParams = None,
) -> pd.DataFrame:
    """
    Generate a deterministic synthetic price series.

    Args:
        length: Number of bars (>= 1)
        seed: Integer seed, usually from seed_from_name()
        shape: SeriesShape.LINE or SeriesShape.CANDLE (or "line"/"candle")
        start_date: First calendar day for candle series
        params: Override the generator constants for the shape

    Returns:
        DataFrame with one row per bar. Line columns: time, Close, Volume,
        band_spread. Candle columns: time, Open, High, Low, Close, Volume,
        band_spread. Prices are rounded to 2 decimals, volume to integers.

    Raises:
        TypeError: If seed or length is not an integer
        ValueError: If length < 1 or shape is unknown
    """
    _validate_inputs(length, seed)
    shape = SeriesShape.parse(shape)
    params = params or SHAPE_PRESETS[shape]
    seed = int(seed)
    length = int(length)

    steps, labels = _driver_steps(length, shape, start_date)
    changes = (
        (noise(seed, steps) - params.drift_bias) * params.noise_scale
        + np.sin(steps / params.wave_period) * params.wave_amplitude
    )

    opens = np.empty(length)
    closes = np.empty(length)
    price = params.start_price(seed)
    for i, change in enumerate(changes):
        opens[i] = price
        price = max(params.price_floor, price + change)
        closes[i] = price

    volume = params.volume_base + noise(seed, steps, VOLUME_OFFSET) * params.volume_range
    if params.spike_bonus:
        volume = volume + np.where(np.abs(changes) > params.spike_threshold, params.spike_bonus, 0.0)
    spread = BAND_SPREAD_BASE + noise(seed, steps, SPREAD_OFFSET) * BAND_SPREAD_RANGE

    df = pd.DataFrame({"time": labels})
    if shape == SeriesShape.CANDLE:
        highs = np.maximum(opens, closes) + noise(seed, steps, WICK_HIGH_OFFSET) * params.wick_scale
        lows = np.minimum(opens, closes) - noise(seed, steps, WICK_LOW_OFFSET) * params.wick_scale
        lows = np.maximum(lows, params.price_floor)
        df["Open"] = np.round(opens, 2)
        df["High"] = np.round(highs, 2)
        df["Low"] = np.round(lows, 2)
    df["Close"] = np.round(closes, 2)
    df["Volume"] = np.round(volume).astype(np.int64)
    df["band_spread"] = np.round(spread, 2)

    logger.debug(f"Generated {length} {shape.value} bars for seed {seed}")
    return df

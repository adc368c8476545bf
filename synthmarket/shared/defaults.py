"""
Centralized default values for generator, indicator and rule parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.

Two rule profiles exist:
- preview: coarse line charts (strategy cards, compact previews)
- detailed: calendar-dated candle charts (chart modal)
"""

# Pseudo-random driver: noise(i) = sin(seed * NOISE_SEED_FACTOR + i * NOISE_STEP_FACTOR) * 0.5 + 0.5
NOISE_SEED_FACTOR = 13.37
NOISE_STEP_FACTOR = 7.91

# Driver stream offsets (one independent stream per derived quantity)
WICK_HIGH_OFFSET = 50
WICK_LOW_OFFSET = 100
VOLUME_OFFSET = 200
SPREAD_OFFSET = 300

# Band envelope spread: BAND_SPREAD_BASE + noise * BAND_SPREAD_RANGE (4-7 price units)
BAND_SPREAD_BASE = 4.0
BAND_SPREAD_RANGE = 3.0

# Line series (preview charts)
LINE_START_BASE = 100.0
LINE_START_MODULUS = 50  # start price = 100 + seed % 50
LINE_PRICE_FLOOR = 50.0
LINE_DRIFT_BIAS = 0.48
LINE_NOISE_SCALE = 3.0
LINE_WAVE_PERIOD = 6.0  # bars per radian of the slow sinusoidal drift
LINE_WAVE_AMPLITUDE = 1.5
LINE_VOLUME_BASE = 500.0
LINE_VOLUME_RANGE = 1500.0
LINE_SPIKE_THRESHOLD = 2.0  # |change| above this adds the spike bonus
LINE_SPIKE_BONUS = 1000.0

# Candle series (detailed charts)
CANDLE_START_BASE = 100.0
CANDLE_START_MODULUS = 80  # start price = 100 + seed % 80
CANDLE_PRICE_FLOOR = 40.0
CANDLE_DRIFT_BIAS = 0.47
CANDLE_NOISE_SCALE = 4.0
CANDLE_WAVE_PERIOD = 12.0
CANDLE_WAVE_AMPLITUDE = 2.0
CANDLE_WICK_SCALE = 2.0
CANDLE_VOLUME_BASE = 500.0
CANDLE_VOLUME_RANGE = 2000.0
CANDLE_START_DATE = "2025-06-01"

# Default series lengths
LINE_LENGTH = 60
LINE_COMPACT_LENGTH = 40
CANDLE_LENGTH = 180

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_NEUTRAL = 50.0  # Output before RSI_PERIOD bars have elapsed
RSI_ZERO_LOSS_RS = 100.0  # RS used when the average loss is exactly zero

# EMA (Exponential Moving Average) defaults
EMA_SHORT_PERIOD = 20
EMA_LONG_PERIOD = 50

# Signal scan window
INDICATOR_WARMUP_PERIOD = 20  # First bar position evaluated by the rules
PREVIEW_TRAILING_BARS = 3  # Bars left unevaluated at the end of preview series
DETAILED_TRAILING_BARS = 2

# Fallback: fewer than MIN_SIGNALS rule signals adds a synthetic round trip
MIN_SIGNALS = 2
FALLBACK_BUY_REASON = "Entry signal triggered"
FALLBACK_SELL_REASON = "Exit signal triggered"

# Rule thresholds shared by both profiles
BREAKOUT_VOLUME_THRESHOLD = 1500.0
SCALPING_VOLUME_THRESHOLD = 1200.0
SWING_RSI_OVERSOLD = 40.0
SWING_RSI_OVERBOUGHT = 65.0

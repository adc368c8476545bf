"""
Tests for technical indicators (EMA, RSI, envelope).
"""
import pytest
import pandas as pd
import numpy as np

from synthmarket.indicators.technical import TechnicalIndicators, IndicatorValues
from synthmarket.data.generator import generate_series

ZERO_LOSS_RSI = 100.0 - 100.0 / 101.0


@pytest.fixture
def line_series():
    return generate_series(60, 42)


@pytest.fixture
def candle_series():
    return generate_series(180, 42, shape="candle")


class TestEMA:
    """Test EMA calculation."""

    def test_first_value_is_first_price(self):
        indicators = TechnicalIndicators()
        prices = pd.Series([10.0, 11.0, 12.0])
        ema = indicators.calculate_ema(prices, 20)
        assert ema.iloc[0] == 10.0

    def test_recursive_formula(self):
        indicators = TechnicalIndicators()
        prices = pd.Series([1.0, 2.0, 3.0])
        ema = indicators.calculate_ema(prices, 2)
        k = 2 / 3
        expected_1 = 2.0 * k + 1.0 * (1 - k)
        expected_2 = 3.0 * k + expected_1 * (1 - k)
        assert ema.iloc[1] == pytest.approx(expected_1)
        assert ema.iloc[2] == pytest.approx(expected_2)

    def test_no_nans(self, line_series):
        indicators = TechnicalIndicators()
        ema = indicators.calculate_ema(line_series["Close"], 50)
        assert not ema.isna().any()

    def test_constant_prices(self):
        indicators = TechnicalIndicators()
        ema = indicators.calculate_ema(pd.Series([5.0] * 30), 20)
        assert np.allclose(ema, 5.0)


class TestRSI:
    """Test RSI calculation."""

    @pytest.mark.parametrize("seed", [0, 42, 999, -3])
    def test_rsi_range(self, seed):
        indicators = TechnicalIndicators()
        df = generate_series(300, seed, shape="candle")
        rsi = indicators.calculate_rsi(df["Close"])
        assert rsi.between(0, 100).all()
        assert np.isfinite(rsi).all()

    def test_neutral_before_period(self, line_series):
        indicators = TechnicalIndicators(rsi_period=14)
        rsi = indicators.calculate_rsi(line_series["Close"])
        assert (rsi.iloc[:14] == 50.0).all()

    def test_only_gains_uses_zero_loss_rs(self):
        indicators = TechnicalIndicators(rsi_period=14)
        rsi = indicators.calculate_rsi(pd.Series(np.arange(30, dtype=float)))
        assert rsi.iloc[14:].tolist() == pytest.approx([ZERO_LOSS_RSI] * 16)

    def test_only_losses_is_zero(self):
        indicators = TechnicalIndicators(rsi_period=14)
        rsi = indicators.calculate_rsi(pd.Series(np.arange(30, 0, -1, dtype=float)))
        assert (rsi.iloc[14:] == 0.0).all()

    def test_constant_prices_stay_finite(self):
        indicators = TechnicalIndicators()
        rsi = indicators.calculate_rsi(pd.Series([100.0] * 40))
        assert np.isfinite(rsi).all()

    def test_shorter_than_period(self):
        indicators = TechnicalIndicators(rsi_period=14)
        rsi = indicators.calculate_rsi(pd.Series([1.0, 2.0, 3.0]))
        assert rsi.tolist() == [50.0, 50.0, 50.0]

    def test_wilder_smoothing_step(self):
        indicators = TechnicalIndicators(rsi_period=2)
        # changes: +2, -1, +3
        rsi = indicators.calculate_rsi(pd.Series([10.0, 12.0, 11.0, 14.0]))
        avg_gain, avg_loss = 1.0, 0.5  # straight averages over the first 2 changes
        assert rsi.iloc[2] == pytest.approx(100 - 100 / (1 + avg_gain / avg_loss))
        avg_gain, avg_loss = (avg_gain + 3.0) / 2, (avg_loss + 0.0) / 2
        assert rsi.iloc[3] == pytest.approx(100 - 100 / (1 + avg_gain / avg_loss))


class TestCalculateAll:
    def test_adds_indicator_columns(self, line_series):
        df = TechnicalIndicators().calculate_all(line_series)
        for col in ("ema_short", "ema_long", "rsi", "bb_upper", "bb_lower"):
            assert col in df.columns
        assert len(df) == len(line_series)

    def test_does_not_modify_input(self, line_series):
        before = line_series.copy()
        TechnicalIndicators().calculate_all(line_series)
        pd.testing.assert_frame_equal(line_series, before)

    def test_envelope_width_is_band_spread(self, candle_series):
        df = TechnicalIndicators().calculate_all(candle_series)
        assert np.allclose(df["bb_upper"] - df["ema_short"], df["band_spread"])
        assert np.allclose(df["ema_short"] - df["bb_lower"], df["band_spread"])

    def test_price_series_has_no_envelope(self, line_series):
        df = TechnicalIndicators().calculate_all(line_series["Close"])
        assert "rsi" in df.columns
        assert "bb_upper" not in df.columns

    def test_missing_close_raises(self):
        with pytest.raises(KeyError, match="Close"):
            TechnicalIndicators().calculate_all(pd.DataFrame({"Open": [1.0, 2.0]}))


class TestValidation:
    def test_short_must_be_less_than_long(self):
        with pytest.raises(ValueError, match="short_period"):
            TechnicalIndicators(ema_short_period=50, ema_long_period=20)

    def test_period_must_be_positive(self):
        with pytest.raises(ValueError, match="rsi_period"):
            TechnicalIndicators(rsi_period=0)


class TestGetIndicatorsAt:
    def test_values_at_position(self, line_series):
        indicators = TechnicalIndicators()
        values = indicators.get_indicators_at(line_series, 30)
        assert isinstance(values, IndicatorValues)
        assert values.position == 30
        assert values.price == line_series["Close"].iloc[30]
        assert 0 <= values.rsi <= 100
        assert values.bb_lower < values.ema_short < values.bb_upper

    def test_out_of_range_returns_none(self, line_series):
        indicators = TechnicalIndicators()
        assert indicators.get_indicators_at(line_series, 60) is None
        assert indicators.get_indicators_at(line_series, -1) is None

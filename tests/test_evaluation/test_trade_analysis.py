"""
Tests for trade pairing and P&L aggregation.
"""
import math

import pytest

from synthmarket.evaluation.trade_analysis import (
    SimulatedTrade,
    TradeSummary,
    TRADE_COLUMNS,
    pair_trades,
    summarize_trades,
    trades_to_dataframe,
    aggregate_trades_by_entry_reason,
)
from synthmarket.shared.types import SignalType, TradingSignal


def _buy(position: int, price: float = 100.0, reason: str = "entry"):
    return TradingSignal(SignalType.BUY, position, str(position + 1), price, reasoning=reason)


def _sell(position: int, price: float = 100.0, reason: str = "exit"):
    return TradingSignal(SignalType.SELL, position, str(position + 1), price, reasoning=reason)


class TestPairTrades:
    def test_out_of_order_sell_ignored(self):
        """[buy@1, sell@3, buy@5, sell@2] pairs buy@1 with sell@3 only."""
        signals = [_buy(1), _sell(3), _buy(5), _sell(2)]
        trades = pair_trades(signals)
        assert len(trades) == 1
        assert (trades[0].entry_position, trades[0].exit_position) == (1, 3)

    def test_sell_consumed_once(self):
        signals = [_buy(1), _buy(2), _sell(3)]
        trades = pair_trades(signals)
        assert [(t.entry_position, t.exit_position) for t in trades] == [(1, 3)]

    def test_each_buy_takes_next_available_sell(self):
        signals = [_buy(1), _buy(2), _sell(3), _sell(4)]
        trades = pair_trades(signals)
        assert [(t.entry_position, t.exit_position) for t in trades] == [(1, 3), (2, 4)]

    def test_same_bar_sell_does_not_close(self):
        assert pair_trades([_buy(4), _sell(4)]) == []

    def test_no_signals(self):
        assert pair_trades([]) == []

    def test_pnl_values(self):
        trades = pair_trades([_buy(1, 100.0, "in"), _sell(5, 110.0, "out")])
        trade = trades[0]
        assert trade.pnl == pytest.approx(10.0)
        assert trade.pnl_pct == pytest.approx(10.0)
        assert (trade.entry_time, trade.exit_time) == ("2", "6")
        assert (trade.entry_reason, trade.exit_reason) == ("in", "out")
        assert trade.is_win


class TestSummarizeTrades:
    def test_zero_trades_win_rate_is_zero(self):
        summary = summarize_trades([])
        assert summary.total_trades == 0
        assert summary.win_rate_pct == 0.0
        assert not math.isnan(summary.win_rate_pct)
        assert summary.total_pnl == 0.0

    def test_wins_losses_and_break_even(self):
        signals = [
            _buy(1, 100.0), _sell(2, 110.0),
            _buy(3, 100.0), _sell(4, 95.0),
            _buy(5, 100.0), _sell(6, 100.0),
            _buy(7, 100.0), _sell(8, 120.0),
        ]
        summary = summarize_trades(pair_trades(signals), signals)
        assert summary.total_trades == 4
        assert summary.win_count == 2
        assert summary.loss_count == 1
        assert summary.total_pnl == pytest.approx(25.0)
        assert summary.win_rate_pct == pytest.approx(50.0)
        assert summary.avg_pnl_pct == pytest.approx(6.25)
        assert summary.avg_win_pct == pytest.approx(15.0)
        assert summary.avg_loss_pct == pytest.approx(-5.0)
        assert (summary.buy_count, summary.sell_count) == (4, 4)

    def test_signal_counts_optional(self):
        summary = summarize_trades([])
        assert (summary.buy_count, summary.sell_count) == (0, 0)

    def test_to_dict(self):
        assert TradeSummary().to_dict()["win_rate_pct"] == 0.0


class TestTradesToDataFrame:
    def test_empty_has_columns(self):
        df = trades_to_dataframe([])
        assert df.empty
        assert list(df.columns) == TRADE_COLUMNS

    def test_one_row_per_trade(self):
        trades = pair_trades([_buy(1, 100.0), _sell(3, 105.0), _buy(4, 105.0), _sell(6, 100.0)])
        df = trades_to_dataframe(trades)
        assert len(df) == 2
        assert df["pnl"].tolist() == pytest.approx([5.0, -5.0])


class TestAggregateByEntryReason:
    def test_groups_by_reason(self):
        trades = [
            SimulatedTrade(1, 2, "2", "3", 100.0, 110.0, 10.0, 10.0, entry_reason="cross"),
            SimulatedTrade(3, 4, "4", "5", 100.0, 90.0, -10.0, -10.0, entry_reason="cross"),
            SimulatedTrade(5, 6, "6", "7", 100.0, 105.0, 5.0, 5.0, entry_reason="Entry signal triggered"),
        ]
        out = aggregate_trades_by_entry_reason(trades_to_dataframe(trades))
        assert out["cross"]["count"] == 2
        assert out["cross"]["win_rate_pct"] == pytest.approx(50.0)
        assert out["Entry signal triggered"]["avg_pnl_pct"] == pytest.approx(5.0)

    def test_empty(self):
        assert aggregate_trades_by_entry_reason(trades_to_dataframe([])) == {}

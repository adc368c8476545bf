"""
Simulated P&L module.

Pairs buy/sell signals into round trips and aggregates the resulting ledger.
"""
from .trade_analysis import (
    SimulatedTrade,
    TradeSummary,
    pair_trades,
    summarize_trades,
    trades_to_dataframe,
    aggregate_trades_by_entry_reason,
)

__all__ = [
    'SimulatedTrade',
    'TradeSummary',
    'pair_trades',
    'summarize_trades',
    'trades_to_dataframe',
    'aggregate_trades_by_entry_reason',
]

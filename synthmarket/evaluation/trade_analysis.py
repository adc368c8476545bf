"""
Simulated trade analysis: pair buy/sell signals into round trips and aggregate P&L.

Long-only simplification: every buy opens one unit and the next available sell
closes it. Buys that never find a later sell are dropped, not reported as open.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional

import pandas as pd

from ..shared.types import SignalType, TradingSignal

TRADE_COLUMNS = [
    "entry_position",
    "exit_position",
    "entry_time",
    "exit_time",
    "entry_price",
    "exit_price",
    "pnl",
    "pnl_pct",
    "entry_reason",
    "exit_reason",
]


@dataclass
class SimulatedTrade:
    """One paired round trip."""
    entry_position: int
    exit_position: int
    entry_time: str
    exit_time: str
    entry_price: float
    exit_price: float
    pnl: float
    pnl_pct: float
    entry_reason: str = ""
    exit_reason: str = ""

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TradeSummary:
    """Aggregate statistics over a trade ledger."""
    total_trades: int = 0
    win_count: int = 0
    loss_count: int = 0
    total_pnl: float = 0.0
    win_rate_pct: float = 0.0
    avg_pnl_pct: float = 0.0
    avg_win_pct: float = 0.0
    avg_loss_pct: float = 0.0
    buy_count: int = 0
    sell_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _make_trade(buy: TradingSignal, sell: TradingSignal) -> SimulatedTrade:
    pnl = sell.price - buy.price
    return SimulatedTrade(
        entry_position=buy.position,
        exit_position=sell.position,
        entry_time=buy.time,
        exit_time=sell.time,
        entry_price=buy.price,
        exit_price=sell.price,
        pnl=pnl,
        pnl_pct=(pnl / buy.price * 100) if buy.price else 0.0,
        entry_reason=buy.reasoning,
        exit_reason=sell.reasoning,
    )


def pair_trades(signals: List[TradingSignal]) -> List[SimulatedTrade]:
    """
    Pair buys with sells into round trips.

    Buys are visited in list order; each takes the first sell (in list order)
    whose position is strictly greater and that no earlier buy consumed.
    The input is not reordered, so out-of-order sells are skipped.

    Args:
        signals: Signals, normally ordered by position

    Returns:
        Trades in the order their buys appear
    """
    sells = [s for s in signals if s.signal_type == SignalType.SELL]
    consumed = [False] * len(sells)
    trades: List[SimulatedTrade] = []
    for buy in signals:
        if buy.signal_type != SignalType.BUY:
            continue
        for i, sell in enumerate(sells):
            if not consumed[i] and sell.position > buy.position:
                consumed[i] = True
                trades.append(_make_trade(buy, sell))
                break
    return trades


def _metrics_for_trades(pnls: List[float], pnl_pcts: List[float]) -> Dict[str, Any]:
    n = len(pnls)
    if n == 0:
        return {
            "total_trades": 0,
            "win_count": 0,
            "loss_count": 0,
            "total_pnl": 0.0,
            "win_rate_pct": 0.0,
            "avg_pnl_pct": 0.0,
            "avg_win_pct": 0.0,
            "avg_loss_pct": 0.0,
        }
    winners = [pct for pnl, pct in zip(pnls, pnl_pcts) if pnl > 0]
    losers = [pct for pnl, pct in zip(pnls, pnl_pcts) if pnl < 0]
    return {
        "total_trades": n,
        "win_count": len(winners),
        "loss_count": len(losers),
        "total_pnl": sum(pnls),
        "win_rate_pct": len(winners) / n * 100,
        "avg_pnl_pct": sum(pnl_pcts) / n,
        "avg_win_pct": (sum(winners) / len(winners)) if winners else 0.0,
        "avg_loss_pct": (sum(losers) / len(losers)) if losers else 0.0,
    }


def summarize_trades(
    trades: List[SimulatedTrade],
    signals: Optional[List[TradingSignal]] = None,
) -> TradeSummary:
    """
    Aggregate a trade ledger.

    win_count counts trades with pnl > 0 (break-even is neither a win nor a
    loss). win_rate_pct is 0.0 when there are no trades. When signals are
    given, buy_count/sell_count report the signal mix.
    """
    metrics = _metrics_for_trades([t.pnl for t in trades], [t.pnl_pct for t in trades])
    summary = TradeSummary(**metrics)
    if signals is not None:
        summary.buy_count = sum(1 for s in signals if s.signal_type == SignalType.BUY)
        summary.sell_count = sum(1 for s in signals if s.signal_type == SignalType.SELL)
    return summary


def trades_to_dataframe(trades: List[SimulatedTrade]) -> pd.DataFrame:
    """One row per trade; the columns are fixed even when there are no trades."""
    if not trades:
        return pd.DataFrame(columns=TRADE_COLUMNS)
    return pd.DataFrame([t.to_dict() for t in trades], columns=TRADE_COLUMNS)


def aggregate_trades_by_entry_reason(df: pd.DataFrame) -> Dict[str, Dict[str, Any]]:
    """For each entry reason, compute count, win_rate_pct, avg_pnl_pct."""
    out: Dict[str, Dict[str, Any]] = {}
    if df.empty:
        return out
    for key, grp in df.groupby("entry_reason", dropna=False):
        k = "(empty)" if (key is None or (isinstance(key, float) and pd.isna(key)) or key == "") else key
        pnl_pcts = grp["pnl_pct"].fillna(0).tolist()
        n = len(pnl_pcts)
        winners = [p for p in pnl_pcts if p > 0]
        out[str(k)] = {
            "count": n,
            "win_rate_pct": (len(winners) / n * 100) if n else 0.0,
            "avg_pnl_pct": (sum(pnl_pcts) / n) if n else 0.0,
        }
    return out

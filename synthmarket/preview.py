"""
Strategy preview pipeline.

One call runs the whole chain for a strategy card or chart:
name -> seed -> series -> indicators -> signals -> paired trades -> summary.
Everything is recomputed on each call; callers that render repeatedly can
memoise on (name, length, strategy_type, shape).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .shared.types import SeriesShape, StrategyType, TradingSignal
from .shared.defaults import LINE_LENGTH, LINE_COMPACT_LENGTH, CANDLE_LENGTH
from .data.generator import generate_series, seed_from_name
from .signals.config import SignalConfig, default_config_for
from .signals.detector import SignalDetector
from .evaluation.trade_analysis import SimulatedTrade, TradeSummary, pair_trades, summarize_trades

logger = logging.getLogger(__name__)

DEFAULT_TIMEFRAME = "4H"


@dataclass
class StrategyPreview:
    """Everything needed to draw one strategy chart and its P&L panel."""
    strategy_name: str
    strategy_type: StrategyType
    shape: SeriesShape
    timeframe: str
    seed: int
    config_name: str
    series: pd.DataFrame
    signals: List[TradingSignal] = field(default_factory=list)
    trades: List[SimulatedTrade] = field(default_factory=list)
    summary: TradeSummary = field(default_factory=TradeSummary)

    @property
    def buy_signals(self) -> List[TradingSignal]:
        return [s for s in self.signals if s.is_buy]

    @property
    def sell_signals(self) -> List[TradingSignal]:
        return [s for s in self.signals if not s.is_buy]

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-serialisable representation (bars as records)."""
        return {
            "strategy_name": self.strategy_name,
            "strategy_type": self.strategy_type.value,
            "shape": self.shape.value,
            "timeframe": self.timeframe,
            "seed": self.seed,
            "config": self.config_name,
            "bars": self.series.astype(object).to_dict(orient="records"),
            "signals": [s.to_dict() for s in self.signals],
            "trades": [t.to_dict() for t in self.trades],
            "summary": self.summary.to_dict(),
        }


def default_length(shape: Union[SeriesShape, str], compact: bool = False) -> int:
    """Bar count used when the caller does not give one."""
    if SeriesShape.parse(shape) == SeriesShape.CANDLE:
        return CANDLE_LENGTH
    return LINE_COMPACT_LENGTH if compact else LINE_LENGTH


def build_strategy_preview(
    strategy_name: str,
    strategy_type: Union[StrategyType, str, None] = StrategyType.MOMENTUM,
    length: Optional[int] = None,
    shape: Union[SeriesShape, str] = SeriesShape.LINE,
    config: Optional[SignalConfig] = None,
    timeframe: str = DEFAULT_TIMEFRAME,
    compact: bool = False,
) -> StrategyPreview:
    """
    Build the synthetic chart data, signals and simulated P&L for a strategy.

    Args:
        strategy_name: Display name; its character codes seed the series
        strategy_type: Strategy enum or tag (unknown tags use swing rules)
        length: Bar count (default: 60 line bars, 40 when compact, 180 candles)
        shape: "line" (preview cards) or "candle" (detailed chart)
        config: Signal config (default: preset matching the shape)
        timeframe: Display label only; it does not change the bars
        compact: Use the compact line length when length is not given

    Returns:
        StrategyPreview

    Raises:
        ValueError: If length < 1 or shape is unknown
        TypeError: If length is not an integer
    """
    shape = SeriesShape.parse(shape)
    strategy = StrategyType.parse(strategy_type)
    config = default_config_for(shape, config)
    if length is None:
        length = default_length(shape, compact)

    seed = seed_from_name(strategy_name)
    series = generate_series(length, seed, shape=shape)

    detector = SignalDetector(config)
    signals, indicator_df = detector.detect_signals_with_indicators(series, strategy)
    trades = pair_trades(signals)
    summary = summarize_trades(trades, signals)

    logger.debug(
        f"Preview {strategy_name!r} ({strategy.value}, {shape.value}, {length} bars): "
        f"{len(signals)} signals, {summary.total_trades} trades, "
        f"total P&L {summary.total_pnl:.2f}"
    )
    return StrategyPreview(
        strategy_name=strategy_name,
        strategy_type=strategy,
        shape=shape,
        timeframe=timeframe,
        seed=seed,
        config_name=config.name,
        series=indicator_df,
        signals=signals,
        trades=trades,
        summary=summary,
    )

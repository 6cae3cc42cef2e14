__all__ = [
    "RoutePlanner",
    "TradeExecutor",
    "TradePipeline",
    "TradePreview",
    "TradeValidator",
    "format_outcome",
    "trade",
]

from dex_trader.trading.executor import TradeExecutor
from dex_trader.trading.pipeline import TradePipeline, TradePreview, trade
from dex_trader.trading.planner import RoutePlanner
from dex_trader.trading.results import format_outcome
from dex_trader.trading.validator import TradeValidator

__all__ = ["ACTIONS", "TokenRef", "TradeRequest", "invoke_action", "trade"]

from dex_trader.actions import ACTIONS, invoke_action
from dex_trader.trading.pipeline import trade
from dex_trader.types import TokenRef, TradeRequest

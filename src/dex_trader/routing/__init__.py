__all__ = ["RoutingApiError", "RoutingEngine", "RoutingEngineFactory", "UniswapRoutingApi"]

from dex_trader.routing.base import RoutingEngine, RoutingEngineFactory
from dex_trader.routing.uniswap_api import RoutingApiError, UniswapRoutingApi

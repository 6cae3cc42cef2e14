from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from dex_trader.networks import Network
from dex_trader.types import RouteQuote, SwapOptions, TokenDescriptor, TradeType


class RoutingEngine(Protocol):
    async def route(
        self,
        *,
        amount_in: int,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        trade_type: TradeType,
        options: SwapOptions,
    ) -> RouteQuote | None: ...

    async def aclose(self) -> None: ...


RoutingEngineFactory = Callable[[Network], RoutingEngine]

from __future__ import annotations

import logging
import time
from decimal import Decimal

from dex_trader.errors import DexError, DexErrorCode
from dex_trader.networks import Network
from dex_trader.routing.base import RoutingEngine
from dex_trader.types import RouteQuote, SwapOptions, TokenDescriptor, TradeType

logger = logging.getLogger("dex_trader.planner")

SLIPPAGE_TOLERANCE = Decimal("0.5")
DEADLINE_SECONDS = 1800
SWAP_TYPE = "UNIVERSAL_ROUTER"
ROUTER_VERSION = "2.0"
SUPPORTED_PROTOCOL = "V3"

_NO_ROUTE_MARKERS = ("no route", "no_route")
_NO_LIQUIDITY_MARKERS = ("insufficient liquidity",)


def classify_routing_error(error: Exception) -> DexError:
    text = str(error).lower()
    if any(marker in text for marker in _NO_ROUTE_MARKERS):
        return DexError(
            "No valid trading route found. This likely means there is no liquidity pool "
            "for this pair.",
            code=DexErrorCode.NO_ROUTE,
            cause=error,
        )
    if any(marker in text for marker in _NO_LIQUIDITY_MARKERS):
        return DexError(
            "Insufficient liquidity in the pool for this trade.",
            code=DexErrorCode.NO_LIQUIDITY,
            cause=error,
        )
    return DexError(str(error) or type(error).__name__, code=DexErrorCode.UNKNOWN, cause=error)


class RoutePlanner:
    def __init__(self, *, engine: RoutingEngine, network: Network) -> None:
        self._engine = engine
        self._network = network

    def swap_options(self, *, recipient: str, now_s: float | None = None) -> SwapOptions:
        now = time.time() if now_s is None else now_s
        return SwapOptions(
            recipient=recipient,
            slippage_tolerance=SLIPPAGE_TOLERANCE,
            deadline=int(now + DEADLINE_SECONDS),
            swap_type=SWAP_TYPE,
            router_version=ROUTER_VERSION,
            protocols=(SUPPORTED_PROTOCOL,),
        )

    async def plan(
        self,
        *,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        amount_in_raw: int,
        recipient: str,
    ) -> RouteQuote:
        options = self.swap_options(recipient=recipient)
        logger.info(
            "route_search",
            extra={
                "chain_id": self._network.chain_id,
                "token_in": token_in.address,
                "token_out": token_out.address,
                "amount": str(amount_in_raw),
            },
        )
        try:
            quote = await self._engine.route(
                amount_in=amount_in_raw,
                token_in=token_in,
                token_out=token_out,
                trade_type=TradeType.EXACT_INPUT,
                options=options,
            )
        except DexError:
            raise
        except Exception as e:
            logger.warning("route_search_failed", extra={"error": str(e)})
            raise classify_routing_error(e) from e

        if quote is None or not quote.calldata:
            raise DexError("Failed to compute a valid trading route", code=DexErrorCode.NO_ROUTE)

        if len(quote.route) != 1:
            raise DexError(
                f"Only single-hop routes are supported (got {len(quote.route)} hops)",
                code=DexErrorCode.NO_ROUTE,
            )
        hop = quote.route[0]
        if hop.protocol.upper() != SUPPORTED_PROTOCOL:
            raise DexError(
                f"Only {SUPPORTED_PROTOCOL} routes are supported",
                code=DexErrorCode.NO_ROUTE,
            )

        logger.info(
            "route_found",
            extra={
                "pool": hop.address,
                "liquidity": str(hop.liquidity),
                "fee_pct": str(hop.fee_pct),
                "quote_raw": quote.expected_output_raw,
            },
        )
        return quote

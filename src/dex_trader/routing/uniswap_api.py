from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Any

import httpx

from dex_trader.networks import Network
from dex_trader.types import PoolHop, RouteQuote, SwapOptions, TokenDescriptor, TradeType

logger = logging.getLogger("dex_trader.routing")

_TRADE_TYPES = {
    TradeType.EXACT_INPUT: "exactIn",
    TradeType.EXACT_OUTPUT: "exactOut",
}

_POOL_PROTOCOLS = {
    "v2-pool": "V2",
    "v3-pool": "V3",
    "v4-pool": "V4",
}


class RoutingApiError(RuntimeError):
    def __init__(self, *, status_code: int, payload: Any):
        super().__init__(f"Routing API error: status={status_code} payload={payload!r}")
        self.status_code = status_code
        self.payload = payload


def _compact_params(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


def _percent(fraction: Decimal) -> str:
    return format((fraction * Decimal(100)).normalize(), "f")


def _is_no_route(payload: Any) -> bool:
    return isinstance(payload, dict) and str(payload.get("errorCode", "")).upper() == "NO_ROUTE"


def parse_route(raw: Any) -> tuple[PoolHop, ...]:
    """Flatten the first path of a routing API `route` into hops."""
    if not isinstance(raw, list) or not raw:
        return ()
    first = raw[0]
    if not isinstance(first, list):
        return ()
    hops: list[PoolHop] = []
    for pool in first:
        if not isinstance(pool, dict):
            continue
        pool_type = str(pool.get("type", ""))
        hops.append(
            PoolHop(
                protocol=_POOL_PROTOCOLS.get(pool_type, pool_type.upper()),
                address=str(pool.get("address", "")).lower(),
                liquidity=int(pool.get("liquidity") or 0),
                fee=int(pool.get("fee") or 0),
                token_in=str((pool.get("tokenIn") or {}).get("address", "")).lower(),
                token_out=str((pool.get("tokenOut") or {}).get("address", "")).lower(),
            )
        )
    return tuple(hops)


class UniswapRoutingApi:
    """Client for the hosted Uniswap routing API (`GET /quote`)."""

    def __init__(
        self,
        *,
        network: Network,
        api_key: str = "",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=network.routing_api_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds),
            headers={"x-api-key": api_key} if api_key else {},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def route(
        self,
        *,
        amount_in: int,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        trade_type: TradeType,
        options: SwapOptions,
    ) -> RouteQuote | None:
        params = _compact_params(
            {
                "tokenInAddress": token_in.address,
                "tokenInChainId": token_in.chain_id,
                "tokenOutAddress": token_out.address,
                "tokenOutChainId": token_out.chain_id,
                "amount": str(amount_in),
                "type": _TRADE_TYPES[trade_type],
                "recipient": options.recipient or None,
                "slippageTolerance": _percent(options.slippage_tolerance),
                "deadline": max(1, options.deadline - int(time.time())),
                "protocols": ",".join(p.lower() for p in options.protocols),
                "enableUniversalRouter": "true",
                "universalRouterVersion": options.router_version,
            }
        )
        response = await self._client.get("/quote", params=params)
        if response.status_code >= 400:
            payload: Any
            try:
                payload = response.json()
            except Exception:
                payload = response.text
            if _is_no_route(payload):
                logger.info(
                    "routing_no_route",
                    extra={"token_in": token_in.address, "token_out": token_out.address},
                )
                return None
            raise RoutingApiError(status_code=response.status_code, payload=payload)

        data = response.json()
        if not isinstance(data, dict):
            return None
        method_parameters = data.get("methodParameters") or {}
        calldata = method_parameters.get("calldata") or None
        value = method_parameters.get("value") or "0x0"
        return RouteQuote(
            token_in=token_in,
            token_out=token_out,
            amount_in_raw=amount_in,
            route=parse_route(data.get("route")),
            expected_output_raw=str(data.get("quote", "0")),
            calldata=calldata,
            execution_value=int(str(value), 0),
            deadline=options.deadline,
        )

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dex_trader.networks import BASE_SEPOLIA, Network
from dex_trader.routing.base import RoutingEngineFactory
from dex_trader.trading.pipeline import trade
from dex_trader.types import TokenRef, TradeRequest
from dex_trader.wallet.base import WalletProvider

logger = logging.getLogger("dex_trader.actions")


class TradeActionArgs(BaseModel):
    """Instructions for trading assets on Base Sepolia testnet."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    amount: str = Field(description="The amount of the from asset to trade")
    from_asset_id: str = Field(
        alias="fromAssetId",
        description="The from asset ID to trade",
    )
    to_asset_id: str = Field(
        alias="toAssetId",
        description="The to asset ID to receive from the trade",
    )
    from_asset_ticker: Optional[str] = Field(
        default=None,
        alias="fromAssetTicker",
        description="The ticker symbol of the from asset",
    )
    to_asset_ticker: Optional[str] = Field(
        default=None,
        alias="toAssetTicker",
        description="The ticker symbol of the to asset",
    )

    def to_request(self) -> TradeRequest:
        return TradeRequest(
            amount=self.amount,
            from_token=TokenRef(address=self.from_asset_id, ticker=self.from_asset_ticker),
            to_token=TokenRef(address=self.to_asset_id, ticker=self.to_asset_ticker),
        )


ActionHandler = Callable[..., Awaitable[str]]


@dataclass(frozen=True)
class ActionSpec:
    name: str
    description: str
    schema: type[BaseModel]
    handler: ActionHandler

    def input_schema(self) -> dict[str, Any]:
        return self.schema.model_json_schema(by_alias=True)


async def _testnet_trade(
    wallet: WalletProvider,
    args: TradeActionArgs,
    *,
    network: Network = BASE_SEPOLIA,
    engine_factory: RoutingEngineFactory | None = None,
) -> str:
    return await trade(
        wallet,
        args.to_request(),
        network=network,
        engine_factory=engine_factory,
    )


ACTIONS: dict[str, ActionSpec] = {
    "testnet_trade": ActionSpec(
        name="testnet_trade",
        description="Trade tokens on Base Sepolia testnet using Uniswap V3",
        schema=TradeActionArgs,
        handler=_testnet_trade,
    ),
}


async def invoke_action(
    name: str,
    wallet: WalletProvider,
    args: Mapping[str, Any],
    **kwargs: Any,
) -> str:
    spec = ACTIONS.get(name)
    if spec is None:
        return f"Unknown action: {name}"
    try:
        parsed = spec.schema.model_validate(dict(args))
    except ValidationError as e:
        logger.warning("action_args_invalid", extra={"action": name})
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return f"Invalid arguments for {name}: {details}"
    return await spec.handler(wallet, parsed, **kwargs)

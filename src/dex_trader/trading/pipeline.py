from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from dex_trader.amounts import InvalidAmountError, to_base_units, to_decimal_string
from dex_trader.errors import DexError, DexErrorCode
from dex_trader.networks import BASE_SEPOLIA, Network
from dex_trader.routing.base import RoutingEngine, RoutingEngineFactory
from dex_trader.routing.uniswap_api import UniswapRoutingApi
from dex_trader.tokens import resolve_token
from dex_trader.trading.executor import TradeExecutor
from dex_trader.trading.planner import RoutePlanner
from dex_trader.trading.results import classify_exception, format_outcome
from dex_trader.trading.validator import TradeValidator
from dex_trader.types import (
    RouteQuote,
    TokenDescriptor,
    TradeOutcome,
    TradeRequest,
    TradeStage,
    TradeSuccess,
)
from dex_trader.wallet.base import WalletProvider

logger = logging.getLogger("dex_trader.pipeline")


def _default_engine_factory(network: Network) -> RoutingEngine:
    return UniswapRoutingApi(network=network)


@dataclass(frozen=True)
class TradePreview:
    token_in: TokenDescriptor
    token_out: TokenDescriptor
    quote: RouteQuote
    expected_output: str


class TradePipeline:
    """
    Runs one swap: resolve tokens, plan a route, validate it, submit and confirm.

    Each call builds its own routing engine and closes it afterwards. Nothing is
    retried; every failure ends the run as a `TradeFailure`.
    """

    def __init__(
        self,
        *,
        network: Network = BASE_SEPOLIA,
        engine_factory: RoutingEngineFactory | None = None,
    ) -> None:
        self._network = network
        self._engine_factory = engine_factory or _default_engine_factory
        self._validator = TradeValidator(network=network)
        self._executor = TradeExecutor(network=network)

    @property
    def network(self) -> Network:
        return self._network

    def _enter(self, stage: TradeStage, request: TradeRequest) -> None:
        logger.info(
            "trade_stage",
            extra={"stage": stage.value, "chain_id": self._network.chain_id, "amount": request.amount},
        )

    async def _resolve(
        self,
        wallet: WalletProvider,
        request: TradeRequest,
    ) -> tuple[TokenDescriptor, TokenDescriptor]:
        tasks = [
            asyncio.create_task(
                resolve_token(
                    wallet,
                    ref.address,
                    ref.ticker,
                    chain_id=self._network.chain_id,
                )
            )
            for ref in (request.from_token, request.to_token)
        ]
        try:
            token_in, token_out = await asyncio.gather(*tasks)
        except BaseException:
            # Cancel the sibling resolution before propagating.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.info(
            "tokens_resolved",
            extra={
                "token_in": f"{token_in.symbol} ({token_in.address})",
                "token_out": f"{token_out.symbol} ({token_out.address})",
            },
        )
        return token_in, token_out

    async def _plan_and_validate(
        self,
        wallet: WalletProvider,
        request: TradeRequest,
    ) -> TradePreview:
        self._enter(TradeStage.RESOLVING, request)
        token_in, token_out = await self._resolve(wallet, request)

        try:
            amount_in_raw = int(to_base_units(request.amount, token_in.decimals))
        except InvalidAmountError as e:
            raise DexError(f"Invalid amount: {e}", code=DexErrorCode.UNKNOWN, cause=e) from e

        self._enter(TradeStage.PLANNING, request)
        engine = self._engine_factory(self._network)
        try:
            planner = RoutePlanner(engine=engine, network=self._network)
            quote = await planner.plan(
                token_in=token_in,
                token_out=token_out,
                amount_in_raw=amount_in_raw,
                recipient=await wallet.get_address(),
            )
        finally:
            await engine.aclose()

        self._enter(TradeStage.VALIDATING, request)
        await self._validator.validate(quote, wallet)
        expected = to_decimal_string(quote.expected_output_raw, token_out.decimals)
        return TradePreview(
            token_in=token_in,
            token_out=token_out,
            quote=quote,
            expected_output=expected,
        )

    async def preview(self, wallet: WalletProvider, request: TradeRequest) -> TradePreview:
        """Resolve, plan and validate without submitting anything."""
        return await self._plan_and_validate(wallet, request)

    async def run(self, wallet: WalletProvider, request: TradeRequest) -> TradeOutcome:
        self._enter(TradeStage.START, request)
        try:
            preview = await self._plan_and_validate(wallet, request)

            self._enter(TradeStage.SUBMITTING, request)
            tx_hash = await self._executor.submit(preview.quote, wallet)

            self._enter(TradeStage.CONFIRMING, request)
            result = await self._executor.confirm(tx_hash, wallet)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            failure = classify_exception(e)
            logger.warning(
                "trade_failed",
                extra={
                    "stage": TradeStage.FAILED.value,
                    "code": failure.code.value if failure.code else "UNEXPECTED",
                },
                exc_info=not isinstance(e, DexError),
            )
            return failure

        logger.info(
            "trade_succeeded",
            extra={"stage": TradeStage.SUCCEEDED.value, "tx_hash": result.tx_hash},
        )
        return TradeSuccess(
            tx_hash=result.tx_hash,
            amount=request.amount.strip(),
            from_symbol=preview.token_in.symbol,
            to_symbol=preview.token_out.symbol,
            expected_output=preview.expected_output,
        )


async def trade(
    wallet: WalletProvider,
    request: TradeRequest,
    *,
    network: Network = BASE_SEPOLIA,
    engine_factory: RoutingEngineFactory | None = None,
) -> str:
    pipeline = TradePipeline(network=network, engine_factory=engine_factory)
    try:
        outcome = await pipeline.run(wallet, request)
        return format_outcome(outcome)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        return f"Unexpected error during trade: {e}"

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer

from dex_trader.logging_utils import configure_logging
from dex_trader.networks import Network
from dex_trader.routing.base import RoutingEngine, RoutingEngineFactory
from dex_trader.routing.uniswap_api import UniswapRoutingApi
from dex_trader.settings import Settings
from dex_trader.trading.pipeline import TradePipeline, trade
from dex_trader.trading.results import classify_exception, format_failure
from dex_trader.types import TokenRef, TradeRequest
from dex_trader.wallet.web3_wallet import Web3Wallet

app = typer.Typer(no_args_is_help=True, add_completion=False)
logger = logging.getLogger("dex_trader")


def _engine_factory(settings: Settings) -> RoutingEngineFactory:
    def build(network: Network) -> RoutingEngine:
        return UniswapRoutingApi(
            network=network,
            api_key=settings.routing_api_key,
            timeout_seconds=settings.routing_timeout_seconds,
        )

    return build


def _wallet(settings: Settings, network: Network) -> Web3Wallet:
    try:
        return Web3Wallet(
            rpc_url=network.rpc_url,
            private_key=settings.wallet_private_key,
            chain_id=network.chain_id,
        )
    except (RuntimeError, ValueError) as e:
        typer.echo(f"Wallet unavailable: {e}")
        raise typer.Exit(code=2) from e


def _request(
    amount: str,
    from_token: str,
    to_token: str,
    from_ticker: Optional[str],
    to_ticker: Optional[str],
) -> TradeRequest:
    return TradeRequest(
        amount=amount,
        from_token=TokenRef(address=from_token, ticker=from_ticker),
        to_token=TokenRef(address=to_token, ticker=to_ticker),
    )


@app.command()
def show_config() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    redacted = settings.model_dump()
    redacted["wallet_private_key"] = "***" if redacted["wallet_private_key"] else ""
    redacted["routing_api_key"] = "***" if redacted["routing_api_key"] else ""
    logger.info("loaded_config", extra={"chain_id": settings.network().chain_id})
    typer.echo(redacted)


@app.command()
def health() -> None:
    """
    Check the RPC endpoint and print the chain id and wallet address.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    network = settings.network()
    wallet = _wallet(settings, network)

    async def _run() -> None:
        try:
            chain_id = await wallet.chain_id()
            address = await wallet.get_address()
            balance = await wallet.get_balance()
        finally:
            await wallet.aclose()
        typer.echo(
            {
                "ok": chain_id == network.chain_id,
                "chain_id": chain_id,
                "expected_chain_id": network.chain_id,
                "address": address,
                "balance_wei": balance,
            }
        )

    asyncio.run(_run())


@app.command()
def quote(
    amount: str = typer.Argument(..., help="Amount of the from token, e.g. 0.1"),
    from_token: str = typer.Argument(..., help="From token contract address."),
    to_token: str = typer.Argument(..., help="To token contract address."),
    from_ticker: Optional[str] = typer.Option(None, help="Display symbol of the from token."),
    to_ticker: Optional[str] = typer.Option(None, help="Display symbol of the to token."),
) -> None:
    """
    Resolve, route and validate a swap without sending a transaction.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    network = settings.network()
    request = _request(amount, from_token, to_token, from_ticker, to_ticker)
    wallet = _wallet(settings, network)

    async def _run() -> None:
        pipeline = TradePipeline(network=network, engine_factory=_engine_factory(settings))
        try:
            preview = await pipeline.preview(wallet, request)
        except Exception as e:
            typer.echo(format_failure(classify_exception(e)))
            raise typer.Exit(code=1) from e
        finally:
            await wallet.aclose()
        hop = preview.quote.route[0]
        typer.echo(
            f"Quote: {amount.strip()} {preview.token_in.symbol} -> approximately "
            f"{preview.expected_output} {preview.token_out.symbol} "
            f"(pool {hop.address}, fee {hop.fee_pct}%)"
        )

    asyncio.run(_run())


@app.command("trade")
def trade_command(
    amount: str = typer.Argument(..., help="Amount of the from token, e.g. 0.1"),
    from_token: str = typer.Argument(..., help="From token contract address."),
    to_token: str = typer.Argument(..., help="To token contract address."),
    from_ticker: Optional[str] = typer.Option(None, help="Display symbol of the from token."),
    to_ticker: Optional[str] = typer.Option(None, help="Display symbol of the to token."),
) -> None:
    """
    Execute a swap. Requires TRADING_MODE=live and CONFIRM_LIVE_TRADING=YES.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    if not settings.live_trading_enabled():
        typer.echo("Live trading is disabled; set TRADING_MODE=live and CONFIRM_LIVE_TRADING=YES.")
        raise typer.Exit(code=2)

    network = settings.network()
    request = _request(amount, from_token, to_token, from_ticker, to_ticker)
    wallet = _wallet(settings, network)

    async def _run() -> str:
        try:
            return await trade(
                wallet,
                request,
                network=network,
                engine_factory=_engine_factory(settings),
            )
        finally:
            await wallet.aclose()

    typer.echo(asyncio.run(_run()))

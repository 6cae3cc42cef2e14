from __future__ import annotations

import logging

from dex_trader.errors import DexError, DexErrorCode
from dex_trader.networks import Network
from dex_trader.trading.validator import required_native_value
from dex_trader.types import ExecutionResult, RouteQuote
from dex_trader.wallet.base import TransactionRequest, WalletProvider

logger = logging.getLogger("dex_trader.executor")


class TradeExecutor:
    def __init__(self, *, network: Network) -> None:
        self._network = network

    def build_transaction(self, quote: RouteQuote) -> TransactionRequest:
        if not quote.calldata:
            raise DexError("Route has no call data", code=DexErrorCode.EXECUTION_ERROR)
        return TransactionRequest(
            to=self._network.universal_router,
            data=quote.calldata,
            value=required_native_value(quote, self._network),
        )

    async def submit(self, quote: RouteQuote, wallet: WalletProvider) -> str:
        tx = self.build_transaction(quote)
        try:
            tx_hash = await wallet.send_transaction(tx)
        except Exception as e:
            logger.exception("tx_submit_failed", extra={"chain_id": self._network.chain_id})
            if "insufficient funds" in str(e).lower():
                raise DexError(
                    "Insufficient funds to execute the trade",
                    code=DexErrorCode.EXECUTION_ERROR,
                    cause=e,
                ) from e
            raise DexError(
                f"Failed to execute the trade: {e}",
                code=DexErrorCode.EXECUTION_ERROR,
                cause=e,
            ) from e
        logger.info("tx_submitted", extra={"tx_hash": tx_hash, "value": str(tx["value"])})
        return tx_hash

    async def confirm(self, tx_hash: str, wallet: WalletProvider) -> ExecutionResult:
        try:
            receipt = await wallet.wait_for_transaction_receipt(tx_hash)
        except Exception as e:
            raise DexError(
                f"Failed to confirm transaction {tx_hash}: {e}",
                code=DexErrorCode.EXECUTION_ERROR,
                cause=e,
            ) from e

        if receipt.get("status") != "success":
            logger.warning("tx_reverted", extra={"tx_hash": tx_hash})
            raise DexError(f"Transaction failed. Hash: {tx_hash}", code=DexErrorCode.EXECUTION_ERROR)
        logger.info("tx_confirmed", extra={"tx_hash": tx_hash})
        return ExecutionResult(tx_hash=tx_hash, status="success")

    async def execute(self, quote: RouteQuote, wallet: WalletProvider) -> ExecutionResult:
        tx_hash = await self.submit(quote, wallet)
        return await self.confirm(tx_hash, wallet)

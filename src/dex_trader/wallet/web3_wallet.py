from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3

from dex_trader.wallet.base import TransactionRequest

logger = logging.getLogger("dex_trader.wallet")

_DEFAULT_RECEIPT_TIMEOUT_SECONDS = 180.0


class Web3Wallet:
    """
    Local-key wallet backed by a JSON-RPC endpoint.

    Uses the node's legacy `gasPrice` and `eth_estimateGas`; no fee strategy.
    """

    def __init__(
        self,
        *,
        rpc_url: str,
        private_key: str,
        chain_id: int,
        timeout_seconds: float = 30.0,
        receipt_timeout_seconds: float = _DEFAULT_RECEIPT_TIMEOUT_SECONDS,
        w3: AsyncWeb3 | None = None,
    ) -> None:
        key = private_key.strip()
        if not key:
            raise RuntimeError("WALLET_PRIVATE_KEY is required for signing")
        if not key.startswith("0x"):
            key = f"0x{key}"
        self._account = Account.from_key(key)
        self._chain_id = chain_id
        self._receipt_timeout_seconds = receipt_timeout_seconds
        self._w3 = w3 or AsyncWeb3(
            AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": timeout_seconds})
        )

    async def aclose(self) -> None:
        await self._w3.provider.disconnect()

    async def get_address(self) -> str:
        return str(self._account.address)

    async def get_balance(self) -> int:
        return int(await self._w3.eth.get_balance(self._account.address))

    async def chain_id(self) -> int:
        return int(await self._w3.eth.chain_id)

    async def read_contract(
        self,
        address: str,
        abi: Sequence[Mapping[str, Any]],
        function_name: str,
    ) -> Any:
        contract = self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(address),
            abi=list(abi),
        )
        fn = getattr(contract.functions, function_name)
        return await fn().call()

    async def send_transaction(self, tx: TransactionRequest) -> str:
        sender = self._account.address
        params: dict[str, Any] = {
            "from": sender,
            "to": AsyncWeb3.to_checksum_address(tx["to"]),
            "data": tx["data"],
            "value": int(tx["value"]),
            "chainId": self._chain_id,
        }
        params["nonce"] = await self._w3.eth.get_transaction_count(sender, "pending")
        params["gasPrice"] = await self._w3.eth.gas_price
        params["gas"] = await self._w3.eth.estimate_gas(params)

        signed = self._account.sign_transaction(params)
        raw_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash = AsyncWeb3.to_hex(raw_hash)
        logger.info("tx_broadcast", extra={"tx_hash": tx_hash, "chain_id": self._chain_id})
        return tx_hash

    async def wait_for_transaction_receipt(self, tx_hash: str) -> Mapping[str, Any]:
        receipt = await self._w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=self._receipt_timeout_seconds,
        )
        status = "success" if int(receipt.get("status", 0)) == 1 else "reverted"
        return {
            "status": status,
            "tx_hash": tx_hash,
            "block_number": receipt.get("blockNumber"),
            "gas_used": receipt.get("gasUsed"),
        }

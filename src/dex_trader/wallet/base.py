from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypedDict


class TransactionRequest(TypedDict):
    to: str
    data: str
    value: int


class WalletProvider(Protocol):
    """Signing wallet consumed by the trade pipeline. Implementations never expose keys."""

    async def get_address(self) -> str: ...

    async def get_balance(self) -> int: ...

    async def read_contract(
        self,
        address: str,
        abi: Sequence[Mapping[str, Any]],
        function_name: str,
    ) -> Any: ...

    async def send_transaction(self, tx: TransactionRequest) -> str: ...

    async def wait_for_transaction_receipt(self, tx_hash: str) -> Mapping[str, Any]: ...


ERC20_METADATA_ABI: list[dict[str, Any]] = [
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]

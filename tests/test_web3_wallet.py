import asyncio
from typing import Any

import pytest

from dex_trader.networks import BASE_SEPOLIA
from dex_trader.wallet.web3_wallet import Web3Wallet

# Well-known local development key; never funded on a public network.
_DEV_KEY = "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
_DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class _FakeEth:
    def __init__(self, *, receipt_status: int = 1) -> None:
        self.receipt_status = receipt_status
        self.estimated: list[dict[str, Any]] = []
        self.raw_sent: list[bytes] = []

    async def get_balance(self, address: str) -> int:
        return 42

    async def get_transaction_count(self, address: str, block: str) -> int:
        return 7

    @property
    async def gas_price(self) -> int:
        return 1_000_000_000

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        self.estimated.append(dict(tx))
        return 210_000

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        self.raw_sent.append(raw)
        return bytes.fromhex("ab" * 32)

    async def wait_for_transaction_receipt(self, tx_hash: str, timeout: float) -> dict[str, Any]:
        return {"status": self.receipt_status, "blockNumber": 100, "gasUsed": 150_000}


class _FakeProvider:
    def __init__(self) -> None:
        self.disconnected = False

    async def disconnect(self) -> None:
        self.disconnected = True


class _FakeWeb3:
    def __init__(self, eth: _FakeEth) -> None:
        self.eth = eth
        self.provider = _FakeProvider()


def _wallet(eth: _FakeEth) -> Web3Wallet:
    return Web3Wallet(
        rpc_url="http://localhost:8545",
        private_key=_DEV_KEY,
        chain_id=BASE_SEPOLIA.chain_id,
        w3=_FakeWeb3(eth),  # type: ignore[arg-type]
    )


def test_address_and_balance() -> None:
    wallet = _wallet(_FakeEth())

    assert asyncio.run(wallet.get_address()) == _DEV_ADDRESS
    assert asyncio.run(wallet.get_balance()) == 42


def test_send_transaction_signs_and_broadcasts() -> None:
    eth = _FakeEth()
    wallet = _wallet(eth)

    tx_hash = asyncio.run(
        wallet.send_transaction(
            {"to": BASE_SEPOLIA.universal_router, "data": "0x3593564c", "value": 5}
        )
    )

    assert tx_hash == "0x" + "ab" * 32
    assert len(eth.raw_sent) == 1
    estimated = eth.estimated[0]
    assert estimated["nonce"] == 7
    assert estimated["gasPrice"] == 1_000_000_000
    assert estimated["value"] == 5
    assert estimated["chainId"] == 84532


def test_receipt_status_is_mapped() -> None:
    ok = asyncio.run(_wallet(_FakeEth()).wait_for_transaction_receipt("0x01"))
    reverted = asyncio.run(_wallet(_FakeEth(receipt_status=0)).wait_for_transaction_receipt("0x01"))

    assert ok["status"] == "success"
    assert reverted["status"] == "reverted"


def test_aclose_disconnects_provider() -> None:
    w3 = _FakeWeb3(_FakeEth())
    wallet = Web3Wallet(
        rpc_url="http://localhost:8545",
        private_key=_DEV_KEY,
        chain_id=BASE_SEPOLIA.chain_id,
        w3=w3,  # type: ignore[arg-type]
    )

    asyncio.run(wallet.aclose())

    assert w3.provider.disconnected is True


def test_missing_private_key_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="WALLET_PRIVATE_KEY"):
        Web3Wallet(rpc_url="http://localhost:8545", private_key="  ", chain_id=84532)

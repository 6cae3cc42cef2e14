import asyncio

import pytest
from fakes import JTK, MTK, WETH, FakeWallet, quote, token

from dex_trader.errors import DexError, DexErrorCode
from dex_trader.networks import BASE_SEPOLIA
from dex_trader.trading.validator import TradeValidator, required_native_value


def test_required_value_only_for_wrapped_native_input() -> None:
    weth_quote = quote(token_in=token(WETH), token_out=token(MTK), amount_in_raw=7)
    erc20_quote = quote(token_in=token(JTK), token_out=token(MTK), amount_in_raw=7)

    assert required_native_value(weth_quote, BASE_SEPOLIA) == 7
    assert required_native_value(erc20_quote, BASE_SEPOLIA) == 0


def test_quote_below_minimum_output_is_too_small() -> None:
    validator = TradeValidator(network=BASE_SEPOLIA)
    tiny = quote(token_in=token(JTK), token_out=token(MTK), expected_output_raw="999999999999")

    with pytest.raises(DexError) as exc_info:
        asyncio.run(validator.validate(tiny, FakeWallet()))

    assert exc_info.value.code == DexErrorCode.AMOUNT_TOO_SMALL
    assert "0.000000999999999999" in exc_info.value.message


def test_minimum_output_uses_output_token_decimals() -> None:
    validator = TradeValidator(network=BASE_SEPOLIA)
    six_decimals = quote(
        token_in=token(JTK),
        token_out=token(MTK, decimals=6),
        expected_output_raw="1",
    )

    asyncio.run(validator.validate(six_decimals, FakeWallet()))


def test_insufficient_balance_for_wrapped_native_input() -> None:
    validator = TradeValidator(network=BASE_SEPOLIA)
    weth_quote = quote(token_in=token(WETH), token_out=token(MTK), amount_in_raw=10**17)

    with pytest.raises(DexError) as exc_info:
        asyncio.run(validator.validate(weth_quote, FakeWallet(balance=5)))

    assert exc_info.value.code == DexErrorCode.INSUFFICIENT_BALANCE
    assert exc_info.value.message == (
        "Insufficient balance. Have 5 wei, need 100000000000000000 wei"
    )


def test_erc20_input_needs_no_native_balance() -> None:
    validator = TradeValidator(network=BASE_SEPOLIA)
    erc20_quote = quote(token_in=token(JTK), token_out=token(MTK))

    asyncio.run(validator.validate(erc20_quote, FakeWallet(balance=0)))


def test_empty_pool_fails_before_balance_read() -> None:
    class NoBalanceWallet(FakeWallet):
        async def get_balance(self) -> int:
            raise AssertionError("balance must not be read")

    validator = TradeValidator(network=BASE_SEPOLIA)
    drained = quote(token_in=token(WETH), token_out=token(MTK), liquidity=0)

    with pytest.raises(DexError) as exc_info:
        asyncio.run(validator.validate(drained, NoBalanceWallet()))

    assert exc_info.value.code == DexErrorCode.NO_LIQUIDITY

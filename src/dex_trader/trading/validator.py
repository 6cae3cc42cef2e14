from __future__ import annotations

import logging
from decimal import Decimal

from dex_trader.amounts import parse_amount, to_decimal_string
from dex_trader.errors import DexError, DexErrorCode
from dex_trader.networks import Network
from dex_trader.types import RouteQuote
from dex_trader.wallet.base import WalletProvider

logger = logging.getLogger("dex_trader.validator")

MIN_OUTPUT = Decimal("0.000001")


def required_native_value(quote: RouteQuote, network: Network) -> int:
    """Native currency attached to the swap call: the input amount when spending wrapped native."""
    if network.is_wrapped_native(quote.token_in.address):
        return quote.amount_in_raw
    return 0


class TradeValidator:
    def __init__(self, *, network: Network, min_output: Decimal = MIN_OUTPUT) -> None:
        self._network = network
        self._min_output = min_output

    async def validate(self, quote: RouteQuote, wallet: WalletProvider) -> None:
        if not quote.route or quote.route[0].liquidity <= 0:
            raise DexError(
                "Insufficient liquidity in the pool for this trade.",
                code=DexErrorCode.NO_LIQUIDITY,
            )

        expected = to_decimal_string(quote.expected_output_raw, quote.token_out.decimals)
        if parse_amount(expected) < self._min_output:
            raise DexError(
                f"Quote too small ({expected}). The minimum tradeable amount might be higher, "
                "try increasing the input amount.",
                code=DexErrorCode.AMOUNT_TOO_SMALL,
            )

        required = required_native_value(quote, self._network)
        balance = int(await wallet.get_balance())
        if balance < required:
            raise DexError(
                f"Insufficient balance. Have {balance} wei, need {required} wei",
                code=DexErrorCode.INSUFFICIENT_BALANCE,
            )
        logger.info(
            "trade_validated",
            extra={"quote": expected, "balance": str(balance), "required": str(required)},
        )

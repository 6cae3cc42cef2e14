from __future__ import annotations

from dex_trader.errors import DexError, DexErrorCode
from dex_trader.types import TradeFailure, TradeOutcome, TradeSuccess

_NO_ROUTE_TEXT = (
    "Trade failed: No valid trading route found. This usually means there is no "
    "liquidity pool available for this token pair."
)
_NO_LIQUIDITY_TEXT = "Trade failed: The pool exists but has insufficient liquidity for this trade."


def classify_exception(error: BaseException) -> TradeFailure:
    if isinstance(error, DexError):
        return TradeFailure(code=error.code, message=error.message)
    return TradeFailure(code=None, message=str(error) or type(error).__name__)


def format_success(outcome: TradeSuccess) -> str:
    return (
        f"Successfully traded {outcome.amount} {outcome.from_symbol} for approximately "
        f"{outcome.expected_output} {outcome.to_symbol}.\n"
        f"Transaction hash: {outcome.tx_hash}"
    )


def format_failure(outcome: TradeFailure) -> str:
    if outcome.code is None:
        return f"Unexpected error during trade: {outcome.message}"
    if outcome.code == DexErrorCode.NO_ROUTE:
        return _NO_ROUTE_TEXT
    if outcome.code == DexErrorCode.NO_LIQUIDITY:
        return _NO_LIQUIDITY_TEXT
    if outcome.code in (DexErrorCode.AMOUNT_TOO_SMALL, DexErrorCode.INSUFFICIENT_BALANCE):
        return f"Trade failed: {outcome.message}"
    if outcome.code == DexErrorCode.EXECUTION_ERROR:
        return f"Trade failed during execution: {outcome.message}"
    return f"Trade failed with an unknown error: {outcome.message}"


def format_outcome(outcome: TradeOutcome) -> str:
    if isinstance(outcome, TradeSuccess):
        return format_success(outcome)
    return format_failure(outcome)

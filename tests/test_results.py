from dex_trader.errors import DexError, DexErrorCode
from dex_trader.trading.results import classify_exception, format_outcome
from dex_trader.types import TradeFailure, TradeSuccess


def test_success_template() -> None:
    outcome = TradeSuccess(
        tx_hash="0xabc",
        amount="0.1",
        from_symbol="ETH",
        to_symbol="WBTC",
        expected_output="0.0042",
    )
    assert format_outcome(outcome) == (
        "Successfully traded 0.1 ETH for approximately 0.0042 WBTC.\nTransaction hash: 0xabc"
    )


def test_failure_templates_per_code() -> None:
    def fmt(code: DexErrorCode, message: str = "detail") -> str:
        return format_outcome(TradeFailure(code=code, message=message))

    assert fmt(DexErrorCode.NO_ROUTE).startswith("Trade failed: No valid trading route found.")
    assert fmt(DexErrorCode.NO_LIQUIDITY) == (
        "Trade failed: The pool exists but has insufficient liquidity for this trade."
    )
    assert fmt(DexErrorCode.AMOUNT_TOO_SMALL, "Quote too small (0)") == (
        "Trade failed: Quote too small (0)"
    )
    assert fmt(DexErrorCode.INSUFFICIENT_BALANCE) == "Trade failed: detail"
    assert fmt(DexErrorCode.EXECUTION_ERROR) == "Trade failed during execution: detail"
    assert fmt(DexErrorCode.UNKNOWN) == "Trade failed with an unknown error: detail"


def test_classify_exception() -> None:
    typed = classify_exception(DexError("no pool", code=DexErrorCode.NO_ROUTE))
    untyped = classify_exception(ValueError("bad"))

    assert typed == TradeFailure(code=DexErrorCode.NO_ROUTE, message="no pool")
    assert untyped == TradeFailure(code=None, message="bad")
    assert format_outcome(untyped) == "Unexpected error during trade: bad"

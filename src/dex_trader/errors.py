from __future__ import annotations

from enum import StrEnum


class DexErrorCode(StrEnum):
    NO_ROUTE = "NO_ROUTE"
    NO_LIQUIDITY = "NO_LIQUIDITY"
    AMOUNT_TOO_SMALL = "AMOUNT_TOO_SMALL"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    UNKNOWN = "UNKNOWN"


class DexError(RuntimeError):
    """A trade failure tagged with one of the closed `DexErrorCode` values."""

    def __init__(
        self,
        message: str,
        *,
        code: DexErrorCode,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause

    def __repr__(self) -> str:
        return f"DexError(code={self.code.value}, message={self.message!r})"

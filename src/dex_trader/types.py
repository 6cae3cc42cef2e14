from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Literal

from dex_trader.errors import DexErrorCode


class TradeType(StrEnum):
    EXACT_INPUT = "EXACT_INPUT"
    EXACT_OUTPUT = "EXACT_OUTPUT"


class TradeStage(StrEnum):
    START = "start"
    RESOLVING = "resolving"
    PLANNING = "planning"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TokenRef:
    address: str
    ticker: str | None = None


@dataclass(frozen=True)
class TradeRequest:
    amount: str
    from_token: TokenRef
    to_token: TokenRef


@dataclass(frozen=True)
class TokenDescriptor:
    chain_id: int
    address: str
    decimals: int
    symbol: str


@dataclass(frozen=True)
class PoolHop:
    protocol: str
    address: str
    liquidity: int
    # Fee tier in hundredths of a basis point (3000 == 0.3%).
    fee: int
    token_in: str = ""
    token_out: str = ""

    @property
    def fee_pct(self) -> Decimal:
        return Decimal(self.fee) / Decimal(10_000)


@dataclass(frozen=True)
class SwapOptions:
    recipient: str
    slippage_tolerance: Decimal
    deadline: int
    swap_type: str
    router_version: str
    protocols: tuple[str, ...] = ("V3",)


@dataclass(frozen=True)
class RouteQuote:
    token_in: TokenDescriptor
    token_out: TokenDescriptor
    amount_in_raw: int
    route: tuple[PoolHop, ...]
    expected_output_raw: str
    calldata: str | None
    execution_value: int
    deadline: int


@dataclass(frozen=True)
class ExecutionResult:
    tx_hash: str
    status: Literal["success", "reverted"]


@dataclass(frozen=True)
class TradeSuccess:
    tx_hash: str
    amount: str
    from_symbol: str
    to_symbol: str
    expected_output: str


@dataclass(frozen=True)
class TradeFailure:
    code: DexErrorCode | None
    message: str


TradeOutcome = TradeSuccess | TradeFailure

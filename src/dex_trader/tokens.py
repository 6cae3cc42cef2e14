from __future__ import annotations

import logging
import re

from dex_trader.errors import DexError, DexErrorCode
from dex_trader.types import TokenDescriptor
from dex_trader.wallet.base import ERC20_METADATA_ABI, WalletProvider

logger = logging.getLogger("dex_trader.tokens")

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_address(address: str) -> str:
    normalized = address.strip().lower()
    if not _ADDRESS_RE.match(normalized):
        raise DexError(f"Invalid token address provided: {address!r}", code=DexErrorCode.UNKNOWN)
    return normalized


def fallback_symbol(address: str) -> str:
    # First six hex digits after the 0x prefix.
    return f"TKN-{address[2:8].upper()}"


async def resolve_token(
    wallet: WalletProvider,
    address: str,
    hint_symbol: str | None = None,
    *,
    chain_id: int,
) -> TokenDescriptor:
    normalized = normalize_address(address)

    try:
        raw_decimals = await wallet.read_contract(normalized, ERC20_METADATA_ABI, "decimals")
        decimals = int(raw_decimals)
    except Exception as e:
        raise DexError(
            f"Failed to read decimals for token {normalized}: {e}",
            code=DexErrorCode.UNKNOWN,
            cause=e,
        ) from e
    if decimals < 0:
        raise DexError(
            f"Token {normalized} reported invalid decimals: {decimals}",
            code=DexErrorCode.UNKNOWN,
        )

    symbol = (hint_symbol or "").strip()
    if not symbol:
        try:
            symbol = str(await wallet.read_contract(normalized, ERC20_METADATA_ABI, "symbol"))
        except Exception:
            logger.warning("symbol_read_failed", extra={"token": normalized})
            symbol = ""
        symbol = symbol.strip() or fallback_symbol(normalized)

    return TokenDescriptor(
        chain_id=chain_id,
        address=normalized,
        decimals=decimals,
        symbol=symbol,
    )

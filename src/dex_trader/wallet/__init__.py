__all__ = ["ERC20_METADATA_ABI", "TransactionRequest", "WalletProvider", "Web3Wallet"]

from dex_trader.wallet.base import ERC20_METADATA_ABI, TransactionRequest, WalletProvider
from dex_trader.wallet.web3_wallet import Web3Wallet

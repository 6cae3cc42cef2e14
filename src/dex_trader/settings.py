from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dex_trader.networks import Network, get_network


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Chain
    network_name: str = Field(default="base_sepolia", validation_alias="NETWORK")
    rpc_url: str = Field(default="", validation_alias="RPC_URL")

    # Routing
    routing_api_url: str = Field(default="", validation_alias="ROUTING_API_URL")
    routing_api_key: str = Field(default="", validation_alias="ROUTING_API_KEY")
    routing_timeout_seconds: float = Field(default=30.0, validation_alias="ROUTING_TIMEOUT_SECONDS")

    # Wallet
    wallet_private_key: str = Field(default="", validation_alias="WALLET_PRIVATE_KEY")
    trading_mode: Literal["dry_run", "live"] = Field(
        default="dry_run",
        validation_alias="TRADING_MODE",
    )
    confirm_live_trading: str = Field(default="", validation_alias="CONFIRM_LIVE_TRADING")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def live_trading_enabled(self) -> bool:
        return self.trading_mode == "live" and self.confirm_live_trading.strip().upper() == "YES"

    def network(self) -> Network:
        return get_network(self.network_name).with_overrides(
            rpc_url=self.rpc_url.strip() or None,
            routing_api_url=self.routing_api_url.strip() or None,
        )

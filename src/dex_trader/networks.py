from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Network:
    name: str
    chain_id: int
    rpc_url: str
    universal_router: str
    wrapped_native: str
    routing_api_url: str = "https://api.uniswap.org/v2"

    def is_wrapped_native(self, address: str) -> bool:
        return address.lower() == self.wrapped_native.lower()

    def with_overrides(
        self,
        *,
        rpc_url: str | None = None,
        routing_api_url: str | None = None,
    ) -> Network:
        return replace(
            self,
            rpc_url=rpc_url or self.rpc_url,
            routing_api_url=routing_api_url or self.routing_api_url,
        )


BASE_SEPOLIA = Network(
    name="base_sepolia",
    chain_id=84532,
    rpc_url="https://sepolia.base.org",
    universal_router="0x050E797f3625EC8785265e1d9BDd4799b97528A1",
    wrapped_native="0x4200000000000000000000000000000000000006",
)

NETWORKS: dict[str, Network] = {BASE_SEPOLIA.name: BASE_SEPOLIA}


def get_network(name: str) -> Network:
    try:
        return NETWORKS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown network: {name!r}") from None

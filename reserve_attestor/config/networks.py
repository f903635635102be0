"""
Chains the attestor can read balances from and write reports to.

Each entry carries the EIP-155 chain id used to sign the write transaction
and the oracle-network chain selector reported in the run log.
"""

from typing import Dict, TypedDict

from ..errors import ConfigError


class NetworkConfig(TypedDict):
    name: str
    chain_id: int
    chain_selector: int


SUPPORTED_NETWORKS: Dict[str, NetworkConfig] = {
    "ethereum-mainnet": {"name": "Ethereum", "chain_id": 1, "chain_selector": 5009297550715157269},
    "ethereum-testnet-sepolia": {"name": "Ethereum Sepolia", "chain_id": 11155111, "chain_selector": 16015286601757825753},
    "ethereum-testnet-sepolia-base-1": {"name": "Base Sepolia", "chain_id": 84532, "chain_selector": 10344971235874465080},
    "ethereum-testnet-sepolia-arbitrum-1": {"name": "Arbitrum Sepolia", "chain_id": 421614, "chain_selector": 3478487238524512106},
}

DEFAULT_NETWORK = "ethereum-testnet-sepolia"


def get_network_config(chain_name: str) -> NetworkConfig:
    """Look up a chain by name. Raises ConfigError naming POR_CHAIN_NAME if unknown."""
    try:
        return SUPPORTED_NETWORKS[chain_name]
    except KeyError:
        raise ConfigError(
            "POR_CHAIN_NAME",
            f"unsupported chain {chain_name!r}, expected one of {sorted(SUPPORTED_NETWORKS)}",
        ) from None

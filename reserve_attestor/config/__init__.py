"""Configuration module for the reserve attestor."""

from .networks import (
    SUPPORTED_NETWORKS,
    DEFAULT_NETWORK,
    NetworkConfig,
    get_network_config,
)
from .settings import (
    REQUIRED_FIELDS,
    DEFAULT_GAS_LIMIT,
    RunConfig,
    RuntimeSettings,
    validate_config,
)

__all__ = [
    "SUPPORTED_NETWORKS",
    "DEFAULT_NETWORK",
    "NetworkConfig",
    "get_network_config",
    "REQUIRED_FIELDS",
    "DEFAULT_GAS_LIMIT",
    "RunConfig",
    "RuntimeSettings",
    "validate_config",
]

"""
Run configuration and collaborator settings.

RunConfig holds the seven values a Proof-of-Reserve run needs. It is
supplied by the scheduler on every trigger (from a JSON file or the
environment) and is read-only for the duration of a run. RuntimeSettings
holds everything the chain, HTTP and signing collaborators need.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ConfigError
from .networks import DEFAULT_NETWORK, NetworkConfig, get_network_config

# Checked in this order; the first violation is reported.
REQUIRED_FIELDS: Tuple[str, ...] = (
    "schedule",
    "url",
    "balance_reader_address",
    "address_one",
    "address_two",
    "data_feeds_cache_address",
    "feed_id",
)

ENV_PREFIX = "POR_"

DEFAULT_GAS_LIMIT = 5_000_000


class RunConfig(BaseModel):
    """Per-invocation workflow configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    schedule: Optional[str] = None
    url: Optional[str] = None
    balance_reader_address: Optional[str] = None
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    data_feeds_cache_address: Optional[str] = None
    feed_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Read POR_SCHEDULE, POR_URL, ... from the environment."""
        return cls(**{name: os.getenv(ENV_PREFIX + name.upper()) for name in REQUIRED_FIELDS})

    @classmethod
    def from_file(cls, path: str) -> "RunConfig":
        """
        Load a JSON config file, falling back to the environment for any
        field the file leaves out.
        """
        try:
            with open(Path(path)) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError("config", f"failed to load config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("config", f"config file {path} must contain a JSON object")

        env = cls.from_env()
        merged = {name: data[name] if name in data else getattr(env, name) for name in REQUIRED_FIELDS}
        try:
            return cls(**merged)
        except ValidationError as e:
            name = str(e.errors()[0]["loc"][0])
            raise ConfigError(name, f"config value '{name}' must be a string") from e


def validate_config(config: RunConfig) -> RunConfig:
    """
    Check every required field is present and non-blank.

    Raises:
        ConfigError naming the first offending field
    """
    for name in REQUIRED_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, str) or value.strip() == "":
            print(f"[CONFIG] ✗ config value '{name}' cannot be empty")
            raise ConfigError(name)

    print("[CONFIG] ✓ Config is valid")
    return config


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(name, f"{name} must be an integer, got {raw!r}") from e


@dataclass
class RuntimeSettings:
    """Settings for the chain, HTTP and signing collaborators."""
    rpc_url: Optional[str] = None
    private_key: Optional[str] = None
    signer_keys: List[str] = field(default_factory=list)
    chain_name: str = DEFAULT_NETWORK
    gas_limit: int = DEFAULT_GAS_LIMIT
    node_count: int = 1
    http_timeout: int = 30
    receipt_timeout: int = 120

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        signer_keys = [k.strip() for k in os.getenv("POR_SIGNER_KEYS", "").split(",") if k.strip()]
        chain_name = os.getenv("POR_CHAIN_NAME") or DEFAULT_NETWORK
        get_network_config(chain_name)

        settings = cls(
            rpc_url=os.getenv("POR_RPC_URL"),
            private_key=os.getenv("PRIVATE_KEY"),
            signer_keys=signer_keys,
            chain_name=chain_name,
            gas_limit=_int_env("POR_GAS_LIMIT", DEFAULT_GAS_LIMIT),
            node_count=_int_env("POR_NODE_COUNT", 1),
            http_timeout=_int_env("POR_HTTP_TIMEOUT", 30),
            receipt_timeout=_int_env("POR_RECEIPT_TIMEOUT", 120),
        )
        if settings.node_count < 1:
            raise ConfigError("POR_NODE_COUNT", "POR_NODE_COUNT must be at least 1")
        return settings

    @property
    def network(self) -> NetworkConfig:
        return get_network_config(self.chain_name)

    def report_signer_keys(self) -> List[str]:
        """Keys that sign reports: the explicit signer set, else the sender key."""
        if self.signer_keys:
            return list(self.signer_keys)
        return [self.private_key] if self.private_key else []

    def describe(self) -> Dict[str, object]:
        """Printable view without secrets."""
        return {
            "rpc_url": self.rpc_url,
            "chain_name": self.chain_name,
            "gas_limit": self.gas_limit,
            "node_count": self.node_count,
            "signers": len(self.report_signer_keys()),
        }

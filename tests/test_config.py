"""
Test run configuration loading and validation.

This verifies that:
1. Every required field is checked, in order, and blank values are rejected
2. The error names the offending field
3. JSON files and POR_* environment variables both produce a RunConfig
"""

import json

import pytest
from pydantic import ValidationError

from reserve_attestor.config import REQUIRED_FIELDS, RunConfig, RuntimeSettings, validate_config
from reserve_attestor.errors import ConfigError


def test_valid_config_passes(run_config, capsys):
    assert validate_config(run_config) is run_config
    assert "Config is valid" in capsys.readouterr().out


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_missing_or_blank_field_is_named(run_config, field, value, capsys):
    config = run_config.model_copy(update={field: value})

    with pytest.raises(ConfigError) as exc_info:
        validate_config(config)

    assert exc_info.value.field == field
    assert f"'{field}'" in str(exc_info.value)
    assert field in capsys.readouterr().out


def test_first_violation_wins(run_config):
    config = run_config.model_copy(update={"url": "", "feed_id": ""})

    with pytest.raises(ConfigError) as exc_info:
        validate_config(config)

    assert exc_info.value.field == "url"


def test_config_is_immutable(run_config):
    with pytest.raises(ValidationError):
        run_config.url = "https://other.example"


def test_from_env(monkeypatch, run_config):
    for name in REQUIRED_FIELDS:
        monkeypatch.setenv(f"POR_{name.upper()}", getattr(run_config, name))

    assert RunConfig.from_env() == run_config


def test_from_file_falls_back_to_env(tmp_path, monkeypatch, run_config):
    data = run_config.model_dump()
    feed_id = data.pop("feed_id")
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    monkeypatch.setenv("POR_FEED_ID", feed_id)

    assert RunConfig.from_file(str(path)) == run_config


def test_blank_value_in_file_is_not_replaced_by_env(tmp_path, monkeypatch, run_config, capsys):
    data = run_config.model_dump()
    data["feed_id"] = ""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    monkeypatch.setenv("POR_FEED_ID", run_config.feed_id)

    config = RunConfig.from_file(str(path))

    assert config.feed_id == ""
    with pytest.raises(ConfigError) as exc_info:
        validate_config(config)
    assert exc_info.value.field == "feed_id"
    assert "'feed_id'" in capsys.readouterr().out


def test_from_file_rejects_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        RunConfig.from_file(str(path))


def test_from_file_rejects_non_string_value(tmp_path, run_config):
    data = run_config.model_dump()
    data["address_one"] = 1234
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))

    with pytest.raises(ConfigError) as exc_info:
        RunConfig.from_file(str(path))
    assert exc_info.value.field == "address_one"


def test_runtime_settings_defaults(monkeypatch):
    for name in ("POR_RPC_URL", "PRIVATE_KEY", "POR_SIGNER_KEYS", "POR_CHAIN_NAME",
                 "POR_GAS_LIMIT", "POR_NODE_COUNT", "POR_HTTP_TIMEOUT", "POR_RECEIPT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = RuntimeSettings.from_env()

    assert settings.chain_name == "ethereum-testnet-sepolia"
    assert settings.gas_limit == 5_000_000
    assert settings.node_count == 1
    assert settings.network["chain_selector"] == 16015286601757825753
    assert settings.report_signer_keys() == []


def test_runtime_settings_from_env(monkeypatch):
    monkeypatch.setenv("POR_RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("PRIVATE_KEY", "0xabc")
    monkeypatch.setenv("POR_SIGNER_KEYS", "0x01, 0x02,")
    monkeypatch.setenv("POR_CHAIN_NAME", "ethereum-testnet-sepolia-base-1")
    monkeypatch.setenv("POR_NODE_COUNT", "4")

    settings = RuntimeSettings.from_env()

    assert settings.rpc_url == "http://localhost:8545"
    assert settings.node_count == 4
    assert settings.network["chain_id"] == 84532
    assert settings.report_signer_keys() == ["0x01", "0x02"]
    assert "0xabc" not in str(settings.describe())


def test_runtime_settings_signers_default_to_sender_key(monkeypatch):
    monkeypatch.delenv("POR_SIGNER_KEYS", raising=False)
    monkeypatch.setenv("PRIVATE_KEY", "0xabc")

    assert RuntimeSettings.from_env().report_signer_keys() == ["0xabc"]


@pytest.mark.parametrize("name,value", [
    ("POR_NODE_COUNT", "0"),
    ("POR_GAS_LIMIT", "lots"),
    ("POR_CHAIN_NAME", "not-a-chain"),
])
def test_runtime_settings_rejects_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError) as exc_info:
        RuntimeSettings.from_env()
    assert exc_info.value.field == name

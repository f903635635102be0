"""Shared fixtures for the reserve attestor tests."""

import json
from unittest.mock import Mock

import pytest

from reserve_attestor.config import RunConfig

# Well-known anvil/hardhat development keys; never hold real funds.
SIGNER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SECOND_SIGNER_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"

FEED_ID = "0x018e16c39e000320000000000000000000000000000000000000000000000000"


@pytest.fixture
def run_config() -> RunConfig:
    return RunConfig(
        schedule="0 */6 * * *",
        url="https://por.example/reserve",
        balance_reader_address="0x4b0739c94c1389b55481cb7506c62430ca7211cf",
        address_one="0x1111111111111111111111111111111111111111",
        address_two="0x2222222222222222222222222222222222222222",
        data_feeds_cache_address="0xcafecafecafecafecafecafecafecafecafecafe",
        feed_id=FEED_ID,
    )


def por_body(total_token=100.0, ripcord=False, updated_at="2024-01-01T00:00:00Z", **overrides) -> bytes:
    body = {
        "accountName": "TrueUSD",
        "totalTrust": 1000000.0,
        "totalToken": total_token,
        "ripcord": ripcord,
        "updatedAt": updated_at,
    }
    body.update(overrides)
    return json.dumps(body).encode()


def http_response(body: bytes, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.content = body
    return response


def session_returning(response: Mock) -> Mock:
    session = Mock()
    session.get.return_value = response
    return session

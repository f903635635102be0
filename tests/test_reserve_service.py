"""
Test off-chain reserve fetching and response validation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from conftest import FEED_ID, http_response, por_body, session_returning
from reserve_attestor.errors import HTTPStatusError, MalformedResponseError, RipcordTripped
from reserve_attestor.services.reserve_service import fetch_reserve_observation, parse_por_response

URL = "https://por.example/reserve"


def test_observation_from_valid_response():
    session = session_returning(http_response(por_body(total_token=100.25)))

    observation = fetch_reserve_observation(session, URL, feed_id=FEED_ID, timeout=5)

    assert observation.total_reserve == Decimal("100.25")
    assert observation.last_updated == datetime(2024, 1, 1, tzinfo=timezone.utc)
    session.get.assert_called_once_with(URL, timeout=5)


def test_integer_reserve_is_accepted():
    por = parse_por_response(por_body(total_token=100), URL)
    assert por.total_token == Decimal(100)


def test_non_200_status():
    session = session_returning(http_response(b"", status_code=503))

    with pytest.raises(HTTPStatusError) as exc_info:
        fetch_reserve_observation(session, URL)
    assert exc_info.value.status_code == 503


def test_transport_failure():
    session = Mock()
    session.get.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(HTTPStatusError) as exc_info:
        fetch_reserve_observation(session, URL)
    assert exc_info.value.status_code is None


def test_ripcord_trips():
    session = session_returning(http_response(por_body(ripcord=True)))

    with pytest.raises(RipcordTripped) as exc_info:
        fetch_reserve_observation(session, URL, feed_id=FEED_ID)
    assert exc_info.value.feed_id == FEED_ID
    assert exc_info.value.account_name == "TrueUSD"


@pytest.mark.parametrize("body", [
    b"not json",
    b"[1, 2, 3]",
    por_body(ripcord="true"),
    por_body(total_token=True),
    por_body(total_token="100.0"),
    por_body(updated_at="not a date"),
    por_body(updated_at="2024-01-01T00:00:00"),
    por_body(updated_at=1704067200),
    por_body(updated_at="1704067200"),
    por_body(total_token=float("nan")),
    por_body(accountName=42),
    b'{"accountName": "x", "totalTrust": 1, "totalToken": 1, "ripcord": false}',
])
def test_malformed_bodies_are_rejected(body):
    session = session_returning(http_response(body))

    with pytest.raises(MalformedResponseError):
        fetch_reserve_observation(session, URL)


def test_ripcord_checked_only_after_schema_validation():
    body = por_body(ripcord=True, updated_at="garbage")
    session = session_returning(http_response(body))

    with pytest.raises(MalformedResponseError):
        fetch_reserve_observation(session, URL)


def test_offset_timestamps_are_normalised_by_instant():
    por = parse_por_response(por_body(updated_at="2024-01-01T02:00:00+02:00"), URL)
    assert por.updated_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

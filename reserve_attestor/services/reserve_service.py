"""
Off-chain reserve evidence, fetched once per participating node.
"""

import json
from decimal import Decimal
from typing import Optional

import requests
from pydantic import ValidationError

from ..errors import HTTPStatusError, MalformedResponseError, RipcordTripped
from ..models import PORResponse, ReserveObservation


def parse_por_response(body: bytes, url: str) -> PORResponse:
    """
    Parse and validate the reserve source's JSON body.

    Numbers are read as Decimal so reserve figures are never rounded
    through float.

    Raises:
        MalformedResponseError
    """
    try:
        data = json.loads(body, parse_float=Decimal)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedResponseError(url, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(url, "expected a JSON object")

    try:
        return PORResponse.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedResponseError(url, f"schema mismatch on {fields}") from e


def fetch_reserve_observation(
    session: requests.Session,
    url: str,
    feed_id: Optional[str] = None,
    timeout: int = 30,
) -> ReserveObservation:
    """
    Fetch one node's reserve observation.

    Args:
        session: HTTP session owned by the calling node
        url: Reserve source URL
        feed_id: Feed the observation is for, reported if the ripcord trips
        timeout: Request timeout in seconds

    Raises:
        HTTPStatusError: transport failure or non-200 status
        MalformedResponseError: body is not the expected JSON document
        RipcordTripped: the source declared an unsafe condition
    """
    try:
        response = session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise HTTPStatusError(None, url, f"failed to await reserve response from {url}: {e}") from e

    if response.status_code != 200:
        raise HTTPStatusError(response.status_code, url)

    por = parse_por_response(response.content, url)
    print(
        f"[RESERVE] Response is account name: {por.account_name}, totalTrust: {por.total_trust}, "
        f"totalToken: {por.total_token}, ripcord: {por.ripcord}, updatedAt: {por.updated_at.isoformat()}"
    )

    if por.ripcord:
        print(f"[RESERVE] ✗ ripcord flag set for feed ID {feed_id}")
        raise RipcordTripped(feed_id, por.account_name)

    return ReserveObservation(last_updated=por.updated_at, total_reserve=por.total_token)

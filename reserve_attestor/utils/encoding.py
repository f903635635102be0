from typing import List, Sequence

from eth_abi import decode, encode
from web3 import Web3

from ..errors import ReportEncodingError
from ..models import ReconciledPrice

# tuple[] (bytes32 FeedID, uint32 Timestamp, uint224 Price)
REPORT_TYPE = "(bytes32,uint32,uint224)[]"

MAX_UINT32 = 2**32 - 1
MAX_UINT224 = 2**224 - 1

GET_NATIVE_BALANCES_SIGNATURE = "getNativeBalances(address[])"


def feed_id_to_bytes(feed_id: str) -> bytes:
    """
    Convert a 0x-prefixed hex feed id to a 32-byte value.

    Shorter ids are right-padded with zeros, the way bytes32 values are laid
    out in their slot.

    Raises:
        ReportEncodingError if the id is not hex or is longer than 32 bytes
    """
    if not feed_id or len(feed_id) < 2:
        raise ReportEncodingError(f"feedID string too short: {feed_id!r}")

    try:
        raw = bytes.fromhex(feed_id[2:] if feed_id[:2].lower() == "0x" else feed_id)
    except ValueError as e:
        raise ReportEncodingError(f"feedID is not valid hex: {feed_id!r}") from e

    if len(raw) > 32:
        raise ReportEncodingError(f"feedID longer than 32 bytes: {feed_id!r}")

    return raw.ljust(32, b"\x00")


def encode_reports(reports: Sequence[ReconciledPrice]) -> bytes:
    """
    ABI-encode reports as a tuple array of (bytes32, uint32, uint224).

    Out-of-range values raise instead of being truncated.

    Raises:
        ReportEncodingError
    """
    rows = []
    for report in reports:
        if len(report.feed_id) != 32:
            raise ReportEncodingError(f"feedID must be 32 bytes, got {len(report.feed_id)}")
        if not 0 <= report.timestamp <= MAX_UINT32:
            raise ReportEncodingError(f"timestamp {report.timestamp} does not fit in uint32")
        if not 0 <= report.price <= MAX_UINT224:
            raise ReportEncodingError(f"price {report.price} does not fit in uint224")
        rows.append((report.feed_id, report.timestamp, report.price))

    return encode([REPORT_TYPE], [rows])


def get_native_balances_calldata(addresses: Sequence[str]) -> bytes:
    """Build call data for BalanceReader.getNativeBalances(address[])."""
    selector = Web3.keccak(text=GET_NATIVE_BALANCES_SIGNATURE)[:4]
    checksummed = [Web3.to_checksum_address(a) for a in addresses]
    return bytes(selector) + encode(["address[]"], [checksummed])


def decode_native_balances(data: bytes) -> List[int]:
    """Decode the uint256[] returned by getNativeBalances."""
    (balances,) = decode(["uint256[]"], data)
    return list(balances)


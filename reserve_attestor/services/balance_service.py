"""
On-chain balance evidence.

Two independent views: a direct balance query for one address and a
BalanceReader contract read for the other, pinned to the last finalized
block so the value is reproducible by anyone re-querying later.
"""

from typing import List, Sequence

from eth_abi.exceptions import DecodingError

from ..config.settings import RunConfig
from ..errors import ChainQueryError, EmptyResultError
from ..models import BalanceEvidence
from ..utils.encoding import decode_native_balances, get_native_balances_calldata
from ..utils.web3_utils import LAST_FINALIZED_BLOCK, BlockIdentifier, EVMClient


def read_direct_balance(client: EVMClient, address: str) -> int:
    """Native balance of `address` at the chain's current view."""
    balance = client.balance_at(address)
    print(f"[BALANCE] Got on-chain balance with balance_at() for address {address}: {balance}")
    return balance


def read_native_balances(
    client: EVMClient,
    balance_reader_address: str,
    addresses: Sequence[str],
    block_identifier: BlockIdentifier = LAST_FINALIZED_BLOCK,
) -> List[int]:
    """
    Call BalanceReader.getNativeBalances(addresses).

    Raises:
        ChainQueryError if the call fails or the result cannot be decoded
        EmptyResultError if the contract returned no balances
    """
    try:
        calldata = get_native_balances_calldata(addresses)
    except ValueError as e:
        raise ChainQueryError(f"invalid address in {list(addresses)}: {e}", ", ".join(addresses)) from e

    raw = client.call_contract(balance_reader_address, calldata, block_identifier)
    print(f"[BALANCE] Got raw call_contract output: 0x{raw.hex()}")

    try:
        balances = decode_native_balances(raw)
    except DecodingError as e:
        raise ChainQueryError(
            f"failed to decode getNativeBalances output from {balance_reader_address}: {e}",
            balance_reader_address,
        ) from e

    if not balances:
        raise EmptyResultError(", ".join(addresses))
    return balances


def collect_balance_evidence(client: EVMClient, config: RunConfig) -> BalanceEvidence:
    """Gather both balance views for one run."""
    balance_one = read_direct_balance(client, config.address_one)

    # One address per call; only index 0 is consumed.
    balances = read_native_balances(client, config.balance_reader_address, [config.address_two])
    balance_two = balances[0]
    print(f"[BALANCE] Read on-chain balance (contract) from {config.address_two} value: {balance_two}")

    evidence = BalanceEvidence(
        address_one=config.address_one,
        balance_one=balance_one,
        address_two=config.address_two,
        balance_two=balance_two,
    )
    print(f"[BALANCE] ✓ Total on-chain balance for addresses: {evidence.total}")
    return evidence

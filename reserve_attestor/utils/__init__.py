"""Encoding, chain client and scheduling helpers."""
from .encoding import (
    REPORT_TYPE,
    MAX_UINT32,
    MAX_UINT224,
    feed_id_to_bytes,
    encode_reports,
    get_native_balances_calldata,
    decode_native_balances,
)
from .web3_utils import EVMClient, LAST_FINALIZED_BLOCK, encode_on_report_call

__all__ = [
    'REPORT_TYPE',
    'MAX_UINT32',
    'MAX_UINT224',
    'feed_id_to_bytes',
    'encode_reports',
    'get_native_balances_calldata',
    'decode_native_balances',
    'EVMClient',
    'LAST_FINALIZED_BLOCK',
    'encode_on_report_call',
]

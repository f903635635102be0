"""Evidence collection, reconciliation and submission services."""
from .balance_service import collect_balance_evidence, read_direct_balance, read_native_balances
from .reserve_service import fetch_reserve_observation, parse_por_response
from .consensus import RESERVE_AGGREGATION, NodeModeRunner, aggregate_by_fields, median
from .signer import ReportSigner
from .submitter import submit_report

__all__ = [
    'collect_balance_evidence',
    'read_direct_balance',
    'read_native_balances',
    'fetch_reserve_observation',
    'parse_por_response',
    'RESERVE_AGGREGATION',
    'NodeModeRunner',
    'aggregate_by_fields',
    'median',
    'ReportSigner',
    'submit_report',
]

"""
Reserve Attestor

Scheduled Proof-of-Reserve workflow. On every cron trigger:
1. Validates the run configuration
2. Collects on-chain balance evidence (direct query + finalized contract read)
3. Fetches the off-chain reserve on every node and reconciles it by median
4. Encodes, signs and writes the report to the receiver contract

Usage:
    reserve-attestor --once           # Run one attestation now
    reserve-attestor --validate       # Check configuration only
    reserve-attestor                  # Run on the configured cron schedule
"""

from .config import RunConfig, RuntimeSettings, validate_config
from .errors import (
    AttestationError,
    ConfigError,
    ChainQueryError,
    EmptyResultError,
    HTTPStatusError,
    MalformedResponseError,
    RipcordTripped,
    ReportEncodingError,
    ReportSigningError,
    SubmissionFailedError,
)
from .workflow import WorkflowRuntime, build_runtime, on_trigger

__version__ = "0.1.0"
__all__ = [
    "RunConfig",
    "RuntimeSettings",
    "validate_config",
    "AttestationError",
    "ConfigError",
    "ChainQueryError",
    "EmptyResultError",
    "HTTPStatusError",
    "MalformedResponseError",
    "RipcordTripped",
    "ReportEncodingError",
    "ReportSigningError",
    "SubmissionFailedError",
    "WorkflowRuntime",
    "build_runtime",
    "on_trigger",
]

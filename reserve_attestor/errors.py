"""
Error taxonomy for the Proof-of-Reserve workflow.

Every error here is fatal for the current run. The scheduler's next trigger
is the only retry.
"""

from typing import Any, Dict, Optional


class AttestationError(Exception):
    """Base error for a failed attestation run."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(AttestationError):
    """A required configuration value is missing or blank."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"config value '{field}' cannot be empty",
            {"field": field},
        )
        self.field = field


class ChainQueryError(AttestationError):
    """An on-chain read failed."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message, {"address": address})
        self.address = address


class EmptyResultError(ChainQueryError):
    """A contract read decoded to an empty list."""

    def __init__(self, address: Optional[str] = None):
        super().__init__(f"No balances returned from contract for {address}", address)


class HTTPStatusError(AttestationError):
    """The off-chain source answered with a non-200 status, or not at all."""

    def __init__(self, status_code: Optional[int], url: str, message: Optional[str] = None):
        super().__init__(
            message or f"HTTP request failed with status: {status_code}",
            {"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class MalformedResponseError(AttestationError):
    """The off-chain body is not JSON or does not match the reserve schema."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Malformed reserve response from {url}: {reason}", {"url": url})
        self.url = url
        self.reason = reason


class RipcordTripped(AttestationError):
    """The off-chain source declared an unsafe condition. No report is published."""

    def __init__(self, feed_id: Optional[str] = None, account_name: Optional[str] = None):
        super().__init__(
            f"ripcord flag set for feed ID {feed_id}",
            {"feed_id": feed_id, "account_name": account_name},
        )
        self.feed_id = feed_id
        self.account_name = account_name


class ReportEncodingError(AttestationError):
    """A report field does not fit the on-chain tuple layout."""


class ReportSigningError(AttestationError):
    """The report could not be signed."""


class SubmissionFailedError(AttestationError):
    """The write transaction did not report success."""

    def __init__(self, tx_status: str, error_message: Optional[str] = None, tx_hash: Optional[bytes] = None):
        reason = error_message or tx_status
        super().__init__(
            f"Failed to write report: {reason}",
            {"tx_status": tx_status, "error_message": error_message},
        )
        self.tx_status = tx_status
        self.error_message = error_message
        self.tx_hash = tx_hash

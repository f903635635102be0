"""Records that flow through one attestation run."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal, DecimalException, localcontext
from enum import Enum
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from .errors import ReportEncodingError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Reports carry prices as 18-decimal fixed point.
PRICE_DECIMALS = 18


@dataclass(frozen=True)
class BalanceEvidence:
    """Native balances for the two configured addresses."""
    address_one: str
    balance_one: int
    address_two: str
    balance_two: int

    @property
    def total(self) -> int:
        return self.balance_one + self.balance_two


class PORResponse(BaseModel):
    """Body returned by the off-chain reserve source."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    account_name: StrictStr = Field(..., alias="accountName")
    total_trust: Decimal = Field(..., alias="totalTrust")
    total_token: Decimal = Field(..., alias="totalToken")
    ripcord: StrictBool
    updated_at: AwareDatetime = Field(..., alias="updatedAt")

    @field_validator("total_trust", "total_token", mode="before")
    @classmethod
    def _require_number(cls, value):
        # bool is an int subclass and must not pass as a number
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("must be a JSON number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    @field_validator("updated_at", mode="before")
    @classmethod
    def _require_iso_string(cls, value):
        # pydantic would otherwise read numbers and digit strings as unix time
        if not isinstance(value, str):
            raise ValueError("must be an ISO8601 string")
        try:
            float(value)
        except ValueError:
            return value
        raise ValueError("must be an ISO8601 string, not a unix timestamp")


@dataclass(frozen=True)
class ReserveObservation:
    """One node's view of the off-chain reserve."""
    last_updated: datetime
    total_reserve: Decimal


@dataclass(frozen=True)
class ReconciledPrice:
    """The agreed value that goes into the report."""
    feed_id: bytes
    timestamp: int
    price: int

    @classmethod
    def from_reserve(cls, feed_id: bytes, reserve: ReserveObservation) -> "ReconciledPrice":
        """
        Build the report value from a reconciled observation.

        The timestamp is whole seconds since the epoch, floored. The price is
        the reserve scaled by 10^18 and truncated.

        Raises:
            ReportEncodingError if the reserve cannot be scaled to an integer
        """
        timestamp = (reserve.last_updated - EPOCH) // timedelta(seconds=1)
        try:
            with localcontext() as ctx:
                ctx.prec = 100
                price = int(reserve.total_reserve.scaleb(PRICE_DECIMALS))
        except (DecimalException, ValueError, OverflowError) as e:
            raise ReportEncodingError(
                f"reserve {reserve.total_reserve} cannot be scaled to a price",
                {"total_reserve": str(reserve.total_reserve)},
            ) from e
        return cls(feed_id=feed_id, timestamp=timestamp, price=price)


class TxStatus(Enum):
    """Outcome of a report write."""
    SUCCESS = "success"
    REVERTED = "reverted"
    FATAL = "fatal"


@dataclass(frozen=True)
class WriteReportReply:
    """What the chain write boundary hands back."""
    tx_status: TxStatus
    tx_hash: Optional[bytes] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class SignedReport:
    """Signed envelope around an encoded report payload."""
    payload: bytes
    digest: bytes
    signatures: List[bytes] = field(default_factory=list)
    signers: List[str] = field(default_factory=list)
    encoder_name: str = "evm"
    signing_algo: str = "ecdsa"
    hashing_algo: str = "keccak256"


@dataclass(frozen=True)
class SubmissionResult:
    """Terminal artifact of a successful run."""
    tx_hash: bytes
    tx_status: TxStatus = TxStatus.SUCCESS
    error_message: Optional[str] = None

    @property
    def tx_hash_hex(self) -> str:
        return "0x" + self.tx_hash.hex()

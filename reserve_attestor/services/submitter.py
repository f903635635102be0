"""
Report submission: sign the encoded payload, then write it to the receiver.
"""

from ..errors import SubmissionFailedError
from ..models import SubmissionResult, TxStatus
from ..utils.web3_utils import EVMClient
from .signer import ReportSigner


def submit_report(
    client: EVMClient,
    signer: ReportSigner,
    receiver: str,
    encoded_report: bytes,
    gas_limit: int,
) -> SubmissionResult:
    """
    Sign and write one report. No retry happens here.

    Raises:
        ReportSigningError if signing fails
        SubmissionFailedError for any non-success write status
    """
    report = signer.sign(encoded_report, encoder_name="evm", signing_algo="ecdsa", hashing_algo="keccak256")
    print(f"[SUBMIT] Report signed by {len(report.signatures)} signer(s), digest 0x{report.digest.hex()}")

    reply = client.write_report(receiver, report, gas_limit)

    if reply.tx_status != TxStatus.SUCCESS:
        print(f"[SUBMIT] ✗ Failed to write report to {receiver}: {reply.error_message or reply.tx_status.value}")
        raise SubmissionFailedError(reply.tx_status.value, reply.error_message, reply.tx_hash)

    tx_hash = reply.tx_hash or bytes(32)
    result = SubmissionResult(tx_hash=tx_hash)
    print(f"[SUBMIT] ✓ Write report transaction succeeded at txHash: {result.tx_hash_hex}")
    return result

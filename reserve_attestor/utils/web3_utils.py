from typing import Optional, Union

from eth_abi import encode
from eth_account import Account
from web3 import Web3

from ..errors import ChainQueryError
from ..models import SignedReport, TxStatus, WriteReportReply

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# IReceiver.onReport(bytes metadata, bytes report)
ON_REPORT_SIGNATURE = "onReport(bytes,bytes)"

LAST_FINALIZED_BLOCK = "finalized"

BlockIdentifier = Union[str, int]


def encode_on_report_call(report: SignedReport) -> bytes:
    """
    Build call data for the receiver's onReport entry point.

    The metadata argument carries the ABI-encoded signature list so the
    receiver can check the quorum against the report digest.
    """
    selector = Web3.keccak(text=ON_REPORT_SIGNATURE)[:4]
    metadata = encode(["bytes[]"], [list(report.signatures)])
    return bytes(selector) + encode(["bytes", "bytes"], [metadata, report.payload])


class EVMClient:
    """Chain read and write boundary over web3.py."""

    def __init__(
        self,
        w3: Web3,
        chain_id: int,
        chain_selector: Optional[int] = None,
        private_key: Optional[str] = None,
        receipt_timeout: int = 120,
    ):
        """
        Initialize EVM client.

        Args:
            w3: Connected Web3 instance
            chain_id: EIP-155 chain id used when signing transactions
            chain_selector: Oracle-network chain selector, for logging
            private_key: Key of the account that pays for report writes
            receipt_timeout: Seconds to wait for a write receipt
        """
        self.w3 = w3
        self.chain_id = chain_id
        self.chain_selector = chain_selector
        self.receipt_timeout = receipt_timeout
        self._account = None
        if private_key:
            if not private_key.startswith('0x'):
                private_key = '0x' + private_key
            self._account = Account.from_key(private_key)

    @classmethod
    def from_rpc_url(cls, rpc_url: str, **kwargs) -> "EVMClient":
        return cls(Web3(Web3.HTTPProvider(rpc_url)), **kwargs)

    @property
    def sender(self) -> Optional[str]:
        return self._account.address if self._account else None

    def balance_at(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Native balance of an address.

        Raises:
            ChainQueryError on any RPC or address failure
        """
        try:
            return int(self.w3.eth.get_balance(Web3.to_checksum_address(address), block_identifier))
        except Exception as e:
            raise ChainQueryError(f"failed to get on-chain balance for {address}: {e}", address) from e

    def call_contract(
        self,
        to: str,
        data: bytes,
        block_identifier: BlockIdentifier = LAST_FINALIZED_BLOCK,
    ) -> bytes:
        """
        Execute a read-only call, by default against the last finalized block.

        Raises:
            ChainQueryError on any RPC or address failure
        """
        try:
            result = self.w3.eth.call(
                {
                    'from': ZERO_ADDRESS,
                    'to': Web3.to_checksum_address(to),
                    'data': Web3.to_hex(data),
                },
                block_identifier,
            )
        except Exception as e:
            raise ChainQueryError(f"failed to call contract {to}: {e}", to) from e
        return bytes(result)

    def write_report(self, receiver: str, report: SignedReport, gas_limit: int) -> WriteReportReply:
        """
        Submit a signed report to the receiver contract.

        Never raises for transaction failures; the outcome is carried in the
        returned status so the caller decides what a failure means.
        """
        if self._account is None:
            return WriteReportReply(TxStatus.FATAL, error_message="no sender key configured for report writes")

        try:
            account = self._account
            tx = {
                'from': account.address,
                'to': Web3.to_checksum_address(receiver),
                'data': Web3.to_hex(encode_on_report_call(report)),
                'value': 0,
                'nonce': self.w3.eth.get_transaction_count(account.address),
                'gasPrice': self.w3.eth.gas_price,
                'gas': gas_limit,
                'chainId': self.chain_id,
            }

            # Sign the transaction
            signed_tx = account.sign_transaction(tx)

            # Send the transaction
            tx_hash = bytes(self.w3.eth.send_raw_transaction(signed_tx.raw_transaction))

            # Wait for receipt
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except Exception as e:
            return WriteReportReply(TxStatus.FATAL, error_message=str(e))

        if receipt['status'] == 1:
            return WriteReportReply(TxStatus.SUCCESS, tx_hash=tx_hash)
        return WriteReportReply(
            TxStatus.REVERTED,
            tx_hash=tx_hash,
            error_message=f"transaction 0x{tx_hash.hex()} reverted",
        )

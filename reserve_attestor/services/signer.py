from typing import List, Sequence

from eth_account import Account
from web3 import Web3

from ..errors import ReportSigningError
from ..models import SignedReport

SUPPORTED_ENCODERS = ("evm",)
SUPPORTED_SIGNING_ALGOS = ("ecdsa",)
SUPPORTED_HASHING_ALGOS = ("keccak256",)


class ReportSigner:
    """Signs encoded report payloads with every configured key."""

    def __init__(self, private_keys: Sequence[str]):
        """
        Args:
            private_keys: Signer keys (with or without 0x prefix)
        """
        self._accounts = []
        for key in private_keys:
            if not key.startswith('0x'):
                key = '0x' + key
            try:
                self._accounts.append(Account.from_key(key))
            except (ValueError, TypeError) as e:
                raise ReportSigningError(f"invalid signer key: {e}") from e

    @property
    def addresses(self) -> List[str]:
        return [a.address for a in self._accounts]

    def sign(
        self,
        payload: bytes,
        encoder_name: str = "evm",
        signing_algo: str = "ecdsa",
        hashing_algo: str = "keccak256",
    ) -> SignedReport:
        """
        Hash the payload with keccak256 and sign the digest.

        Raises:
            ReportSigningError for unsupported algorithms or no signers
        """
        if encoder_name not in SUPPORTED_ENCODERS:
            raise ReportSigningError(f"unsupported encoder: {encoder_name}")
        if signing_algo not in SUPPORTED_SIGNING_ALGOS:
            raise ReportSigningError(f"unsupported signing algorithm: {signing_algo}")
        if hashing_algo not in SUPPORTED_HASHING_ALGOS:
            raise ReportSigningError(f"unsupported hashing algorithm: {hashing_algo}")
        if not self._accounts:
            raise ReportSigningError("no report signers configured")

        digest = bytes(Web3.keccak(payload))

        # For raw hash, we need to use unsafe_sign_hash
        signatures = [bytes(account.unsafe_sign_hash(digest).signature) for account in self._accounts]

        return SignedReport(
            payload=payload,
            digest=digest,
            signatures=signatures,
            signers=self.addresses,
            encoder_name=encoder_name,
            signing_algo=signing_algo,
            hashing_algo=hashing_algo,
        )

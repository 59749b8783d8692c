"""Request-scoped transaction signer.

The caller's private key arrives with a single swap request and lives only as
long as that request. It is held inside an eth_account ``LocalAccount`` and is
never logged, stored, or echoed back.
"""

from typing import Any, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from swaprelay.errors import Unauthorized


class RequestSigner:
    """Signer for EVM transactions, built from a per-request credential."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @classmethod
    def from_credential(cls, credential: Optional[str]) -> "RequestSigner":
        """Build a signer from a hex private key.

        Raises:
            Unauthorized: If the credential is missing or not a valid key
        """
        if not credential:
            raise Unauthorized("Private key required in Authorization header")

        key = credential.strip()
        if key.lower().startswith("bearer "):
            key = key[7:].strip()

        try:
            account = Account.from_key(key)
        except Exception:
            # The key must not end up in a traceback or error message
            raise Unauthorized("Invalid private key in Authorization header") from None

        return cls(account)

    @property
    def address(self) -> str:
        """Checksummed address of the signer."""
        return self._account.address

    def sign_transaction(self, tx: dict[str, Any]) -> bytes:
        """Sign a fully populated transaction and return the raw bytes."""
        signed = self._account.sign_transaction(tx)
        return signed.raw_transaction

    def __repr__(self) -> str:
        return f"RequestSigner(address={self.address})"

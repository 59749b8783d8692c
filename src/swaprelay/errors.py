"""Error taxonomy for quote and swap requests.

Each exception carries the HTTP status it maps to. The API layer catches
``SwapRelayError`` once and renders ``{"error": message}``.
"""


class SwapRelayError(Exception):
    """Base class for all request-terminating failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(SwapRelayError):
    """Missing or malformed request field."""

    status_code = 400


class Unauthorized(SwapRelayError):
    """Missing or unusable signer credential on the swap path."""

    status_code = 401


class InsufficientBalance(SwapRelayError):
    """Signer holds less of the input token than the requested amount."""

    status_code = 400


class NoLiquidity(SwapRelayError):
    """No configured fee tier produced a quote."""


class DownstreamFailure(SwapRelayError):
    """RPC or contract-call error not otherwise classified."""

    @classmethod
    def from_exception(cls, exc: Exception) -> "DownstreamFailure":
        """Wrap an unexpected error, naming its type when it has no message."""
        return cls(str(exc) or type(exc).__name__)


class TransactionReverted(DownstreamFailure):
    """
    Raised when the tx was sent on-chain, mined, and status == 0.
    Gas was already paid.
    """

    def __init__(self, tx_hash: str, receipt: dict):
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
        self.receipt = receipt

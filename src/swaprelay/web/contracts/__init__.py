"""Request and response contracts for the web layer.

These Pydantic models define the JSON interface (camelCase on the wire).
"""

from swaprelay.web.contracts.quotes import (
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
)
from swaprelay.web.contracts.swaps import (
    SwapRequest,
    SwapResponse,
)

__all__ = [
    "ErrorResponse",
    "QuoteRequest",
    "QuoteResponse",
    "SwapRequest",
    "SwapResponse",
]

"""Web services: one per endpoint, built per request."""

from swaprelay.web.services.quote_service import QuoteService
from swaprelay.web.services.swap_service import SwapService

__all__ = [
    "QuoteService",
    "SwapService",
]

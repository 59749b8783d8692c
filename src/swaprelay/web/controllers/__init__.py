"""HTTP controllers for the quote and swap endpoints."""

from swaprelay.web.controllers.quotes import router as quotes_router
from swaprelay.web.controllers.swaps import router as swaps_router

__all__ = [
    "quotes_router",
    "swaps_router",
]

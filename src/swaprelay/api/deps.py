"""FastAPI dependencies resolving process-wide collaborators from app state."""

from fastapi import Request

from swaprelay.chain import ChainClient
from swaprelay.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Resolve the immutable settings the app was created with."""
    return request.app.state.settings


def get_chain(request: Request) -> ChainClient:
    """
    Resolve the shared chain client from FastAPI app state.
    """
    chain = getattr(request.app.state, "chain", None)
    if chain is None:
        raise RuntimeError("Chain client is not initialized in app.state.chain")
    return chain

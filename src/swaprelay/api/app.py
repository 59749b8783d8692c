"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swaprelay import __version__
from swaprelay.chain import ChainClient
from swaprelay.config import Settings, get_settings
from swaprelay.errors import SwapRelayError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    if getattr(app.state, "chain", None) is None:
        app.state.chain = ChainClient(app.state.settings)
    logger.info(f"Using RPC {app.state.settings.redacted_rpc_url}")
    yield
    # Shutdown
    await app.state.chain.close()


async def handle_swaprelay_error(request: Request, exc: SwapRelayError) -> JSONResponse:
    """Render a pipeline failure as {"error": message}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors with the same shape as everything else."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {details}"})


def create_app(settings: Optional[Settings] = None, chain: Optional[ChainClient] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        chain: Chain client to use (defaults to one built from settings at startup)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="SwapRelay API",
        description="Uniswap V3 single-hop quote and swap service",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.chain = chain

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SwapRelayError, handle_swaprelay_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Register routes
    from swaprelay.api.routes import health
    from swaprelay.web.controllers import quotes_router, swaps_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(quotes_router)
    app.include_router(swaps_router)

    return app

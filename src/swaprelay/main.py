"""Main entry point - runs the API server."""

import logging

import uvicorn
from dotenv import load_dotenv

from swaprelay.api.app import create_app
from swaprelay.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    load_dotenv()
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting SwapRelay...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Fee tiers: {list(settings.fee_tiers)}, approval policy: {settings.approval_policy}")

    app = create_app(settings)
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()

"""Main entry point - runs the API against the configured wallet."""

import logging

import uvicorn

from tokenfactory.api.app import create_app
from tokenfactory.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting TokenFactory client...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Contract: {settings.contract_address} on chain {settings.chain_id}")

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()

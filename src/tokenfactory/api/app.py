"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tokenfactory.chain.session import WalletSession
from tokenfactory.config import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Connects the wallet session unless one was supplied. A wallet that is
    unreachable or authorizes no account aborts startup.
    """
    created = app.state.session is None
    if created:
        app.state.session = await WalletSession.connect(app.state.settings)
    try:
        yield
    finally:
        if created:
            await app.state.session.close()
            app.state.session = None


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[WalletSession] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
        session: Already connected wallet session; connected at startup if None
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="TokenFactory Client",
        description="Create token requests, pool funds and swap tokens through a wallet",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.session = session

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from tokenfactory.api.routes import health
    from tokenfactory.web.controllers import (
        actions_router,
        session_router,
        transactions_router,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(session_router)
    app.include_router(actions_router)
    app.include_router(transactions_router)

    return app

"""FastAPI dependencies shared by the controllers."""

from fastapi import Depends, HTTPException, Request

from tokenfactory.chain.session import WalletSession
from tokenfactory.config import Settings, get_settings
from tokenfactory.web.services.submitter import TransactionSubmitter
from tokenfactory.web.services.transaction_builder import TransactionBuilder


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_session(request: Request) -> WalletSession:
    """Wallet session established by the application lifespan."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Wallet session not connected")
    return session


def get_builder(
    session: WalletSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> TransactionBuilder:
    return TransactionBuilder(session, settings.deposit_ratio)


def get_submitter(
    session: WalletSession = Depends(get_session),
    builder: TransactionBuilder = Depends(get_builder),
    settings: Settings = Depends(get_app_settings),
) -> TransactionSubmitter:
    return TransactionSubmitter(
        session,
        builder,
        receipt_timeout=settings.receipt_timeout,
        poll_latency=settings.receipt_poll_latency,
    )

"""Health check endpoints."""

from fastapi import APIRouter, Request

from tokenfactory.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "tokenfactory"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration and wallet info."""
    settings = getattr(request.app.state, "settings", None) or get_settings()
    session = getattr(request.app.state, "session", None)
    return {
        "status": "healthy",
        "service": "tokenfactory",
        "version": "0.1.0",
        "config": settings.get_safe_dict(),
        "wallet": {
            "connected": session is not None,
            "sender": session.sender if session else None,
        },
    }

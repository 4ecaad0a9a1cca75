"""HTTP controllers for web API endpoints."""

from tokenfactory.web.controllers.actions import router as actions_router
from tokenfactory.web.controllers.session import router as session_router
from tokenfactory.web.controllers.transactions import router as transactions_router

__all__ = [
    "actions_router",
    "session_router",
    "transactions_router",
]

"""HTTP boundary for the three TokenFactory actions.

contracts/   request and response models
services/    transaction building and submission
controllers/ FastAPI routers
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]

"""Request and response contracts for the web layer."""

from tokenfactory.web.contracts.transactions import (
    BuildTransactionRequest,
    PoolContributionRequest,
    SessionInfo,
    SubmissionResult,
    SubmissionStatus,
    SwapRequest,
    TokenCreationRequest,
    UnsignedTransaction,
)

__all__ = [
    # Action requests
    "TokenCreationRequest",
    "PoolContributionRequest",
    "SwapRequest",
    "BuildTransactionRequest",
    # Results
    "UnsignedTransaction",
    "SubmissionStatus",
    "SubmissionResult",
    "SessionInfo",
]

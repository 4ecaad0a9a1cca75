"""Action endpoints: one per button of the original page.

Each endpoint reads the same fields as the page's form, submits the call
through the wallet and returns the outcome. Input errors are 400/422;
wallet and ledger failures come back as ``success: false`` results.
"""

from fastapi import APIRouter, Depends, HTTPException

from tokenfactory.web.contracts.transactions import (
    PoolContributionRequest,
    SubmissionResult,
    SwapRequest,
    TokenCreationRequest,
)
from tokenfactory.web.controllers.deps import get_submitter
from tokenfactory.web.services.submitter import TransactionSubmitter

router = APIRouter(tags=["actions"])


@router.post("/token-requests", response_model=SubmissionResult)
async def create_token_request(
    request: TokenCreationRequest,
    submitter: TransactionSubmitter = Depends(get_submitter),
) -> SubmissionResult:
    """Request a new token, paying the deposit share of its price upfront."""
    try:
        return await submitter.create_token_request(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/pools", response_model=SubmissionResult)
async def pool_eth(
    request: PoolContributionRequest,
    submitter: TransactionSubmitter = Depends(get_submitter),
) -> SubmissionResult:
    """Pool native currency toward buying tokens from an open request.

    The value sent is ``tokensToPurchase * unitPrice``.
    """
    try:
        return await submitter.pool_eth(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/swaps", response_model=SubmissionResult)
async def swap(
    request: SwapRequest,
    submitter: TransactionSubmitter = Depends(get_submitter),
) -> SubmissionResult:
    """Swap one token for another (no value attached)."""
    try:
        return await submitter.swap(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

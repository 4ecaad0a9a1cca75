"""Transaction preview endpoints.

These endpoints build the exact transaction an action would send but do
NOT sign or send it.
"""

from fastapi import APIRouter, Depends, HTTPException

from tokenfactory.web.contracts.transactions import (
    BuildTransactionRequest,
    UnsignedTransaction,
)
from tokenfactory.web.controllers.deps import get_builder
from tokenfactory.web.services.transaction_builder import TransactionBuilder

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("/build", response_model=UnsignedTransaction)
async def build_transaction(
    request: BuildTransactionRequest,
    builder: TransactionBuilder = Depends(get_builder),
) -> UnsignedTransaction:
    """Build an unsigned transaction for one of the actions.

    Supported actions:
    - create: createTokenRequest (tokenPrice, totalSupply)
    - pool: poolEth (requestId, tokensToPurchase, unitPrice)
    - swap: swap (tokenIn, amountIn, tokenOut)
    """
    try:
        return builder.build_from_request(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

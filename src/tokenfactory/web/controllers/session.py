"""Wallet session endpoint."""

from fastapi import APIRouter, Depends

from tokenfactory.chain.session import WalletSession
from tokenfactory.web.contracts.transactions import SessionInfo
from tokenfactory.web.controllers.deps import get_session

router = APIRouter(tags=["session"])


@router.get("/session", response_model=SessionInfo)
async def session_info(session: WalletSession = Depends(get_session)) -> SessionInfo:
    """Sender, authorized accounts and the bound contract."""
    return SessionInfo(
        sender=session.sender,
        accounts=list(session.accounts),
        contract_address=session.binding.address,
        chain_id=session.chain_id,
        functions=session.binding.function_names,
    )

"""On-chain side of the client: contract interface, binding and wallet session."""

from tokenfactory.chain.abi import TOKEN_FACTORY_ABI
from tokenfactory.chain.binding import ContractBinding, ContractFunction
from tokenfactory.chain.session import (
    AuthorizationError,
    SessionError,
    WalletSession,
    WalletUnavailableError,
)

__all__ = [
    "TOKEN_FACTORY_ABI",
    "ContractBinding",
    "ContractFunction",
    "WalletSession",
    "SessionError",
    "AuthorizationError",
    "WalletUnavailableError",
]

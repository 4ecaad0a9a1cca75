"""Wallet session established once at startup.

Startup flow:
1. Connect to the wallet's JSON-RPC endpoint
2. Request the authorized accounts
3. Bind the TokenFactory contract

Any failure aborts startup; there is no fallback wallet.
"""

import logging
from typing import Optional

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from tokenfactory.chain.abi import TOKEN_FACTORY_ABI
from tokenfactory.chain.binding import ContractBinding
from tokenfactory.config import Settings, get_settings

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for wallet session failures."""


class WalletUnavailableError(SessionError):
    """The wallet endpoint could not be reached."""


class AuthorizationError(SessionError):
    """The wallet returned no accounts or refused access."""


class WalletSession:
    """Accounts and contract binding shared by every submission.

    Read-only after ``connect``. The first authorized account is the
    sender of every transaction.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        accounts: tuple[str, ...],
        binding: ContractBinding,
        chain_id: int,
        owns_provider: bool = False,
    ):
        if not accounts:
            raise AuthorizationError("Wallet session requires at least one account")
        self.w3 = w3
        self.accounts = accounts
        self.binding = binding
        self.chain_id = chain_id
        self._owns_provider = owns_provider


    @property
    def sender(self) -> str:
        """Account used as ``from`` for every call."""
        return self.accounts[0]

    @classmethod
    async def connect(
        cls,
        settings: Optional[Settings] = None,
        w3: Optional[AsyncWeb3] = None,
    ) -> "WalletSession":
        """Connect to the wallet, authorize accounts and bind the contract.

        Args:
            settings: Settings to use (defaults to ``get_settings()``)
            w3: Pre-built AsyncWeb3 instance; one is created from
                ``settings.rpc_url`` when omitted

        Raises:
            WalletUnavailableError: If the endpoint is unreachable
            AuthorizationError: If no account is authorized
        """
        settings = settings or get_settings()
        owns_provider = w3 is None
        if w3 is None:
            w3 = AsyncWeb3(AsyncHTTPProvider(settings.rpc_url))

        session = None
        try:
            session = await cls._authorize(settings, w3, owns_provider)
        finally:
            if session is None and owns_provider:
                await w3.provider.disconnect()
        return session

    @classmethod
    async def _authorize(
        cls,
        settings: Settings,
        w3: AsyncWeb3,
        owns_provider: bool,
    ) -> "WalletSession":
        redacted = settings.get_safe_dict()["rpc_url"]
        if not await w3.is_connected():
            raise WalletUnavailableError(f"Wallet endpoint unreachable: {redacted}")

        try:
            accounts = tuple(await w3.eth.accounts)
        except (Web3Exception, ValueError) as e:
            raise AuthorizationError(f"Wallet refused account access: {e}") from e

        if not accounts:
            raise AuthorizationError("Wallet did not authorize any account")

        chain_id = await w3.eth.chain_id
        if chain_id != settings.chain_id:
            logger.warning(
                f"Wallet reports chain {chain_id}, settings expect {settings.chain_id}; "
                f"using {chain_id}"
            )

        binding = ContractBinding(settings.contract_address, TOKEN_FACTORY_ABI)
        logger.info(
            f"Wallet session ready: sender={accounts[0]} accounts={len(accounts)} "
            f"contract={binding.address} chain={chain_id}"
        )
        return cls(w3, accounts, binding, chain_id, owns_provider=owns_provider)

    async def close(self) -> None:
        """Release the provider connection if this session created it."""
        if self._owns_provider:
            await self.w3.provider.disconnect()
            logger.info("Wallet session closed")

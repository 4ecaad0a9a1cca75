"""Pytest configuration and fixtures."""

import os
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from web3 import Web3

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from tokenfactory.chain.abi import TOKEN_FACTORY_ABI
from tokenfactory.chain.binding import ContractBinding
from tokenfactory.chain.session import WalletSession
from tokenfactory.config import Settings
from tokenfactory.web.services.submitter import TransactionSubmitter
from tokenfactory.web.services.transaction_builder import TransactionBuilder

SENDER = "0x1111111111111111111111111111111111111111"
OTHER_ACCOUNT = "0x2222222222222222222222222222222222222222"
CONTRACT_ADDRESS = Web3.to_checksum_address("0x2653561f7eF320ae105495Ce829A020a9ddd176E")
CHAIN_ID = 11155111

TX_HASH = bytes.fromhex("ab" * 32)
TX_HASH_HEX = "0x" + "ab" * 32

CONFIRMED_RECEIPT = {"status": 1, "blockNumber": 123, "gasUsed": 51234}


class FakeEth:
    """Stand-in for ``AsyncWeb3.eth`` backed by a wallet holding ``accounts``."""

    def __init__(self, accounts=(SENDER, OTHER_ACCOUNT), chain_id=CHAIN_ID, accounts_error=None):
        self._accounts = list(accounts)
        self._chain_id = chain_id
        self._accounts_error = accounts_error
        self.send_transaction = AsyncMock(return_value=TX_HASH)
        self.wait_for_transaction_receipt = AsyncMock(return_value=dict(CONFIRMED_RECEIPT))

    @property
    async def accounts(self):
        if self._accounts_error is not None:
            raise self._accounts_error
        return self._accounts

    @property
    async def chain_id(self):
        return self._chain_id


class FakeWeb3:
    """Stand-in for ``AsyncWeb3``."""

    def __init__(self, eth=None, connected=True):
        self.eth = eth or FakeEth()
        self._connected = connected

    async def is_connected(self):
        return self._connected


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a local wallet."""
    return Settings(
        rpc_url="http://127.0.0.1:8545",
        chain_id=CHAIN_ID,
        contract_address=CONTRACT_ADDRESS,
        deposit_ratio=Decimal("0.7"),
        receipt_timeout=5.0,
        receipt_poll_latency=0.01,
        debug=True,
    )


@pytest.fixture
def fake_w3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def session(settings, fake_w3) -> WalletSession:
    """Wallet session over the fake wallet, as connect() would build it."""
    return WalletSession(
        fake_w3,
        (SENDER, OTHER_ACCOUNT),
        ContractBinding(settings.contract_address, TOKEN_FACTORY_ABI),
        CHAIN_ID,
    )


@pytest.fixture
def builder(session, settings) -> TransactionBuilder:
    return TransactionBuilder(session, settings.deposit_ratio)


@pytest.fixture
def submitter(session, builder, settings) -> TransactionSubmitter:
    return TransactionSubmitter(
        session,
        builder,
        receipt_timeout=settings.receipt_timeout,
        poll_latency=settings.receipt_poll_latency,
    )

"""Tests for wallet session startup."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tokenfactory.chain.session import (
    AuthorizationError,
    SessionError,
    WalletSession,
    WalletUnavailableError,
)

from conftest import CHAIN_ID, CONTRACT_ADDRESS, OTHER_ACCOUNT, SENDER, FakeEth, FakeWeb3


class TestWalletSession:
    """Tests for WalletSession.connect."""

    @pytest.mark.asyncio
    async def test_connect_uses_first_account_as_sender(self, settings):
        session = await WalletSession.connect(settings, w3=FakeWeb3())

        assert session.sender == SENDER
        assert session.accounts == (SENDER, OTHER_ACCOUNT)

    @pytest.mark.asyncio
    async def test_connect_binds_contract(self, settings):
        session = await WalletSession.connect(settings, w3=FakeWeb3())

        assert session.binding.address == CONTRACT_ADDRESS
        assert session.binding.function_names == ["createTokenRequest", "poolEth", "swap"]
        assert session.chain_id == CHAIN_ID

    @pytest.mark.asyncio
    async def test_wallet_unreachable(self, settings):
        with pytest.raises(WalletUnavailableError):
            await WalletSession.connect(settings, w3=FakeWeb3(connected=False))

    @pytest.mark.asyncio
    async def test_no_accounts_authorized(self, settings):
        w3 = FakeWeb3(eth=FakeEth(accounts=()))

        with pytest.raises(AuthorizationError):
            await WalletSession.connect(settings, w3=w3)

    @pytest.mark.asyncio
    async def test_account_access_refused(self, settings):
        w3 = FakeWeb3(eth=FakeEth(accounts_error=ValueError({"code": 4001, "message": "denied"})))

        with pytest.raises(AuthorizationError, match="refused"):
            await WalletSession.connect(settings, w3=w3)

    @pytest.mark.asyncio
    async def test_errors_share_base_class(self, settings):
        with pytest.raises(SessionError):
            await WalletSession.connect(settings, w3=FakeWeb3(connected=False))

    @pytest.mark.asyncio
    async def test_wallet_chain_id_wins(self, settings):
        w3 = FakeWeb3(eth=FakeEth(chain_id=1337))

        session = await WalletSession.connect(settings, w3=w3)

        assert session.chain_id == 1337

    @pytest.mark.asyncio
    async def test_session_requires_accounts(self, session):
        with pytest.raises(AuthorizationError):
            WalletSession(session.w3, (), session.binding, CHAIN_ID)

    @pytest.mark.asyncio
    async def test_close_leaves_injected_provider_alone(self, session):
        # The fake has no provider attribute; close() must not touch it
        await session.close()

    @pytest.mark.asyncio
    async def test_own_provider_disconnected_on_failure(self, settings):
        w3 = FakeWeb3(connected=False)
        w3.provider = MagicMock(disconnect=AsyncMock())

        with patch("tokenfactory.chain.session.AsyncHTTPProvider"), patch(
            "tokenfactory.chain.session.AsyncWeb3", return_value=w3
        ):
            with pytest.raises(WalletUnavailableError):
                await WalletSession.connect(settings)

        w3.provider.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_own_provider_kept_on_success(self, settings):
        w3 = FakeWeb3()
        w3.provider = MagicMock(disconnect=AsyncMock())

        with patch("tokenfactory.chain.session.AsyncHTTPProvider"), patch(
            "tokenfactory.chain.session.AsyncWeb3", return_value=w3
        ):
            session = await WalletSession.connect(settings)

        w3.provider.disconnect.assert_not_awaited()
        await session.close()
        w3.provider.disconnect.assert_awaited_once()

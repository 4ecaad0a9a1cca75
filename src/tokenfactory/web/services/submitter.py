"""Submission of TokenFactory calls through the connected wallet.

Flow for every action:
1. Build the unsigned transaction (amounts converted, value attached)
2. eth_sendTransaction from the first authorized account; the wallet signs
3. Wait for the receipt, bounded by the receipt timeout
4. Return a SubmissionResult

Nothing is retried, cancelled or serialized. Overlapping submissions each
run independently. Input errors raise before step 2; every failure after
that is reported through the result.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from tokenfactory.chain.session import WalletSession
from tokenfactory.web.contracts.transactions import (
    PoolContributionRequest,
    SubmissionResult,
    SubmissionStatus,
    SwapRequest,
    TokenCreationRequest,
    UnsignedTransaction,
)
from tokenfactory.web.services.transaction_builder import TransactionBuilder

logger = logging.getLogger(__name__)

# EIP-1193 "User Rejected Request"
USER_REJECTED_CODE = 4001

TOKEN_REQUEST_CREATED = "Token request created!"
POOLED = "Successfully pooled ETH!"
SWAPPED = "Tokens swapped!"

_PROVIDER_ERRORS = (
    Web3Exception,
    ValueError,
    OSError,
    asyncio.TimeoutError,
    aiohttp.ClientError,
)


def _rpc_error_code(exc: Exception) -> Optional[int]:
    """Pull the JSON-RPC error code out of a provider exception, if any."""
    response = getattr(exc, "rpc_response", None)
    if isinstance(response, dict):
        error = response.get("error")
        if isinstance(error, dict):
            return error.get("code")

    # Some providers raise ValueError({"code": ..., "message": ...})
    if exc.args and isinstance(exc.args[0], dict):
        return exc.args[0].get("code")
    return None


def _receipt_field(receipt: Any, key: str) -> Any:
    try:
        return receipt[key]
    except (KeyError, TypeError):
        return None


class TransactionSubmitter:
    """Sends TokenFactory calls and reports their outcome.

    Args:
        session: Connected wallet session
        builder: Transaction builder bound to the same session
        receipt_timeout: Seconds to wait for inclusion
        poll_latency: Seconds between receipt polls
    """

    def __init__(
        self,
        session: WalletSession,
        builder: TransactionBuilder,
        receipt_timeout: float = 120.0,
        poll_latency: float = 0.5,
    ):
        self.session = session
        self.builder = builder
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    async def create_token_request(self, request: TokenCreationRequest) -> SubmissionResult:
        """Request a new token, paying the deposit share of its price."""
        tx = self.builder.build_create_token_request(request)
        return await self.submit(tx, TOKEN_REQUEST_CREATED)

    async def pool_eth(self, request: PoolContributionRequest) -> SubmissionResult:
        """Pool native currency toward an open token request."""
        tx = self.builder.build_pool_eth(request)
        return await self.submit(tx, POOLED)

    async def swap(self, request: SwapRequest) -> SubmissionResult:
        """Swap one token for another. No value is attached."""
        tx = self.builder.build_swap(request)
        return await self.submit(tx, SWAPPED)

    async def submit(self, tx: UnsignedTransaction, success_message: str) -> SubmissionResult:
        """Send a built transaction and wait for its receipt.

        Never raises for wallet or ledger failures; see SubmissionStatus.
        """
        w3 = self.session.w3
        params = tx.to_tx_params()

        def result(status: SubmissionStatus, **kwargs) -> SubmissionResult:
            return SubmissionResult(
                success=status == SubmissionStatus.CONFIRMED,
                status=status,
                function=tx.function,
                sender=tx.from_address,
                value=tx.value,
                **kwargs,
            )

        logger.info(f"Submitting {tx.function} from {tx.from_address} value={tx.value}")

        try:
            raw_hash = await w3.eth.send_transaction(params)
        except ContractLogicError as e:
            logger.warning(f"{tx.function} reverted before sending: {e}")
            return result(SubmissionStatus.REVERTED, error=str(e))
        except _PROVIDER_ERRORS as e:
            if _rpc_error_code(e) == USER_REJECTED_CODE:
                logger.info(f"{tx.function} rejected in wallet")
                return result(SubmissionStatus.REJECTED, error=str(e))
            logger.error(f"{tx.function} submission failed: {e}")
            return result(SubmissionStatus.FAILED, error=str(e))

        tx_hash = Web3.to_hex(raw_hash)
        logger.info(f"{tx.function} sent: {tx_hash}")

        try:
            receipt = await w3.eth.wait_for_transaction_receipt(
                raw_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_latency,
            )
        except TimeExhausted:
            logger.warning(
                f"{tx_hash} not mined within {self.receipt_timeout}s; still pending"
            )
            return result(
                SubmissionStatus.PENDING,
                tx_hash=tx_hash,
                error=f"Not mined within {self.receipt_timeout} seconds",
            )
        except _PROVIDER_ERRORS as e:
            logger.error(f"Receipt lookup for {tx_hash} failed: {e}")
            return result(SubmissionStatus.FAILED, tx_hash=tx_hash, error=str(e))

        block_number = _receipt_field(receipt, "blockNumber")
        gas_used = _receipt_field(receipt, "gasUsed")

        if _receipt_field(receipt, "status") != 1:
            logger.warning(f"{tx.function} reverted in block {block_number}: {tx_hash}")
            return result(
                SubmissionStatus.REVERTED,
                tx_hash=tx_hash,
                block_number=block_number,
                gas_used=gas_used,
                error="Transaction reverted",
            )

        logger.info(f"{tx.function} confirmed in block {block_number}: {tx_hash}")
        return result(
            SubmissionStatus.CONFIRMED,
            tx_hash=tx_hash,
            block_number=block_number,
            gas_used=gas_used,
            message=success_message,
        )

"""Transaction builder for the three TokenFactory calls.

Converts user amounts to base units, computes the payable value and
encodes calldata. NO signing or sending happens here.
"""

import logging
from decimal import Decimal

from tokenfactory.chain.session import WalletSession
from tokenfactory.units import MAX_UINT256, InvalidAmountError, apply_ratio, to_base_units
from tokenfactory.web.contracts.transactions import (
    BuildTransactionRequest,
    PoolContributionRequest,
    SwapRequest,
    TokenCreationRequest,
    UnsignedTransaction,
)

logger = logging.getLogger(__name__)


class TransactionBuilder:
    """Builds unsigned TokenFactory transactions from the session's sender.

    Args:
        session: Wallet session supplying sender, binding and chain id
        deposit_ratio: Fraction of the price paid on createTokenRequest
    """

    def __init__(self, session: WalletSession, deposit_ratio: Decimal):
        self.session = session
        self.deposit_ratio = deposit_ratio

    def _build(
        self,
        function: str,
        args: list,
        value: int,
        description: str,
    ) -> UnsignedTransaction:
        binding = self.session.binding
        fn = binding.function(function)
        if value > MAX_UINT256:
            raise InvalidAmountError(f"Payable value for {fn.name} does not fit in uint256")

        warnings = []
        if value and not fn.payable:
            # poolEth is declared nonpayable but the value is still attached
            warnings.append(f"{fn.name} is declared nonpayable; value is attached anyway")

        logger.debug(f"Building {fn.signature} from {self.session.sender} value={value}")

        return UnsignedTransaction(
            chain_id=self.session.chain_id,
            from_address=self.session.sender,
            to=binding.address,
            value=str(value),
            data=binding.encode_call(function, args),
            function=fn.signature,
            args=[str(a) for a in args],
            description=description,
            warnings=warnings,
        )

    def build_create_token_request(self, request: TokenCreationRequest) -> UnsignedTransaction:
        """Build ``createTokenRequest(price, totalSupply)`` paying the deposit.

        Raises:
            InvalidAmountError: If the price is not an exact decimal amount
        """
        price_wei = to_base_units(request.token_price, "tokenPrice")
        deposit = apply_ratio(price_wei, self.deposit_ratio)

        return self._build(
            "createTokenRequest",
            [price_wei, request.total_supply],
            deposit,
            description=(
                f"Request token (price {request.token_price}, supply {request.total_supply}), "
                f"deposit {deposit} base units"
            ),
        )

    def build_pool_eth(self, request: PoolContributionRequest) -> UnsignedTransaction:
        """Build ``poolEth(requestId, tokensToPurchase)`` paying tokens * unit price."""
        unit_price_wei = to_base_units(request.unit_price, "unitPrice")
        value = request.tokens_to_purchase * unit_price_wei

        return self._build(
            "poolEth",
            [request.request_id, request.tokens_to_purchase],
            value,
            description=(
                f"Pool {request.tokens_to_purchase} tokens at {request.unit_price} "
                f"into request #{request.request_id}"
            ),
        )

    def build_swap(self, request: SwapRequest) -> UnsignedTransaction:
        """Build ``swap(tokenIn, amountIn, tokenOut)``; never payable."""
        amount_in = to_base_units(request.amount_in, "amountIn")

        return self._build(
            "swap",
            [request.token_in, amount_in, request.token_out],
            0,
            description=(
                f"Swap {request.amount_in} of {request.token_in[:10]}... "
                f"for {request.token_out[:10]}..."
            ),
        )

    def build_from_request(self, request: BuildTransactionRequest) -> UnsignedTransaction:
        """Build an unsigned transaction from a generic preview request.

        Raises:
            ValueError: If fields required by the action are missing or invalid
        """
        action = request.action

        if action == "create":
            if request.token_price is None or request.total_supply is None:
                raise ValueError("create requires tokenPrice and totalSupply")
            return self.build_create_token_request(
                TokenCreationRequest(
                    token_price=request.token_price,
                    total_supply=request.total_supply,
                )
            )

        elif action == "pool":
            if request.request_id is None or request.tokens_to_purchase is None:
                raise ValueError("pool requires requestId and tokensToPurchase")
            if request.unit_price is None:
                raise ValueError(
                    f"pool requires unitPrice for request #{request.request_id}"
                )
            return self.build_pool_eth(
                PoolContributionRequest(
                    request_id=request.request_id,
                    tokens_to_purchase=request.tokens_to_purchase,
                    unit_price=request.unit_price,
                )
            )

        elif action == "swap":
            if not request.token_in or not request.token_out or request.amount_in is None:
                raise ValueError("swap requires tokenIn, amountIn and tokenOut")
            return self.build_swap(
                SwapRequest(
                    token_in=request.token_in,
                    amount_in=request.amount_in,
                    token_out=request.token_out,
                )
            )

        else:
            raise ValueError(f"Unknown action: {action}")

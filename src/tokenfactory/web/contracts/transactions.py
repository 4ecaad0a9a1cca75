"""Transaction contracts for the three TokenFactory actions.

Request models accept the same field names as the original page's form
inputs (``tokenPrice``, ``requestId``, ``amountIn``, ...); snake_case names
are accepted too. Amounts stay decimal strings until the transaction
builder converts them to base units.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3

from tokenfactory.units import parse_uint


def _checksum(v: str) -> str:
    if not Web3.is_address(v):
        raise ValueError(f"Invalid address: {v}")
    return Web3.to_checksum_address(v)


class _FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TokenCreationRequest(_FormModel):
    """Request creation of a new token, paying a deposit upfront."""

    token_price: str = Field(
        ..., alias="tokenPrice", description="Token price in native currency (decimal string)"
    )
    total_supply: int = Field(..., alias="totalSupply", description="Total token supply")

    @field_validator("total_supply", mode="before")
    @classmethod
    def validate_total_supply(cls, v):
        return parse_uint(v, "totalSupply")


class PoolContributionRequest(_FormModel):
    """Contribute native currency toward buying tokens from an open request."""

    request_id: int = Field(..., alias="requestId", description="Open token request id")
    tokens_to_purchase: int = Field(
        ..., alias="tokensToPurchase", description="Number of tokens to buy"
    )
    unit_price: str = Field(
        ...,
        alias="unitPrice",
        description="Price per token in native currency (decimal string)",
    )

    @field_validator("request_id", mode="before")
    @classmethod
    def validate_request_id(cls, v):
        return parse_uint(v, "requestId")

    @field_validator("tokens_to_purchase", mode="before")
    @classmethod
    def validate_tokens_to_purchase(cls, v):
        return parse_uint(v, "tokensToPurchase")


class SwapRequest(_FormModel):
    """Swap ``amount_in`` of ``token_in`` for ``token_out``."""

    token_in: str = Field(..., alias="tokenIn", description="Input token address")
    amount_in: str = Field(..., alias="amountIn", description="Input amount (decimal string)")
    token_out: str = Field(..., alias="tokenOut", description="Output token address")

    @field_validator("token_in", "token_out")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _checksum(v)


class BuildTransactionRequest(_FormModel):
    """Request to preview an unsigned transaction for one of the actions."""

    action: Literal["create", "pool", "swap"] = Field(
        ..., description="Action type: create, pool, swap"
    )

    # For create
    token_price: Optional[str] = Field(None, alias="tokenPrice")
    total_supply: Optional[int] = Field(None, alias="totalSupply")

    # For pool
    request_id: Optional[int] = Field(None, alias="requestId")
    tokens_to_purchase: Optional[int] = Field(None, alias="tokensToPurchase")
    unit_price: Optional[str] = Field(None, alias="unitPrice")

    # For swap
    token_in: Optional[str] = Field(None, alias="tokenIn")
    amount_in: Optional[str] = Field(None, alias="amountIn")
    token_out: Optional[str] = Field(None, alias="tokenOut")


class UnsignedTransaction(BaseModel):
    """A contract call ready for the wallet to sign.

    ``value`` is a decimal string of base units so 256-bit amounts survive
    JSON clients that parse numbers as doubles.
    """

    chain_id: int = Field(..., description="EVM chain ID")
    from_address: str = Field(..., description="Sender (first authorized account)")
    to: str = Field(..., description="TokenFactory contract address")
    value: str = Field(default="0", description="Payable value in base units")
    data: str = Field(..., description="ABI-encoded calldata (hex)")
    function: str = Field(..., description="Contract function signature")
    args: list[str] = Field(default_factory=list, description="Call arguments as strings")
    description: Optional[str] = Field(None, description="Human-readable description")
    warnings: list[str] = Field(default_factory=list, description="Any warnings")

    @property
    def value_wei(self) -> int:
        return int(self.value)

    def to_tx_params(self) -> dict:
        """Transaction dict for ``eth_sendTransaction``.

        ``value`` is left out entirely when nothing is paid.
        """
        params = {
            "from": self.from_address,
            "to": self.to,
            "data": self.data,
        }
        if self.value_wei:
            params["value"] = self.value_wei
        return params


class SubmissionStatus(str, Enum):
    """Outcome of a submitted call."""

    CONFIRMED = "confirmed"  # Mined with status 1
    REVERTED = "reverted"    # Mined with status 0, or reverted in simulation
    REJECTED = "rejected"    # Wallet refused to sign
    FAILED = "failed"        # Any other provider error
    PENDING = "pending"      # Sent, not mined before the timeout


class SubmissionResult(BaseModel):
    """Result of submitting one contract call."""

    success: bool
    status: SubmissionStatus
    function: str = Field(..., description="Contract function signature")
    sender: str = Field(..., description="Account the call was sent from")
    value: str = Field(default="0", description="Payable value in base units")
    tx_hash: Optional[str] = Field(None, description="Transaction hash once sent")
    block_number: Optional[int] = Field(None, description="Block number if mined")
    gas_used: Optional[int] = Field(None, description="Gas used if mined")
    message: str = Field(default="", description="Confirmation message")
    error: Optional[str] = Field(None, description="Failure reason")


class SessionInfo(BaseModel):
    """Public view of the wallet session."""

    sender: str
    accounts: list[str]
    contract_address: str
    chain_id: int
    functions: list[str]

"""Application configuration using pydantic-settings.

Holds the wallet RPC endpoint, the TokenFactory binding and the client-side
deposit policy.
"""

from decimal import Decimal
from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Wallet / RPC
    # ======================
    rpc_url: str = Field(
        default="http://127.0.0.1:8545",
        description="JSON-RPC endpoint of the wallet that holds and signs for the accounts",
    )
    chain_id: int = Field(default=11155111, description="EVM chain ID (Sepolia by default)")

    # ======================
    # Contract
    # ======================
    contract_address: str = Field(
        default="0x2653561f7eF320ae105495Ce829A020a9ddd176E",
        description="Deployed TokenFactory contract address",
    )

    # ======================
    # Deposit policy
    # ======================
    # Client convention, not confirmed against the contract.
    deposit_ratio: Decimal = Field(
        default=Decimal("0.7"),
        ge=0,
        le=1,
        description="Fraction of the token price paid upfront on createTokenRequest",
    )

    # ======================
    # Receipts
    # ======================
    receipt_timeout: float = Field(
        default=120.0, gt=0, description="Seconds to wait for a transaction receipt"
    )
    receipt_poll_latency: float = Field(
        default=0.5, gt=0, description="Seconds between receipt polls"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "rpc_url": self._redact_url(self.rpc_url),
            "chain_id": self.chain_id,
            "contract_address": self.contract_address,
            "deposit_ratio": str(self.deposit_ratio),
            "receipt_timeout": self.receipt_timeout,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in an RPC URL.

        Hosted endpoints carry API keys in userinfo, path or query
        (e.g. ``https://mainnet.infura.io/v3/<key>``); only scheme, host
        and port are shown as-is.
        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            return "***" if url else url

        creds, _, host = parts.netloc.rpartition("@")
        if creds:
            user = creds.split(":", 1)[0] if ":" in creds else ""
            host = f"{user}:***@{host}" if user else f"***@{host}"

        path = "/***" if parts.path.strip("/") else parts.path
        query = "***" if parts.query else ""
        return urlunsplit((parts.scheme, host, path, query, ""))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

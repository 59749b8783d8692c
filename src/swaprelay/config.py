"""Application configuration using pydantic-settings.

Settings are loaded once at startup and are immutable afterwards. Components
receive the instance explicitly instead of reaching for module globals.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UINT256 = 2**256 - 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(
        default=8000,
        validation_alias=AliasChoices("api_port", "port"),
        description="API server port",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Chain
    # ======================
    rpc_url: str = Field(default="https://eth.llamarpc.com", description="JSON-RPC endpoint")
    chain_id: int = Field(default=1, description="EVM chain ID")
    receipt_timeout_seconds: float = Field(
        default=120, gt=0, description="Seconds to wait for a transaction to be mined"
    )

    # ======================
    # Contracts (Uniswap V3 mainnet)
    # ======================
    router_address: str = Field(
        default="0xE592427A0AEce92De3Edee1F18E0157C05861564",
        description="SwapRouter exposing exactInputSingle",
    )
    quoter_address: str = Field(
        default="0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6",
        description="Quoter exposing quoteExactInputSingle",
    )
    wrapped_native_address: str = Field(
        default="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        description="WETH address",
    )

    # ======================
    # Tokens
    # ======================
    native_alias: str = Field(default="eth", description="Alias resolved to the wrapped-native token")
    native_decimals: int = Field(default=18, description="Decimals of the wrapped-native token")
    stable_asset_alias: str = Field(
        default="usdt", description="Identifier that gets the tightest slippage bound"
    )

    # ======================
    # Swap policy
    # ======================
    fee_tiers: tuple[int, ...] = Field(
        default=(500, 3000, 10000),
        description="Fee tiers tried in order (hundredths of a bip)",
    )
    max_gas_limit: int = Field(default=300_000, gt=0, description="Gas limit for swap transactions")
    deadline_seconds: int = Field(default=300, gt=0, description="Swap deadline offset")
    base_slippage: Decimal = Field(default=Decimal("0.005"), description="Base slippage (0.5%)")
    max_slippage: Decimal = Field(default=Decimal("0.03"), description="Slippage ceiling (3%)")
    approval_policy: Literal["unlimited", "exact"] = Field(
        default="unlimited",
        description="Approve max uint256 or only the amount being swapped",
    )

    @field_validator("fee_tiers")
    @classmethod
    def _check_fee_tiers(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("fee_tiers must not be empty")
        if any(tier <= 0 for tier in value):
            raise ValueError("fee_tiers must be positive")
        return value

    @field_validator("base_slippage", "max_slippage")
    @classmethod
    def _check_slippage(cls, value: Decimal) -> Decimal:
        if not (Decimal(0) <= value < Decimal(1)):
            raise ValueError("slippage must be in [0, 1)")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def redacted_rpc_url(self) -> str:
        """RPC URL safe to log or expose."""
        return self._redact_url(self.rpc_url)

    def approval_amount(self, required: int) -> int:
        """Amount to approve when the current allowance is below `required`."""
        if self.approval_policy == "exact":
            return required
        return MAX_UINT256

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "chain": {
                "chain_id": self.chain_id,
                "rpc": self.redacted_rpc_url,
            },
            "contracts": {
                "router": self.router_address,
                "quoter": self.quoter_address,
                "wrapped_native": self.wrapped_native_address,
            },
            "swap": {
                "fee_tiers": list(self.fee_tiers),
                "max_gas_limit": self.max_gas_limit,
                "deadline_seconds": self.deadline_seconds,
                "base_slippage": str(self.base_slippage),
                "max_slippage": str(self.max_slippage),
                "approval_policy": self.approval_policy,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials and API-key paths from an RPC URL."""
        if "://" not in url:
            return url
        proto, rest = url.split("://", 1)
        if "@" in rest:
            rest = "***@" + rest.rsplit("@", 1)[1]
        host, sep, path = rest.partition("/")
        if sep and path:
            return f"{proto}://{host}/***"
        return f"{proto}://{rest}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Application configuration using pydantic-settings.

Values are read from environment variables and an optional ``.env`` file.
"""

from functools import lru_cache

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
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/walletrix.db",
        description="Database connection URL",
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

    # ======================
    # Auth
    # ======================
    jwt_secret_key: str = Field(
        default="change-me-in-production", description="Secret used to sign bearer tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expiration_hours: int = Field(default=24, description="Bearer token lifetime")
    otp_length: int = Field(default=6, description="Number of digits in an OTP")
    otp_expiry_minutes: int = Field(default=10, description="OTP validity window")

    # ======================
    # EVM
    # ======================
    default_chain_id: int = Field(
        default=8453, description="Chain used when a balance request names none"
    )
    rpc_timeout: float = Field(
        default=15.0, description="Timeout in seconds for each outbound RPC call"
    )

    # ======================
    # Stellar
    # ======================
    stellar_mainnet_horizon_url: str = Field(
        default="https://horizon.stellar.org", description="Stellar mainnet Horizon URL"
    )
    stellar_testnet_horizon_url: str = Field(
        default="https://horizon-testnet.stellar.org",
        description="Stellar testnet Horizon URL",
    )
    stellar_futurenet_horizon_url: str = Field(
        default="https://horizon-futurenet.stellar.org",
        description="Stellar futurenet Horizon URL",
    )
    friendbot_url: str = Field(
        default="https://friendbot.stellar.org", description="Stellar testnet faucet URL"
    )
    faucet_settle_delay: float = Field(
        default=3.0, description="Seconds to wait after faucet funding before reloading"
    )

    # ======================
    # Email
    # ======================
    email_backend: str = Field(default="dryrun", description="Email backend: dryrun or http")
    email_api_url: str = Field(default="", description="HTTP email API endpoint")
    email_api_key: str = Field(default="", description="HTTP email API key")
    email_sender: str = Field(
        default="no-reply@walletrix.local", description="From address for OTP emails"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_horizon_url(self, network: str) -> str:
        """Get Horizon URL for a Stellar network variant."""
        horizon_map = {
            "mainnet": self.stellar_mainnet_horizon_url,
            "testnet": self.stellar_testnet_horizon_url,
            "futurenet": self.stellar_futurenet_horizon_url,
        }
        return horizon_map.get(network.lower(), "")

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "jwt_secret_key": "***" if self.jwt_secret_key else "(not set)",
            "default_chain_id": self.default_chain_id,
            "rpc_timeout": self.rpc_timeout,
            "stellar": {
                "mainnet": self.stellar_mainnet_horizon_url,
                "testnet": self.stellar_testnet_horizon_url,
                "futurenet": self.stellar_futurenet_horizon_url,
                "friendbot": self.friendbot_url,
            },
            "email": {
                "backend": self.email_backend,
                "api_key": "***" if self.email_api_key else "(not set)",
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

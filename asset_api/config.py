"""
Configuration management for the Asset Transfer API.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    PROJECT_NAME: str = "Hyperledger Fabric Asset Transfer API"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # Ledger network (connection profile + file system wallet)
    CONNECTION_PROFILE_PATH: str = "network/connection-org1.json"
    WALLET_PATH: str = "wallet"
    CHANNEL_NAME: str = "mychannel"
    CONTRACT_NAME: str = "asset-transfer"

    # REST gateway fronting the peers
    GATEWAY_URL: str = "http://localhost:5102"
    DISCOVERY_ENABLED: bool = True
    DISCOVERY_AS_LOCALHOST: bool = True

    # Seconds; unset means the gateway call is not bounded locally
    LEDGER_TIMEOUT: float | None = None

    # Logging
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

"""Configuration management for TxLookup."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from txlookup.display.renderer import EXPLORER_TX_URL


class Settings(BaseSettings):
    """Application settings loaded from TXLOOKUP_* environment variables."""

    # Lookup backend the client calls (GET /api/transactions/{address})
    transactions_api_url: str = "http://127.0.0.1:5000"

    # Basescan (Etherscan-compatible) upstream behind that endpoint
    basescan_api_url: str = "https://api.basescan.org/api"
    basescan_api_key: Optional[str] = None

    # Hash cells link here
    explorer_tx_url: str = EXPLORER_TX_URL

    request_timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="TXLOOKUP_",
        env_file=".env",
        case_sensitive=False,
    )


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

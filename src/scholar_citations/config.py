"""
Configuration for scholar-citations.

Uses Pydantic Settings for environment variable support.
All settings can be overridden via environment variables with
the SCHOLAR_ prefix, or from a local .env file.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are prefixed with SCHOLAR_.
    Example: SCHOLAR_API_KEY=your-serpapi-key

    API key:
        SCHOLAR_API_KEY wins when set. Otherwise the first line of
        API_KEY_FILE (default ./serpapi.key) is used.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHOLAR_",
        env_file=".env",
        extra="ignore",
    )

    # Application info
    APP_NAME: str = "scholar-citations"
    APP_VERSION: str = "0.1.0"

    # SerpApi credentials
    API_KEY: Optional[str] = None
    API_KEY_FILE: Path = Path("serpapi.key")

    # Upstream service
    BASE_URL: str = "https://serpapi.com"
    LANGUAGE: str = "en"  # Sent as the `hl` parameter
    REQUEST_TIMEOUT: int = 60  # Seconds

    # Lookup behaviour
    CACHE_LOOKUPS: bool = True  # Memoize lookups by title for one run
    CITING_CONCURRENCY: int = 1  # 1 = scan citing works sequentially

    LOG_LEVEL: str = "WARNING"

    def resolve_api_key(self) -> str:
        """
        Return the SerpApi key.

        Raises:
            ConfigurationError: If neither the environment nor the key
                file provides a non-empty key.
        """
        if self.API_KEY:
            return self.API_KEY.strip()

        try:
            with self.API_KEY_FILE.open(encoding="utf-8") as f:
                key = f.readline().strip()
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read API key file {self.API_KEY_FILE}: {e}"
            ) from e

        if not key:
            raise ConfigurationError(f"API key file {self.API_KEY_FILE} is empty")
        return key

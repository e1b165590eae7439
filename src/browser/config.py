"""Configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings


class BrowserSettings(BaseSettings):
    """Browser configuration."""

    user_agent: str = "Browser-Demo/0.0.1"
    # Bytes fed to the charset detector between guesses.
    detect_chunk_size: int = Field(default=100, ge=1)
    log_level: str = "WARNING"

    model_config = {"env_prefix": "BROWSER_"}


settings = BrowserSettings()

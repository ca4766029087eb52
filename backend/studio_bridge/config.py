"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Relay timing defaults: 30000ms command timeout, 200ms poll interval

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - No env prefix: PORT matches what hosting platforms inject
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Relay
    command_timeout_ms: int = Field(30_000, gt=0)
    poll_interval_ms: int = Field(200, gt=0)

    # MCP
    mcp_server_name: str = "roblox-studio"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

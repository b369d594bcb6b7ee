"""Application configuration loaded from environment variables.

Tenant credentials are deliberately absent: they arrive per request as
headers and are never read from settings.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings pulled from .env / environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # MCP
    mcp_server_name: str = "primrose-mcp-cloudflare"
    mcp_server_version: str = "1.0.0"

    # FastAPI
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8000

    # Cloudflare API
    cloudflare_api_base_url: str = "https://api.cloudflare.com/client/v4"
    request_timeout_seconds: float = 30.0
    """Transport timeout for a single provider call. There is no retry."""

    # Pagination & output
    default_page_size: int = 20
    max_page_size: int = 100
    character_limit: int = 50_000
    """Markdown / raw text longer than this is cut with a notice. JSON is never cut."""

    # Security Headers
    enable_security_headers: bool = True
    allowed_origins: str = "*"
    """Comma-separated list of allowed CORS origins. Use '*' only in development."""


settings = Settings()

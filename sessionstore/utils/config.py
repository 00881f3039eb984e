# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class OpenSearchSettings(BaseSettings):
    """OpenSearch connection settings for the session document store."""

    model_config = SettingsConfigDict(env_prefix="OPENSEARCH_")

    host: str = Field(default="localhost", description="OpenSearch host")
    port: int = Field(default=9200, description="OpenSearch port")
    user: str = Field(default="admin", description="OpenSearch username")
    password: str = Field(default="admin", description="OpenSearch password")
    use_ssl: bool = Field(default=True, description="Use SSL")
    verify_certs: bool = Field(
        default=True, description="Verify SSL certificates (False for local self-signed)"
    )
    timeout: int = Field(default=30, description="Request timeout in seconds")

    # Index and query behaviour
    sessions_index: str = Field(default="analytics-sessions", description="Sessions index name")
    scroll: str = Field(default="2m", description="Scroll keep-alive for session id scans")
    scan_size: int = Field(default=500, description="Documents fetched per scroll page")
    refresh: Literal["true", "false", "wait_for"] = Field(
        default="wait_for",
        description="Refresh policy applied when inserting a session document",
    )

    @property
    def hosts(self) -> list[dict]:
        """Build OpenSearch hosts configuration."""
        return [
            {
                "host": self.host,
                "port": self.port,
            }
        ]


class ValkeySettings(BaseSettings):
    """Valkey (Redis-compatible) connection settings for session timestamps."""

    model_config = SettingsConfigDict(env_prefix="VALKEY_")

    host: str = Field(default="localhost", description="Valkey host")
    port: int = Field(default=6379, description="Valkey port")
    password: Optional[str] = Field(default=None, description="Valkey password")
    db: int = Field(default=0, description="Valkey database number")
    ssl: bool = Field(default=False, description="Use SSL/TLS connection")
    socket_timeout: int = Field(default=10, description="Socket timeout in seconds")

    # Timestamp store configuration
    session_ttl_hours: int = Field(
        default=24, description="TTL for first-seen session timestamps in hours"
    )
    key_prefix: str = Field(
        default="", description="Prefix prepended to session ids to build timestamp keys"
    )

    @property
    def session_ttl_seconds(self) -> int:
        """TTL for first-seen timestamps in seconds."""
        return self.session_ttl_hours * 3600

    @property
    def url(self) -> str:
        """Build Valkey connection URL."""
        # Use rediss:// scheme for SSL connections
        scheme = "rediss" if self.ssl else "redis"
        if self.password:
            return f"{scheme}://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"{scheme}://{self.host}:{self.port}/{self.db}"


class AuthSettings(BaseSettings):
    """Token verification settings.

    Secrets map directly to ACCESS_SECRET and REFRESH_SECRET. Token verifiers
    instantiate this class on every verification call so a changed
    environment is picked up without restarting the process.
    """

    model_config = SettingsConfigDict(extra="ignore")

    access_secret: str = Field(default="", description="HMAC key for access tokens")
    refresh_secret: str = Field(default="", description="HMAC key for refresh tokens")
    access_cookie: str = Field(default="access_token", description="Access token cookie name")
    refresh_cookie: str = Field(default="refresh_token", description="Refresh token cookie name")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    valkey: ValkeySettings = Field(default_factory=ValkeySettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()

"""
Configuration management for the Google Maps MCP Server.

Provides type-safe settings using Pydantic BaseSettings with
environment variable support and .env file loading.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MapsConfig(BaseModel):
    """Options handed to the adapters: credential plus language/region preference."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    default_language: str = "en"
    default_region: str = "US"


class Settings(BaseSettings):
    """MCP Server settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Google Maps Platform
    google_maps_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google Maps Platform API key",
    )
    default_language: str = Field(
        default="en",
        description="Language forwarded with every upstream request",
    )
    default_region: str = Field(
        default="US",
        description="Region bias forwarded with geocoding requests",
    )

    # MCP Server configuration
    server_name: str = Field(
        default="google-maps",
        description="MCP server name",
    )
    server_version: str = Field(
        default="0.1.0",
        description="MCP server version",
    )

    # HTTP client configuration
    http_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment (development/production)",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Transport
    mcp_transport: str = Field(
        default="stdio",
        description="Transport: stdio, sse or streamable-http",
    )
    mcp_host: str = Field(
        default="0.0.0.0",
        description="Bind host for HTTP transports",
    )
    mcp_port: int = Field(
        default=8080,
        description="Bind port for HTTP transports",
    )

    def maps_config(self) -> MapsConfig:
        """Build the configuration object consumed by the tool adapters."""
        return MapsConfig(
            api_key=self.google_maps_api_key,
            default_language=self.default_language,
            default_region=self.default_region,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

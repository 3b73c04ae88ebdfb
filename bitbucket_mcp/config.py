"""
Bitbucket MCP Server - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal


class BitbucketSettings(BaseSettings):
    """Bitbucket Cloud API configuration."""
    base_url: str = Field(
        "https://api.bitbucket.org/2.0", alias="BITBUCKET_API_BASE_URL"
    )
    username: Optional[str] = Field(None, alias="ATLASSIAN_BITBUCKET_USERNAME")
    app_password: Optional[str] = Field(
        None, alias="ATLASSIAN_BITBUCKET_APP_PASSWORD"
    )
    default_workspace: Optional[str] = Field(
        None, alias="BITBUCKET_DEFAULT_WORKSPACE"
    )
    timeout_seconds: float = Field(30.0, alias="BITBUCKET_TIMEOUT_SECONDS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class CacheSettings(BaseSettings):
    """Caching configuration."""
    enabled: bool = Field(True, alias="CACHE_ENABLED")
    ttl_workspace: int = Field(3600, alias="CACHE_TTL_WORKSPACE_SECONDS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["stdio", "sse", "streamable-http"] = Field("stdio", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )
    format: Literal["json", "text"] = Field("json", alias="LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    bitbucket: BitbucketSettings = Field(default_factory=BitbucketSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()

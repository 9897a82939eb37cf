from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """
    Server configuration loaded from FILE_SEARCH_* environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="FILE_SEARCH_", env_file=".env", extra="ignore")

    server_name: str = Field(default="file-search-server", description="Name reported to MCP clients")
    server_version: str = Field(default="1.0.0", description="Version reported to MCP clients")
    log_level: str = Field(default="INFO", description="Logging level")
    encoding: str = Field(default="utf-8", description="Text encoding used to read searched files")

    # HTTP transport
    http_host: str = Field(default="0.0.0.0", description="Bind address for the HTTP server")
    http_port: int = Field(default=3000, ge=1, le=65535, description="Port for the HTTP server")


@lru_cache
def get_settings() -> ServerSettings:
    return ServerSettings()

"""Configuration module using Pydantic Settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from verman.services.registry import FsRegistry
from verman.storage.local import LocalDirectoryStore


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Attributes:
        repository_root: Filesystem directory holding the package repository.
        base_uri: URI prefix for file locations; defaults to the file URI
            of the repository root.
        host: Host address for the server.
        port: Port number for the server.
        cors_origins: Allowed CORS origins.
        log_level: Logging level name.
        debug: Enable debug mode.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Repository Configuration
    repository_root: Path = Field(
        default=Path("./repository"),
        description="Directory holding <package>/<version>/<files>",
    )
    base_uri: Optional[str] = Field(
        default=None,
        description="URI prefix for file locations",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", alias="server_host", description="Server host address")
    port: int = Field(default=4030, alias="server_port", description="Server port")

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="List of allowed CORS origins",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Debug Mode
    debug: bool = Field(default=False, description="Enable debug mode")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        return v.strip().upper()

    @property
    def resolved_base_uri(self) -> str:
        """Base URI for file locations."""
        if self.base_uri:
            return self.base_uri
        return self.repository_root.expanduser().resolve().as_uri()

    def build_registry(self) -> FsRegistry:
        """Create a registry over the configured repository root.

        Returns:
            Registry reading the local filesystem.
        """
        return FsRegistry(
            store=LocalDirectoryStore(self.repository_root),
            base_uri=self.resolved_base_uri,
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

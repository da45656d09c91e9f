"""
Application settings and configuration management.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from urllib.parse import quote

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO")

    # Proxy
    proxy_host: str = Field(default="us.smartproxy.com:10000")
    proxy_username: str = Field(default="")
    proxy_password: SecretStr = Field(default=SecretStr(""))

    # Fetch policy
    request_timeout: float = Field(default=20.0)
    retry_attempts: int = Field(default=5)
    retry_backoff: float = Field(default=1.0)

    # Worker container
    container_name: str = Field(default="ytreader")
    resource_group: str = Field(default="ytreader")
    container_registry: str = Field(default="ytreader.azurecr.io")
    container_registry_username: str = Field(default="")
    container_registry_password: SecretStr = Field(default=SecretStr(""))
    container_image_name: str = Field(default="ytreader:latest")
    container_cores: float = Field(default=1.0)
    container_memory_gb: float = Field(default=2.0)
    container_command: str = Field(default="ytreader-worker")
    storage_connection_string: SecretStr = Field(default=SecretStr(""))
    environment: str = Field(default="dev")

    # Fleet
    channels_per_container: int = Field(default=150)
    precheck_parallel: int = Field(default=8)
    create_parallel: int = Field(default=8)
    catalog_path: Path = Field(default=Path("./channels.csv"))

    @field_validator("catalog_path", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure paths are Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator(
        "retry_attempts", "channels_per_container", "precheck_parallel", "create_parallel"
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Counts and concurrency limits must be at least 1."""
        if v < 1:
            raise ValueError(f"Value must be at least 1, got {v}")
        return v

    @property
    def proxy_url(self) -> str | None:
        """Proxy URL with embedded credentials, or None when no credentials are set."""
        if not self.proxy_username:
            return None
        username = quote(self.proxy_username, safe="")
        password = quote(self.proxy_password.get_secret_value(), safe="")
        return f"http://{username}:{password}@{self.proxy_host}"

    @property
    def container_command_args(self) -> list[str]:
        """Worker entrypoint split into argv tokens."""
        return shlex.split(self.container_command)

    @property
    def container_image(self) -> str:
        """Fully qualified worker image reference."""
        return f"{self.container_registry}/{self.container_image_name}"

    model_config = {
        "env_prefix": "YTREADER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()

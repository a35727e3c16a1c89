"""Configuration management for discocli."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, field_validator

from discocli import __version__

logger = structlog.get_logger()

DISCO_API_URL = "https://api.foojay.io/disco/v3.0/"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "discocli" / "config.json"


class DiscoConfig(BaseModel):
    """Disco API client configuration."""

    api_url: str = Field(default=DISCO_API_URL, description="Disco API base URL")
    timeout: float = Field(default=20.0, description="Connect/read timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    user_agent: str = Field(default=f"discocli/{__version__}", description="User-Agent header")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL and make sure it ends with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API URL: {v}")
        return v if v.endswith("/") else f"{v}/"

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class AppConfig(BaseModel):
    """Application configuration."""

    # API settings
    api_url: str = Field(default=DISCO_API_URL, description="Disco API base URL")
    timeout: float = Field(default=20.0, description="Catalog request timeout")
    user_agent: str = Field(default=f"discocli/{__version__}", description="User-Agent header")

    # Download settings
    download_chunk_size: int = Field(default=8192, description="Download chunk size in bytes")

    # Detection settings
    search_paths: list[Path] = Field(
        default_factory=list,
        description="Extra folders scanned for local JDKs"
    )

    # Output settings
    output_format: str = Field(
        default="rich",
        description="Output format (rich, json, plain)"
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @classmethod
    def load(cls, config_file: Path | None = None) -> AppConfig:
        """Load configuration from file.

        Args:
            config_file: Path to config file, uses default if None

        Returns:
            Application configuration
        """
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        if config_file.exists():
            with open(config_file) as f:
                data = json.load(f)
                logger.debug("config_loaded", path=str(config_file))
                return cls(**data)

        # Return defaults
        return cls()

    def disco_config(self) -> DiscoConfig:
        """Build the API client configuration."""
        return DiscoConfig(
            api_url=self.api_url,
            timeout=self.timeout,
            user_agent=self.user_agent,
        )

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = {"rich", "json", "plain"}
        if v not in valid_formats:
            raise ValueError(f"Invalid output format: {v}. Valid formats: {valid_formats}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {valid_levels}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("download_chunk_size")
    @classmethod
    def validate_download_chunk_size(cls, v: int) -> int:
        """Validate chunk size value."""
        if v <= 0:
            raise ValueError("Download chunk size must be positive")
        return v

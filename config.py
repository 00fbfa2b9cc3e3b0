"""Configuration management for QuickLink."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL for generating short URLs when the request carries no host"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=3,
        le=20,
        description="Length of generated short codes"
    )

    max_generation_attempts: int = Field(
        default=10,
        ge=1,
        description="Random codes to try before reporting a generation failure"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    max_body_bytes: int = Field(
        default=1048576,
        ge=1,
        description="Maximum accepted request body size for shorten requests"
    )

    qr_size: int = Field(
        default=256,
        ge=64,
        description="Approximate edge length of generated QR images in pixels"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()

"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    URL and code rules are enforced by the service so that every client
    gets the same error messages; the schema only fixes the shape.
    """

    url: str = Field(..., description="The URL to shorten")
    custom_code: Optional[str] = Field(None, description="Optional custom short code")

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "custom_code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "my-repo"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_code: str = Field(..., description="The claimed short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The stored (sanitized) URL")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "aB3xZ9",
                    "short_url": "http://localhost:8080/aB3xZ9",
                    "original_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class URLInfoResponse(BaseModel):
    """Response with URL information."""

    short_code: str
    short_url: str
    original_url: str
    created_at: datetime
    custom: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Short error title")
    message: str = Field(..., description="Detailed error information")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_urls: int
    custom_urls: int
    generated_urls: int
    storage: str
    custom_codes_enabled: bool

"""Common utilities for QuickLink."""

from .validators import (
    is_valid_url,
    sanitize_url,
    is_valid_short_code_format,
    is_valid_custom_code,
    is_reserved_code,
    is_valid_short_code,
)
from .reserved import RESERVED_CODES
from .headers import extract_forwarded_headers, build_base_url, get_forwarded_path_prefix
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "sanitize_url",
    "is_valid_short_code_format",
    "is_valid_custom_code",
    "is_reserved_code",
    "is_valid_short_code",
    "RESERVED_CODES",
    "extract_forwarded_headers",
    "build_base_url",
    "get_forwarded_path_prefix",
    "build_short_url",
    "setup_logging",
    "get_logger",
]

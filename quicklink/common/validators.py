"""Validation utilities for URL shortener."""

import re
import string
from urllib.parse import urlsplit
from typing import Tuple

from .reserved import RESERVED_CODES

MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 20

ALLOWED_URL_SCHEMES = ("http", "https")

_CODE_CHARS = frozenset(string.ascii_letters + string.digits + "-")

# scheme ":" ["//" authority] rest, as in RFC 3986 appendix B
_URL_PARTS = re.compile(r"^(?P<scheme>[^:/?#]+):(?://(?P<netloc>[^/?#]*))?(?P<rest>.*)$", re.DOTALL)


def _has_control_chars(value: str) -> bool:
    return any(ord(c) < 0x20 or c == "\x7f" for c in value)


def is_valid_url(url: str) -> bool:
    """Check that a URL is an absolute http(s) URL with a host.

    Purely syntactic, no network access is performed. urlsplit quietly
    drops tabs and newlines, so control characters and surrounding
    whitespace are refused before parsing.

    Args:
        url: The URL to validate

    Returns:
        True if the URL can be stored
    """
    if not url or not isinstance(url, str):
        return False

    if _has_control_chars(url) or url != url.strip():
        return False

    try:
        result = urlsplit(url)
        host = result.hostname
    except ValueError:
        return False

    if result.scheme not in ALLOWED_URL_SCHEMES:
        return False

    # hostname excludes userinfo and port, so "http://user@" has no host
    if not host or any(c.isspace() for c in host):
        return False

    return True


def sanitize_url(url: str) -> str:
    """Normalize a URL before storage.

    Lower-cases the scheme and host. Everything else, including userinfo,
    port and empty "?" or "#" markers, is copied from the input as is.
    Returns the input unchanged if it cannot be parsed.

    Args:
        url: The URL to normalize

    Returns:
        Normalized URL
    """
    try:
        urlsplit(url)
    except ValueError:
        return url

    match = _URL_PARTS.match(url)
    if match is None:
        return url

    scheme = match.group("scheme").lower()
    netloc = match.group("netloc")
    if netloc is None:
        return f"{scheme}:{match.group('rest')}"

    userinfo, at, host = netloc.rpartition("@")
    return f"{scheme}://{userinfo}{at}{host.lower()}{match.group('rest')}"


def is_valid_short_code_format(code: str) -> bool:
    """Check the general short code shape: 3-20 letters, digits or hyphens."""
    if not code or not isinstance(code, str):
        return False

    if not MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH:
        return False

    return all(c in _CODE_CHARS for c in code)


def is_valid_custom_code(code: str) -> bool:
    """Check the stricter rules for user-chosen codes.

    On top of the general format, a custom code may not start or end
    with a hyphen and may not contain two hyphens in a row.
    """
    valid, _ = is_valid_short_code(code)
    return valid


def is_reserved_code(code: str) -> bool:
    """Case-insensitive check against the reserved word list."""
    return code.lower() in RESERVED_CODES


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code and explain any failure.

    Does not consult the reserved word list; see is_reserved_code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < MIN_CODE_LENGTH:
        return False, f"Short code must be at least {MIN_CODE_LENGTH} characters"

    if len(short_code) > MAX_CODE_LENGTH:
        return False, f"Short code must be at most {MAX_CODE_LENGTH} characters"

    if not is_valid_short_code_format(short_code):
        return False, "Short code can only contain letters, numbers, and hyphens"

    if short_code.startswith("-") or short_code.endswith("-"):
        return False, "Short code cannot start or end with a hyphen"

    if "--" in short_code:
        return False, "Short code cannot contain consecutive hyphens"

    return True, ""

"""Header parsing utilities for building public short URLs.

X-Forwarded-* values are only as trustworthy as the proxy in front of the
service: they are honoured on the assumption that a trusted proxy sets
them, and a value that does not look like a scheme, host or path is
ignored rather than echoed into generated links.
"""

import re
from typing import Dict, Optional

FORWARDED_PROTOS = ("http", "https")

# DNS name or bracketed IPv6 literal, optional port
_HOST_RE = re.compile(r"^(?:[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?|\[[0-9A-Fa-f:.]+\])(?::\d{1,5})?$")
_PREFIX_RE = re.compile(r"^[\w.~/-]*$")


def _first_value(value: Optional[str]) -> Optional[str]:
    # Proxy chains append comma-separated values, the first is the client-facing one
    if not value:
        return None
    return value.split(",", 1)[0].strip() or None


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_prefix
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": _first_value(headers_lower.get("x-forwarded-proto")),
        "forwarded_host": _first_value(headers_lower.get("x-forwarded-host")),
        "forwarded_prefix": _first_value(headers_lower.get("x-forwarded-prefix")),
    }


def is_valid_forwarded_host(host: Optional[str]) -> bool:
    """Check that a forwarded host is a bare host[:port] with no path or userinfo."""
    return bool(host) and _HOST_RE.match(host) is not None


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host, when both are well formed
    2. Request scheme + host
    3. Fallback base URL from config

    Args:
        headers: Request headers
        fallback_base_url: Fallback base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request host

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)
    proto = (forwarded["forwarded_proto"] or "").lower()
    host = forwarded["forwarded_host"]

    if proto in FORWARDED_PROTOS and is_valid_forwarded_host(host):
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_forwarded_path_prefix(headers: Dict[str, str]) -> str:
    """Path prefix from X-Forwarded-Prefix, normalized to '/prefix' or ''."""
    prefix = extract_forwarded_headers(headers)["forwarded_prefix"]
    if not prefix or not _PREFIX_RE.match(prefix):
        return ""
    p = prefix.strip("/")
    return "/" + p if p else ""

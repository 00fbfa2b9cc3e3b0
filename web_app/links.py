"""Public short URL construction for incoming requests."""

from fastapi import Request

from quicklink.common.headers import build_base_url, get_forwarded_path_prefix
from quicklink.common.url_builder import build_short_url


def short_url_for(request: Request, short_code: str) -> str:
    """Build the public short URL for a code as seen by this request's client.

    X-Forwarded-Prefix wins over the configured path prefix so links stay
    correct behind a proxy that strips it.
    """
    config = request.app.state.config
    headers = dict(request.headers)

    base_url = build_base_url(
        headers=headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    path_prefix = get_forwarded_path_prefix(headers) or config.path_prefix

    return build_short_url(
        short_code=short_code,
        base_url=base_url,
        path_prefix=path_prefix,
    )

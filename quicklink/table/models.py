"""Data models for the allocation table."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class URLMapping:
    """A claimed short code and the URL it points to.

    Entries are immutable: once a code is claimed its target never changes.
    """

    short_code: str
    original_url: str
    custom: bool = False
    created_at: datetime = field(default_factory=_utcnow)

"""Core business logic for QuickLink."""

from .allocation import AllocationTable
from .errors import ClaimError, ClaimOutcome, GenerationError, RandomSourceError
from .shortcode import ShortCodeGenerator
from .service import URLShortenerService, ShortURLError

__all__ = [
    "AllocationTable",
    "ClaimError",
    "ClaimOutcome",
    "GenerationError",
    "RandomSourceError",
    "ShortCodeGenerator",
    "URLShortenerService",
    "ShortURLError",
]

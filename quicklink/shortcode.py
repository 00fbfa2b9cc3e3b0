"""Short code generation utilities."""

import secrets
import string
from typing import Callable, Iterator, Optional

from .errors import RandomSourceError


class ShortCodeGenerator:
    """Generate random short codes from a secure byte source."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits

    def __init__(
        self,
        default_length: int = 6,
        random_bytes: Optional[Callable[[int], bytes]] = None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            random_bytes: Source of random bytes, secrets.token_bytes if not given
        """
        self.default_length = default_length
        self.random_bytes = random_bytes or secrets.token_bytes

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each random byte is reduced modulo 62. Since 256 is not a multiple
        of 62 the first eight symbols come up slightly more often; codes
        only need to be unpredictable and collision-checked, not uniform.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code

        Raises:
            RandomSourceError: If the random source fails
        """
        length = length or self.default_length

        try:
            raw = self.random_bytes(length)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Secure random source failed: {e}") from e

        if len(raw) != length:
            raise RandomSourceError(
                f"Secure random source returned {len(raw)} bytes, expected {length}"
            )

        base = len(self.BASE62_CHARS)
        return "".join(self.BASE62_CHARS[b % base] for b in raw)

    def candidates(self, max_attempts: int, length: Optional[int] = None) -> Iterator[str]:
        """Lazily yield at most max_attempts fresh random codes."""
        for _ in range(max_attempts):
            yield self.generate_random(length)


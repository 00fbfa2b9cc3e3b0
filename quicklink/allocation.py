"""Allocation table: who owns which short code."""

from typing import Optional

from .common.validators import (
    is_reserved_code,
    is_valid_custom_code,
    is_valid_short_code_format,
)
from .errors import ClaimError, ClaimOutcome, GenerationError
from .shortcode import ShortCodeGenerator
from .table.base import MappingStore
from .table.memory import InMemoryMappingStore
from .table.models import URLMapping

DEFAULT_MAX_ATTEMPTS = 10


class AllocationTable:
    """Concurrent short code to target URL mapping.

    Every code is claimed at most once and never reassigned. Outcomes for
    bad input or taken codes are returned, not raised; the only exception
    that escapes is RandomSourceError from the generator.

    The table performs no logging and no URL validation. Callers are
    expected to validate and sanitize targets before claiming.
    """

    def __init__(
        self,
        store: Optional[MappingStore] = None,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """Initialize allocation table.

        Args:
            store: Mapping store, a fresh in-memory store if not given
            generator: Short code generator for claims without a custom code
            max_attempts: Random codes to try before giving up
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.store = store if store is not None else InMemoryMappingStore()
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts

    def try_claim_custom(self, code: str, target: str) -> ClaimOutcome:
        """Claim a caller-chosen code for target.

        Checks run in order and stop at the first failure: format,
        reserved words, then an atomic insert-if-absent.

        Args:
            code: The requested short code
            target: Sanitized target URL

        Returns:
            ClaimOutcome with the code on success, or the ClaimError
        """
        if not is_valid_custom_code(code):
            return ClaimOutcome.failure(ClaimError.INVALID_FORMAT, code)

        if is_reserved_code(code):
            return ClaimOutcome.failure(ClaimError.RESERVED, code)

        mapping = URLMapping(short_code=code, original_url=target, custom=True)
        if not self.store.insert_if_absent(mapping):
            return ClaimOutcome.failure(ClaimError.ALREADY_EXISTS, code)

        return ClaimOutcome.success(code)

    def generate_and_claim(self, target: str) -> ClaimOutcome:
        """Claim a freshly generated code for target.

        Args:
            target: Sanitized target URL

        Returns:
            ClaimOutcome with the new code, or EXHAUSTED_RETRIES

        Raises:
            RandomSourceError: If the random source fails
        """
        for code in self.generator.candidates(self.max_attempts):
            # Generated codes skip the reserved list; the alphabet has no hyphen.
            if not is_valid_short_code_format(code):
                continue
            mapping = URLMapping(short_code=code, original_url=target, custom=False)
            if self.store.insert_if_absent(mapping):
                return ClaimOutcome.success(code)

        return ClaimOutcome.failure(GenerationError.EXHAUSTED_RETRIES)

    def lookup(self, code: str) -> Optional[str]:
        """Target URL for code, or None."""
        mapping = self.store.get(code)
        return mapping.original_url if mapping else None

    def exists(self, code: str) -> bool:
        return self.store.contains(code)

    def get_mapping(self, code: str) -> Optional[URLMapping]:
        return self.store.get(code)

    def count(self) -> int:
        return self.store.count()

    def count_custom(self) -> int:
        return self.store.count_custom()

"""Abstract base class for short code mapping stores."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import URLMapping


class MappingStore(ABC):
    """Storage contract behind the allocation table.

    Implementations must make insert_if_absent a single atomic step with
    respect to every other operation on the same code.
    """

    @abstractmethod
    def insert_if_absent(self, mapping: URLMapping) -> bool:
        """Store a mapping unless its short code is already taken.

        Args:
            mapping: The mapping to store

        Returns:
            True if stored, False if the short code already exists
        """

    @abstractmethod
    def get(self, short_code: str) -> Optional[URLMapping]:
        """Get the mapping for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping if found, None otherwise
        """

    @abstractmethod
    def contains(self, short_code: str) -> bool:
        """Check if a short code is already taken."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored mappings."""

    @abstractmethod
    def count_custom(self) -> int:
        """Number of stored mappings whose code was chosen by a caller."""

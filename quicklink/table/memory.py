"""In-memory mapping store guarded by a readers-writer lock."""

from typing import Dict, Optional

from .base import MappingStore
from .models import URLMapping
from .rwlock import ReadWriteLock


class InMemoryMappingStore(MappingStore):
    """Process-local dict of short code to mapping.

    Contents live only as long as the instance.
    """

    def __init__(self):
        self._mappings: Dict[str, URLMapping] = {}
        self._custom_count = 0
        self._lock = ReadWriteLock()

    def insert_if_absent(self, mapping: URLMapping) -> bool:
        with self._lock.write_locked():
            if mapping.short_code in self._mappings:
                return False
            self._mappings[mapping.short_code] = mapping
            if mapping.custom:
                self._custom_count += 1
            return True

    def get(self, short_code: str) -> Optional[URLMapping]:
        with self._lock.read_locked():
            return self._mappings.get(short_code)

    def contains(self, short_code: str) -> bool:
        with self._lock.read_locked():
            return short_code in self._mappings

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._mappings)

    def count_custom(self) -> int:
        with self._lock.read_locked():
            return self._custom_count

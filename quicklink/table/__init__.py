"""Storage layer for the allocation table."""

from .base import MappingStore
from .memory import InMemoryMappingStore
from .models import URLMapping
from .rwlock import ReadWriteLock

__all__ = ["MappingStore", "InMemoryMappingStore", "URLMapping", "ReadWriteLock"]

"""Caching services - abstract interface and concrete implementations."""

from xenolexia.services.caching.lookup_cache import CacheRecord, LookupCache
from xenolexia.services.caching.in_memory_lookup_cache import InMemoryLookupCache

__all__ = [
    "LookupCache",
    "CacheRecord",
    "InMemoryLookupCache",
]

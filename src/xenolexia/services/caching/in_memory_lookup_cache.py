"""In-memory LRU lookup cache for session-level caching."""

import logging
from collections import OrderedDict
from typing import Dict, Optional, Tuple

from xenolexia.services.caching.lookup_cache import CacheRecord, LookupCache

logger = logging.getLogger(__name__)

_Key = Tuple[str, str, str]


class InMemoryLookupCache(LookupCache):
    """
    Bounded in-memory cache with least-recently-used eviction.

    Used by dictionaries for session-level caching and in tests. No persistence.
    """

    DEFAULT_MAX_SIZE = 5000

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        self._max_size = max(1, max_size)
        # Structure: {(word, source, target): CacheRecord}, oldest first
        self._store: "OrderedDict[_Key, CacheRecord]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(
        self, word: str, source_language: str, target_language: str
    ) -> Optional[CacheRecord]:
        key = (word, source_language, target_language)
        record = self._store.get(key)
        if record is None:
            self._misses += 1
            return None
        self._store.move_to_end(key)
        self._hits += 1
        return record

    def put(self, record: CacheRecord) -> None:
        key = (record.word, record.source_language, record.target_language)
        self._store[key] = record
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def invalidate(self, word: str, source_language: str, target_language: str) -> None:
        self._store.pop((word, source_language, target_language), None)

    def clear_language_pair(self, source_language: str, target_language: str) -> None:
        stale = [
            key for key in self._store if key[1] == source_language and key[2] == target_language
        ]
        for key in stale:
            del self._store[key]
        logger.debug(
            "Invalidated %d cached lookups for %s->%s", len(stale), source_language, target_language
        )

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> Dict[str, int]:
        return {"size": len(self._store), "hits": self._hits, "misses": self._misses}

"""Lookup cache abstraction - explicit cache owned by a dictionary collaborator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from xenolexia.core import DictionaryEntry


@dataclass
class CacheRecord:
    """A cached lookup result. A record with ``entry=None`` is a cached miss."""

    word: str
    source_language: str
    target_language: str
    entry: Optional[DictionaryEntry]
    cached_at: datetime


class LookupCache(ABC):
    """
    Abstract interface for caching dictionary lookups per language pair.

    Entries never expire on their own. Owners invalidate explicitly, e.g. a
    dictionary clears the affected language pair after importing words.
    """

    @abstractmethod
    def get(
        self, word: str, source_language: str, target_language: str
    ) -> Optional[CacheRecord]:
        """
        Retrieve a cached lookup.

        Args:
            word: Lookup key (already folded by the word matcher).
            source_language: Book language code.
            target_language: Learner's target language code.

        Returns:
            CacheRecord if present (possibly a cached miss), else None.
        """
        pass

    @abstractmethod
    def put(self, record: CacheRecord) -> None:
        """Store or overwrite a cache entry."""
        pass

    @abstractmethod
    def invalidate(self, word: str, source_language: str, target_language: str) -> None:
        """Drop a single cached lookup."""
        pass

    @abstractmethod
    def clear_language_pair(self, source_language: str, target_language: str) -> None:
        """Drop every cached lookup for a language pair."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop everything."""
        pass

    @abstractmethod
    def stats(self) -> Dict[str, int]:
        """Return diagnostic counters: size, hits, misses."""
        pass

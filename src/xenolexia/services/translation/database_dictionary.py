"""Database Dictionary - word list lookups backed by SQLite with an explicit cache."""

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence, Tuple

from xenolexia.core import DictionaryEntry
from xenolexia.io.database_manager import DatabaseManager
from xenolexia.services.caching import CacheRecord, InMemoryLookupCache, LookupCache
from xenolexia.services.text_processing.text_normalization import fold_case
from xenolexia.services.translation.dictionary_service import (
    DictionaryLookupError,
    DictionaryService,
    WordLookupResult,
)

logger = logging.getLogger(__name__)


class DatabaseDictionary(DictionaryService):
    """
    Dictionary backed by the ``word_list``/``word_variants`` tables.

    Owns its LookupCache: hits (including cached misses) are answered from the
    cache, the rest go to the database in a single batched query run on a
    worker thread so the event loop is not blocked. Importing
    entries clears the cache for the affected language pairs.
    """

    def __init__(self, db_manager: DatabaseManager, cache: Optional[LookupCache] = None):
        self.db_manager = db_manager
        self.cache = cache if cache is not None else InMemoryLookupCache()

    async def lookup_words(
        self, words: Sequence[str], source_language: str, target_language: str
    ) -> Dict[str, WordLookupResult]:
        source = source_language.lower()
        target = target_language.lower()
        results: Dict[str, WordLookupResult] = {}
        pending: Dict[str, str] = {}

        for word in words:
            key = fold_case(word, source)
            record = self.cache.get(key, source, target)
            if record is not None:
                results[word] = WordLookupResult(
                    entry=record.entry, source="cache" if record.entry else "none"
                )
            else:
                pending[word] = key

        if not pending:
            return results

        try:
            found = await asyncio.to_thread(
                self.db_manager.lookup_word_entries, list(pending.values()), source, target
            )
        except sqlite3.Error as exc:
            raise DictionaryLookupError(f"Word list lookup failed: {exc}") from exc

        now = datetime.now(timezone.utc)
        for word, key in pending.items():
            entry = found.get(key)
            self.cache.put(
                CacheRecord(
                    word=key,
                    source_language=source,
                    target_language=target,
                    entry=entry,
                    cached_at=now,
                )
            )
            results[word] = WordLookupResult(entry=entry, source="database" if entry else "none")
        return results

    def import_entries(self, entries: Iterable[DictionaryEntry]) -> Tuple[int, int]:
        """
        Bulk-import word list entries.

        Returns:
            Tuple of (imported, skipped). Entries whose folded source word is
            already present for the language pair are skipped.
        """
        imported = 0
        skipped = 0
        touched_pairs = set()
        for entry in entries:
            source = entry.source_language.lower()
            key = fold_case(entry.source_word, source)
            if not key:
                skipped += 1
                continue
            variant_keys = {}
            for variant in entry.variants:
                variant_key = fold_case(variant, source)
                if variant_key and variant_key != key:
                    variant_keys[variant] = variant_key
            if self.db_manager.insert_word_entry(entry, key, variant_keys):
                imported += 1
                touched_pairs.add((source, entry.target_language.lower()))
            else:
                skipped += 1
        self.db_manager.commit()

        for source, target in touched_pairs:
            self.cache.clear_language_pair(source, target)
        logger.info("Imported %d word list entries (%d skipped)", imported, skipped)
        return imported, skipped

    def entry_count(self, source_language: str, target_language: str) -> int:
        return self.db_manager.count_word_entries(source_language.lower(), target_language.lower())

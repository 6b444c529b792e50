"""In-memory dictionary for bundled word lists and tests."""

import logging
from typing import Dict, Iterable, Sequence, Tuple

from xenolexia.core import DictionaryEntry
from xenolexia.services.text_processing.text_normalization import fold_case
from xenolexia.services.translation.dictionary_service import DictionaryService, WordLookupResult

logger = logging.getLogger(__name__)

_PairIndex = Dict[str, DictionaryEntry]


class InMemoryDictionary(DictionaryService):
    """
    Dictionary held entirely in memory, indexed per language pair.

    Entries are indexed under the folded source word and every folded variant.
    When two entries claim the same key the more frequent (lower rank) wins.
    """

    def __init__(self, entries: Iterable[DictionaryEntry] = ()):
        # Structure: {(source, target): {folded key: entry}}
        self._index: Dict[Tuple[str, str], _PairIndex] = {}
        self.add_entries(entries)

    def add_entries(self, entries: Iterable[DictionaryEntry]) -> int:
        """Index entries; returns how many were added."""
        added = 0
        for entry in entries:
            pair = (entry.source_language.lower(), entry.target_language.lower())
            index = self._index.setdefault(pair, {})
            for form in [entry.source_word, *entry.variants]:
                key = fold_case(form, pair[0])
                if not key:
                    continue
                current = index.get(key)
                if current is None or entry.frequency_rank < current.frequency_rank:
                    index[key] = entry
            added += 1
        if added:
            logger.info("Indexed %d in-memory dictionary entries", added)
        return added

    def entry_count(self, source_language: str, target_language: str) -> int:
        index = self._index.get((source_language.lower(), target_language.lower()), {})
        return len({entry.id for entry in index.values()})

    async def lookup_words(
        self, words: Sequence[str], source_language: str, target_language: str
    ) -> Dict[str, WordLookupResult]:
        pair = (source_language.lower(), target_language.lower())
        index = self._index.get(pair, {})
        results: Dict[str, WordLookupResult] = {}
        for word in words:
            entry = index.get(fold_case(word, pair[0]))
            results[word] = WordLookupResult(entry=entry, source="memory" if entry else "none")
        return results

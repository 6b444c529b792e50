"""Word Matcher - structural eligibility and lookup keys for a language pair."""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import regex

from xenolexia.core import DictionaryEntry, is_supported_language, is_within_level
from xenolexia.services.text_processing.text_normalization import fold_case

_HAS_LETTER = regex.compile(r"\p{L}")
_WORD_SHAPE = regex.compile(r"^[\p{L}\p{M}\p{N}]+(?:'[\p{L}\p{M}\p{N}]+)*$")


class WordMatcher:
    """
    Decides which words are worth looking up, and under which key.

    Holds no dictionary data. It only applies the language pair's folding rules
    so lookup keys match the keys dictionaries index under, and it rejects
    material that can never have a translation (numbers, stray symbols).
    An unknown or malformed language code makes every word a non-candidate.
    """

    def __init__(
        self,
        source_language: str,
        target_language: str,
        min_word_length: int = 1,
        max_word_length: int = 30,
    ) -> None:
        self.source_language = _clean_code(source_language)
        self.target_language = _clean_code(target_language)
        self.min_word_length = max(1, min_word_length)
        self.max_word_length = max(self.min_word_length, max_word_length)

    @property
    def is_supported(self) -> bool:
        return (
            is_supported_language(self.source_language)
            and is_supported_language(self.target_language)
            and self.source_language != self.target_language
        )

    def get_language_pair(self) -> Tuple[str, str]:
        return self.source_language, self.target_language

    def normalize(self, word: str) -> Optional[str]:
        """Return the lookup key for word, or None if it is not a candidate."""
        if not self.is_supported or not isinstance(word, str):
            return None
        key = fold_case(word, self.source_language)
        if not key or not self.min_word_length <= len(key) <= self.max_word_length:
            return None
        if not _HAS_LETTER.search(key) or not _WORD_SHAPE.match(key):
            return None
        return key

    def is_candidate(self, word: str) -> bool:
        return self.normalize(word) is not None

    def build_lookup_keys(self, words: Iterable[str]) -> Tuple[Dict[str, str], List[str]]:
        """
        Map candidate words to lookup keys.

        Args:
            words: Token surface forms, possibly with repeats. Folding is
                applied here, so the original casing must be kept.

        Returns:
            Tuple of (word -> key for every candidate word, unique keys in
            first-appearance order) so the caller can issue one batched lookup.
        """
        word_keys: Dict[str, str] = {}
        unique_keys: List[str] = []
        seen = set()
        for word in words:
            if word in word_keys:
                continue
            key = self.normalize(word)
            if key is None:
                continue
            word_keys[word] = key
            if key not in seen:
                seen.add(key)
                unique_keys.append(key)
        return word_keys, unique_keys

    def resolve(
        self,
        word_keys: Mapping[str, str],
        entries_by_key: Mapping[str, Optional[DictionaryEntry]],
    ) -> Dict[str, Optional[DictionaryEntry]]:
        """Project key-level lookup results back onto token words.

        Entries for a different language pair are treated as absent.
        """
        resolved: Dict[str, Optional[DictionaryEntry]] = {}
        for word, key in word_keys.items():
            entry = entries_by_key.get(key)
            if entry is not None and not self._matches_pair(entry):
                entry = None
            resolved[word] = entry
        return resolved

    def _matches_pair(self, entry: DictionaryEntry) -> bool:
        return (
            entry.source_language.lower() == self.source_language
            and entry.target_language.lower() == self.target_language
        )

    @staticmethod
    def is_within_level(level: str, max_level: str) -> bool:
        """Check if a word's level is within the max allowed level."""
        return is_within_level(level, max_level)


def _clean_code(code: object) -> str:
    return code.strip().lower() if isinstance(code, str) else ""

"""Dictionary Service - batched word lookups for a language pair."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Sequence

from xenolexia.core import DictionaryEntry

LookupSource = Literal["cache", "database", "memory", "none"]


class DictionaryLookupError(RuntimeError):
    """Raised when a dictionary's backing store cannot answer a lookup."""


@dataclass
class WordLookupResult:
    """Result of looking up one word."""

    entry: Optional[DictionaryEntry]
    source: LookupSource = "none"

    @property
    def found(self) -> bool:
        return self.entry is not None


class DictionaryService(ABC):
    """
    Abstract collaborator that supplies translations to the injection pipeline.

    Implementations are language-pair scoped per call and must answer a whole
    batch at once, so a chapter costs one lookup regardless of its length.
    """

    @abstractmethod
    async def lookup_words(
        self, words: Sequence[str], source_language: str, target_language: str
    ) -> Dict[str, WordLookupResult]:
        """
        Look up a batch of words.

        Args:
            words: Lookup keys, already folded for the source language.
            source_language: Book language code.
            target_language: Learner's target language code.

        Returns:
            One WordLookupResult per requested word; misses carry ``entry=None``.

        Raises:
            DictionaryLookupError: If the backing store fails.
        """
        pass


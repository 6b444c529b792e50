"""Translation services - dictionary collaborators, word replacement and orchestration."""

from xenolexia.services.translation.database_dictionary import DatabaseDictionary
from xenolexia.services.translation.dictionary_service import (
    DictionaryLookupError,
    DictionaryService,
    WordLookupResult,
)
from xenolexia.services.translation.in_memory_dictionary import InMemoryDictionary
from xenolexia.services.translation.translation_engine import TranslationEngine, TranslationOptions
from xenolexia.services.translation.word_replacer import (
    MARKER_CLASS,
    ReplacementResult,
    ReplacementStats,
    ReplacerOptions,
    WordReplacer,
)

__all__ = [
    "DatabaseDictionary",
    "DictionaryLookupError",
    "DictionaryService",
    "WordLookupResult",
    "InMemoryDictionary",
    "TranslationEngine",
    "TranslationOptions",
    "MARKER_CLASS",
    "ReplacementResult",
    "ReplacementStats",
    "ReplacerOptions",
    "WordReplacer",
]

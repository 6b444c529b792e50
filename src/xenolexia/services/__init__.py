"""Services layer - text processing, translation, caching and review."""

from xenolexia.services.settings_manager import SettingsManager

# Text processing services
from xenolexia.services.text_processing import Tokenizer, TokenizerOptions, WordMatcher, normalize_text, fold_case

# Caching services
from xenolexia.services.caching import LookupCache, CacheRecord, InMemoryLookupCache

# Translation services
from xenolexia.services.translation import (
    DatabaseDictionary,
    DictionaryLookupError,
    DictionaryService,
    InMemoryDictionary,
    TranslationEngine,
    TranslationOptions,
    WordLookupResult,
    WordReplacer,
    ReplacerOptions,
)

# Review services
from xenolexia.services.review import ReviewScheduler, SchedulerConfig, VocabularyService

__all__ = [
    "SettingsManager",
    "Tokenizer",
    "TokenizerOptions",
    "WordMatcher",
    "normalize_text",
    "fold_case",
    "LookupCache",
    "CacheRecord",
    "InMemoryLookupCache",
    "DatabaseDictionary",
    "DictionaryLookupError",
    "DictionaryService",
    "InMemoryDictionary",
    "TranslationEngine",
    "TranslationOptions",
    "WordLookupResult",
    "WordReplacer",
    "ReplacerOptions",
    "ReviewScheduler",
    "SchedulerConfig",
    "VocabularyService",
]

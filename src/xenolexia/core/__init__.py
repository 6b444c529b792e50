"""Domain layer - pure entities for the reading and review core."""

from .languages import (
    PROFICIENCY_ORDER,
    SUPPORTED_LANGUAGES,
    ProficiencyLevel,
    coerce_proficiency,
    is_supported_language,
    is_within_level,
    proficiency_for_rank,
)
from .processed_text import ForeignWordData, ProcessedText, ProcessingStats
from .token import Token
from .vocabulary_entities import (
    INITIAL_EASE_FACTOR,
    VOCABULARY_STATUSES,
    MemoryState,
    VocabularyItem,
    VocabularyStats,
    VocabularyStatus,
)
from .word_entry import DictionaryEntry, PartOfSpeech

__all__ = [
    "PROFICIENCY_ORDER",
    "SUPPORTED_LANGUAGES",
    "ProficiencyLevel",
    "coerce_proficiency",
    "is_supported_language",
    "is_within_level",
    "proficiency_for_rank",
    "Token",
    "DictionaryEntry",
    "PartOfSpeech",
    "ForeignWordData",
    "ProcessedText",
    "ProcessingStats",
    "INITIAL_EASE_FACTOR",
    "VOCABULARY_STATUSES",
    "MemoryState",
    "VocabularyItem",
    "VocabularyStats",
    "VocabularyStatus",
]

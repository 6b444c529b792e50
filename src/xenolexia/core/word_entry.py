"""Dictionary entry entity consumed by the text injection pipeline."""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .languages import ProficiencyLevel

PartOfSpeech = Literal[
    "noun",
    "verb",
    "adjective",
    "adverb",
    "pronoun",
    "preposition",
    "conjunction",
    "interjection",
    "article",
    "other",
]


@dataclass
class DictionaryEntry:
    """A source word with its translation in the learner's target language."""

    id: str
    source_word: str
    target_word: str
    source_language: str
    target_language: str
    proficiency_level: ProficiencyLevel
    frequency_rank: int
    """Position in the source language frequency list, 1 = most common"""
    part_of_speech: PartOfSpeech = "other"
    variants: List[str] = field(default_factory=list)
    """Inflected or alternate spellings that resolve to this entry"""
    pronunciation: Optional[str] = None

"""Output entities of the text injection pipeline."""

from dataclasses import dataclass, field
from typing import List

from .word_entry import DictionaryEntry


@dataclass
class ForeignWordData:
    """One substitution made in a chapter, in document order."""

    original_word: str
    foreign_word: str
    start_index: int
    end_index: int
    word_entry: DictionaryEntry


@dataclass
class ProcessingStats:
    """Aggregate statistics for one processed chapter."""

    total_words: int = 0
    eligible_words: int = 0
    replaced_words: int = 0
    protected_words: int = 0
    processing_time: float = 0.0
    """Elapsed wall time in milliseconds"""


@dataclass
class ProcessedText:
    """Annotated chapter content returned to the reading surface."""

    content: str
    foreign_words: List[ForeignWordData] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)

    @classmethod
    def unchanged(cls, content: str) -> "ProcessedText":
        """Degraded result: original content, no substitutions, zeroed stats."""
        return cls(content=content, foreign_words=[], stats=ProcessingStats())

"""Vocabulary tracking entities used across services and persistence."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional, Tuple

VocabularyStatus = Literal["new", "learning", "review", "learned"]

VOCABULARY_STATUSES: Tuple[str, ...] = ("new", "learning", "review", "learned")

INITIAL_EASE_FACTOR = 2.5


@dataclass(frozen=True)
class MemoryState:
    """Spaced-repetition parameters of a saved word.

    Immutable: the review scheduler returns a new state on every grading.
    """

    review_count: int = 0
    ease_factor: float = INITIAL_EASE_FACTOR
    interval: int = 0
    """Days until the next review is due"""
    last_reviewed_at: Optional[datetime] = None
    status: VocabularyStatus = "new"

    @classmethod
    def new(cls) -> "MemoryState":
        return cls()


@dataclass
class VocabularyItem:
    id: Optional[int]
    source_word: str
    target_word: str
    source_language: str
    target_language: str
    added_at: datetime
    memory: MemoryState = field(default_factory=MemoryState.new)
    context_sentence: Optional[str] = None
    book_id: Optional[str] = None
    book_title: Optional[str] = None

    @property
    def status(self) -> str:
        return self.memory.status


@dataclass
class VocabularyStats:
    total: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    learned: int = 0
    due_today: int = 0

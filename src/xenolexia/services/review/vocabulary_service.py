"""Vocabulary Service - saved words and their review schedule."""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from xenolexia.core import VOCABULARY_STATUSES, VocabularyItem, VocabularyStats
from xenolexia.io import DatabaseManager
from xenolexia.services.review.review_scheduler import ReviewScheduler

logger = logging.getLogger(__name__)

DEFAULT_DUE_LIMIT = 20


class VocabularyService:
    """Application service for the learner's vocabulary.

    Depends on DatabaseManager for persistence and ReviewScheduler for grading.
    Grading is a read-modify-write of one row, so it runs under a lock.
    """

    def __init__(self, db: DatabaseManager, scheduler: Optional[ReviewScheduler] = None) -> None:
        self._db = db
        self._scheduler = scheduler or ReviewScheduler()
        self._review_lock = threading.Lock()

    @property
    def scheduler(self) -> ReviewScheduler:
        return self._scheduler

    def add_word(
        self,
        source_word: str,
        target_word: str,
        source_language: str,
        target_language: str,
        context_sentence: Optional[str] = None,
        book_id: Optional[str] = None,
        book_title: Optional[str] = None,
    ) -> VocabularyItem:
        """Save a NEW word with a fresh memory state.

        Raises:
            ValueError: If the word is already saved for this target language.
        """
        item = VocabularyItem(
            id=None,
            source_word=source_word,
            target_word=target_word,
            source_language=source_language,
            target_language=target_language,
            added_at=datetime.now(timezone.utc),
            context_sentence=context_sentence,
            book_id=book_id,
            book_title=book_title,
        )
        return self._db.insert_vocabulary_item(item)

    def get_word(self, word_id: int) -> Optional[VocabularyItem]:
        return self._db.get_vocabulary_item(word_id)

    def remove_word(self, word_id: int) -> bool:
        return self._db.delete_vocabulary_item(word_id)

    def list_words(self) -> List[VocabularyItem]:
        """All saved words, newest first."""
        return self._db.list_vocabulary()

    def search(self, query: str) -> List[VocabularyItem]:
        query = (query or "").strip()
        if not query:
            return self.list_words()
        return self._db.search_vocabulary(query)

    def get_words_by_status(self, status: str) -> List[VocabularyItem]:
        if status not in VOCABULARY_STATUSES:
            raise ValueError(f"Unknown vocabulary status: {status}")
        return self._db.list_vocabulary(status=status)

    def get_words_by_book(self, book_id: str) -> List[VocabularyItem]:
        return self._db.list_vocabulary(book_id=book_id)

    def is_word_saved(self, source_word: str, target_language: str) -> bool:
        return self._db.find_vocabulary_item(source_word, target_language) is not None

    def clear(self) -> None:
        self._db.delete_all_vocabulary()

    def record_review(
        self, word_id: int, quality: float, now: Optional[datetime] = None
    ) -> Optional[VocabularyItem]:
        """
        Grade a saved word and persist the new memory state.

        Args:
            word_id: Saved word id.
            quality: Recall quality 0-5 (see QUALITY_* constants).
            now: Review time; defaults to the current UTC time.

        Returns:
            The updated VocabularyItem, or None if the word does not exist.
        """
        with self._review_lock:
            item = self._db.get_vocabulary_item(word_id)
            if item is None:
                return None
            memory = self._scheduler.grade(item.memory, quality, now)
            self._db.update_memory_state(word_id, memory)
        logger.debug(
            "Graded word %s (q=%s): %s -> %s, interval %d days",
            word_id,
            quality,
            item.memory.status,
            memory.status,
            memory.interval,
        )
        return replace(item, memory=memory)

    def get_due_for_review(
        self,
        limit: int = DEFAULT_DUE_LIMIT,
        now: Optional[datetime] = None,
        include_learned: bool = False,
    ) -> List[VocabularyItem]:
        """Due words: new first, then learning, then review; oldest review first."""
        if limit <= 0:
            return []
        return self._db.list_due_vocabulary(
            now or datetime.now(timezone.utc), limit, include_learned=include_learned
        )

    def get_statistics(self, now: Optional[datetime] = None) -> VocabularyStats:
        counts = self._db.count_by_status()
        return VocabularyStats(
            total=sum(counts.values()),
            new=counts.get("new", 0),
            learning=counts.get("learning", 0),
            review=counts.get("review", 0),
            learned=counts.get("learned", 0),
            due_today=self._db.count_due(now or datetime.now(timezone.utc)),
        )

"""Review services - spaced-repetition scheduling and the vocabulary store."""

from xenolexia.services.review.review_scheduler import (
    QUALITY_AGAIN,
    QUALITY_EASY,
    QUALITY_GOOD,
    QUALITY_HARD,
    ReviewScheduler,
    SchedulerConfig,
    clamp_quality,
    grade,
)
from xenolexia.services.review.vocabulary_service import VocabularyService

__all__ = [
    "QUALITY_AGAIN",
    "QUALITY_EASY",
    "QUALITY_GOOD",
    "QUALITY_HARD",
    "ReviewScheduler",
    "SchedulerConfig",
    "clamp_quality",
    "grade",
    "VocabularyService",
]

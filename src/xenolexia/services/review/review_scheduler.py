"""Review Scheduler - SM-2 style spaced repetition over immutable memory states."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from xenolexia.core import INITIAL_EASE_FACTOR, MemoryState

# Fixed UI mapping from review buttons to quality grades.
QUALITY_AGAIN = 1
QUALITY_HARD = 2
QUALITY_GOOD = 4
QUALITY_EASY = 5

PASSING_QUALITY = 3
MAX_QUALITY = 5


@dataclass(frozen=True)
class SchedulerConfig:
    initial_ease: float = INITIAL_EASE_FACTOR
    ease_floor: float = 1.3
    lapse_interval: int = 1
    graduating_interval: int = 1
    """Interval after the first successful review"""
    second_interval: int = 6
    easy_bonus: float = 1.0
    """Extra interval multiplier for a top-quality recall"""
    graduation_review_count: int = 2
    learned_threshold_days: int = 21


class ReviewScheduler:
    """
    Computes the next memory state of a word from a quality grade.

    Pure: never touches storage and never mutates its input. Every
    (state, quality) pair has a result; out-of-range input is clamped.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()

    def grade(
        self, state: MemoryState, quality: float, now: Optional[datetime] = None
    ) -> MemoryState:
        """
        Apply one review.

        Args:
            state: Current memory state.
            quality: Recall quality, 0 (blackout) to 5 (perfect). Below 3 is a lapse.
            now: Review time; defaults to the current UTC time.

        Returns:
            The new MemoryState.
        """
        cfg = self.config
        reviewed_at = now or datetime.now(timezone.utc)
        q = clamp_quality(quality)
        ease = self._current_ease(state)
        new_ease = self._updated_ease(ease, q)

        if q < PASSING_QUALITY:
            return MemoryState(
                review_count=0,
                ease_factor=new_ease,
                interval=cfg.lapse_interval,
                last_reviewed_at=reviewed_at,
                status="learning",
            )

        review_count = max(0, int(state.review_count or 0)) + 1
        if review_count == 1:
            interval = cfg.graduating_interval
        elif review_count == 2:
            interval = cfg.second_interval
        else:
            previous = max(1, int(state.interval or 0))
            growth = ease * (cfg.easy_bonus if q == MAX_QUALITY else 1.0)
            interval = max(1, int(previous * growth + 0.5))

        return MemoryState(
            review_count=review_count,
            ease_factor=new_ease,
            interval=interval,
            last_reviewed_at=reviewed_at,
            status=self._status_after_pass(state.status, review_count, interval),
        )

    def is_due(
        self, state: MemoryState, now: Optional[datetime] = None, include_learned: bool = False
    ) -> bool:
        """Due when never reviewed, or when last review plus interval days has passed."""
        if state.status == "learned" and not include_learned:
            return False
        due_at = self.next_review_at(state)
        if due_at is None:
            return True
        return due_at <= _as_utc(now or datetime.now(timezone.utc))

    def next_review_at(self, state: MemoryState) -> Optional[datetime]:
        """When the word next falls due; None means it is due immediately."""
        if state.last_reviewed_at is None:
            return None
        days = max(0, int(state.interval or 0))
        return _as_utc(state.last_reviewed_at) + timedelta(days=days)

    def _current_ease(self, state: MemoryState) -> float:
        try:
            ease = float(state.ease_factor)
        except (TypeError, ValueError):
            return self.config.initial_ease
        if math.isnan(ease):
            return self.config.initial_ease
        return max(self.config.ease_floor, ease)

    def _updated_ease(self, ease: float, quality: int) -> float:
        miss = MAX_QUALITY - quality
        adjusted = ease + (0.1 - miss * (0.08 + miss * 0.02))
        return round(max(self.config.ease_floor, adjusted), 4)

    def _status_after_pass(self, previous: str, review_count: int, interval: int) -> str:
        cfg = self.config
        if previous == "learned" or interval > cfg.learned_threshold_days:
            return "learned"
        if review_count >= cfg.graduation_review_count and interval > cfg.graduating_interval:
            return "review"
        return "learning"


def clamp_quality(quality: object) -> int:
    """Round to the nearest whole grade and clamp into 0-5; unusable input is 0."""
    try:
        value = float(quality)
    except (TypeError, ValueError):
        return 0
    if math.isnan(value):
        return 0
    value = min(float(MAX_QUALITY), max(0.0, value))
    return int(math.floor(value + 0.5))


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken as local time, matching datetime.timestamp().
    return value.astimezone(timezone.utc)


_default_scheduler = ReviewScheduler()


def grade(state: MemoryState, quality: float, now: Optional[datetime] = None) -> MemoryState:
    """Grade with the default configuration."""
    return _default_scheduler.grade(state, quality, now)

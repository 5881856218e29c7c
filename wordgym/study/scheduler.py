"""
Fixed-Interval Review Scheduler.

Implements:
- Mastery levels 0-7 that move one step per review
- A fixed escalating interval table (days) indexed by the new level
- XP awards for correct answers and a flat effort credit for misses
- Due-first pool selection for building sessions

Level Scale:
0     - New
1-3   - Learning
4-6   - Reviewing
7     - Mastered
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from loguru import logger

from wordgym.core.models import MAX_LEVEL, WordItem
from wordgym.core.randomness import RandomSource

# =============================================================================
# Review Scheduler
# =============================================================================


@dataclass(frozen=True)
class SchedulerConfig:
    """Configuration for the interval scheduler."""

    max_level: int = MAX_LEVEL
    intervals: tuple[int, ...] = (1, 3, 7, 14, 30, 60, 120, 240)  # Days, ascending
    base_xp: int = 10
    level_bonus: int = 2  # XP per level reached
    fast_threshold_ms: int = 3000
    speed_bonus: int = 5
    effort_xp: int = 2  # Awarded for an incorrect answer
    failure_interval_days: int = 1

    def __post_init__(self) -> None:
        # WordItem rejects levels above MAX_LEVEL
        if not 1 <= self.max_level <= MAX_LEVEL:
            raise ValueError(f"max_level must be between 1 and {MAX_LEVEL}, got {self.max_level}")
        if not self.intervals:
            raise ValueError("intervals must not be empty")


class ReviewScheduler:
    """
    Computes the next mastery state of a word after one answer.

    The scheduler is a pure transformation: it never reads the clock and
    never mutates its input. Callers pass `now` and persist the result.
    """

    def __init__(self, config: SchedulerConfig | None = None):
        """
        Initialize the scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SchedulerConfig()

    def advance(
        self,
        word: WordItem,
        was_correct: bool,
        now: datetime,
        elapsed_ms: int | None = None,
    ) -> WordItem:
        """
        Apply one review outcome.

        Args:
            word: Current word state
            was_correct: Whether the learner answered correctly
            now: Review timestamp
            elapsed_ms: Time taken to answer, for the speed bonus

        Returns:
            New WordItem with updated level, streak, XP and due date
        """
        cfg = self.config

        if was_correct:
            level = min(cfg.max_level, word.level + 1)
            streak = word.correct_streak + 1
            fast = elapsed_ms is not None and elapsed_ms < cfg.fast_threshold_ms
            xp = cfg.base_xp + level * cfg.level_bonus + (cfg.speed_bonus if fast else 0)
            interval_days = cfg.intervals[min(level, len(cfg.intervals) - 1)]
        else:
            level = max(0, word.level - 1)
            streak = 0
            xp = cfg.effort_xp
            interval_days = cfg.failure_interval_days

        updated = replace(
            word,
            level=level,
            correct_streak=streak,
            total_xp=word.total_xp + xp,
            due_at=now + timedelta(days=interval_days),
            review_count=word.review_count + 1,
            last_reviewed_at=now,
        )

        logger.debug(
            f"Reviewed {word.id}: correct={was_correct}, level {word.level}->{level}, "
            f"+{xp}xp, next in {interval_days}d"
        )

        return updated


# =============================================================================
# Pool selection
# =============================================================================


def due_items(words: Iterable[WordItem], as_of: datetime) -> list[WordItem]:
    """Words whose due date has passed (or that were never scheduled)."""
    return [w for w in words if w.is_due(as_of)]


def select_review_pool(
    words: Sequence[WordItem],
    count: int,
    as_of: datetime,
    rng: RandomSource,
    due_ratio: float = 0.6,
) -> list[WordItem]:
    """
    Pick up to `count` words, favouring due ones.

    Takes ceil(count * due_ratio) due words, most overdue first, and fills
    the rest with words that are not yet due. A shortfall on either side is
    back-filled from the other, so the result has min(count, len(words)) items.
    """
    count = min(count, len(words))
    due = sorted(
        due_items(words, as_of),
        key=lambda w: w.due_at or datetime.min.replace(tzinfo=as_of.tzinfo),
    )
    due_ids = {w.id for w in due}
    fresh = rng.shuffled([w for w in words if w.id not in due_ids])

    due_quota = min(len(due), math.ceil(count * due_ratio))
    fresh_quota = min(len(fresh), count - due_quota)
    selected = due[:due_quota] + fresh[:fresh_quota]

    # Back-fill from whichever side still has words
    shortfall = count - len(selected)
    if shortfall > 0:
        selected += due[due_quota : due_quota + shortfall]
    shortfall = count - len(selected)
    if shortfall > 0:
        selected += fresh[fresh_quota : fresh_quota + shortfall]

    logger.debug(
        f"Review pool: {min(due_quota, len(selected))} due of {len(due)}, "
        f"{len(selected)} selected from {len(words)}"
    )

    return selected

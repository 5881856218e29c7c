"""
Learner progress.

Aggregates mastery and experience across a set of words:
- mastery_breakdown(): new / learning / reviewing / mastered counts
- level_from_xp(): learner level from accumulated XP
- xp_progress(): how far the learner is into the current level
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from wordgym.core.models import MAX_LEVEL, WordItem

# XP needed to reach learner levels 1..8
LEVEL_THRESHOLDS = (0, 100, 300, 600, 1000, 1500, 2200, 3000)
MAX_LEARNER_LEVEL = len(LEVEL_THRESHOLDS)


@dataclass(frozen=True)
class MasteryBreakdown:
    """Word counts per mastery band."""

    total: int
    new: int  # level 0
    learning: int  # levels 1-3
    reviewing: int  # levels 4-6
    mastered: int  # level 7

    @property
    def mastery_percentage(self) -> int:
        return round(self.mastered / self.total * 100) if self.total else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "new": self.new,
            "learning": self.learning,
            "reviewing": self.reviewing,
            "mastered": self.mastered,
            "mastery_percentage": self.mastery_percentage,
        }


@dataclass(frozen=True)
class XPProgress:
    """Progress through the current learner level."""

    level: int
    current: int  # XP earned within this level
    needed: int  # XP span of this level; 0 at the top level
    percentage: float


def mastery_breakdown(words: Iterable[WordItem]) -> MasteryBreakdown:
    levels = [w.level for w in words]
    return MasteryBreakdown(
        total=len(levels),
        new=sum(1 for lv in levels if lv == 0),
        learning=sum(1 for lv in levels if 1 <= lv <= 3),
        reviewing=sum(1 for lv in levels if 4 <= lv < MAX_LEVEL),
        mastered=sum(1 for lv in levels if lv == MAX_LEVEL),
    )


def total_xp(words: Iterable[WordItem]) -> int:
    return sum(w.total_xp for w in words)


def level_from_xp(xp: int) -> int:
    """Learner level (1-8) for a total XP amount."""
    return max(1, bisect_right(LEVEL_THRESHOLDS, xp))


def xp_progress(xp: int) -> XPProgress:
    level = level_from_xp(xp)
    floor = LEVEL_THRESHOLDS[level - 1]
    ceiling = LEVEL_THRESHOLDS[min(level, MAX_LEARNER_LEVEL - 1)]
    needed = ceiling - floor
    current = xp - floor
    percentage = min(100.0, current / needed * 100) if needed > 0 else 100.0
    return XPProgress(level=level, current=current, needed=needed, percentage=percentage)

"""
Reward policies.

Each game shape awards experience differently. A policy is a small object
with a single award() method, so the engine stays shape-agnostic and games
can inject their own curve.

Defaults:
    multiple_choice   10 / 2, +5 when correct under 3s
    typing            15 / 3, +5 when correct under 3s
    dictation         20 / 5, +5 when correct under 3s
    listening         15 per correct
    scramble          15 per correct
    fill_blanks       20 per correct
    chain             25 per correct round
    true_false        8 per correct, +2 whenever the best streak grows
    speed             10 per correct, +5 under half the limit, +10 on a 5+ streak
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from wordgym.core.models import RoundShape


@dataclass(frozen=True)
class RewardContext:
    """Everything a policy may look at when pricing one answer."""

    correct: bool
    elapsed_ms: int
    time_limit_ms: int | None = None
    streak_before: int = 0  # Consecutive correct answers before this one
    max_streak_before: int = 0


class RewardPolicy(Protocol):
    def award(self, ctx: RewardContext) -> int:
        """XP for one answer. Never negative."""
        ...


@dataclass(frozen=True)
class FlatReward:
    """Fixed XP for correct and incorrect answers, with an optional quick-answer bonus."""

    correct_xp: int
    incorrect_xp: int = 0
    fast_bonus: int = 0
    fast_threshold_ms: int = 3000

    def award(self, ctx: RewardContext) -> int:
        if not ctx.correct:
            return self.incorrect_xp
        bonus = self.fast_bonus if ctx.elapsed_ms < self.fast_threshold_ms else 0
        return self.correct_xp + bonus


@dataclass(frozen=True)
class StreakReward:
    """
    Flat XP plus a streak bonus.

    With grow_bonus, every correct answer that beats the session's best
    streak earns extra. With threshold_bonus, a correct answer earns extra
    once the running streak before it has reached `threshold`.
    """

    correct_xp: int
    grow_bonus: int = 0
    threshold: int = 5
    threshold_bonus: int = 0

    def award(self, ctx: RewardContext) -> int:
        if not ctx.correct:
            return 0
        xp = self.correct_xp
        if ctx.streak_before + 1 > ctx.max_streak_before:
            xp += self.grow_bonus
        if ctx.streak_before >= self.threshold:
            xp += self.threshold_bonus
        return xp


@dataclass(frozen=True)
class TimeBoxedReward:
    """
    Speed rounds: bonus for answering inside a fraction of the time limit.

    An optional streak policy is added on top; give it correct_xp=0.
    """

    correct_xp: int = 10
    speed_bonus: int = 5
    speed_fraction: float = 0.5
    streak: StreakReward | None = None

    def award(self, ctx: RewardContext) -> int:
        if not ctx.correct:
            return 0
        xp = self.correct_xp
        if ctx.time_limit_ms and ctx.elapsed_ms < ctx.time_limit_ms * self.speed_fraction:
            xp += self.speed_bonus
        if self.streak is not None:
            xp += self.streak.award(ctx)
        return xp


def default_rewards() -> dict[RoundShape, RewardPolicy]:
    """Reward curve for every shape."""
    return {
        RoundShape.MULTIPLE_CHOICE: FlatReward(correct_xp=10, incorrect_xp=2, fast_bonus=5),
        RoundShape.TYPING: FlatReward(correct_xp=15, incorrect_xp=3, fast_bonus=5),
        RoundShape.DICTATION: FlatReward(correct_xp=20, incorrect_xp=5, fast_bonus=5),
        RoundShape.LISTENING: FlatReward(correct_xp=15),
        RoundShape.SCRAMBLE: FlatReward(correct_xp=15),
        RoundShape.FILL_BLANKS: FlatReward(correct_xp=20),
        RoundShape.CHAIN: FlatReward(correct_xp=25),
        RoundShape.FLASHCARD: FlatReward(correct_xp=10),
        RoundShape.TRUE_FALSE: StreakReward(correct_xp=8, grow_bonus=2),
        RoundShape.SPEED: TimeBoxedReward(
            correct_xp=10,
            speed_bonus=5,
            streak=StreakReward(correct_xp=0, threshold=5, threshold_bonus=10),
        ),
    }

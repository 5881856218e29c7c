"""
Unit tests for reward policies.
"""

import pytest

from wordgym.core.models import RoundShape
from wordgym.study.rewards import (
    FlatReward,
    RewardContext,
    StreakReward,
    TimeBoxedReward,
    default_rewards,
)


def ctx(correct=True, elapsed_ms=5000, time_limit_ms=None, streak_before=0, max_streak_before=0):
    return RewardContext(
        correct=correct,
        elapsed_ms=elapsed_ms,
        time_limit_ms=time_limit_ms,
        streak_before=streak_before,
        max_streak_before=max_streak_before,
    )


class TestFlatReward:
    def test_correct_and_incorrect(self):
        policy = FlatReward(correct_xp=15, incorrect_xp=3)
        assert policy.award(ctx()) == 15
        assert policy.award(ctx(correct=False)) == 3

    def test_fast_bonus(self):
        policy = FlatReward(correct_xp=10, incorrect_xp=2, fast_bonus=5)
        assert policy.award(ctx(elapsed_ms=2999)) == 15
        assert policy.award(ctx(elapsed_ms=3000)) == 10

    def test_no_fast_bonus_on_miss(self):
        policy = FlatReward(correct_xp=10, incorrect_xp=2, fast_bonus=5)
        assert policy.award(ctx(correct=False, elapsed_ms=100)) == 2


class TestStreakReward:
    def test_grow_bonus_when_best_streak_grows(self):
        policy = StreakReward(correct_xp=8, grow_bonus=2)
        assert policy.award(ctx(streak_before=2, max_streak_before=2)) == 10

    def test_no_grow_bonus_below_best(self):
        policy = StreakReward(correct_xp=8, grow_bonus=2)
        assert policy.award(ctx(streak_before=0, max_streak_before=4)) == 8

    def test_threshold_bonus(self):
        policy = StreakReward(correct_xp=0, threshold=5, threshold_bonus=10)
        assert policy.award(ctx(streak_before=4, max_streak_before=9)) == 0
        assert policy.award(ctx(streak_before=5, max_streak_before=9)) == 10

    def test_miss_earns_nothing(self):
        assert StreakReward(correct_xp=8, grow_bonus=2).award(ctx(correct=False)) == 0


class TestTimeBoxedReward:
    @pytest.fixture
    def policy(self):
        return default_rewards()[RoundShape.SPEED]

    def test_slow_correct(self, policy):
        assert policy.award(ctx(elapsed_ms=6000, time_limit_ms=10000)) == 10

    def test_fast_correct(self, policy):
        assert policy.award(ctx(elapsed_ms=4999, time_limit_ms=10000)) == 15

    def test_streak_bonus_after_five(self, policy):
        assert policy.award(
            ctx(elapsed_ms=6000, time_limit_ms=10000, streak_before=5, max_streak_before=5)
        ) == 20

    def test_miss(self, policy):
        assert policy.award(ctx(correct=False, elapsed_ms=100, time_limit_ms=10000)) == 0

    def test_without_time_limit_has_no_speed_bonus(self):
        assert TimeBoxedReward().award(ctx(elapsed_ms=1)) == 10


class TestDefaultRewards:
    def test_covers_every_shape(self):
        assert set(default_rewards()) == set(RoundShape)

    @pytest.mark.parametrize(
        "shape,xp",
        [
            (RoundShape.MULTIPLE_CHOICE, 10),
            (RoundShape.TYPING, 15),
            (RoundShape.DICTATION, 20),
            (RoundShape.LISTENING, 15),
            (RoundShape.SCRAMBLE, 15),
            (RoundShape.FILL_BLANKS, 20),
            (RoundShape.CHAIN, 25),
            (RoundShape.FLASHCARD, 10),
            (RoundShape.TRUE_FALSE, 10),
        ],
    )
    def test_slow_first_correct_answer(self, shape, xp):
        assert default_rewards()[shape].award(ctx(elapsed_ms=5000)) == xp

    @pytest.mark.parametrize(
        "shape,xp",
        [
            (RoundShape.MULTIPLE_CHOICE, 2),
            (RoundShape.TYPING, 3),
            (RoundShape.DICTATION, 5),
            (RoundShape.CHAIN, 0),
            (RoundShape.FLASHCARD, 0),
        ],
    )
    def test_incorrect_answer(self, shape, xp):
        assert default_rewards()[shape].award(ctx(correct=False)) == xp

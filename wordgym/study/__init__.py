"""
Study Module - Scheduling, round building and the session engine.

Components:
- scheduler: fixed-interval Review Scheduler and due-first pool selection
- distractors: wrong-option picking for choice rounds
- rounds: one registered builder per RoundShape
- rewards: per-shape XP policies
- session_engine: the shared session state machine
- progress: mastery bands and learner level
"""

from wordgym.study.distractors import compose_options, pick_distractors
from wordgym.study.progress import (
    LEVEL_THRESHOLDS,
    MasteryBreakdown,
    XPProgress,
    level_from_xp,
    mastery_breakdown,
    total_xp,
    xp_progress,
)
from wordgym.study.rewards import (
    FlatReward,
    RewardContext,
    RewardPolicy,
    StreakReward,
    TimeBoxedReward,
    default_rewards,
)
from wordgym.study.rounds import BUILDERS, build_round
from wordgym.study.scheduler import (
    ReviewScheduler,
    SchedulerConfig,
    due_items,
    select_review_pool,
)
from wordgym.study.session_engine import SessionEngine

__all__ = [
    # Scheduling
    "ReviewScheduler",
    "SchedulerConfig",
    "due_items",
    "select_review_pool",
    # Rounds
    "BUILDERS",
    "build_round",
    "compose_options",
    "pick_distractors",
    # Rewards
    "FlatReward",
    "RewardContext",
    "RewardPolicy",
    "StreakReward",
    "TimeBoxedReward",
    "default_rewards",
    # Engine
    "SessionEngine",
    # Progress
    "LEVEL_THRESHOLDS",
    "MasteryBreakdown",
    "XPProgress",
    "level_from_xp",
    "mastery_breakdown",
    "total_xp",
    "xp_progress",
]

"""
wordgym - vocabulary games on one shared session engine.

Packages:
- core: data model, errors, clock and random source
- grading: Similarity Matcher and per-kind graders
- study: Review Scheduler, round builders, rewards and the Session Engine
- storage: word repositories used by callers
"""

from wordgym.core import (
    Direction,
    EmptyPoolError,
    InvalidTransitionError,
    RandomSource,
    RoundShape,
    Session,
    SessionStatus,
    WordItem,
)
from wordgym.grading import SimilarityMatcher
from wordgym.study import ReviewScheduler, SessionEngine

__version__ = "1.0.0"

__all__ = [
    "Direction",
    "EmptyPoolError",
    "InvalidTransitionError",
    "RandomSource",
    "ReviewScheduler",
    "RoundShape",
    "Session",
    "SessionEngine",
    "SessionStatus",
    "SimilarityMatcher",
    "WordItem",
]

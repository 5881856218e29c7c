"""
Core Module - Shared domain models and interfaces.

Components:
- models: WordItem, Round, Session and friends
- errors: EmptyPoolError, InvalidTransitionError
- clock: Clock protocol and the UTC system clock
- randomness: the injectable RandomSource

Every other package (grading, study, storage) imports its shared
concepts from here rather than redefining them.
"""

from wordgym.core.clock import Clock, SystemClock
from wordgym.core.errors import EmptyPoolError, InvalidTransitionError, WordGymError
from wordgym.core.models import (
    MAX_LEVEL,
    Direction,
    Round,
    RoundKind,
    RoundShape,
    Session,
    SessionOutcome,
    SessionStats,
    SessionStatus,
    WordItem,
)
from wordgym.core.randomness import RandomSource

__all__ = [
    # Models
    "MAX_LEVEL",
    "Direction",
    "Round",
    "RoundKind",
    "RoundShape",
    "Session",
    "SessionOutcome",
    "SessionStats",
    "SessionStatus",
    "WordItem",
    # Errors
    "WordGymError",
    "EmptyPoolError",
    "InvalidTransitionError",
    # Collaborators
    "Clock",
    "SystemClock",
    "RandomSource",
]

"""
Error taxonomy for the word game engine.

Lifecycle and pool errors are caller bugs and are raised immediately.
Grading never raises: every answer resolves to correct or incorrect.
"""

from __future__ import annotations


class WordGymError(Exception):
    """Base class for engine errors."""


class EmptyPoolError(WordGymError):
    """A session was requested from a word pool with no eligible items."""

    def __init__(self, message: str = "Cannot build a session from an empty word pool"):
        super().__init__(message)


class InvalidTransitionError(WordGymError):
    """An operation was called on a session in the wrong lifecycle state."""

    def __init__(self, operation: str, status: str):
        self.operation = operation
        self.status = status
        super().__init__(f"Cannot {operation} a session that is {status}")

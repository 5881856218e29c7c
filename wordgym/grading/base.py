"""
Base Grader.

Provides the abstract base for all graders and a registry that maps each
RoundKind to exactly one grader, so grading dispatches on the round's tag
instead of probing which fields a round happens to carry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from loguru import logger

from wordgym.core.models import Round, RoundKind
from wordgym.grading.similarity import SimilarityMatcher


@dataclass(frozen=True)
class GradingResult:
    """Result of grading one answer. Always definite."""

    is_correct: bool
    confidence: float  # 0.0 to 1.0
    expected: Any = None
    actual: Any = None


class Grader(ABC):
    """Grades answers for one RoundKind."""

    kind: ClassVar[RoundKind]

    @abstractmethod
    def grade(self, round_: Round, answer: Any, matcher: SimilarityMatcher) -> GradingResult:
        """Grade a raw answer against the round's expected answer(s)."""


class GraderRegistry:
    """
    Registry for graders.

    Example:
        @GraderRegistry.register(RoundKind.CHOICE)
        class ChoiceGrader(Grader):
            ...

        result = GraderRegistry.grade(round_, "dog", matcher)
    """

    _graders: ClassVar[dict[RoundKind, Grader]] = {}

    @classmethod
    def register(cls, kind: RoundKind):
        """Decorator registering a grader class for a kind."""

        def decorator(grader_class: type[Grader]) -> type[Grader]:
            grader_class.kind = kind
            cls._graders[kind] = grader_class()
            logger.debug(f"Registered grader: {kind.value} -> {grader_class.__name__}")
            return grader_class

        return decorator

    @classmethod
    def get(cls, kind: RoundKind) -> Grader:
        try:
            return cls._graders[kind]
        except KeyError:
            raise KeyError(f"No grader registered for round kind {kind.value!r}") from None

    @classmethod
    def kinds(cls) -> set[RoundKind]:
        return set(cls._graders)

    @classmethod
    def grade(cls, round_: Round, answer: Any, matcher: SimilarityMatcher) -> GradingResult:
        return cls.get(round_.kind).grade(round_, answer, matcher)

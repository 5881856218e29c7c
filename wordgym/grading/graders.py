"""
Grader Implementations.

One grader per RoundKind:
- choice: exact membership in the accepted answers
- free_text / audio: Similarity Matcher against the best accepted answer
- sequence: exact positional equality of the whole list
"""

from __future__ import annotations

from typing import Any

from wordgym.core.models import Round, RoundKind
from wordgym.grading.base import Grader, GraderRegistry, GradingResult
from wordgym.grading.similarity import SimilarityMatcher


def as_text(answer: Any) -> str:
    """Coerce a raw answer to a string. None becomes empty."""
    if answer is None:
        return ""
    if isinstance(answer, (list, tuple)):
        return ", ".join(str(a) for a in answer)
    return str(answer)


def as_sequence(answer: Any) -> tuple[str, ...]:
    """
    Coerce a raw answer to a trimmed tuple, one element per entry.

    A bare string is a single entry and is never split, so answer forms
    containing commas ("hello, hi") survive intact.
    """
    if answer is None:
        return ()
    if isinstance(answer, str):
        return (answer.strip(),) if answer.strip() else ()
    return tuple(str(x).strip() for x in answer)


@GraderRegistry.register(RoundKind.CHOICE)
class ChoiceGrader(Grader):
    """Exact string match against the accepted answers."""

    def grade(self, round_: Round, answer: Any, matcher: SimilarityMatcher) -> GradingResult:
        actual = as_text(answer)
        is_correct = actual in round_.answers
        return GradingResult(
            is_correct=is_correct,
            confidence=1.0 if is_correct else 0.0,
            expected=round_.correct_answer,
            actual=actual,
        )


@GraderRegistry.register(RoundKind.FREE_TEXT)
class FreeTextGrader(Grader):
    """
    Fuzzy match typed answers.

    When the round disables fuzzy matching only an answer identical to the
    target after normalization passes; the similarity is still reported.
    """

    def grade(self, round_: Round, answer: Any, matcher: SimilarityMatcher) -> GradingResult:
        actual = as_text(answer)
        best = max(
            (matcher.match(actual, expected) for expected in round_.answers),
            key=lambda result: result.confidence,
        )
        is_correct = best.is_match if round_.fuzzy else best.confidence == 1.0
        return GradingResult(
            is_correct=is_correct,
            confidence=best.confidence,
            expected=round_.correct_answer,
            actual=actual,
        )


@GraderRegistry.register(RoundKind.AUDIO)
class AudioGrader(FreeTextGrader):
    """Dictation: the prompt is spoken, the answer is typed."""


@GraderRegistry.register(RoundKind.SEQUENCE)
class SequenceGrader(Grader):
    """All-or-nothing ordered recall. No fuzzy fallback."""

    def grade(self, round_: Round, answer: Any, matcher: SimilarityMatcher) -> GradingResult:
        actual = as_sequence(answer)
        is_correct = len(actual) == len(round_.answers) and actual == round_.answers
        return GradingResult(
            is_correct=is_correct,
            confidence=1.0 if is_correct else 0.0,
            expected=round_.answers,
            actual=actual,
        )

"""
Grading.

Similarity matching for typed answers plus one registered grader per
round kind. Importing this package registers all graders.
"""

from .base import Grader, GraderRegistry, GradingResult
from .graders import AudioGrader, ChoiceGrader, FreeTextGrader, SequenceGrader
from .similarity import (
    Alphabet,
    MatchResult,
    SimilarityMatcher,
    detect_alphabet,
    levenshtein,
    normalize,
    similarity,
)

__all__ = [
    # Registry
    "Grader",
    "GraderRegistry",
    "GradingResult",
    # Graders
    "ChoiceGrader",
    "FreeTextGrader",
    "AudioGrader",
    "SequenceGrader",
    # Similarity
    "Alphabet",
    "MatchResult",
    "SimilarityMatcher",
    "detect_alphabet",
    "levenshtein",
    "normalize",
    "similarity",
]

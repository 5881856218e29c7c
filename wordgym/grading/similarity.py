"""
Similarity Matcher.

Fuzzy comparison for typed answers. Both strings are normalized, then
scored by normalized Levenshtein distance:

    similarity = 1 - distance(a, b) / max(len(a), len(b))

An answer matches when similarity reaches the alphabet's threshold.
Non-Latin text (Hangul) gets a lower threshold because composed syllables
turn small typing slips into whole-character differences.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Hangul syllables, Hangul Jamo, Hangul compatibility Jamo
_OTHER_BLOCK = r"\uac00-\ud7af\u1100-\u11ff\u3130-\u318f"
_OTHER_CHAR = re.compile(f"[{_OTHER_BLOCK}]")
_OUTSIDE_OTHER = re.compile(f"[^{_OTHER_BLOCK}]")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

LATIN_THRESHOLD = 0.75
OTHER_THRESHOLD = 0.70


class Alphabet(str, Enum):
    LATIN = "latin"
    OTHER = "other"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a fuzzy comparison."""

    is_match: bool
    confidence: float  # 1.0 = identical after normalization


def detect_alphabet(text: str) -> Alphabet:
    """OTHER when text contains any character of the non-Latin block."""
    return Alphabet.OTHER if _OTHER_CHAR.search(text) else Alphabet.LATIN


def normalize(text: str, alphabet: Alphabet) -> str:
    """Canonical form used for comparison."""
    text = _WHITESPACE.sub(" ", text.strip())
    text = _PUNCTUATION.sub("", text).casefold()
    if alphabet == Alphabet.OTHER:
        return _OUTSIDE_OTHER.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost insertions, deletions and substitutions."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + (ca != cb),  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized edit similarity in [0, 1]; 1.0 when both are empty."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


class SimilarityMatcher:
    """
    Threshold-based fuzzy matcher.

    The thresholds are the only tuning knobs; everything else is fixed.
    """

    def __init__(
        self,
        latin_threshold: float = LATIN_THRESHOLD,
        other_threshold: float = OTHER_THRESHOLD,
    ):
        self.thresholds = {
            Alphabet.LATIN: latin_threshold,
            Alphabet.OTHER: other_threshold,
        }

    def match(self, user_input: str, target: str, alphabet: Alphabet | None = None) -> MatchResult:
        """
        Compare user input with the target.

        Args:
            user_input: What the learner typed
            target: Expected answer
            alphabet: Normalization rules; detected from target when omitted

        Returns:
            MatchResult with the decision and the similarity score
        """
        alphabet = alphabet or detect_alphabet(target)
        a = normalize(user_input, alphabet)
        b = normalize(target, alphabet)

        if a == b:
            return MatchResult(is_match=True, confidence=1.0)

        score = similarity(a, b)
        return MatchResult(is_match=score >= self.thresholds[alphabet], confidence=score)

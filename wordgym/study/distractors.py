"""
Distractor Selector.

Picks plausible-but-wrong options for choice rounds from the answer forms
of the other words in the session snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable

from wordgym.core.randomness import RandomSource


def pick_distractors(
    pool: Iterable[str],
    correct: str,
    count: int,
    rng: RandomSource,
) -> list[str]:
    """
    Pick up to `count` unique wrong options.

    The correct answer is dropped, duplicates are removed (exact,
    case-sensitive), and the remainder is shuffled. When fewer candidates
    exist than requested, all of them are returned.
    """
    candidates = list(dict.fromkeys(option for option in pool if option != correct))
    return rng.shuffled(candidates)[: max(0, count)]


def compose_options(correct: str, distractors: Iterable[str], rng: RandomSource) -> list[str]:
    """Shuffle the correct answer in among the distractors."""
    options = [correct, *(d for d in dict.fromkeys(distractors) if d != correct)]
    return rng.shuffled(options)

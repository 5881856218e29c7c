"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgym.config import SessionSettings  # noqa: E402
from wordgym.core.models import WordItem  # noqa: E402
from wordgym.core.randomness import RandomSource  # noqa: E402
from wordgym.grading import SimilarityMatcher  # noqa: E402
from wordgym.study import ReviewScheduler, SessionEngine  # noqa: E402

T0 = datetime(2025, 1, 6, 9, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (engine + scheduler + storage)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def make_word(
    term: str,
    translation: str,
    word_id: str | None = None,
    lesson_id: str = "lesson-1",
    **state,
) -> WordItem:
    """Build a WordItem with a readable id."""
    return WordItem(
        id=word_id or f"w-{translation}",
        term=term,
        translation=translation,
        lesson_id=lesson_id,
        **state,
    )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clock():
    """Manual clock starting at T0."""
    return ManualClock()


@pytest.fixture
def rng():
    """Seeded random source."""
    return RandomSource(seed=42)


@pytest.fixture
def matcher():
    return SimilarityMatcher()


@pytest.fixture
def settings():
    return SessionSettings(questions_per_session=5, time_limit_seconds=10)


@pytest.fixture
def korean_words():
    """Five Korean/English pairs with distinct answer forms."""
    return [
        make_word("사과", "apple"),
        make_word("바나나", "banana"),
        make_word("고양이", "cat"),
        make_word("개", "dog"),
        make_word("물", "water"),
    ]


@pytest.fixture
def engine(matcher, rng, clock):
    """Engine with a scheduler, seeded randomness and a manual clock."""
    return SessionEngine(matcher=matcher, scheduler=ReviewScheduler(), rng=rng, clock=clock)


def answer_for(round_):
    """The accepted answer in the form submit() expects."""
    if round_.kind.value == "sequence":
        return list(round_.answers)
    return round_.answers[0]

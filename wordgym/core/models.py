"""
Core data model for the word game engine.

Design:
- WordItem: a learnable word pair plus its mastery state
- Round: one question instance, tagged by shape (and therefore kind)
- SessionOutcome: the immutable result of answering one round
- Session: ordered rounds, cursor, outcomes and lifecycle status
- SessionStats: read-only aggregation over a session's outcomes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from wordgym.config import SessionSettings

MAX_LEVEL = 7


# =============================================================================
# Enums
# =============================================================================


class Direction(str, Enum):
    """Which form of a word is shown and which one is asked for."""

    A_TO_B = "a-to-b"  # show term, ask translation
    B_TO_A = "b-to-a"  # show translation, ask term


class RoundKind(str, Enum):
    """How a round is graded."""

    CHOICE = "choice"
    FREE_TEXT = "free_text"
    AUDIO = "audio"
    SEQUENCE = "sequence"


class RoundShape(str, Enum):
    """Question format requested by a game."""

    MULTIPLE_CHOICE = "multiple_choice"
    LISTENING = "listening"
    SPEED = "speed"
    TRUE_FALSE = "true_false"
    FILL_BLANKS = "fill_blanks"
    TYPING = "typing"
    SCRAMBLE = "scramble"
    DICTATION = "dictation"
    CHAIN = "chain"
    FLASHCARD = "flashcard"

    @property
    def kind(self) -> RoundKind:
        """Grading kind for this shape."""
        return _SHAPE_KINDS[self]


_SHAPE_KINDS: dict[RoundShape, RoundKind] = {
    RoundShape.MULTIPLE_CHOICE: RoundKind.CHOICE,
    RoundShape.LISTENING: RoundKind.CHOICE,
    RoundShape.SPEED: RoundKind.CHOICE,
    RoundShape.TRUE_FALSE: RoundKind.CHOICE,
    RoundShape.FILL_BLANKS: RoundKind.CHOICE,
    RoundShape.TYPING: RoundKind.FREE_TEXT,
    RoundShape.SCRAMBLE: RoundKind.FREE_TEXT,
    RoundShape.DICTATION: RoundKind.AUDIO,
    RoundShape.CHAIN: RoundKind.SEQUENCE,
    RoundShape.FLASHCARD: RoundKind.CHOICE,  # Self-graded: Know / Don't know
}


class SessionStatus(str, Enum):
    """Session lifecycle. Transitions only move forward."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# =============================================================================
# WordItem
# =============================================================================


@dataclass(frozen=True)
class WordItem:
    """
    A learnable word pair with its spaced-repetition state.

    A due_at of None means the word has never been scheduled and is due now.
    """

    id: str
    term: str
    translation: str
    lesson_id: str | None = None
    image_url: str | None = None
    context_sentence: str | None = None

    # Mastery state
    level: int = 0
    due_at: datetime | None = None
    review_count: int = 0
    correct_streak: int = 0
    total_xp: int = 0
    last_reviewed_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.level <= MAX_LEVEL:
            raise ValueError(f"level must be within 0..{MAX_LEVEL}, got {self.level}")
        if self.review_count < 0 or self.correct_streak < 0 or self.total_xp < 0:
            raise ValueError("review_count, correct_streak and total_xp must be non-negative")

    @classmethod
    def new(
        cls,
        term: str,
        translation: str,
        lesson_id: str | None = None,
        image_url: str | None = None,
        context_sentence: str | None = None,
    ) -> WordItem:
        """Create an unreviewed word that is due immediately."""
        return cls(
            id=f"word-{uuid4().hex[:12]}",
            term=term,
            translation=translation,
            lesson_id=lesson_id,
            image_url=image_url,
            context_sentence=context_sentence,
        )

    def prompt_form(self, direction: Direction) -> str:
        return self.term if direction == Direction.A_TO_B else self.translation

    def answer_form(self, direction: Direction) -> str:
        return self.translation if direction == Direction.A_TO_B else self.term

    def is_due(self, as_of: datetime) -> bool:
        return self.due_at is None or self.due_at <= as_of

    def to_dict(self) -> dict[str, Any]:
        """Serialize with ISO timestamps."""
        return {
            "id": self.id,
            "term": self.term,
            "translation": self.translation,
            "lesson_id": self.lesson_id,
            "image_url": self.image_url,
            "context_sentence": self.context_sentence,
            "level": self.level,
            "due_at": self.due_at.isoformat() if self.due_at else None,
            "review_count": self.review_count,
            "correct_streak": self.correct_streak,
            "total_xp": self.total_xp,
            "last_reviewed_at": self.last_reviewed_at.isoformat() if self.last_reviewed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordItem:
        due_at = data.get("due_at")
        last_reviewed_at = data.get("last_reviewed_at")
        return cls(
            id=str(data["id"]),
            term=data["term"],
            translation=data["translation"],
            lesson_id=data.get("lesson_id"),
            image_url=data.get("image_url"),
            context_sentence=data.get("context_sentence"),
            level=int(data.get("level", 0)),
            due_at=datetime.fromisoformat(due_at) if due_at else None,
            review_count=int(data.get("review_count", 0)),
            correct_streak=int(data.get("correct_streak", 0)),
            total_xp=int(data.get("total_xp", 0)),
            last_reviewed_at=datetime.fromisoformat(last_reviewed_at) if last_reviewed_at else None,
        )


# =============================================================================
# Round
# =============================================================================


@dataclass(frozen=True)
class Round:
    """
    One question instance.

    answers holds the accepted answer(s); for sequence rounds it is the
    ordered list that must be recalled. options is only used by choice rounds.
    """

    id: str
    shape: RoundShape
    words: tuple[WordItem, ...]
    prompt: str
    answers: tuple[str, ...]
    options: tuple[str, ...] = ()
    audio_text: str | None = None
    image_url: str | None = None
    time_limit_ms: int | None = None
    fuzzy: bool = True
    hints: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError(f"{self.id}: a round needs at least one source word")
        if not self.answers:
            raise ValueError(f"{self.id}: a round needs an expected answer")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"{self.id}: options contain duplicates")
        if self.kind == RoundKind.CHOICE:
            correct_options = [o for o in self.options if o in self.answers]
            if len(correct_options) != 1:
                raise ValueError(f"{self.id}: the correct answer must appear exactly once in options")

    @property
    def kind(self) -> RoundKind:
        return self.shape.kind

    @property
    def word(self) -> WordItem:
        """Primary source word."""
        return self.words[0]

    @property
    def correct_answer(self) -> str:
        """Display form of the expected answer."""
        if self.kind == RoundKind.SEQUENCE:
            return " → ".join(self.answers)
        return self.answers[0]


# =============================================================================
# Outcomes and sessions
# =============================================================================


@dataclass(frozen=True)
class SessionOutcome:
    """Result of one submission. Never modified after creation."""

    round_id: str
    raw_input: str | tuple[str, ...]
    correct: bool
    confidence: float
    elapsed_ms: int
    xp: int
    timed_out: bool = False
    updated_word: WordItem | None = None  # Scheduler output, for the caller to persist


@dataclass
class Session:
    """
    A round-based activity.

    Mutated only by SessionEngine.submit. Invariants:
    len(outcomes) == position, and status is COMPLETED exactly when
    position == len(rounds).
    """

    shape: RoundShape
    rounds: tuple[Round, ...]
    pool: tuple[WordItem, ...]
    settings: SessionSettings
    id: str = field(default_factory=lambda: f"session-{uuid4().hex[:12]}")
    position: int = 0
    outcomes: list[SessionOutcome] = field(default_factory=list)
    status: SessionStatus = SessionStatus.NOT_STARTED
    started_at: datetime | None = None
    ended_at: datetime | None = None
    round_started_at: datetime | None = None
    streak: int = 0
    max_streak: int = 0

    def __post_init__(self) -> None:
        if not self.rounds:
            raise ValueError("a session needs at least one round")

    @property
    def current_round(self) -> Round | None:
        if self.position >= len(self.rounds):
            return None
        return self.rounds[self.position]

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def remaining(self) -> int:
        return len(self.rounds) - self.position

    @property
    def progress(self) -> float:
        """Percentage of rounds answered."""
        return self.position / len(self.rounds) * 100


@dataclass(frozen=True)
class SessionStats:
    """Aggregate statistics over a session's outcomes."""

    correct_count: int
    incorrect_count: int
    answered: int
    total_rounds: int
    accuracy: float  # percentage, 0-100
    total_xp: int
    elapsed_seconds: int
    max_streak: int
    average_response_ms: int
    max_sequence_length: int = 0  # Longest sequence recalled correctly

    def to_dict(self) -> dict[str, Any]:
        return {
            "correct_count": self.correct_count,
            "incorrect_count": self.incorrect_count,
            "answered": self.answered,
            "total_rounds": self.total_rounds,
            "accuracy": round(self.accuracy, 1),
            "total_xp": self.total_xp,
            "elapsed_seconds": self.elapsed_seconds,
            "max_streak": self.max_streak,
            "average_response_ms": self.average_response_ms,
            "max_sequence_length": self.max_sequence_length,
        }

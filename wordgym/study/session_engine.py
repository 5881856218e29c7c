"""
Session Engine.

One state machine behind every game:

    not-started --build--> in-progress --submit x N--> completed

The engine builds rounds from a pool snapshot, grades submissions through
the grader registry, prices them with the shape's reward policy, and hands
the Review Scheduler's output back to the caller. It never reads or writes
a word store and never runs timers: a timeout is the caller calling expire().
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from wordgym.config import SessionSettings
from wordgym.core.clock import Clock, SystemClock
from wordgym.core.errors import EmptyPoolError, InvalidTransitionError
from wordgym.core.models import (
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
from wordgym.grading import GraderRegistry, SimilarityMatcher
from wordgym.grading.graders import as_sequence, as_text
from wordgym.study.rewards import RewardContext, RewardPolicy, default_rewards
from wordgym.study.rounds import build_round
from wordgym.study.scheduler import ReviewScheduler, select_review_pool


class SessionEngine:
    """
    Builds and drives sessions for any RoundShape.

    All collaborators are injectable; the defaults use the system clock,
    an unseeded random source and the default reward curves. Without a
    scheduler, outcomes carry no updated word.
    """

    def __init__(
        self,
        matcher: SimilarityMatcher | None = None,
        scheduler: ReviewScheduler | None = None,
        rng: RandomSource | None = None,
        clock: Clock | None = None,
        rewards: Mapping[RoundShape, RewardPolicy] | None = None,
    ):
        self.matcher = matcher or SimilarityMatcher()
        self.scheduler = scheduler
        self.rng = rng or RandomSource()
        self.clock = clock or SystemClock()
        self.rewards: dict[RoundShape, RewardPolicy] = {**default_rewards(), **(rewards or {})}

    # =========================================================================
    # Build
    # =========================================================================

    def build(
        self,
        pool: Sequence[WordItem],
        shape: RoundShape,
        count: int | None = None,
        settings: SessionSettings | None = None,
        prioritize_due: bool = False,
    ) -> Session:
        """
        Build a session and start it.

        Args:
            pool: Candidate words (snapshotted; later changes are not seen)
            shape: Question format for every round
            count: Number of rounds; defaults to settings.questions_per_session
                and is clamped to the pool size
            settings: Session options (defaults to SessionSettings())
            prioritize_due: Fill the session with due words first

        Raises:
            EmptyPoolError: pool has no words
            ValueError: count is less than 1
        """
        snapshot = tuple(pool)
        if not snapshot:
            raise EmptyPoolError()

        settings = settings or SessionSettings()
        requested = settings.questions_per_session if count is None else count
        if requested < 1:
            raise ValueError(f"count must be at least 1, got {requested}")
        size = min(requested, len(snapshot))

        now = self.clock.now()
        if prioritize_due:
            selected = self.rng.shuffled(select_review_pool(snapshot, size, now, self.rng))
        else:
            selected = self.rng.sample(snapshot, size)

        rounds = tuple(
            build_round(shape, i, word, snapshot, settings.direction, self.rng, settings)
            for i, word in enumerate(selected)
        )

        session = Session(shape=shape, rounds=rounds, pool=snapshot, settings=settings)
        session.status = SessionStatus.IN_PROGRESS
        session.started_at = now
        session.round_started_at = now

        logger.info(
            f"Built session {session.id}: {len(rounds)} {shape.value} rounds "
            f"from {len(snapshot)} words (requested {requested})"
        )
        return session

    # =========================================================================
    # Submit
    # =========================================================================

    def submit(
        self,
        session: Session,
        answer: Any,
        elapsed_ms: int | None = None,
    ) -> tuple[SessionOutcome, Session]:
        """
        Grade the answer to the current round and advance.

        An answer arriving after the round's time limit is graded as an
        empty submission. When elapsed_ms is omitted it is measured on the
        engine's clock since the round started, and that measurement alone
        can time the answer out; callers that run their own timers should
        always pass elapsed_ms and call expire() at their deadline.

        Raises:
            InvalidTransitionError: session is not in progress
        """
        return self._record(session, answer, elapsed_ms, timed_out=False)

    def expire(self, session: Session) -> tuple[SessionOutcome, Session]:
        """Caller-driven timeout: an empty submission flagged as timed out."""
        return self._record(session, "", None, timed_out=True)

    def _record(
        self,
        session: Session,
        answer: Any,
        elapsed_ms: int | None,
        timed_out: bool,
    ) -> tuple[SessionOutcome, Session]:
        self._require(session, "submit to", SessionStatus.IN_PROGRESS)

        round_ = session.current_round
        now = self.clock.now()
        if elapsed_ms is None:
            started = session.round_started_at or now
            elapsed_ms = max(0, int((now - started).total_seconds() * 1000))

        if round_.time_limit_ms is not None and elapsed_ms > round_.time_limit_ms:
            timed_out = True
        if timed_out:
            answer = ""

        result = GraderRegistry.grade(round_, answer, self.matcher)

        policy = self.rewards[round_.shape]
        xp = policy.award(
            RewardContext(
                correct=result.is_correct,
                elapsed_ms=elapsed_ms,
                time_limit_ms=round_.time_limit_ms,
                streak_before=session.streak,
                max_streak_before=session.max_streak,
            )
        )

        updated_word = None
        if self.scheduler is not None and len(round_.words) == 1:
            updated_word = self.scheduler.advance(round_.word, result.is_correct, now, elapsed_ms)

        outcome = SessionOutcome(
            round_id=round_.id,
            raw_input=self._raw_input(round_, answer),
            correct=result.is_correct,
            confidence=result.confidence,
            elapsed_ms=elapsed_ms,
            xp=xp,
            timed_out=timed_out,
            updated_word=updated_word,
        )

        if outcome.correct:
            session.streak += 1
            session.max_streak = max(session.max_streak, session.streak)
        else:
            session.streak = 0

        session.outcomes.append(outcome)
        session.position += 1
        session.round_started_at = now

        logger.debug(
            f"{session.id} {round_.id}: correct={outcome.correct}, "
            f"confidence={outcome.confidence:.2f}, +{xp}xp"
            + (" (timed out)" if timed_out else "")
        )

        if session.position == len(session.rounds):
            session.status = SessionStatus.COMPLETED
            session.ended_at = now
            stats = self.stats(session)
            logger.info(
                f"Completed session {session.id}: {stats.correct_count}/{stats.total_rounds} "
                f"correct, {stats.total_xp}xp, best streak {stats.max_streak}"
            )

        return outcome, session

    @staticmethod
    def _raw_input(round_: Round, answer: Any) -> str | tuple[str, ...]:
        if round_.shape == RoundShape.CHAIN:
            return as_sequence(answer)
        return as_text(answer)

    @staticmethod
    def _require(session: Session, operation: str, *allowed: SessionStatus) -> None:
        if session.status not in allowed:
            raise InvalidTransitionError(operation, session.status.value)

    # =========================================================================
    # Read side
    # =========================================================================

    def stats(self, session: Session) -> SessionStats:
        """
        Aggregate the outcomes so far.

        Works mid-session for live progress and after completion.

        Raises:
            InvalidTransitionError: session has not been started
        """
        self._require(
            session, "read stats of", SessionStatus.IN_PROGRESS, SessionStatus.COMPLETED
        )

        outcomes = session.outcomes
        answered = len(outcomes)
        correct = sum(1 for o in outcomes if o.correct)

        by_round = {r.id: r for r in session.rounds}
        recalled = [
            len(by_round[o.round_id].answers)
            for o in outcomes
            if o.correct and by_round[o.round_id].kind == RoundKind.SEQUENCE
        ]

        end = session.ended_at or self.clock.now()
        elapsed_seconds = 0
        if session.started_at is not None:
            elapsed_seconds = max(0, int((end - session.started_at).total_seconds()))

        return SessionStats(
            correct_count=correct,
            incorrect_count=answered - correct,
            answered=answered,
            total_rounds=len(session.rounds),
            accuracy=(correct / answered * 100) if answered else 0.0,
            total_xp=sum(o.xp for o in outcomes),
            elapsed_seconds=elapsed_seconds,
            max_streak=session.max_streak,
            average_response_ms=(
                round(sum(o.elapsed_ms for o in outcomes) / answered) if answered else 0
            ),
            max_sequence_length=max(recalled, default=0),
        )

    def incorrect_words(self, session: Session) -> list[WordItem]:
        """Words from rounds answered incorrectly, in round order, without repeats."""
        by_round = {r.id: r for r in session.rounds}
        words: dict[str, WordItem] = {}
        for outcome in session.outcomes:
            if outcome.correct:
                continue
            for word in by_round[outcome.round_id].words:
                words.setdefault(word.id, word)
        return list(words.values())

    def retry_incorrect(self, session: Session, shape: RoundShape | None = None) -> Session:
        """
        Start a new session from the words missed in `session`.

        Raises:
            EmptyPoolError: nothing was answered incorrectly
        """
        missed = self.incorrect_words(session)
        if not missed:
            raise EmptyPoolError("No incorrect answers to review")
        return self.build(
            missed,
            shape or session.shape,
            count=len(missed),
            settings=session.settings,
        )

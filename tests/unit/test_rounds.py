"""
Unit tests for round builders.

Every shape must produce a Round that satisfies the model invariants and
is answerable with its own expected answer.
"""

import pytest
from conftest import make_word

from wordgym.config import SessionSettings
from wordgym.core.models import Direction, Round, RoundKind, RoundShape
from wordgym.core.randomness import RandomSource
from wordgym.grading import GraderRegistry, SimilarityMatcher
from wordgym.study.rounds import (
    BUILDERS,
    DONT_KNOW,
    FALSE,
    KNOW,
    TRUE,
    build_round,
    chain_length,
    scramble_text,
)


@pytest.fixture
def snapshot(korean_words):
    return tuple(korean_words)


def build(shape, snapshot, index=0, word=None, direction=Direction.A_TO_B, seed=1, settings=None):
    return build_round(
        shape,
        index,
        word or snapshot[0],
        snapshot,
        direction,
        RandomSource(seed),
        settings or SessionSettings(),
    )


class TestRegistry:
    def test_every_shape_has_a_builder(self):
        assert set(BUILDERS) == set(RoundShape)

    @pytest.mark.parametrize("shape", list(RoundShape))
    def test_round_answers_itself(self, shape, snapshot):
        round_ = build(shape, snapshot)
        answer = list(round_.answers) if round_.kind == RoundKind.SEQUENCE else round_.answers[0]

        assert round_.id == "round-0"
        assert round_.shape == shape
        assert GraderRegistry.grade(round_, answer, SimilarityMatcher()).is_correct


class TestChoiceShapes:
    @pytest.mark.parametrize("seed", range(10))
    def test_multiple_choice_options(self, snapshot, seed):
        round_ = build(RoundShape.MULTIPLE_CHOICE, snapshot, seed=seed)

        assert round_.prompt == "사과"
        assert round_.answers == ("apple",)
        assert len(round_.options) == 4
        assert round_.options.count("apple") == 1
        assert len(set(round_.options)) == 4

    def test_reverse_direction(self, snapshot):
        round_ = build(RoundShape.MULTIPLE_CHOICE, snapshot, direction=Direction.B_TO_A)

        assert round_.prompt == "apple"
        assert round_.answers == ("사과",)
        assert all(opt in {w.term for w in snapshot} for opt in round_.options)

    def test_single_word_snapshot_has_only_the_answer(self):
        only = (make_word("사과", "apple"),)
        round_ = build(RoundShape.MULTIPLE_CHOICE, only)
        assert round_.options == ("apple",)

    def test_speed_carries_time_limit(self, snapshot):
        round_ = build(RoundShape.SPEED, snapshot, settings=SessionSettings(time_limit_seconds=7))
        assert round_.time_limit_ms == 7000

    def test_listening_uses_terms(self, snapshot):
        round_ = build(RoundShape.LISTENING, snapshot)

        assert round_.audio_text == "사과"
        assert round_.answers == ("사과",)
        assert set(round_.options) <= {w.term for w in snapshot}

    @pytest.mark.parametrize("seed", range(20))
    def test_true_false_statement_matches_verdict(self, snapshot, seed):
        round_ = build(RoundShape.TRUE_FALSE, snapshot, seed=seed)
        shown = round_.prompt.split(" = ", 1)[1]

        assert round_.options == (TRUE, FALSE)
        assert round_.answers == ((TRUE,) if shown == "apple" else (FALSE,))

    def test_true_false_shows_both_verdicts(self, snapshot):
        verdicts = {build(RoundShape.TRUE_FALSE, snapshot, seed=s).answers[0] for s in range(30)}
        assert verdicts == {TRUE, FALSE}

    def test_true_false_without_alternatives_is_true(self):
        only = (make_word("사과", "apple"),)
        verdicts = {build(RoundShape.TRUE_FALSE, only, seed=s).answers[0] for s in range(10)}
        assert verdicts == {TRUE}

    def test_fill_blanks_uses_context_sentence(self):
        word = make_word("사과", "apple", context_sentence="I ate an apple today")
        round_ = build(RoundShape.FILL_BLANKS, (word, make_word("개", "dog")))
        assert round_.prompt == "I ate an ___ today"

    def test_fill_blanks_without_sentence(self, snapshot):
        round_ = build(RoundShape.FILL_BLANKS, snapshot)
        assert round_.prompt == "___ (사과)"


class TestFreeTextShapes:
    def test_typing_hints_and_fuzzy_setting(self, snapshot):
        round_ = build(
            RoundShape.TYPING, snapshot, settings=SessionSettings(fuzzy_match_enabled=False)
        )

        assert round_.kind == RoundKind.FREE_TEXT
        assert round_.fuzzy is False
        assert round_.hints == ("5 characters", "Starts with a")

    @pytest.mark.parametrize("seed", range(20))
    def test_scramble_differs_from_answer(self, snapshot, seed):
        round_ = build(RoundShape.SCRAMBLE, snapshot, word=snapshot[1], seed=seed)

        assert round_.prompt != "banana"
        assert sorted(round_.prompt) == sorted("banana")
        assert round_.fuzzy is False

    def test_scramble_text_single_repeated_char(self):
        assert scramble_text("aa", RandomSource(0)) == "aa"

    def test_scramble_text_single_char(self):
        assert scramble_text("a", RandomSource(0)) == "a"

    def test_dictation_is_audio(self, snapshot):
        round_ = build(RoundShape.DICTATION, snapshot)

        assert round_.kind == RoundKind.AUDIO
        assert round_.audio_text == "apple"


class TestChainShape:
    @pytest.mark.parametrize(
        "index,available,expected",
        [(0, 10, 3), (1, 10, 3), (2, 10, 4), (5, 10, 5), (20, 10, 10), (0, 2, 2), (0, 1, 1)],
    )
    def test_chain_length(self, index, available, expected):
        assert chain_length(index, available) == expected

    def test_chain_contains_anchor_word(self, snapshot):
        round_ = build(RoundShape.CHAIN, snapshot, index=2, word=snapshot[3])

        assert len(round_.words) == 4
        assert snapshot[3] in round_.words
        assert len({w.id for w in round_.words}) == 4
        assert round_.answers == tuple(w.translation for w in round_.words)

    def test_chain_with_small_snapshot(self):
        only = (make_word("하나", "one"), make_word("둘", "two"))
        round_ = build(RoundShape.CHAIN, only)
        assert len(round_.answers) == 2

    def test_chain_keeps_answer_forms_with_commas(self):
        only = (make_word("안녕", "hello, hi"), make_word("개", "dog"))
        round_ = build(RoundShape.CHAIN, only)

        assert "hello, hi" in round_.answers
        assert len(round_.answers) == 2
        assert GraderRegistry.grade(round_, list(round_.answers), SimilarityMatcher()).is_correct


class TestFlashcardShape:
    def test_front_back_and_image(self):
        word = make_word("고양이", "cat", image_url="https://img.example/cat.png")
        round_ = build(RoundShape.FLASHCARD, (word,))

        assert round_.prompt == "고양이"
        assert round_.hints == ("cat",)
        assert round_.image_url == "https://img.example/cat.png"
        assert round_.options == (KNOW, DONT_KNOW)
        assert round_.answers == (KNOW,)

    def test_reverse_direction_flips_the_card(self, snapshot):
        round_ = build(RoundShape.FLASHCARD, snapshot, direction=Direction.B_TO_A)

        assert round_.prompt == snapshot[0].translation
        assert round_.hints == (snapshot[0].term,)

    def test_no_image(self, snapshot):
        assert build(RoundShape.FLASHCARD, snapshot).image_url is None

    def test_dont_know_is_incorrect(self, snapshot):
        round_ = build(RoundShape.FLASHCARD, snapshot)
        assert not GraderRegistry.grade(round_, DONT_KNOW, SimilarityMatcher()).is_correct


class TestRoundInvariants:
    def test_duplicate_options_rejected(self, snapshot):
        with pytest.raises(ValueError, match="duplicates"):
            Round(
                id="r",
                shape=RoundShape.MULTIPLE_CHOICE,
                words=(snapshot[0],),
                prompt="사과",
                answers=("apple",),
                options=("apple", "dog", "dog"),
            )

    def test_missing_correct_option_rejected(self, snapshot):
        with pytest.raises(ValueError, match="exactly once"):
            Round(
                id="r",
                shape=RoundShape.MULTIPLE_CHOICE,
                words=(snapshot[0],),
                prompt="사과",
                answers=("apple",),
                options=("dog", "cat"),
            )

    def test_round_needs_words(self):
        with pytest.raises(ValueError):
            Round(id="r", shape=RoundShape.TYPING, words=(), prompt="p", answers=("a",))

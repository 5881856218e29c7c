"""
Round builders, one per RoundShape.

Each builder turns a word plus the session snapshot into a Round. Builders
are registered with the @builder decorator and looked up by shape, so a new
game format only needs a new function here.

Choice shapes draw their wrong options from the answer forms of the other
words in the snapshot via the Distractor Selector.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from wordgym.config import SessionSettings
from wordgym.core.models import Direction, Round, RoundShape, WordItem
from wordgym.core.randomness import RandomSource
from wordgym.study.distractors import compose_options, pick_distractors

DISTRACTOR_COUNT = 3
CHAIN_START_LENGTH = 3
CHAIN_GROWTH_EVERY = 2  # rounds
BLANK = "___"
TRUE = "True"
FALSE = "False"
KNOW = "Know"
DONT_KNOW = "Don't know"


@dataclass(frozen=True)
class RoundRequest:
    """Inputs shared by every builder."""

    index: int
    word: WordItem
    snapshot: tuple[WordItem, ...]
    direction: Direction
    rng: RandomSource
    settings: SessionSettings

    @property
    def round_id(self) -> str:
        return f"round-{self.index}"

    @property
    def prompt(self) -> str:
        return self.word.prompt_form(self.direction)

    @property
    def answer(self) -> str:
        return self.word.answer_form(self.direction)

    def answer_pool(self) -> list[str]:
        return [w.answer_form(self.direction) for w in self.snapshot]


RoundBuilder = Callable[[RoundRequest], Round]

# Builder registry - populated by @builder decorator
BUILDERS: dict[RoundShape, RoundBuilder] = {}


def builder(shape: RoundShape):
    """Decorator to register a round builder."""

    def decorator(func: RoundBuilder) -> RoundBuilder:
        BUILDERS[shape] = func
        return func

    return decorator


def build_round(
    shape: RoundShape,
    index: int,
    word: WordItem,
    snapshot: Sequence[WordItem],
    direction: Direction,
    rng: RandomSource,
    settings: SessionSettings,
) -> Round:
    """Build the round at `index` for one word."""
    try:
        make = BUILDERS[shape]
    except KeyError:
        raise KeyError(f"No round builder registered for shape {shape.value!r}") from None
    request = RoundRequest(
        index=index,
        word=word,
        snapshot=tuple(snapshot),
        direction=direction,
        rng=rng,
        settings=settings,
    )
    return make(request)


def _choice_options(req: RoundRequest, correct: str, pool: list[str]) -> tuple[str, ...]:
    distractors = pick_distractors(pool, correct, DISTRACTOR_COUNT, req.rng)
    return tuple(compose_options(correct, distractors, req.rng))


# =============================================================================
# Choice shapes
# =============================================================================


@builder(RoundShape.MULTIPLE_CHOICE)
def multiple_choice(req: RoundRequest) -> Round:
    return Round(
        id=req.round_id,
        shape=RoundShape.MULTIPLE_CHOICE,
        words=(req.word,),
        prompt=req.prompt,
        answers=(req.answer,),
        options=_choice_options(req, req.answer, req.answer_pool()),
    )


@builder(RoundShape.SPEED)
def speed(req: RoundRequest) -> Round:
    """Multiple choice against a per-round deadline."""
    return Round(
        id=req.round_id,
        shape=RoundShape.SPEED,
        words=(req.word,),
        prompt=req.prompt,
        answers=(req.answer,),
        options=_choice_options(req, req.answer, req.answer_pool()),
        time_limit_ms=req.settings.time_limit_seconds * 1000,
    )


@builder(RoundShape.LISTENING)
def listening(req: RoundRequest) -> Round:
    """The term is spoken; pick it from a list of terms."""
    term = req.word.term
    return Round(
        id=req.round_id,
        shape=RoundShape.LISTENING,
        words=(req.word,),
        prompt="Which word did you hear?",
        answers=(term,),
        options=_choice_options(req, term, [w.term for w in req.snapshot]),
        audio_text=term,
    )


@builder(RoundShape.TRUE_FALSE)
def true_false(req: RoundRequest) -> Round:
    """
    Judge a pairing. Half the time a wrong translation is shown; when the
    snapshot has no other answer form the statement is always true.
    """
    shown = req.answer
    if req.rng.chance(0.5):
        wrong = pick_distractors(req.answer_pool(), req.answer, 1, req.rng)
        if wrong:
            shown = wrong[0]
    verdict = TRUE if shown == req.answer else FALSE
    return Round(
        id=req.round_id,
        shape=RoundShape.TRUE_FALSE,
        words=(req.word,),
        prompt=f"{req.prompt} = {shown}",
        answers=(verdict,),
        options=(TRUE, FALSE),
        hints=(req.answer,) if verdict == FALSE else (),
    )


@builder(RoundShape.FILL_BLANKS)
def fill_blanks(req: RoundRequest) -> Round:
    """Blank the answer out of the word's context sentence."""
    sentence = req.word.context_sentence
    if sentence and req.answer in sentence:
        prompt = sentence.replace(req.answer, BLANK, 1)
    else:
        prompt = f"{BLANK} ({req.prompt})"
    return Round(
        id=req.round_id,
        shape=RoundShape.FILL_BLANKS,
        words=(req.word,),
        prompt=prompt,
        answers=(req.answer,),
        options=_choice_options(req, req.answer, req.answer_pool()),
    )


# =============================================================================
# Free-text and audio shapes
# =============================================================================


@builder(RoundShape.TYPING)
def typing(req: RoundRequest) -> Round:
    answer = req.answer
    return Round(
        id=req.round_id,
        shape=RoundShape.TYPING,
        words=(req.word,),
        prompt=req.prompt,
        answers=(answer,),
        fuzzy=req.settings.fuzzy_match_enabled,
        hints=(f"{len(answer)} characters", f"Starts with {answer[:1]}"),
    )


def scramble_text(text: str, rng: RandomSource) -> str:
    """
    Shuffle the characters of text.

    The result differs from the input whenever the input has at least two
    distinct characters.
    """
    chars = rng.shuffled(list(text))
    if "".join(chars) == text:
        for i in range(1, len(chars)):
            if chars[i] != chars[0]:
                chars[0], chars[i] = chars[i], chars[0]
                break
    return "".join(chars)


@builder(RoundShape.SCRAMBLE)
def scramble(req: RoundRequest) -> Round:
    """Unscramble the answer form. Exact spelling only."""
    return Round(
        id=req.round_id,
        shape=RoundShape.SCRAMBLE,
        words=(req.word,),
        prompt=scramble_text(req.answer, req.rng),
        answers=(req.answer,),
        fuzzy=False,
        hints=(req.prompt,),
    )


@builder(RoundShape.DICTATION)
def dictation(req: RoundRequest) -> Round:
    """The answer form is spoken; type what you hear."""
    return Round(
        id=req.round_id,
        shape=RoundShape.DICTATION,
        words=(req.word,),
        prompt="Type what you hear",
        answers=(req.answer,),
        audio_text=req.answer,
        fuzzy=req.settings.fuzzy_match_enabled,
        hints=(req.prompt,),
    )


# =============================================================================
# Sequence shape
# =============================================================================


def chain_length(index: int, available: int) -> int:
    """Sequence length for the round at index: 3, 3, 4, 4, 5, ... capped."""
    return max(1, min(CHAIN_START_LENGTH + index // CHAIN_GROWTH_EVERY, available))


@builder(RoundShape.CHAIN)
def chain(req: RoundRequest) -> Round:
    """
    Memorise a sequence of answer forms, then recall it in order.

    The round's word anchors the chain; the rest are sampled from the snapshot.
    """
    length = chain_length(req.index, len(req.snapshot))
    others = [w for w in req.snapshot if w.id != req.word.id]
    words = req.rng.shuffled([req.word, *req.rng.sample(others, length - 1)])
    sequence = tuple(w.answer_form(req.direction) for w in words)
    return Round(
        id=req.round_id,
        shape=RoundShape.CHAIN,
        words=tuple(words),
        prompt=" → ".join(sequence),
        answers=sequence,
        fuzzy=False,
        hints=tuple(w.prompt_form(req.direction) for w in words),
    )


# =============================================================================
# Self-graded shape
# =============================================================================


@builder(RoundShape.FLASHCARD)
def flashcard(req: RoundRequest) -> Round:
    """
    Show the front, flip to the back, and let the learner say whether they
    knew it. The back travels as the round's only hint.
    """
    return Round(
        id=req.round_id,
        shape=RoundShape.FLASHCARD,
        words=(req.word,),
        prompt=req.prompt,
        answers=(KNOW,),
        options=(KNOW, DONT_KNOW),
        image_url=req.word.image_url,
        hints=(req.answer,),
    )

"""
wordgym command line.

Commands:
    wordgym play LESSON         - Play a session of any shape against a lesson
    wordgym due LESSON          - Show words due for review
    wordgym progress LESSON     - Show mastery breakdown and learner level

Usage:
    wordgym play animals --shape typing --count 10
    wordgym play animals --shape chain --direction b-to-a
    wordgym play animals --due-first
    wordgym play animals --shape flashcard
    wordgym due animals
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from wordgym.config import get_settings
from wordgym.core.clock import SystemClock
from wordgym.core.errors import EmptyPoolError
from wordgym.core.models import Direction, Round, RoundKind, RoundShape, Session, SessionStats
from wordgym.core.randomness import RandomSource
from wordgym.grading import SimilarityMatcher
from wordgym.storage import JsonWordRepository
from wordgym.study import (
    ReviewScheduler,
    SessionEngine,
    due_items,
    level_from_xp,
    mastery_breakdown,
    total_xp,
    xp_progress,
)

app = typer.Typer(
    help="wordgym: vocabulary games on one shared session engine",
    no_args_is_help=True,
)
console = Console()


def _repository(words_file: Path | None) -> JsonWordRepository:
    return JsonWordRepository(words_file or get_settings().words_file)


# =============================================================================
# Display helpers
# =============================================================================


def display_round(round_: Round, index: int, total: int) -> None:
    """Render a round's prompt, options and hints."""
    body = round_.prompt
    if round_.audio_text:
        body += f"\n[dim](audio: {round_.audio_text})[/dim]"
    if round_.image_url:
        body += f"\n[dim](image: {round_.image_url})[/dim]"
    if round_.options:
        body += "\n\n" + "\n".join(f"  {i}. {opt}" for i, opt in enumerate(round_.options, 1))
    if round_.time_limit_ms:
        body += f"\n\n[yellow]{round_.time_limit_ms // 1000}s limit[/yellow]"

    console.print(
        Panel(
            body,
            title=f"[bold cyan]{round_.shape.value.replace('_', ' ').upper()}[/bold cyan]",
            subtitle=f"{index}/{total}",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2),
        )
    )
    if round_.hints and round_.kind != RoundKind.CHOICE:
        console.print(f"[dim]Hint: {round_.hints[0]}[/dim]")


def read_answer(round_: Round) -> str | list[str]:
    """Prompt for an answer in the form the round's kind expects."""
    if round_.kind == RoundKind.SEQUENCE:
        # One prompt per entry: answer forms may themselves contain commas
        total = len(round_.answers)
        return [Prompt.ask(f"Word {i}/{total}", default="") for i in range(1, total + 1)]

    if round_.shape == RoundShape.FLASHCARD:
        Prompt.ask("Press Enter to flip", default="")
        console.print(f"[bold]{round_.hints[0]}[/bold]")

    raw = Prompt.ask("Answer", default="")
    if round_.kind == RoundKind.CHOICE and raw.strip().isdigit():
        choice = int(raw.strip())
        if 1 <= choice <= len(round_.options):
            return round_.options[choice - 1]
    return raw


def display_stats(stats: SessionStats) -> None:
    table = Table(title="Session Summary", box=box.SIMPLE)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Correct", f"[green]{stats.correct_count}[/green]")
    table.add_row("Incorrect", f"[red]{stats.incorrect_count}[/red]")
    table.add_row("Accuracy", f"{stats.accuracy:.1f}%")
    table.add_row("XP earned", str(stats.total_xp))
    table.add_row("Best streak", str(stats.max_streak))
    table.add_row("Avg response", f"{stats.average_response_ms} ms")
    if stats.max_sequence_length:
        table.add_row("Longest chain", str(stats.max_sequence_length))
    table.add_row("Time", f"{stats.elapsed_seconds}s")

    console.print(table)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def play(
    lesson: str = typer.Argument(..., help="Lesson id in the word file"),
    shape: RoundShape = typer.Option(
        RoundShape.MULTIPLE_CHOICE,
        "--shape", "-s",
        help="Game format",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count", "-n",
        min=1,
        help="Rounds in the session (defaults to settings)",
    ),
    direction: Optional[Direction] = typer.Option(
        None,
        "--direction", "-d",
        help="a-to-b asks for the translation, b-to-a for the term",
    ),
    due_first: bool = typer.Option(
        False,
        "--due-first",
        help="Fill the session with due words first",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a repeatable session"),
    words_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Word file to use"),
) -> None:
    """Play one session and save the updated word mastery."""
    settings = get_settings()
    session_settings = settings.session_settings()
    if direction is not None:
        session_settings = session_settings.model_copy(update={"direction": direction})

    repo = _repository(words_file)
    engine = SessionEngine(
        matcher=SimilarityMatcher(settings.latin_threshold, settings.other_threshold),
        scheduler=ReviewScheduler(),
        rng=RandomSource(seed),
        clock=SystemClock(),
    )

    try:
        session = engine.build(
            repo.list_words(lesson),
            shape,
            count=count,
            settings=session_settings,
            prioritize_due=due_first,
        )
    except EmptyPoolError:
        console.print(f"\n[red]No words found in lesson '{lesson}'.[/red]")
        console.print(f"Looking in: {repo.path}")
        raise typer.Exit(code=1)

    _run(engine, session, repo)
    display_stats(engine.stats(session))


def _run(engine: SessionEngine, session: Session, repo: JsonWordRepository) -> None:
    total = len(session.rounds)
    while not session.is_completed:
        round_ = session.current_round
        display_round(round_, session.position + 1, total)

        outcome, session = engine.submit(session, read_answer(round_))

        if outcome.timed_out:
            console.print(f"[yellow]Time's up![/yellow] Answer: {round_.correct_answer}")
        elif outcome.correct:
            console.print(f"[green]Correct![/green] +{outcome.xp} XP")
        elif round_.shape == RoundShape.FLASHCARD:
            console.print("[red]Marked for review.[/red]")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: {round_.correct_answer}")

        if outcome.updated_word is not None:
            repo.save_word(outcome.updated_word)
        console.print()


@app.command()
def due(
    lesson: str = typer.Argument(..., help="Lesson id in the word file"),
    words_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Word file to use"),
) -> None:
    """List words due for review."""
    words = due_items(_repository(words_file).list_words(lesson), SystemClock().now())

    if not words:
        console.print("[green]Nothing due for review![/green]")
        return

    table = Table(title=f"Due in {lesson}")
    table.add_column("Term")
    table.add_column("Translation")
    table.add_column("Level", justify="right")
    table.add_column("Due")

    for word in words:
        due_at = word.due_at.strftime("%Y-%m-%d %H:%M") if word.due_at else "[cyan]new[/cyan]"
        table.add_row(word.term, word.translation, str(word.level), due_at)

    console.print(table)
    console.print(f"\n[bold]{len(words)}[/bold] due")


@app.command()
def progress(
    lesson: str = typer.Argument(..., help="Lesson id in the word file"),
    words_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Word file to use"),
) -> None:
    """Show mastery breakdown and learner level."""
    words = _repository(words_file).list_words(lesson)
    breakdown = mastery_breakdown(words)
    xp = total_xp(words)
    level = xp_progress(xp)

    table = Table(title=f"Progress in {lesson}")
    table.add_column("Band")
    table.add_column("Words", justify="right")
    table.add_row("New", str(breakdown.new))
    table.add_row("Learning", str(breakdown.learning))
    table.add_row("Reviewing", str(breakdown.reviewing))
    table.add_row("Mastered", f"[green]{breakdown.mastered}[/green]")
    console.print(table)

    console.print(f"Mastery: {breakdown.mastery_percentage}%")
    console.print(
        f"Level {level_from_xp(xp)} - {xp} XP "
        f"({level.current}/{level.needed} into this level)"
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level,
        format="<level>{message}</level>",
    )

    app()


if __name__ == "__main__":
    main()

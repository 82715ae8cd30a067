"""Rich terminal formatting helpers."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn
from rich.table import Table
from rich.text import Text

from calmspace.breathing import phase_instruction, slugify
from calmspace.classifier import CRISIS_RESPONSE
from calmspace.models import ConversationTurn, ExercisePattern, Phase

console = Console()

_PHASE_STYLE: dict[Phase, str] = {
    Phase.INHALE: "bold green",
    Phase.HOLD: "bold dark_orange",
    Phase.EXHALE: "bold blue",
}


def print_exercises(patterns: list[ExercisePattern], selected: str = "") -> None:
    """Print the built-in exercises in a table."""
    table = Table(show_header=True, box=None, pad_edge=False)
    table.add_column("name", style="bold")
    table.add_column("slug", style="dim")
    table.add_column("rhythm")
    table.add_column("about")

    for pattern in patterns:
        rhythm = (
            f"{pattern.inhale_seconds}s in - {pattern.hold_seconds}s hold - "
            f"{pattern.exhale_seconds}s out - {pattern.total_cycles} cycles"
        )
        style = "cyan" if slugify(pattern.name) == slugify(selected) else ""
        table.add_row(pattern.name, slugify(pattern.name), rhythm, pattern.description, style=style)

    console.print(Panel(table, title="Breathing Exercises", border_style="blue"))


def phase_label(phase: Phase, cycle: int, total_cycles: int) -> str:
    """Progress-bar label for the phase in progress."""
    style = _PHASE_STYLE[phase]
    return f"[{style}]{phase_instruction(phase):<11}[/{style}] cycle {cycle} of {total_cycles}"


def print_tips(tips: list[str]) -> None:
    text = "\n".join(f"- {tip}" for tip in tips)
    console.print(Panel(text, title="Breathing Tips", border_style="dim"))


def print_companion(text: str) -> None:
    """Print a message from the companion. Crisis replies get a red panel."""
    if text == CRISIS_RESPONSE:
        console.print(Panel(Text(text), title="Please reach out", border_style="bold red"))
        return
    console.print(Panel(Text(text), border_style="magenta", padding=(0, 2)))


def print_turn(turn: ConversationTurn) -> None:
    """Print one stored turn with its timestamp."""
    stamp = turn.created_at.strftime("%Y-%m-%d %H:%M")
    speaker = ("You: ", "bold purple") if turn.is_from_user else ("Companion: ", "bold magenta")
    console.print(Text.assemble((stamp, "dim"), " ", speaker, turn.text))


def print_nudge(message: str) -> None:
    """Print an encouragement message in a styled panel."""
    text = Text(message, justify="center")
    console.print(Panel(text, border_style="magenta", padding=(1, 4)))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def create_breathing_progress() -> Progress:
    """Create a Rich progress bar for a breathing session."""
    return Progress(
        TextColumn("{task.description}"),
        BarColumn(bar_width=30),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        console=console,
    )

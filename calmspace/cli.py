"""calmspace CLI -- breathing exercises and a gentle chat companion."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from calmspace import breathing, chat, config as cfg, display, timer
from calmspace.classifier import ResponseClassifier
from calmspace.models import BreathingEvent, InvalidPatternError, PhaseEntered
from calmspace.store import KeyValueStore

app = typer.Typer(
    name="calmspace",
    help="Your safe space: breathe, talk, and take things one moment at a time.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Breathing exercises and a supportive chat companion."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=display.console, show_path=False)],
        force=True,
    )


def _store() -> KeyValueStore:
    """Open the configured key-value store (convenience wrapper)."""
    return KeyValueStore()


def _classifier() -> ResponseClassifier:
    return ResponseClassifier(seed=cfg.load_config().chat_seed)


# ---------------------------------------------------------------------------
# Breathing
# ---------------------------------------------------------------------------


@app.command()
def exercises() -> None:
    """List the breathing exercises."""
    display.print_exercises(breathing.EXERCISES, selected=cfg.load_config().default_exercise)


@app.command()
def breathe(
    name: Optional[str] = typer.Argument(None, help="Exercise name or slug, e.g. box-breathing"),
    cycles: Optional[int] = typer.Option(None, "--cycles", "-c", help="Number of cycles to run"),
    tips: bool = typer.Option(False, "--tips", help="Show breathing tips first"),
    bell: bool = typer.Option(False, "--bell", help="Ring the terminal bell on each phase change"),
) -> None:
    """Start a guided breathing exercise."""
    wanted = name or cfg.load_config().default_exercise
    pattern = breathing.get_exercise(wanted)
    if pattern is None:
        display.print_warning(f"Unknown exercise '{wanted}'. Run 'calmspace exercises' to see them.")
        raise typer.Exit(1)

    if cycles is not None:
        try:
            pattern = breathing.with_cycles(pattern, cycles)
        except InvalidPatternError as exc:
            display.print_warning(str(exc))
            raise typer.Exit(1)

    if tips:
        display.print_tips(breathing.BREATHING_TIPS)

    def on_event(event: BreathingEvent) -> None:
        if bell and isinstance(event, PhaseEntered):
            display.console.print("\a", end="")

    display.print_info(f"{pattern.name}: {pattern.total_cycles} cycles. Press Ctrl-C to pause.")
    completed = timer.run_breathing(pattern, on_event=on_event)
    if completed:
        display.print_success(f"Completed {pattern.total_cycles} cycles of {pattern.name}.")


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


@app.command()
def say(message: str = typer.Argument(..., help="What's on your mind?")) -> None:
    """Send one message to the companion."""
    if not message.strip():
        display.print_warning("Say a little something first.")
        raise typer.Exit(1)
    limit = cfg.load_config().history_limit
    _, answer = chat.reply(_store(), message.strip(), _classifier(), limit=limit)
    display.print_companion(answer.text)


@app.command(name="chat")
def chat_loop() -> None:
    """Talk with the companion. Send an empty line or 'quit' to leave."""
    store = _store()
    classifier = _classifier()
    limit = cfg.load_config().history_limit

    chat.add_turn(store, chat.WELCOME_MESSAGE, is_from_user=False, limit=limit)
    display.print_companion(chat.WELCOME_MESSAGE)

    while True:
        text = typer.prompt("You", default="", show_default=False).strip()
        if not text or text.lower() in {"quit", "exit"}:
            break
        _, answer = chat.reply(store, text, classifier, limit=limit)
        display.print_companion(answer.text)

    display.print_info("Take care. I'm here whenever you want to talk.")


@app.command()
def history(
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Number of messages to show"
    ),
    clear: bool = typer.Option(False, "--clear", help="Delete the saved conversation"),
) -> None:
    """Show (or clear) your saved conversation."""
    store = _store()
    if clear:
        if chat.clear_history(store):
            display.print_success("Conversation history cleared.")
        else:
            display.print_info("No conversation history to clear.")
        return

    if limit is None:
        limit = cfg.load_config().history_limit
    turns = chat.load_history(store, limit=limit)
    if not turns:
        display.print_info("No conversation history yet.")
        return
    for turn in turns:
        display.print_turn(turn)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    history_limit: Optional[int] = typer.Option(
        None, "--history-limit", help="How many chat messages to keep (1-500)"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the companion's replies"),
    exercise: Optional[str] = typer.Option(None, "--exercise", help="Default breathing exercise"),
    data_path: Optional[str] = typer.Option(None, "--data-path", help="Set a custom data file path"),
    reset: bool = typer.Option(False, "--reset", help="Restore default settings"),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """View or change settings."""
    if reset:
        cfg.reset_config()
        display.print_success("Reset to default settings.")
        return

    changes: dict[str, object] = {}
    if history_limit is not None:
        changes["history_limit"] = history_limit
    if seed is not None:
        changes["chat_seed"] = seed
    if exercise is not None:
        pattern = breathing.get_exercise(exercise)
        if pattern is None:
            display.print_warning(f"Unknown exercise '{exercise}'.")
            raise typer.Exit(1)
        changes["default_exercise"] = pattern.name

    if changes:
        try:
            cfg.update_config(**changes)
        except ValidationError as exc:
            display.print_warning(f"Invalid setting: {exc.errors()[0]['msg']}")
            raise typer.Exit(1)
        display.print_success("Settings saved.")
    if data_path:
        result = cfg.set_data_path(data_path)
        display.print_success(f"Data path set to: {result.data_path}")

    if show:
        current = cfg.load_config()
        display.print_info(f"Data file: {cfg.get_data_path()}")
        display.print_info(f"History limit: {current.history_limit}")
        display.print_info(f"Reply seed: {current.chat_seed if current.chat_seed is not None else 'random'}")
        display.print_info(f"Default exercise: {current.default_exercise}")
    elif not changes and not data_path:
        display.print_info("Use --show, --history-limit, --seed, --exercise, --data-path, or --reset.")

"""Breathing cycle engine.

A session runs the fixed sequence inhale -> hold -> exhale for a number of
cycles. Each call to :func:`tick` represents one elapsed second. The engine
does not own a clock: whoever calls ``tick`` (see :mod:`calmspace.timer`)
decides when a second has passed.

Every operation takes a :class:`CycleState` and returns a new one; nothing is
mutated in place, so the caller holding the state is its only owner.

Pausing and resetting are separate: :func:`stop` keeps the phase and cycle
counters so :func:`resume` can continue where the session left off, while
:func:`reset` goes back to the start of the first inhale.
"""

from __future__ import annotations

import logging
from typing import Optional

from calmspace.models import (
    BreathingEvent,
    CycleState,
    ExercisePattern,
    Phase,
    PhaseEntered,
    SessionCompleted,
)

log = logging.getLogger(__name__)

EXERCISES: list[ExercisePattern] = [
    ExercisePattern(
        name="4-7-8 Technique",
        description="Perfect for anxiety relief and falling asleep",
        inhale_seconds=4,
        hold_seconds=7,
        exhale_seconds=8,
        total_cycles=4,
    ),
    ExercisePattern(
        name="Box Breathing",
        description="Used by Navy SEALs for focus and calm",
        inhale_seconds=4,
        hold_seconds=4,
        exhale_seconds=4,
        total_cycles=6,
    ),
    ExercisePattern(
        name="Energizing Breath",
        description="Quick technique to boost energy and focus",
        inhale_seconds=3,
        hold_seconds=2,
        exhale_seconds=3,
        total_cycles=8,
    ),
]

BREATHING_TIPS: list[str] = [
    "Find a comfortable, quiet space",
    "Place one hand on chest, one on belly",
    "Focus on your belly rising and falling",
    "If your mind wanders, gently return focus to breath",
    "Practice regularly for best results",
]

_INSTRUCTIONS: dict[Phase, str] = {
    Phase.INHALE: "Breathe In",
    Phase.HOLD: "Hold",
    Phase.EXHALE: "Breathe Out",
}


def slugify(name: str) -> str:
    """``"Box Breathing"`` -> ``"box-breathing"``."""
    return "-".join(name.lower().split())


def get_exercise(name: str) -> Optional[ExercisePattern]:
    """Look up a built-in exercise by name or slug, ignoring case."""
    wanted = slugify(name)
    for pattern in EXERCISES:
        if slugify(pattern.name) == wanted:
            return pattern
    return None


def with_cycles(pattern: ExercisePattern, cycles: int) -> ExercisePattern:
    """Return a copy of ``pattern`` that runs ``cycles`` times.

    Raises InvalidPatternError if ``cycles`` is less than 1.
    """
    data = pattern.model_dump()
    data["total_cycles"] = cycles
    return ExercisePattern(**data)


def phase_instruction(phase: Phase) -> str:
    """Return the prompt shown to the user during ``phase``."""
    return _INSTRUCTIONS[phase]


def _initial_state(pattern: ExercisePattern, running: bool) -> CycleState:
    return CycleState(
        pattern=pattern,
        current_phase=Phase.INHALE,
        seconds_remaining=pattern.inhale_seconds,
        completed_cycles=0,
        running=running,
    )


def start(pattern: ExercisePattern) -> tuple[CycleState, list[BreathingEvent]]:
    """Begin a new session at the first inhale.

    Any previous state is discarded, so starting while a session is running
    restarts it from the beginning.
    """
    state = _initial_state(pattern, running=True)
    log.debug("Started %s (%d cycles)", pattern.name, pattern.total_cycles)
    return state, [PhaseEntered(phase=Phase.INHALE, duration=pattern.inhale_seconds)]


def tick(state: CycleState) -> tuple[CycleState, list[BreathingEvent]]:
    """Advance the session by one second."""
    if not state.running:
        return state, []

    remaining = state.seconds_remaining - 1
    if remaining > 0:
        return state.model_copy(update={"seconds_remaining": remaining}), []

    pattern = state.pattern
    next_phase = state.current_phase.next
    completed = state.completed_cycles
    if next_phase is Phase.INHALE:
        completed += 1

    if completed >= pattern.total_cycles:
        log.debug("Finished %s after %d cycles", pattern.name, completed)
        finished = state.model_copy(
            update={
                "current_phase": Phase.INHALE,
                "seconds_remaining": 0,
                "completed_cycles": completed,
                "running": False,
            }
        )
        return finished, [SessionCompleted(completed_cycles=completed)]

    duration = pattern.duration(next_phase)
    log.debug("Cycle %d: entering %s for %ds", completed + 1, next_phase.value, duration)
    advanced = state.model_copy(
        update={
            "current_phase": next_phase,
            "seconds_remaining": duration,
            "completed_cycles": completed,
        }
    )
    return advanced, [PhaseEntered(phase=next_phase, duration=duration)]


def stop(state: CycleState) -> CycleState:
    """Pause the session, keeping its phase and cycle counters."""
    return state.model_copy(update={"running": False})


def resume(state: CycleState) -> CycleState:
    """Continue a paused session. A finished session stays finished."""
    if state.is_complete:
        return state
    return state.model_copy(update={"running": True})


def reset(state: CycleState) -> CycleState:
    """Return to the start of the first inhale, not running."""
    return _initial_state(state.pattern, running=False)

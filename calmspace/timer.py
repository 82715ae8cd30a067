"""Drive a breathing session in real time, one tick per second."""

from __future__ import annotations

import time
from typing import Callable, Optional

from calmspace import breathing
from calmspace.display import console, create_breathing_progress, phase_label, print_nudge
from calmspace.models import BreathingEvent, ExercisePattern, PhaseEntered

EventHandler = Callable[[BreathingEvent], None]

COMPLETION_MESSAGE = "Well done. Notice how your body feels right now."


def run_breathing(pattern: ExercisePattern, on_event: Optional[EventHandler] = None) -> bool:
    """Run a session to completion. Returns True if completed, False if interrupted."""
    state, events = breathing.start(pattern)
    progress = create_breathing_progress()

    try:
        with progress:
            task = progress.add_task(
                phase_label(state.current_phase, state.current_cycle, pattern.total_cycles),
                total=pattern.total_seconds,
            )
            while True:
                for event in events:
                    if on_event is not None:
                        on_event(event)
                    if isinstance(event, PhaseEntered):
                        progress.update(
                            task,
                            description=phase_label(
                                event.phase, state.current_cycle, pattern.total_cycles
                            ),
                        )
                if not state.running:
                    break
                time.sleep(1)
                state, events = breathing.tick(state)
                progress.advance(task, 1)
    except KeyboardInterrupt:
        state = breathing.stop(state)
        console.print(
            f"\n[yellow]Paused during cycle {state.current_cycle} of "
            f"{pattern.total_cycles}.[/yellow]"
        )
        return False

    # Bell notification
    console.print("\a", end="")
    print_nudge(COMPLETION_MESSAGE)
    return True

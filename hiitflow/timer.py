"""Once-a-second tick source that drives a TimerEngine in the terminal."""

from __future__ import annotations

import time
from typing import Any, Optional

from rich.progress import Progress, TaskID

from hiitflow import display
from hiitflow.display import console
from hiitflow.engine import TimerEngine
from hiitflow.models import TimerState


def _refresh(progress: Progress, task: TaskID, state: TimerState) -> None:
    upcoming = display.next_label(state)
    progress.update(
        task,
        description=display.describe(state),
        total=max(state.total_time, 1),
        completed=state.total_time - state.time_remaining,
        clock=display.format_time(state.time_remaining),
        next=f"Next: {upcoming}" if upcoming else "",
    )


def run_workout(engine: TimerEngine, presence: Optional[Any] = None) -> bool:
    """Tick *engine* once per second until it stops running.

    Returns True if the workout reached Complete, False if it was paused,
    including by Ctrl-C. When *presence* reports that its display-wake lock
    was revoked, the engine is asked to re-acquire it.
    """
    state = engine.state
    progress = display.create_workout_progress()

    try:
        with progress:
            task = progress.add_task(display.describe(state), total=1, clock="", next="")
            _refresh(progress, task, state)
            while state.is_running:
                time.sleep(1)
                state = engine.tick()
                _refresh(progress, task, state)
                if presence is not None and getattr(presence, "revoked", False):
                    engine.refresh_presence()
    except KeyboardInterrupt:
        engine.pause()
        console.print("\n[yellow]Paused.[/yellow]")
        return False

    return state.is_complete

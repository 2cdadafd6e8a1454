"""Phase ordering for a workout run.

The sequence is fixed by the config::

    Prep → (Work → Rest) × (sets - 1) → Work → [Cooldown] → Complete

Everything here is pure: no state is held and nothing is emitted.
"""

from __future__ import annotations

from typing import Optional

from hiitflow.models import Phase, Segment, TimerState, WorkoutConfig


def next_phase(state: TimerState) -> Phase:
    """Return the phase that follows ``state.phase``."""
    phase = state.phase
    config = state.config
    if phase == Phase.PREP:
        return Phase.WORK
    if phase == Phase.WORK:
        if state.current_set < config.sets:
            return Phase.REST
        if config.cooldown > 0:
            return Phase.COOLDOWN
        return Phase.COMPLETE
    if phase == Phase.REST:
        return Phase.WORK
    if phase == Phase.COOLDOWN:
        return Phase.COMPLETE
    if phase == Phase.COMPLETE:
        return Phase.COMPLETE
    raise ValueError(f"Unknown phase: {phase!r}")


def duration_of(phase: Phase, config: WorkoutConfig) -> int:
    """Seconds a phase lasts under *config*."""
    durations: dict[Phase, int] = {
        Phase.PREP: config.prep,
        Phase.WORK: config.work,
        Phase.REST: config.rest,
        Phase.COOLDOWN: config.cooldown,
        Phase.COMPLETE: 0,
    }
    return durations[phase]


def set_after(state: TimerState, upcoming: Phase) -> int:
    """Set number once *upcoming* begins. Only Rest → Work starts a new set."""
    if state.phase == Phase.REST and upcoming == Phase.WORK:
        return state.current_set + 1
    return state.current_set


def advance(state: TimerState) -> TimerState:
    """Return the state at the start of the next phase.

    Shared by the natural boundary tick and by skip so both apply the same
    set-counting rule.
    """
    upcoming = next_phase(state)
    if upcoming == Phase.COMPLETE:
        return state.model_copy(
            update={"phase": Phase.COMPLETE, "time_remaining": 0, "is_paused": True}
        )
    duration = duration_of(upcoming, state.config)
    return state.model_copy(
        update={
            "phase": upcoming,
            "current_set": set_after(state, upcoming),
            "time_remaining": duration,
            "total_time": duration,
        }
    )


def plan(config: WorkoutConfig) -> list[Segment]:
    """Every timed phase of an uninterrupted run, in order."""
    segments = [Segment(phase=Phase.PREP, set_number=1, duration=config.prep)]
    for set_number in range(1, config.sets + 1):
        segments.append(Segment(phase=Phase.WORK, set_number=set_number, duration=config.work))
        if set_number < config.sets:
            segments.append(Segment(phase=Phase.REST, set_number=set_number, duration=config.rest))
    if config.cooldown > 0:
        segments.append(
            Segment(phase=Phase.COOLDOWN, set_number=config.sets, duration=config.cooldown)
        )
    return segments


def total_duration(config: WorkoutConfig) -> int:
    """Ticks from a fresh start to Complete."""
    return sum(segment.duration for segment in plan(config))


def upcoming(state: TimerState) -> Optional[Segment]:
    """The segment after the current one, or None when Complete comes next."""
    following = next_phase(state)
    if following == Phase.COMPLETE:
        return None
    return Segment(
        phase=following,
        set_number=set_after(state, following),
        duration=duration_of(following, state.config),
    )

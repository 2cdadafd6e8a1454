"""Interval-workout timer state machine.

States
------
Each of PREP, WORK, REST, COOLDOWN is either running or paused.
COMPLETE is terminal and always paused.

Transitions
-----------
start(config)        → (PREP, running)  or (PREP, paused) with ``paused=True``
tick()               → one second off the clock; at the boundary, next phase
skip()               → next phase now, keeping the paused flag
pause() / resume()   → toggle the paused flag (no-op when COMPLETE)
restart()            → fresh (PREP, running) with the same config
discard()            → no workout at all

Ticks are delivered by the caller (see ``hiitflow.timer``). One ``tick()``
is one second of countdown regardless of wall-clock time.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from hiitflow import sequencer
from hiitflow.errors import UsageError
from hiitflow.models import Phase, PhaseStarted, TimerState, WorkoutCompleted, WorkoutConfig
from hiitflow.ports import NotificationPort, NullNotifier, NullPresence, PresencePort

log = logging.getLogger(__name__)


class TimerEngine:
    """Owns the single live ``TimerState`` of a workout run.

    Every operation takes the engine lock, so a tick arriving from a timer
    thread never sees a state half-way through a control call. Operations
    return the new state.
    """

    def __init__(
        self,
        notifier: Optional[NotificationPort] = None,
        presence: Optional[PresencePort] = None,
    ) -> None:
        self._notifier: NotificationPort = notifier or NullNotifier()
        self._presence: PresencePort = presence or NullPresence()
        self._lock = threading.RLock()
        self._state: Optional[TimerState] = None
        self._presence_requested = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def has_state(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> TimerState:
        with self._lock:
            return self._require_state()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def start(self, config: WorkoutConfig, *, paused: bool = False) -> TimerState:
        """Begin a run at Prep, set 1. The config must already be validated."""
        with self._lock:
            state = TimerState(
                phase=Phase.PREP,
                current_set=1,
                time_remaining=config.prep,
                total_time=config.prep,
                is_paused=paused,
                config=config,
            )
            log.debug("Workout started: %s paused=%s", config, paused)
            self._commit(state)
            self._emit_phase_started(state)
            return state

    def tick(self) -> TimerState:
        """Advance the countdown by one second."""
        with self._lock:
            state = self._require_state()
            if not state.is_running:
                return state
            if state.time_remaining > 1:
                state = state.model_copy(update={"time_remaining": state.time_remaining - 1})
                self._commit(state)
                return state
            return self._cross_boundary(state)

    def pause(self) -> TimerState:
        with self._lock:
            state = self._require_state()
            if state.is_paused or state.is_complete:
                return state
            state = state.model_copy(update={"is_paused": True})
            log.debug("Paused in %s with %ss left", state.phase.value, state.time_remaining)
            self._commit(state)
            return state

    def resume(self) -> TimerState:
        with self._lock:
            state = self._require_state()
            if not state.is_paused or state.is_complete:
                return state
            state = state.model_copy(update={"is_paused": False})
            log.debug("Resumed in %s", state.phase.value)
            self._commit(state)
            return state

    def skip(self) -> TimerState:
        """Jump to the next phase now. Works while paused."""
        with self._lock:
            state = self._require_state()
            if state.is_complete:
                return state
            return self._cross_boundary(state)

    def restart(self) -> TimerState:
        """Start the same workout over from Prep, running."""
        with self._lock:
            config = self._require_state().config
            return self.start(config)

    def discard(self) -> None:
        """Drop the current run. The engine is then as if never started."""
        with self._lock:
            self._state = None
            self._sync_presence()

    def refresh_presence(self) -> None:
        """Re-request presence after the holder lost it involuntarily."""
        with self._lock:
            state = self._require_state()
            if state.is_running:
                self._presence_requested = True
                self._call_presence("acquire_presence")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _require_state(self) -> TimerState:
        if self._state is None:
            raise UsageError("No workout in progress; call start() first.")
        return self._state

    def _cross_boundary(self, state: TimerState) -> TimerState:
        new_state = sequencer.advance(state)
        log.debug(
            "Phase %s → %s (set %d/%d)",
            state.phase.value,
            new_state.phase.value,
            new_state.current_set,
            new_state.config.sets,
        )
        # The event follows the committed state even if an interrupt lands in between.
        try:
            self._commit(new_state)
        finally:
            if new_state.is_complete:
                event = WorkoutCompleted(total_sets=new_state.config.sets)
                self._call_notifier("workout_completed", event)
            else:
                self._emit_phase_started(new_state, previous=state.phase)
        return new_state

    def _commit(self, state: TimerState) -> None:
        self._state = state
        self._sync_presence()

    def _emit_phase_started(self, state: TimerState, previous: Optional[Phase] = None) -> None:
        event = PhaseStarted(
            phase=state.phase,
            current_set=state.current_set,
            total_sets=state.config.sets,
            previous_phase=previous,
        )
        self._call_notifier("phase_started", event)

    def _sync_presence(self) -> None:
        wanted = self._state is not None and self._state.is_running
        if wanted == self._presence_requested:
            return
        self._presence_requested = wanted
        self._call_presence("acquire_presence" if wanted else "release_presence")

    def _call_notifier(self, method: str, event: object) -> None:
        try:
            getattr(self._notifier, method)(event)
        except Exception:
            log.warning("Notification %s failed", method, exc_info=True)

    def _call_presence(self, method: str) -> None:
        try:
            getattr(self._presence, method)()
        except Exception:
            log.warning("Presence %s failed", method, exc_info=True)

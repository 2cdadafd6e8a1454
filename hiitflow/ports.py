"""Interfaces the timer engine drives, plus no-op implementations."""

from __future__ import annotations

from typing import Protocol

from hiitflow.models import PhaseStarted, WorkoutCompleted


class NotificationPort(Protocol):
    """Receives phase-change events (audio cues, banners)."""

    def phase_started(self, event: PhaseStarted) -> None: ...

    def workout_completed(self, event: WorkoutCompleted) -> None: ...


class PresencePort(Protocol):
    """Keeps the display awake while a workout is running.

    Both calls must be idempotent, and release must be safe without a prior
    successful acquire.
    """

    def acquire_presence(self) -> None: ...

    def release_presence(self) -> None: ...


class NullNotifier:
    """Notification port that ignores every event."""

    def phase_started(self, event: PhaseStarted) -> None:
        pass

    def workout_completed(self, event: WorkoutCompleted) -> None:
        pass


class NullPresence:
    """Presence port for platforms (or users) without a display-wake mechanism."""

    is_held = False
    revoked = False

    def acquire_presence(self) -> None:
        pass

    def release_presence(self) -> None:
        pass

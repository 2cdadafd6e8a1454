"""Pydantic models: the single source of truth for all data types."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MIN_TIME = 1  # seconds
MAX_TIME = 3600  # 60 minutes


class Phase(str, enum.Enum):
    """Workout stages, in the order a run visits them."""

    PREP = "prep"
    WORK = "work"
    REST = "rest"
    COOLDOWN = "cooldown"
    COMPLETE = "complete"


class WorkoutConfig(BaseModel):
    """A validated workout. Immutable once a run starts."""

    model_config = ConfigDict(frozen=True)

    prep: int = Field(ge=MIN_TIME, le=MAX_TIME)
    sets: int = Field(ge=1)
    work: int = Field(ge=MIN_TIME, le=MAX_TIME)
    rest: int = Field(ge=MIN_TIME, le=MAX_TIME)
    cooldown: int = Field(default=0, ge=0, le=MAX_TIME)  # 0 = no cooldown


class TimerState(BaseModel):
    """Snapshot of a workout run. Replaced, never mutated, on every change."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    current_set: int = Field(ge=1)
    time_remaining: int = Field(ge=0)
    total_time: int = Field(ge=0)
    is_paused: bool = False
    config: WorkoutConfig

    @property
    def is_complete(self) -> bool:
        return self.phase == Phase.COMPLETE

    @property
    def is_running(self) -> bool:
        """True while the countdown should advance (and the screen stay awake)."""
        return not self.is_paused and not self.is_complete

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self.total_time <= 0:
            return 0.0
        elapsed = self.total_time - self.time_remaining
        return max(0.0, min(1.0, elapsed / self.total_time))


class PhaseStarted(BaseModel):
    """Fired on every phase entry, including the first Prep."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    current_set: int = Field(ge=1)
    total_sets: int = Field(ge=1)
    previous_phase: Optional[Phase] = None  # None when a run starts


class WorkoutCompleted(BaseModel):
    """Fired once, when a run reaches Complete."""

    model_config = ConfigDict(frozen=True)

    total_sets: int = Field(ge=1)


class Segment(BaseModel):
    """One planned phase of a workout."""

    phase: Phase
    set_number: int = Field(ge=1)
    duration: int = Field(ge=0)


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/hiitflow/config.json)."""

    sound: bool = True
    keep_awake: bool = True
    presets: dict[str, WorkoutConfig] = Field(default_factory=dict)

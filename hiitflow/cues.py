"""Phase-change cues: a banner on screen and a bell pattern per phase kind.

Cue patterns
------------
- entering Work: one long "go" tone
- entering Rest: three quick short tones
- workout completed: ascending C-major arpeggio
- Prep and Cooldown: silent

A terminal can only ring its bell, so each note becomes one bell; the
frequency and length are kept so a richer backend can synthesize them.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from hiitflow import display
from hiitflow.models import Phase, PhaseStarted, WorkoutCompleted

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cue:
    """A single tone."""

    frequency: float  # Hz
    duration_ms: int
    gap_ms: int = 0  # silence after the tone


ACTIVE_START: tuple[Cue, ...] = (Cue(800.0, 600),)
REST_START: tuple[Cue, ...] = (
    Cue(600.0, 100, gap_ms=80),
    Cue(600.0, 100, gap_ms=80),
    Cue(600.0, 100),
)
CONGRATULATIONS: tuple[Cue, ...] = (
    Cue(523.25, 150, gap_ms=30),  # C5
    Cue(659.25, 150, gap_ms=30),  # E5
    Cue(783.99, 150, gap_ms=30),  # G5
    Cue(1046.50, 300),  # C6
)

_PHASE_CUES: dict[Phase, tuple[Cue, ...]] = {
    Phase.WORK: ACTIVE_START,
    Phase.REST: REST_START,
}


def pattern_for(phase: Phase) -> tuple[Cue, ...]:
    """Cue pattern played when *phase* starts (empty for silent phases)."""
    return _PHASE_CUES.get(phase, ())


class CueNotifier:
    """Notification port that prints phase banners and rings cue patterns."""

    def __init__(self, *, sound: bool = True, background: bool = True) -> None:
        self.sound = sound
        self._background = background

    def phase_started(self, event: PhaseStarted) -> None:
        display.print_phase_banner(event.phase, event.current_set, event.total_sets)
        self._play(pattern_for(event.phase))

    def workout_completed(self, event: WorkoutCompleted) -> None:
        display.print_phase_banner(Phase.COMPLETE, event.total_sets, event.total_sets)
        self._play(CONGRATULATIONS)

    def _play(self, pattern: tuple[Cue, ...]) -> None:
        if not self.sound or not pattern:
            return
        if self._background:
            threading.Thread(target=self.play_pattern, args=(pattern,), daemon=True).start()
        else:
            self.play_pattern(pattern)

    def play_pattern(self, pattern: tuple[Cue, ...]) -> None:
        """Ring the bell once per note, spaced like the original tones."""
        try:
            for index, cue in enumerate(pattern):
                display.console.bell()
                if index < len(pattern) - 1:
                    time.sleep((cue.duration_ms + cue.gap_ms) / 1000)
        except Exception:
            log.warning("Cue playback failed", exc_info=True)

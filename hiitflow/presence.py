"""Keep the display awake during a workout.

Linux: ``systemd-inhibit`` holding an idle/sleep lock around ``sleep infinity``.
macOS: ``caffeinate -d``.

The inhibitor lives as a child process for as long as presence is held.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Optional, Union

from hiitflow.ports import NullPresence

log = logging.getLogger(__name__)

_WHO = "hiitflow"
_WHY = "Interval workout in progress"


def _inhibitor_command() -> Optional[list[str]]:
    """Return the command that keeps the display awake, or None if unsupported."""
    if sys.platform == "darwin":
        caffeinate = shutil.which("caffeinate")
        if caffeinate:
            return [caffeinate, "-d"]
        return None
    inhibit = shutil.which("systemd-inhibit")
    sleep = shutil.which("sleep")
    if inhibit and sleep:
        return [
            inhibit,
            "--what=idle:sleep",
            f"--who={_WHO}",
            f"--why={_WHY}",
            "--mode=block",
            sleep,
            "infinity",
        ]
    return None


_MAX_RESTARTS = 3


class InhibitorPresence:
    """Presence port backed by an inhibitor child process.

    A started inhibitor that later exits on its own is reported as
    ``revoked`` so the caller can ask for it again. An inhibitor that could
    never be started is not: there is nothing to re-request. Restarts are
    capped at ``_MAX_RESTARTS`` per acquisition, so an inhibitor that dies
    as soon as it starts is not respawned every second.
    """

    def __init__(self, command: Optional[list[str]] = None) -> None:
        self._command = command if command is not None else _inhibitor_command()
        self._process: Optional[subprocess.Popen] = None
        self._restarts = 0

    @property
    def is_held(self) -> bool:
        return self._process is not None and self._process.poll() is None

    @property
    def revoked(self) -> bool:
        """True if a started inhibitor has died and may still be restarted."""
        return (
            self._process is not None
            and self._process.poll() is not None
            and self._restarts < _MAX_RESTARTS
        )

    def acquire_presence(self) -> None:
        if self.is_held:
            return
        if not self._command:
            log.debug("No display-wake mechanism available on this platform.")
            return
        if self._process is not None:
            if self._restarts >= _MAX_RESTARTS:
                return
            self._restarts += 1
            log.warning(
                "Display-wake inhibitor exited (status %s); restarting (%d/%d)",
                self._process.returncode,
                self._restarts,
                _MAX_RESTARTS,
            )
        try:
            self._process = subprocess.Popen(
                self._command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
            log.debug("Presence acquired (pid %s)", self._process.pid)
        except OSError as exc:
            self._process = None
            log.warning("Could not keep the display awake: %s", exc)

    def release_presence(self) -> None:
        process = self._process
        self._process = None
        self._restarts = 0
        if process is None or process.poll() is not None:
            return
        try:
            process.terminate()
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
        except OSError as exc:
            log.warning("Could not release display-wake lock: %s", exc)


def make_presence(enabled: bool) -> Union[InhibitorPresence, NullPresence]:
    """Return a real presence holder if *enabled*, otherwise a no-op one."""
    if not enabled:
        return NullPresence()
    return InhibitorPresence()

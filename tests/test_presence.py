"""Tests for the display-wake presence holder."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

from hiitflow.ports import NullPresence
from hiitflow.presence import _MAX_RESTARTS, InhibitorPresence, _inhibitor_command, make_presence


def _fake_process(alive: bool = True) -> MagicMock:
    process = MagicMock()
    process.pid = 4242
    process.poll.return_value = None if alive else 0
    return process


class TestInhibitorCommand:
    @patch("hiitflow.presence.sys.platform", "linux")
    @patch("hiitflow.presence.shutil.which", side_effect=lambda name: f"/usr/bin/{name}")
    def test_linux_uses_systemd_inhibit(self, _mock_which) -> None:
        command = _inhibitor_command()
        assert command is not None
        assert command[0] == "/usr/bin/systemd-inhibit"
        assert command[-2:] == ["/usr/bin/sleep", "infinity"]

    @patch("hiitflow.presence.sys.platform", "darwin")
    @patch("hiitflow.presence.shutil.which", return_value="/usr/bin/caffeinate")
    def test_macos_uses_caffeinate(self, _mock_which) -> None:
        assert _inhibitor_command() == ["/usr/bin/caffeinate", "-d"]

    @patch("hiitflow.presence.sys.platform", "linux")
    @patch("hiitflow.presence.shutil.which", return_value=None)
    def test_unsupported(self, _mock_which) -> None:
        assert _inhibitor_command() is None


class TestInhibitorPresence:
    @patch("hiitflow.presence.subprocess.Popen")
    def test_acquire_starts_process(self, mock_popen) -> None:
        mock_popen.return_value = _fake_process()
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        assert presence.is_held
        mock_popen.assert_called_once()

    @patch("hiitflow.presence.subprocess.Popen")
    def test_acquire_is_idempotent(self, mock_popen) -> None:
        mock_popen.return_value = _fake_process()
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        presence.acquire_presence()
        assert mock_popen.call_count == 1

    @patch("hiitflow.presence.subprocess.Popen")
    def test_release_terminates(self, mock_popen) -> None:
        process = _fake_process()
        mock_popen.return_value = process
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        presence.release_presence()
        process.terminate.assert_called_once()
        assert not presence.is_held
        assert not presence.revoked

    def test_release_without_acquire(self) -> None:
        presence = InhibitorPresence(command=["inhibit"])
        presence.release_presence()
        assert not presence.is_held

    @patch("hiitflow.presence.subprocess.Popen", side_effect=OSError("denied"))
    def test_acquire_failure_is_swallowed(self, _mock_popen) -> None:
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        assert not presence.is_held
        assert not presence.revoked

    @patch("hiitflow.presence.subprocess.Popen")
    def test_dead_process_reports_revoked(self, mock_popen) -> None:
        process = _fake_process()
        mock_popen.return_value = process
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        process.poll.return_value = 1
        assert presence.revoked

        mock_popen.return_value = _fake_process()
        presence.acquire_presence()
        assert presence.is_held
        assert mock_popen.call_count == 2

    @patch("hiitflow.presence.subprocess.Popen")
    def test_restarts_are_capped(self, mock_popen) -> None:
        """An inhibitor that dies at once is restarted a bounded number of times."""
        mock_popen.return_value = _fake_process(alive=False)
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        while presence.revoked:
            presence.acquire_presence()
        assert mock_popen.call_count == 1 + _MAX_RESTARTS

        presence.acquire_presence()
        assert mock_popen.call_count == 1 + _MAX_RESTARTS

    @patch("hiitflow.presence.subprocess.Popen")
    def test_release_resets_restart_count(self, mock_popen) -> None:
        mock_popen.return_value = _fake_process(alive=False)
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        while presence.revoked:
            presence.acquire_presence()
        presence.release_presence()

        mock_popen.return_value = _fake_process()
        presence.acquire_presence()
        assert presence.is_held

    @patch("hiitflow.presence.subprocess.Popen")
    def test_stuck_process_is_killed_and_reaped(self, mock_popen) -> None:
        process = _fake_process()
        process.wait.side_effect = [subprocess.TimeoutExpired("inhibit", 2), 0]
        mock_popen.return_value = process
        presence = InhibitorPresence(command=["inhibit"])
        presence.acquire_presence()
        presence.release_presence()
        process.kill.assert_called_once()
        assert process.wait.call_count == 2

    def test_no_mechanism_is_a_noop(self) -> None:
        presence = InhibitorPresence(command=[])
        presence.acquire_presence()
        assert not presence.revoked
        presence.release_presence()
        assert not presence.is_held


class TestMakePresence:
    def test_disabled_gives_null(self) -> None:
        assert isinstance(make_presence(False), NullPresence)

    @patch("hiitflow.presence._inhibitor_command", return_value=["inhibit"])
    def test_enabled_gives_inhibitor(self, _mock_cmd) -> None:
        assert isinstance(make_presence(True), InhibitorPresence)

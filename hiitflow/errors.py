"""Exceptions raised by hiitflow."""

from __future__ import annotations

from typing import Optional


class HiitError(Exception):
    """Base class for hiitflow errors."""


class ValidationError(HiitError, ValueError):
    """A workout configuration failed its bounds checks.

    ``field`` names the offending field so a form can highlight it.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class UsageError(HiitError, RuntimeError):
    """A control operation was called on an engine with no active workout."""

"""Bounds checks for a candidate workout configuration."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from hiitflow.errors import ValidationError
from hiitflow.models import MAX_TIME, MIN_TIME, WorkoutConfig


def _as_seconds(value: Any) -> Optional[int]:
    """Return *value* as whole seconds, or None if it is not a whole number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _check_timed(name: str, value: Any) -> int:
    seconds = _as_seconds(value)
    if seconds is None or not MIN_TIME <= seconds <= MAX_TIME:
        raise ValidationError(
            f"{name.capitalize()} must be between {MIN_TIME}s and {MAX_TIME}s (60 minutes)",
            field=name,
        )
    return seconds


def validate(candidate: Mapping[str, Any]) -> WorkoutConfig:
    """Check *candidate* and return a fully populated WorkoutConfig.

    Fields are checked in form order (prep, sets, work, rest, cooldown) and
    the first violation is raised as a ValidationError. A missing cooldown
    means no cooldown.
    """
    prep = _check_timed("prep", candidate.get("prep"))

    sets = _as_seconds(candidate.get("sets"))
    if sets is None or sets < 1:
        raise ValidationError("Sets must be at least 1", field="sets")

    work = _check_timed("work", candidate.get("work"))
    rest = _check_timed("rest", candidate.get("rest"))

    cooldown = 0
    raw_cooldown = candidate.get("cooldown")
    if raw_cooldown is not None:
        parsed = _as_seconds(raw_cooldown)
        if parsed is None or not 0 <= parsed <= MAX_TIME:
            raise ValidationError(
                f"Cooldown must be between 0s and {MAX_TIME}s (60 minutes)",
                field="cooldown",
            )
        cooldown = parsed

    return WorkoutConfig(prep=prep, sets=sets, work=work, rest=rest, cooldown=cooldown)

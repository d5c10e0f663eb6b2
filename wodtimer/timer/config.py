"""Immutable timer configuration and input coercion.

The presentation layer hands over whatever the user typed (strings,
possibly empty).  Every field is coerced to a positive integer; anything
else silently falls back to the documented per-field default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .modes import TimerMode


# ── defaults ──────────────────────────────────────────────────────────────

DEFAULT_WORK_SECONDS = 20
DEFAULT_REST_SECONDS = 10
DEFAULT_AMRAP_MINUTES = 10
DEFAULT_OTM_MINUTES = 1  # OTM reads "work" as minutes per round
EMOM_INTERVAL = 60

DEFAULT_ROUNDS: dict[TimerMode, int] = {
    TimerMode.TABATA: 8,
    TimerMode.EMOM: 10,
    TimerMode.OTM: 5,
    TimerMode.AMRAP: 1,
    TimerMode.NORMAL: 8,
    TimerMode.FORTIME: 8,
}


_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def coerce_positive(value: str | int | None, default: int) -> int:
    """Leading integer of *value* when positive, otherwise *default*.

    Trailing text is ignored: ``"12 min"`` reads as 12, ``"5.5"`` as 5.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    match = _LEADING_DIGITS.match(str(value))
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class TimerConfig:
    """Validated numeric parameters for one timer session."""

    work_seconds: int = DEFAULT_WORK_SECONDS
    rest_seconds: int = DEFAULT_REST_SECONDS
    total_rounds: int = DEFAULT_ROUNDS[TimerMode.TABATA]
    amrap_minutes: int = DEFAULT_AMRAP_MINUTES

    @classmethod
    def from_inputs(
        cls,
        mode: TimerMode,
        work_time: str | int | None = None,
        rest_time: str | int | None = None,
        total_rounds: str | int | None = None,
        amrap_time: str | int | None = None,
    ) -> TimerConfig:
        work_default = (
            DEFAULT_OTM_MINUTES if mode == TimerMode.OTM else DEFAULT_WORK_SECONDS
        )
        return cls(
            work_seconds=coerce_positive(work_time, work_default),
            rest_seconds=coerce_positive(rest_time, DEFAULT_REST_SECONDS),
            total_rounds=coerce_positive(total_rounds, DEFAULT_ROUNDS[mode]),
            amrap_minutes=coerce_positive(amrap_time, DEFAULT_AMRAP_MINUTES),
        )

    @classmethod
    def defaults_for(cls, mode: TimerMode) -> TimerConfig:
        return cls.from_inputs(mode)

    @property
    def amrap_seconds(self) -> int:
        return self.amrap_minutes * 60

    @property
    def cycle_seconds(self) -> int:
        """Length of one Tabata work + rest cycle."""
        return self.work_seconds + self.rest_seconds

    def round_interval(self, mode: TimerMode) -> int:
        """Seconds per round for the clock-driven protocols (EMOM / OTM)."""
        if mode == TimerMode.OTM:
            return self.work_seconds * 60
        return EMOM_INTERVAL

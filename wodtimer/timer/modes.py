"""Workout timing protocols and their per-mode presets."""

from __future__ import annotations

from enum import Enum


class TimerMode(Enum):
    NORMAL = "normal"
    FORTIME = "fortime"
    AMRAP = "amrap"
    EMOM = "emom"
    OTM = "otm"
    TABATA = "tabata"

    @classmethod
    def parse(cls, value: str | TimerMode | None) -> TimerMode:
        """Lenient lookup by wire value; unknown input means NORMAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NORMAL


MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.NORMAL:  "Cronómetro",
    TimerMode.FORTIME: "For Time",
    TimerMode.AMRAP:   "AMRAP",
    TimerMode.EMOM:    "EMOM",
    TimerMode.OTM:     "OTM",
    TimerMode.TABATA:  "Tabata",
}

MODE_DESCRIPTIONS: dict[TimerMode, str] = {
    TimerMode.NORMAL:  "Cronómetro básico",
    TimerMode.FORTIME: "Completar en el menor tiempo",
    TimerMode.AMRAP:   "Máximas rondas en el tiempo dado",
    TimerMode.EMOM:    "Cada minuto en el minuto",
    TimerMode.OTM:     "Cada N minutos una nueva ronda",
    TimerMode.TABATA:  "20s trabajo / 10s descanso",
}


# ── form presets ──────────────────────────────────────────────────────────
#    Raw strings pre-filled in the config inputs when a mode is picked.
#    OTM's "work" field is minutes per round, not seconds.

FORM_DEFAULTS: dict[TimerMode, dict[str, str]] = {
    TimerMode.AMRAP: {
        "work_time": "20", "rest_time": "60",
        "total_rounds": "1", "amrap_time": "10",
    },
    TimerMode.TABATA: {
        "work_time": "20", "rest_time": "10",
        "total_rounds": "8", "amrap_time": "10",
    },
    TimerMode.EMOM: {
        "work_time": "20", "rest_time": "10",
        "total_rounds": "10", "amrap_time": "10",
    },
    TimerMode.OTM: {
        "work_time": "2", "rest_time": "0",
        "total_rounds": "5", "amrap_time": "10",
    },
}

_GENERIC_FORM_DEFAULTS: dict[str, str] = {
    "work_time": "20", "rest_time": "10",
    "total_rounds": "8", "amrap_time": "10",
}


def form_defaults(mode: TimerMode) -> dict[str, str]:
    return dict(FORM_DEFAULTS.get(mode, _GENERIC_FORM_DEFAULTS))


# Checked in this order; first keyword found wins.
_DETECTION_ORDER: tuple[tuple[TimerMode, tuple[str, ...]], ...] = (
    (TimerMode.AMRAP, ("amrap",)),
    (TimerMode.EMOM, ("emom",)),
    (TimerMode.OTM, ("otm",)),
    (TimerMode.TABATA, ("tabata",)),
    (TimerMode.FORTIME, ("for time", "fortime")),
)


def detect_mode(title: str = "", blocks_text: str = "") -> TimerMode:
    """Guess the protocol from a workout's title and block text.

    Used by the WOD detail screen to preselect the timer mode.
    """
    text = f"{title or ''} {blocks_text or ''}".lower()
    for mode, keywords in _DETECTION_ORDER:
        if any(k in text for k in keywords):
            return mode
    return TimerMode.NORMAL


def uses_sub_phases(mode: TimerMode, total_rounds: int) -> bool:
    """Whether the protocol alternates work and rest sub-phases."""
    return mode == TimerMode.TABATA or (
        mode == TimerMode.AMRAP and total_rounds > 1
    )


def uses_rounds(mode: TimerMode, total_rounds: int) -> bool:
    """Whether a "round X of N" counter is meaningful for the protocol."""
    return mode in (TimerMode.TABATA, TimerMode.EMOM, TimerMode.OTM) or (
        mode == TimerMode.AMRAP and total_rounds > 1
    )

"""Audio cues fired by the timer engine and the tone-emission interface."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class ToneShape(Enum):
    SHORT_LOW = "short_low"
    SHORT_HIGH = "short_high"
    LONG_HIGH = "long_high"


class Cue(Enum):
    COUNTDOWN_TICK = "countdown_tick"  # pre-start, more than 3 s left
    COUNTDOWN_BELL = "countdown_bell"  # pre-start 3-2-1
    START_BELL = "start_bell"          # pre-start → active, once
    PHASE_BELL = "phase_bell"          # Tabata work ↔ rest
    ROUND_WARNING = "round_warning"    # EMOM / OTM last 3 s of a round

    @property
    def shape(self) -> ToneShape:
        if self == Cue.COUNTDOWN_TICK:
            return ToneShape.SHORT_LOW
        if self in (Cue.COUNTDOWN_BELL, Cue.ROUND_WARNING):
            return ToneShape.SHORT_HIGH
        return ToneShape.LONG_HIGH


class ToneEmitter(Protocol):
    """Anything that can make a noise for a cue.

    Implementations may raise; the engine discards their errors.
    """

    def play(self, cue: Cue) -> None: ...


class SilentEmitter:
    """No-op emitter for headless use."""

    def play(self, cue: Cue) -> None:
        pass

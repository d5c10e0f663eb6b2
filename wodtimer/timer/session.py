"""Timer session record and the display values derived from it.

Only ``current_round`` and ``is_work_phase`` are stored beyond the raw
counters, because detecting a transition needs memory of the previous
value.  Everything the screen shows (time text, phase label, colour,
total elapsed) is recomputed from the record by the pure functions
below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .config import TimerConfig
from .modes import TimerMode, uses_sub_phases


PRE_START_SECONDS = 10
PRE_START_BELLS = 3  # last N countdown seconds ring the bell

PHASE_PREPARE = "PREPARATE"
PHASE_WORK = "TRABAJO"
PHASE_REST = "DESCANSO"
PHASE_TIME = "TIEMPO"

PHASE_COLORS: dict[str, str] = {
    PHASE_PREPARE: "#F97316",  # orange
    PHASE_WORK:    "#A3E635",  # lime (primary)
    PHASE_REST:    "#22C55E",  # green
    PHASE_TIME:    "#A3E635",
}


class EngineState(Enum):
    IDLE = "idle"
    PRE_START = "pre_start"
    ACTIVE = "active"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass
class TimerSession:
    """All mutable state of one timer, owned by a single engine."""

    mode: TimerMode = TimerMode.NORMAL
    config: TimerConfig = field(default_factory=TimerConfig)
    elapsed: int = 0
    is_running: bool = False
    is_paused: bool = False
    pre_start_countdown: int | None = None
    current_round: int = 1
    is_work_phase: bool = True
    amrap_initial_seconds: int = 0
    amrap_armed: bool = False  # AMRAP has run its pre-start at least once
    is_finished: bool = False
    sound_enabled: bool = True

    @property
    def in_pre_start(self) -> bool:
        return self.pre_start_countdown is not None and self.pre_start_countdown > 0


# ══════════════════════════════════════════════════════════════════════════
#  DERIVED VALUES
# ══════════════════════════════════════════════════════════════════════════


def engine_state(s: TimerSession) -> EngineState:
    if s.is_finished:
        return EngineState.FINISHED
    if not s.is_running:
        return EngineState.IDLE
    if s.is_paused:
        return EngineState.PAUSED
    if s.in_pre_start:
        return EngineState.PRE_START
    return EngineState.ACTIVE


def format_time(seconds: int) -> str:
    """``MM:SS``, or ``HH:MM:SS`` once the value reaches an hour."""
    seconds = max(0, int(seconds))
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def tabata_position(s: TimerSession) -> int:
    return s.elapsed % s.config.cycle_seconds


def seconds_to_round_boundary(s: TimerSession) -> int:
    """EMOM / OTM: seconds left until the next round starts."""
    interval = s.config.round_interval(s.mode)
    return interval - s.elapsed % interval


def display_seconds(s: TimerSession) -> int:
    """The number the big clock shows, before formatting."""
    if s.in_pre_start:
        return s.pre_start_countdown
    if s.mode == TimerMode.AMRAP:
        return max(0, s.elapsed)
    if s.mode in (TimerMode.TABATA, TimerMode.EMOM, TimerMode.OTM):
        if s.is_finished:
            return 0
        if s.mode == TimerMode.TABATA:
            pos = tabata_position(s)
            if s.is_work_phase:
                return s.config.work_seconds - pos
            return s.config.cycle_seconds - pos
        return seconds_to_round_boundary(s)
    return s.elapsed


def display_time(s: TimerSession) -> str:
    return format_time(display_seconds(s))


def phase_label(s: TimerSession) -> str:
    if s.in_pre_start:
        return PHASE_PREPARE
    if uses_sub_phases(s.mode, s.config.total_rounds):
        return PHASE_WORK if s.is_work_phase else PHASE_REST
    return PHASE_TIME


def phase_color(s: TimerSession) -> str:
    return PHASE_COLORS[phase_label(s)]


def total_elapsed(s: TimerSession) -> int | None:
    """Raw stopwatch for EMOM / OTM; ``None`` for the other modes."""
    if s.mode in (TimerMode.EMOM, TimerMode.OTM):
        return s.elapsed
    return None

"""Timer package."""

from .modes import (
    TimerMode,
    MODE_LABELS,
    FORM_DEFAULTS,
    detect_mode,
    form_defaults,
)
from .config import TimerConfig
from .session import TimerSession, EngineState, PRE_START_SECONDS, format_time
from .clock import TickSource, QtTickSource
from .engine import TimerEngine

__all__ = [
    "TimerEngine",
    "TimerSession",
    "TimerConfig",
    "TimerMode",
    "EngineState",
    "TickSource",
    "QtTickSource",
    "MODE_LABELS",
    "FORM_DEFAULTS",
    "PRE_START_SECONDS",
    "detect_mode",
    "form_defaults",
    "format_time",
]

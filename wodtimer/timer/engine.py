"""Interval-training timer state machine.

States
------
IDLE        Nothing running.  ``elapsed`` is 0 (or the AMRAP budget
            after a soft reset).
PRE_START   Mandatory 10 s "get ready" countdown.  No phase or round
            logic runs while it is counting.
ACTIVE      Mode-specific progression, one step per tick.
PAUSED      Ticks still arrive but change nothing.
FINISHED    A bounded protocol ran out of rounds or time.  ``elapsed``
            keeps its last value until ``reset``.

Transitions
-----------
IDLE → PRE_START                 (start, elapsed == 0)
IDLE → ACTIVE                    (start, elapsed > 0, e.g. AMRAP soft reset)
PRE_START → ACTIVE               (countdown reaches 0)
PRE_START | ACTIVE ⇄ PAUSED      (pause toggles)
ACTIVE → FINISHED                (rounds or AMRAP time exhausted)
FINISHED → ACTIVE                (start, AMRAP only: restarts the budget)
Any → IDLE                       (reset)

Modes
-----
normal / fortime   stopwatch, stopped by the user.
amrap              countdown from ``amrap_minutes``; with more than one
                   round, alternates work countdown and rest countdown.
emom / otm         stopwatch; a new round every 60 s (EMOM) or every
                   ``work_seconds`` minutes (OTM).
tabata             stopwatch folded into work/rest cycles.
"""

from __future__ import annotations

from dataclasses import replace

from loguru import logger
from PyQt6.QtCore import QObject, pyqtSignal

from ..audio.cues import Cue, SilentEmitter, ToneEmitter
from .clock import QtTickSource, TickSource
from .config import TimerConfig
from .modes import TimerMode
from .session import (
    PRE_START_BELLS,
    PRE_START_SECONDS,
    EngineState,
    TimerSession,
    display_seconds,
    display_time,
    engine_state,
    format_time,
    phase_color,
    phase_label,
    seconds_to_round_boundary,
    tabata_position,
    total_elapsed,
)


ROUND_WARNING_SECONDS = 3


class TimerEngine(QObject):
    """Qt-driven workout timer for all six protocols.

    Signals
    -------
    tick(engine: TimerEngine)
        Emitted after every processed tick (not while paused).
    state_changed(new_state: EngineState)
        Emitted on every control call and on derived state changes.
    cue(cue: Cue)
        Emitted for every audio cue that fired (sound enabled only),
        whether or not the emitter managed to play it.
    finished()
        Emitted once when a bounded protocol ends on its own.
    """

    tick = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    cue = pyqtSignal(object)
    finished = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        mode: TimerMode = TimerMode.NORMAL,
        config: TimerConfig | None = None,
        clock: TickSource | None = None,
        emitter: ToneEmitter | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = TimerSession(
            mode=mode,
            config=config or TimerConfig.defaults_for(mode),
        )
        self._session.amrap_initial_seconds = self._session.config.amrap_seconds
        self._emitter: ToneEmitter = emitter or SilentEmitter()

        self._clock: TickSource = clock or QtTickSource(self)
        self._clock.bind(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> TimerSession:
        """Snapshot copy of the session record."""
        return replace(self._session)

    @property
    def state(self) -> EngineState:
        return engine_state(self._session)

    @property
    def mode(self) -> TimerMode:
        return self._session.mode

    @property
    def config(self) -> TimerConfig:
        return self._session.config

    @property
    def elapsed(self) -> int:
        return self._session.elapsed

    @property
    def is_running(self) -> bool:
        return self._session.is_running

    @property
    def is_paused(self) -> bool:
        return self._session.is_paused

    @property
    def is_finished(self) -> bool:
        return self._session.is_finished

    @property
    def pre_start_countdown(self) -> int | None:
        return self._session.pre_start_countdown

    @property
    def current_round(self) -> int:
        return self._session.current_round

    @property
    def is_work_phase(self) -> bool:
        return self._session.is_work_phase

    @property
    def sound_enabled(self) -> bool:
        return self._session.sound_enabled

    @property
    def display_seconds(self) -> int:
        return display_seconds(self._session)

    @property
    def display_time(self) -> str:
        return display_time(self._session)

    @property
    def phase_label(self) -> str:
        return phase_label(self._session)

    @property
    def phase_color(self) -> str:
        return phase_color(self._session)

    @property
    def total_elapsed(self) -> int | None:
        """EMOM / OTM stopwatch, separate from the per-round countdown."""
        return total_elapsed(self._session)

    @property
    def total_elapsed_text(self) -> str:
        total = self.total_elapsed
        return format_time(total) if total is not None else ""

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def configure(self, mode: TimerMode, config: TimerConfig | None = None) -> None:
        """Switch protocol and parameters.  Always resets to zero first."""
        self.reset(to_zero=True)
        s = self._session
        s.mode = mode
        s.config = config or TimerConfig.defaults_for(mode)
        s.amrap_initial_seconds = s.config.amrap_seconds
        logger.debug("Timer configured: mode={} config={}", mode.value, s.config)
        self._emit_state()

    def start(self) -> None:
        """Arm the pre-start countdown, or resume straight into the action."""
        s = self._session
        if s.is_running and not s.is_paused:
            return
        if s.is_finished and not (s.mode == TimerMode.AMRAP and s.amrap_armed):
            return

        if s.is_finished:
            # AMRAP ran out earlier; run the same budget again.
            self._restart_amrap()
        elif (
            not s.is_paused
            and s.elapsed == 0
            and s.pre_start_countdown is None
        ):
            if s.mode == TimerMode.AMRAP and s.amrap_armed:
                self._restart_amrap()
            else:
                s.pre_start_countdown = PRE_START_SECONDS
                self._fire(Cue.COUNTDOWN_TICK)

        s.is_running = True
        s.is_paused = False
        if not self._clock.active:
            self._clock.start()
        logger.debug("Timer started: mode={} state={}", s.mode.value, self.state.value)
        self._emit_state()

    def pause(self) -> None:
        """Toggle pause.  Only the flag changes; ticks become no-ops."""
        s = self._session
        if not s.is_running:
            return
        s.is_paused = not s.is_paused
        logger.debug("Timer {}", "paused" if s.is_paused else "resumed")
        self._emit_state()

    def reset(self, to_zero: bool = False) -> None:
        """Stop ticking and go back to IDLE.

        AMRAP without *to_zero* keeps its time budget loaded (and armed)
        so the next ``start`` runs it without the pre-start countdown,
        and can run it again after it reaches zero.
        """
        self._clock.stop()
        s = self._session
        s.pre_start_countdown = None
        s.is_running = False
        s.is_paused = False
        s.is_finished = False
        s.current_round = 1
        s.is_work_phase = True
        if s.mode == TimerMode.AMRAP and not to_zero:
            s.elapsed = s.config.amrap_seconds
            s.amrap_initial_seconds = s.elapsed
            s.amrap_armed = True
        else:
            s.elapsed = 0
        if to_zero:
            s.amrap_armed = False
        logger.debug("Timer reset: mode={} elapsed={}", s.mode.value, s.elapsed)
        self._emit_state()

    def toggle_sound(self) -> bool:
        self._session.sound_enabled = not self._session.sound_enabled
        return self._session.sound_enabled

    def set_sound_enabled(self, enabled: bool) -> None:
        self._session.sound_enabled = enabled

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — tick mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        s = self._session
        if not s.is_running or s.is_paused:
            return

        if s.pre_start_countdown is not None:
            self._tick_pre_start()
        elif s.mode in (TimerMode.NORMAL, TimerMode.FORTIME):
            s.elapsed += 1
        elif s.mode == TimerMode.AMRAP:
            self._tick_amrap()
        elif s.mode in (TimerMode.EMOM, TimerMode.OTM):
            self._tick_interval()
        elif s.mode == TimerMode.TABATA:
            self._tick_tabata()

        self.tick.emit(self)

    def _tick_pre_start(self) -> None:
        s = self._session
        remaining = s.pre_start_countdown - 1
        if remaining > 0:
            s.pre_start_countdown = remaining
            self._fire(
                Cue.COUNTDOWN_BELL if remaining <= PRE_START_BELLS
                else Cue.COUNTDOWN_TICK
            )
            return

        s.pre_start_countdown = None
        if s.mode == TimerMode.AMRAP:
            s.elapsed = s.config.amrap_seconds
            s.amrap_initial_seconds = s.elapsed
            s.amrap_armed = True
            s.current_round = 1
            s.is_work_phase = True
        elif s.mode in (TimerMode.EMOM, TimerMode.OTM):
            s.elapsed = 0
            s.current_round = 1
        else:
            s.elapsed = 0
        self._fire(Cue.START_BELL)
        logger.debug("Pre-start done, {} active", s.mode.value)
        self._emit_state()

    def _tick_amrap(self) -> None:
        s = self._session
        s.elapsed -= 1
        if s.elapsed > 0:
            return
        s.elapsed = 0

        if s.config.total_rounds <= 1:
            self._finish()
            return

        if s.is_work_phase:
            if s.current_round >= s.config.total_rounds:
                self._finish()
                return
            s.is_work_phase = False
            s.elapsed = s.config.rest_seconds
        else:
            s.is_work_phase = True
            s.current_round += 1
            s.elapsed = s.config.amrap_seconds
        logger.debug(
            "AMRAP round {} {}", s.current_round,
            "work" if s.is_work_phase else "rest",
        )

    def _tick_interval(self) -> None:
        s = self._session
        interval = s.config.round_interval(s.mode)
        new_elapsed = s.elapsed + 1
        new_round = new_elapsed // interval + 1
        if new_round > s.config.total_rounds:
            # Record the final second but keep the round on the last one.
            s.elapsed = new_elapsed
            self._finish()
            return

        if new_round != s.current_round:
            logger.debug("{} round {}", s.mode.value.upper(), new_round)
        s.elapsed = new_elapsed
        s.current_round = new_round
        if seconds_to_round_boundary(s) <= ROUND_WARNING_SECONDS:
            self._fire(Cue.ROUND_WARNING)

    def _tick_tabata(self) -> None:
        s = self._session
        s.elapsed += 1
        should_work = tabata_position(s) < s.config.work_seconds
        if should_work == s.is_work_phase:
            return

        s.is_work_phase = should_work
        self._fire(Cue.PHASE_BELL)
        if not should_work:
            return
        if s.current_round + 1 > s.config.total_rounds:
            self._finish()
            return
        s.current_round += 1
        logger.debug("Tabata round {}", s.current_round)

    def _restart_amrap(self) -> None:
        s = self._session
        s.elapsed = s.amrap_initial_seconds
        s.current_round = 1
        s.is_work_phase = True
        s.is_finished = False

    def _finish(self) -> None:
        self._clock.stop()
        s = self._session
        s.is_running = False
        s.is_paused = False
        s.is_finished = True
        logger.debug(
            "Timer finished: mode={} elapsed={} round={}",
            s.mode.value, s.elapsed, s.current_round,
        )
        self._emit_state()
        self.finished.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — side effects
    # ══════════════════════════════════════════════════════════════════

    def _fire(self, cue: Cue) -> None:
        if not self._session.sound_enabled:
            return
        self.cue.emit(cue)
        try:
            self._emitter.play(cue)
        except Exception as exc:
            logger.debug("Tone emitter failed for {}: {}", cue.value, exc)

    def _emit_state(self) -> None:
        self.state_changed.emit(self.state)

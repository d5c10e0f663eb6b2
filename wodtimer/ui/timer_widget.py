"""Workout timer card.

Layout (top → bottom):
    - Mode selector + sound / fullscreen toggles
    - Per-mode config inputs (hidden for Cronómetro / For Time)
    - Round line ("Ronda X de N") for round-based protocols
    - Phase label (PREPARATE / TRABAJO / DESCANSO / TIEMPO)
    - Big time display
    - EMOM / OTM running total
    - Start · Pause/Continue · Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QLineEdit, QFrame, QComboBox,
)

from ..timer.config import TimerConfig
from ..timer.engine import TimerEngine
from ..timer.modes import MODE_LABELS, TimerMode, form_defaults, uses_rounds
from ..timer.session import EngineState, PHASE_PREPARE, PHASE_TIME
from .styles import PALETTE, time_label_style


# field key → (label per mode); modes missing from a row hide that input
_FIELD_LABELS: dict[str, dict[TimerMode, str]] = {
    "work_time": {
        TimerMode.TABATA: "Trabajo (seg)",
        TimerMode.OTM: "Minutos por ronda",
    },
    "rest_time": {
        TimerMode.TABATA: "Descanso (seg)",
        TimerMode.AMRAP: "Descanso (seg)",
    },
    "total_rounds": {
        TimerMode.TABATA: "Rondas",
        TimerMode.AMRAP: "Rondas",
        TimerMode.EMOM: "Rondas",
        TimerMode.OTM: "Rondas",
    },
    "amrap_time": {
        TimerMode.AMRAP: "Tiempo (min)",
    },
}

_TIME_FONT_PX = 96
_TIME_FONT_PX_FULLSCREEN = 200


class TimerWidget(QWidget):
    """Timer card bound to one :class:`TimerEngine`."""

    fullscreen_requested = pyqtSignal()
    mode_changed = pyqtSignal(object)

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._inputs: dict[str, QLineEdit] = {}
        self._input_labels: dict[str, QLabel] = {}
        self._fullscreen = False
        self._build_ui()
        self._connect_signals()
        self._load_form(engine.mode)
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(10)

        # ── top row: mode + toggles ──────────────────────────────────
        top = QHBoxLayout()
        self._mode_combo = QComboBox(card)
        for mode, label in MODE_LABELS.items():
            self._mode_combo.addItem(label, mode.value)
        self._mode_combo.setCurrentIndex(
            self._mode_combo.findData(self._engine.mode.value)
        )
        top.addWidget(self._mode_combo, 1)

        self._sound_btn = QPushButton(card)
        self._sound_btn.setObjectName("iconButton")
        self._sound_btn.setToolTip("Sonido")
        top.addWidget(self._sound_btn)

        self._fullscreen_btn = QPushButton("⛶", card)
        self._fullscreen_btn.setObjectName("iconButton")
        self._fullscreen_btn.setToolTip("Pantalla completa")
        top.addWidget(self._fullscreen_btn)
        layout.addLayout(top)

        # ── config inputs ────────────────────────────────────────────
        self._config_box = QWidget(card)
        grid = QGridLayout(self._config_box)
        grid.setContentsMargins(0, 0, 0, 0)
        for col, key in enumerate(_FIELD_LABELS):
            lbl = QLabel(self._config_box)
            edit = QLineEdit(self._config_box)
            edit.setValidator(QIntValidator(0, 999, edit))
            edit.setMaxLength(3)
            grid.addWidget(lbl, 0, col)
            grid.addWidget(edit, 1, col)
            self._input_labels[key] = lbl
            self._inputs[key] = edit
        layout.addWidget(self._config_box)

        # ── display ──────────────────────────────────────────────────
        self._round_label = QLabel(card)
        self._round_label.setObjectName("roundLabel")
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._round_label)

        self._phase_label = QLabel(card)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label, 1)

        self._total_label = QLabel(card)
        self._total_label.setObjectName("totalLabel")
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._total_label)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        self._start_pause_btn = QPushButton("Iniciar", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        btn_row.addWidget(self._start_pause_btn, 1)
        btn_row.addWidget(self._reset_btn, 1)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._mode_combo.currentIndexChanged.connect(self._on_mode_selected)
        self._sound_btn.clicked.connect(self._on_sound_toggled)
        self._fullscreen_btn.clicked.connect(self.fullscreen_requested.emit)
        self._start_pause_btn.clicked.connect(self.toggle_start_pause)
        self._reset_btn.clicked.connect(lambda: self._engine.reset())
        for edit in self._inputs.values():
            edit.textEdited.connect(self._apply_form)

        self._engine.tick.connect(lambda _engine: self._refresh())
        self._engine.state_changed.connect(lambda _state: self._refresh())

    # ── public API ────────────────────────────────────────────────────────

    def select_mode(self, mode: TimerMode) -> None:
        """Switch the selector (and the engine) to *mode*."""
        index = self._mode_combo.findData(mode.value)
        if index >= 0 and index != self._mode_combo.currentIndex():
            self._mode_combo.setCurrentIndex(index)

    def toggle_start_pause(self) -> None:
        if self._engine.is_running:
            if self._engine.state != EngineState.PRE_START:
                self._engine.pause()
        else:
            self._engine.start()

    def set_fullscreen_layout(self, fullscreen: bool) -> None:
        """Hide the config chrome and enlarge the clock."""
        self._fullscreen = fullscreen
        self._refresh()

    def form_values(self) -> dict[str, str]:
        return {key: edit.text() for key, edit in self._inputs.items()}

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_mode_selected(self, index: int) -> None:
        value = self._mode_combo.itemData(index)
        if value is None:
            return
        mode = TimerMode.parse(value)
        self._load_form(mode)
        self.mode_changed.emit(mode)

    def _load_form(self, mode: TimerMode) -> None:
        for key, value in form_defaults(mode).items():
            self._inputs[key].setText(value)
        self._apply_form()

    def _apply_form(self, *_args) -> None:
        """Push the form values into the engine (resets the session)."""
        mode = TimerMode.parse(self._mode_combo.currentData())
        values = self.form_values()
        self._engine.configure(mode, TimerConfig.from_inputs(mode, **values))
        self._refresh()

    def _on_sound_toggled(self) -> None:
        self._engine.toggle_sound()
        self._refresh()

    # ── rendering ─────────────────────────────────────────────────────────

    def _locked(self) -> bool:
        return self._engine.is_running or self._engine.is_paused

    def _refresh(self) -> None:
        eng = self._engine
        mode = eng.mode
        state = eng.state
        rounds = eng.config.total_rounds
        counting_in = state == EngineState.PRE_START or (
            state == EngineState.PAUSED and eng.pre_start_countdown is not None
        )
        locked = self._locked()

        # ── config inputs ────────────────────────────────────────────
        any_visible = False
        for key, labels in _FIELD_LABELS.items():
            visible = mode in labels and not self._fullscreen
            self._inputs[key].setVisible(visible)
            self._input_labels[key].setVisible(visible)
            self._inputs[key].setEnabled(not locked)
            if visible:
                self._input_labels[key].setText(labels[mode])
                any_visible = True
        self._config_box.setVisible(any_visible)
        self._mode_combo.setEnabled(not locked and not self._fullscreen)

        # ── round / phase / time ─────────────────────────────────────
        show_rounds = uses_rounds(mode, rounds) and not counting_in
        self._round_label.setVisible(show_rounds)
        self._round_label.setText(f"Ronda {eng.current_round} de {rounds}")

        phase = eng.phase_label
        self._phase_label.setVisible(phase != PHASE_TIME)
        self._phase_label.setText(phase)
        self._phase_label.setStyleSheet(
            f"color: {eng.phase_color}; font-size: 24px; font-weight: 700;"
        )

        color = PALETTE["prepare"] if phase == PHASE_PREPARE else PALETTE["text"]
        size = _TIME_FONT_PX_FULLSCREEN if self._fullscreen else _TIME_FONT_PX
        self._time_label.setStyleSheet(time_label_style(color, size))
        self._time_label.setText(eng.display_time)

        total = eng.total_elapsed_text
        self._total_label.setVisible(bool(total) and not counting_in)
        self._total_label.setText(f"Total: {total}")

        # ── buttons ──────────────────────────────────────────────────
        if not eng.is_running:
            self._start_pause_btn.setText("Iniciar")
            self._start_pause_btn.setEnabled(True)
        else:
            self._start_pause_btn.setText("Continuar" if eng.is_paused else "Pausar")
            self._start_pause_btn.setEnabled(state != EngineState.PRE_START)
        self._sound_btn.setText("🔊" if eng.sound_enabled else "🔇")

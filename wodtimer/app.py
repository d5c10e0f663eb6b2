"""Main application window for WodTimer."""

from __future__ import annotations

from loguru import logger
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel

from .audio.sounds import SoundManager
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.modes import MODE_DESCRIPTIONS, TimerMode, detect_mode
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget


class WodTimerApp(QMainWindow):
    """Main application window.

    ``workout_text`` (a WOD title plus its blocks) preselects the matching
    protocol, the way the WOD detail screen opens its timer.
    """

    def __init__(
        self,
        *,
        initial_mode: TimerMode | None = None,
        workout_text: str = "",
        settings: Settings | None = None,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("WodTimer")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        if initial_mode is None:
            initial_mode = (
                detect_mode(workout_text) if workout_text
                else TimerMode.parse(self._settings.last_mode)
            )

        # ── sound + engine ────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._timer_engine = TimerEngine(
            self, mode=initial_mode, emitter=self._sound_manager,
        )
        self._timer_engine.set_sound_enabled(self._settings.sound_enabled)

        # ── central widget ────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet())
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget, 1)

        self._hint = QLabel(MODE_DESCRIPTIONS[initial_mode], central)
        self._hint.setObjectName("modeHint")
        self._hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._hint)

        self._timer_widget.fullscreen_requested.connect(self.toggle_fullscreen)
        self._timer_widget.mode_changed.connect(self._on_mode_changed)

        self._setup_shortcuts()

        if self._settings.start_fullscreen:
            self.toggle_fullscreen()

    # ── properties ────────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    # ── fullscreen ────────────────────────────────────────────────────────

    def toggle_fullscreen(self) -> None:
        """Enter or leave fullscreen.  Refusals are ignored."""
        entering = not self.isFullScreen()
        try:
            if entering:
                self.showFullScreen()
            else:
                self.showNormal()
        except Exception as exc:
            logger.debug("Fullscreen toggle failed: {}", exc)
            return
        self._timer_widget.set_fullscreen_layout(entering)
        self._hint.setVisible(not entering)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_mode_changed(self, mode: TimerMode) -> None:
        self._hint.setText(MODE_DESCRIPTIONS[mode])
        self._settings.last_mode = mode.value

    def _setup_shortcuts(self) -> None:
        space = QShortcut(QKeySequence(Qt.Key.Key_Space), self)
        space.activated.connect(self._timer_widget.toggle_start_pause)
        escape = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        escape.activated.connect(self._on_escape)

    def _on_escape(self) -> None:
        if self.isFullScreen():
            self.toggle_fullscreen()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.reset(to_zero=True)
        self._settings.sound_enabled = self._timer_engine.sound_enabled
        self._settings.last_mode = self._timer_engine.mode.value
        if not self.isFullScreen():
            self._settings.window_width = self.width()
            self._settings.window_height = self.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("Could not save settings: {}", exc)
        super().closeEvent(event)

"""Shared pytest fixtures for WodTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from wodtimer.timer.config import TimerConfig
from wodtimer.timer.engine import TimerEngine
from wodtimer.timer.modes import TimerMode

from helpers import FakeClock, RecordingEmitter


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    monkeypatch.setattr("wodtimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def emitter():
    return RecordingEmitter()


@pytest.fixture
def make_engine(qapp, clock, emitter):
    """Factory: ``make_engine(TimerMode.TABATA, work_time="20", ...)``."""

    def _make(mode: TimerMode = TimerMode.NORMAL, **inputs) -> TimerEngine:
        return TimerEngine(
            mode=mode,
            config=TimerConfig.from_inputs(mode, **inputs),
            clock=clock,
            emitter=emitter,
        )

    return _make


@pytest.fixture
def engine(make_engine):
    """Fresh TimerEngine in Cronómetro mode driven by the fake clock."""
    return make_engine()

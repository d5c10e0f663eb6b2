"""Shared test helpers for WodTimer."""

from wodtimer.audio.cues import Cue
from wodtimer.timer.engine import TimerEngine
from wodtimer.timer.session import PRE_START_SECONDS


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Tick source that only fires when the test says so."""

    def __init__(self):
        self._callback = None
        self.active = False

    def bind(self, callback):
        self._callback = callback

    def start(self):
        self.active = True

    def stop(self):
        self.active = False

    def advance(self, seconds: int = 1) -> None:
        """Fire *seconds* ticks, stopping early if the engine disarms us."""
        for _ in range(seconds):
            if not self.active:
                return
            self._callback()


class RecordingEmitter:
    """Tone emitter that remembers what it was asked to play."""

    def __init__(self):
        self.cues: list[Cue] = []

    def play(self, cue: Cue) -> None:
        self.cues.append(cue)

    def count(self, cue: Cue) -> int:
        return self.cues.count(cue)

    def clear(self):
        self.cues.clear()


class BrokenEmitter:
    """Tone emitter with no working audio device."""

    def play(self, cue: Cue) -> None:
        raise RuntimeError("no audio device")


def finish_pre_start(engine: TimerEngine, clock: FakeClock) -> None:
    """Start the engine and run the whole 10 s get-ready countdown."""
    engine.start()
    clock.advance(PRE_START_SECONDS)

"""Tick sources that drive the engine once per second."""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickSource(Protocol):
    """A repeating one-second trigger.

    ``bind`` is called once by the engine; ``start``/``stop`` arm and
    disarm the trigger.  Tests substitute a fake that fires on demand.
    """

    def bind(self, callback: Callable[[], None]) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def active(self) -> bool: ...


class QtTickSource(QObject):
    """Wall-clock ticks from a ``QTimer`` on the Qt event loop."""

    def __init__(
        self,
        parent: QObject | None = None,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)

    def bind(self, callback: Callable[[], None]) -> None:
        self._qt_timer.timeout.connect(callback)

    def start(self) -> None:
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()

    @property
    def active(self) -> bool:
        return self._qt_timer.isActive()

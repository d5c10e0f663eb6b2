"""Allow running WodTimer as a module: python -m wodtimer [workout text]."""

import os
import sys

from loguru import logger
from PyQt6.QtWidgets import QApplication

from .app import WodTimerApp


def configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get("WODTIMER_LOG_LEVEL", "INFO"))


def main() -> None:
    configure_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("WodTimer")
    app.setOrganizationName("WodTimer")

    window = WodTimerApp(workout_text=" ".join(sys.argv[1:]))
    window.show()
    logger.info("WodTimer ready ({})", window.engine.mode.value)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

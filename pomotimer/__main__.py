"""Allow running Pomotimer as a module: python -m pomotimer.

Runs one work period headless, logging every event the UI would get.
"""

import logging
import sys

from PyQt6.QtCore import QCoreApplication

from .commands import CommandDispatcher
from .observer import completion_message, connect_observer, format_time
from .settings import load_settings
from .timer.engine import TimerEngine


logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QCoreApplication(sys.argv)
    app.setApplicationName("Pomotimer")
    app.setOrganizationName("Pomotimer")

    engine = TimerEngine(
        app,
        work_minutes=settings.work_minutes,
        break_minutes=settings.break_minutes,
    )
    commands = CommandDispatcher(engine)

    # Events arrive queued, so track the phase from the events themselves.
    current = {"work": True}

    def on_event(event, payload):
        if event == "timer-update":
            logger.info("%s %s", event, format_time(payload))
        elif event == "period-complete":
            title, body = completion_message(current["work"])
            logger.info("%s: %s", title, body)
        else:
            logger.info("%s %r", event, payload)
        if event == "period-changed":
            current["work"] = payload
            app.quit()

    connect_observer(engine, on_event)

    result = commands.dispatch("start")
    if not result.ok:
        logger.error("Could not start timer: %s", result.error)
        sys.exit(1)
    print("Pomotimer ready!")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

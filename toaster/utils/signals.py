"""Stop the polling loop on SIGINT and SIGTERM."""

import logging
import signal
from pathlib import Path
from threading import Event

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def install_signal_handlers(store_path: Path) -> Event:
    """
    Route shutdown signals to an event the monitor waits on.

    A toast already on screen is not interrupted; the monitor gives it a
    moment to finish and otherwise leaves it pending in ``store_path``.

    Returns:
        Event set on the first shutdown signal.
    """
    shutdown_event = Event()

    def handler(signum, frame):
        if shutdown_event.is_set():
            logger.debug(f"Ignoring repeated {signal.Signals(signum).name}")
            return
        logger.info(f"Received {signal.Signals(signum).name}, no longer watching {store_path}")
        shutdown_event.set()

    for signum in SHUTDOWN_SIGNALS:
        signal.signal(signum, handler)

    return shutdown_event

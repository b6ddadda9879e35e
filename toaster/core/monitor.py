"""Polling driver: runs toaster cycles on a fixed interval."""

import logging
import threading
from threading import Event, Lock
from typing import List, Optional

from ..config import Config
from ..filters.freshness import FreshnessFilter
from ..presenters import (
    BrowserOpener,
    Clipboard,
    ConsolePresenter,
    DialogPresenter,
    LogPresenter,
    NotificationPresenter,
    SystemClipboard,
    UrlOpener,
)
from ..store.archive import ArchiveWriter
from ..store.scanner import ToastStore
from .engine import Toaster
from .presentation import PresentationEngine
from .toast import PresentationOutcome

logger = logging.getLogger(__name__)


class ToastMonitor:
    """
    Main polling loop.

    Every ``poll_interval`` seconds a cycle is started in a background
    thread. If the previous cycle is still running (for example, waiting
    on the user) the tick is skipped, not queued.
    """

    def __init__(
        self,
        toaster: Toaster,
        shutdown_event: Event,
        poll_interval: float = 1.0,
    ):
        """
        Initialize the toast monitor.

        Args:
            toaster: Engine to run each cycle.
            shutdown_event: Event to signal shutdown.
            poll_interval: Seconds between cycles.
        """
        self.toaster = toaster
        self.shutdown_event = shutdown_event
        self.poll_interval = poll_interval
        self._in_flight = Lock()
        self._thread: Optional[threading.Thread] = None

        # Stats
        self._cycles_run = 0
        self._cycles_skipped = 0
        self._toasts_presented = 0

    @property
    def is_firing(self) -> bool:
        return self._in_flight.locked()

    def tick(self) -> bool:
        """
        Start a cycle in the background unless one is in flight.

        Returns:
            True if a cycle was started, False if the tick was skipped.
        """
        if not self._in_flight.acquire(blocking=False):
            self._cycles_skipped += 1
            logger.debug("Previous cycle still running, skipping tick")
            return False

        self._thread = threading.Thread(target=self._cycle, name="toaster-cycle", daemon=True)
        self._thread.start()
        return True

    def run_once(self) -> List[PresentationOutcome]:
        """Run one cycle in the calling thread."""
        with self._in_flight:
            return self._fire()

    def _cycle(self) -> None:
        try:
            self._fire()
        finally:
            self._in_flight.release()

    def _fire(self) -> List[PresentationOutcome]:
        self._cycles_run += 1
        try:
            outcomes = self.toaster.fire()
        except Exception as e:
            logger.error(f"Toast cycle failed: {e}", exc_info=True)
            return []
        self._toasts_presented += sum(1 for o in outcomes if not o.skipped)
        return outcomes

    def run(self) -> None:
        """Run the monitor until shutdown."""
        logger.info(
            f"Watching {self.toaster.store.path} every {self.poll_interval}s "
            f"(presentation={self.toaster.policy.value}, "
            f"presenter={self.toaster.presentation.presenter.name})"
        )

        try:
            while not self.shutdown_event.is_set():
                self.tick()
                self.shutdown_event.wait(timeout=self.poll_interval)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")

        self.stop()

    def stop(self, timeout: float = 2.0) -> None:
        """Wait briefly for an in-flight cycle and log totals."""
        logger.info("Stopping Toaster...")

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("A toast is still awaiting a response; leaving it pending")

        logger.info(
            f"Ran {self._cycles_run} cycles (skipped {self._cycles_skipped} ticks), "
            f"presented {self._toasts_presented} toasts"
        )
        logger.info("Toaster stopped")


def create_presenter(name: str) -> NotificationPresenter:
    """Instantiate a presenter by its configuration name."""
    if name == "dialog":
        return DialogPresenter()
    elif name == "log":
        return LogPresenter()
    return ConsolePresenter()


def build_toaster(
    config: Config,
    presenter: Optional[NotificationPresenter] = None,
    clipboard: Optional[Clipboard] = None,
    opener: Optional[UrlOpener] = None,
) -> Toaster:
    """
    Wire up a Toaster from configuration.

    Host capabilities default to the configured presenter, the system
    clipboard and the default browser.
    """
    store = ToastStore(
        path=config.store.path,
        temp_marker=config.store.temp_marker,
        archived_suffix=config.store.archived_suffix,
    )
    presentation = PresentationEngine(
        presenter=presenter or create_presenter(config.ui.presenter),
        clipboard=clipboard or SystemClipboard(),
        opener=opener or BrowserOpener(),
        archiver=ArchiveWriter(store, config.engine.archive_policy),
    )
    return Toaster(
        store=store,
        presentation=presentation,
        freshness=FreshnessFilter(config.engine.recency_window_seconds),
        policy=config.engine.presentation,
        max_concurrent=config.engine.max_concurrent,
    )

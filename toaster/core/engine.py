"""One scan-and-present cycle over the toast store."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from ..filters.freshness import FreshnessFilter
from ..filters.presented import PresentedSet
from ..parsing.parser import parse_toast
from ..store.scanner import ToastStore
from .errors import ParseError, ValidationError
from .presentation import PresentationEngine
from .toast import PresentationOutcome, Toast, ToastCandidate

logger = logging.getLogger(__name__)


class PresentationPolicy(str, Enum):
    """How many ready toasts a cycle presents."""

    SINGLE = "single"  # only the earliest ready toast
    CONCURRENT = "concurrent"  # every ready toast at once


class Toaster:
    """
    The toast lifecycle engine.

    Each call to ``fire`` scans the store, drops stale and already
    presented files, parses the rest, orders them oldest first and hands
    them to the presentation engine.
    """

    def __init__(
        self,
        store: ToastStore,
        presentation: PresentationEngine,
        freshness: Optional[FreshnessFilter] = None,
        policy: PresentationPolicy = PresentationPolicy.SINGLE,
        max_concurrent: int = 4,
    ):
        """
        Initialize the engine.

        Args:
            store: The watched toast directory.
            presentation: Presents and archives individual toasts.
            freshness: Recency/dedup filter (60 second window if not given).
            policy: Single or concurrent presentation per cycle.
            max_concurrent: Worker threads for reads and concurrent presentation.
        """
        self.store = store
        self.presentation = presentation
        self.freshness = freshness or FreshnessFilter()
        self.policy = PresentationPolicy(policy)
        self.max_concurrent = max(1, max_concurrent)

    @property
    def presented(self) -> PresentedSet:
        return self.presentation.presented

    def fire(self, now: Optional[datetime] = None) -> List[PresentationOutcome]:
        """
        Run one cycle.

        Args:
            now: Reference time for the recency window.

        Returns:
            Outcomes of the toasts presented in this cycle.
        """
        toasts = self.ready_toasts(now)
        if not toasts:
            return []

        logger.info(f"Currently there are {len(toasts)} toasts ready to burn.")

        if self.policy is PresentationPolicy.SINGLE:
            return [self.presentation.present(toasts[0])]

        with ThreadPoolExecutor(
            max_workers=self.max_concurrent, thread_name_prefix="toaster-present"
        ) as pool:
            return list(pool.map(self.presentation.present, toasts))

    def ready_toasts(self, now: Optional[datetime] = None) -> List[Toast]:
        """Parsed toasts eligible for presentation, oldest first."""
        now = now or datetime.now(timezone.utc)
        candidates = self.freshness.select(self.store.list_candidates(), self.presented, now)
        if not candidates:
            return []

        with ThreadPoolExecutor(
            max_workers=self.max_concurrent, thread_name_prefix="toaster-read"
        ) as pool:
            loaded = list(pool.map(self._load, candidates))

        toasts = [toast for toast in loaded if toast is not None]
        toasts.sort(key=lambda t: (t.timestamp, t.filename))
        return toasts

    def _load(self, candidate: ToastCandidate) -> Optional[Toast]:
        """Read and parse one candidate; failures are logged and skipped."""
        try:
            raw = self.store.read(candidate.filename)
        except OSError as e:
            logger.error(f"Could not read toast {candidate.filename}: {e}")
            return None

        try:
            contents = parse_toast(raw)
        except ValidationError as e:
            # Left pending; logged again every cycle until removed
            logger.error(f"Invalid toast {candidate.filename}: {e}")
            return None
        except ParseError as e:
            logger.warning(f"Could not parse toast {candidate.filename}: {e}")
            return None

        return Toast(filename=candidate.filename, timestamp=candidate.timestamp, contents=contents)

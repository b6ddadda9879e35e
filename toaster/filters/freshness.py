"""Recency window and de-duplication filter for scanned toasts."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from ..core.toast import ToastCandidate
from .presented import PresentedSet

logger = logging.getLogger(__name__)


class FreshnessFilter:
    """
    Keep only toasts that are recent and not yet presented.

    Toasts dropped long before the watcher started are ignored rather than
    replayed, while a toast whose file was rewritten after an earlier
    presentation is let through again.
    """

    def __init__(self, window_seconds: float = 60):
        """
        Initialize the filter.

        Args:
            window_seconds: Maximum age of a toast file (default 60s).
        """
        self.window = timedelta(seconds=window_seconds)

    def is_fresh(self, timestamp: datetime, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now - timestamp < self.window

    def select(
        self,
        candidates: Iterable[ToastCandidate],
        presented: PresentedSet,
        now: Optional[datetime] = None,
    ) -> List[ToastCandidate]:
        """
        Filter candidates down to the ones worth reading.

        Args:
            candidates: Scanner output.
            presented: Presented-set of the owning engine.
            now: Reference time (defaults to the current UTC time).

        Returns:
            Candidates inside the recency window that have not been
            presented at their current timestamp.
        """
        now = now or datetime.now(timezone.utc)
        selected = []
        for candidate in candidates:
            if not self.is_fresh(candidate.timestamp, now):
                continue
            if not presented.is_presentable(candidate.filename, candidate.timestamp):
                logger.debug(f"Skipping already presented toast: {candidate.filename}")
                continue
            selected.append(candidate)
        return selected

"""Presented-set: guard against re-showing an unchanged pending toast."""

import logging
from datetime import datetime
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PresentedSet:
    """
    Tracks the timestamp each toast file had when it was last presented.

    A file is only eligible again once its on-disk timestamp moves past the
    recorded one. Entries live for the lifetime of the owning engine.
    """

    def __init__(self):
        self._seen: Dict[str, datetime] = {}
        self._lock = Lock()

    def is_presentable(self, filename: str, timestamp: datetime) -> bool:
        """Return True if the file was never shown or was rewritten since."""
        with self._lock:
            recorded = self._seen.get(filename)
        return recorded is None or recorded < timestamp

    def claim(self, filename: str, timestamp: datetime) -> bool:
        """
        Record a presentation of ``filename`` at ``timestamp``.

        The check and the update happen under one lock, so two concurrent
        presentations of the same unchanged file cannot both win.

        Args:
            filename: Toast file name.
            timestamp: The file's current effective timestamp.

        Returns:
            True if the caller may present the toast, False if it was
            already claimed at this (or a newer) timestamp.
        """
        with self._lock:
            recorded = self._seen.get(filename)
            if recorded is not None and recorded >= timestamp:
                logger.debug(f"Already presented: {filename}")
                return False
            self._seen[filename] = timestamp
            return True

    def get(self, filename: str) -> Optional[datetime]:
        with self._lock:
            return self._seen.get(filename)

    def clear(self) -> None:
        """Forget all presentations."""
        with self._lock:
            self._seen.clear()

    def __contains__(self, filename: str) -> bool:
        with self._lock:
            return filename in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)

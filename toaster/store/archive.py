"""Archival of presented toasts."""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from ..core.errors import ArchivalError
from ..core.toast import ArchivedRecord, ToastPayload
from .scanner import ToastStore, write_atomic

logger = logging.getLogger(__name__)


class ArchivePolicy(str, Enum):
    """What happens to a pending toast once it has been presented."""

    ARCHIVE = "archive"
    DELETE = "delete"


class ArchiveWriter:
    """
    Move presented toasts out of the pending set.

    Under the archive policy the record is written (and renamed into place)
    before the pending file is removed, so a crash in between leaves both
    copies rather than neither.
    """

    def __init__(self, store: ToastStore, policy: ArchivePolicy = ArchivePolicy.ARCHIVE):
        self.store = store
        self.policy = ArchivePolicy(policy)

    def archive(
        self,
        filename: str,
        payload: ToastPayload,
        presented_at: datetime,
        responded_at: datetime,
        chosen_label: Optional[str],
        navigated_url: Optional[str] = None,
        clipboard_outcome: Optional[bool] = None,
    ) -> bool:
        """
        Archive or delete a presented toast.

        Args:
            filename: Pending toast file name.
            payload: The normalized payload that was shown.
            presented_at: When the notification was shown.
            responded_at: When the user's choice (or dismissal) came back.
            chosen_label: Label chosen by the user, None if dismissed.
            navigated_url: URL opened as a result of the choice.
            clipboard_outcome: Result of the clipboard write, if one was made.

        Returns:
            True if the pending file is gone, False if archival failed.
        """
        try:
            if self.policy is ArchivePolicy.ARCHIVE:
                record = ArchivedRecord(
                    toast=payload.archive_copy(),
                    toasted_time=presented_at,
                    toasted_choice_time=responded_at,
                    toasted_choice=chosen_label or "",
                    toasted_navigation=navigated_url or None,
                    clipboard_outcome=clipboard_outcome,
                )
                self._write_record(filename, record)
            self._remove_pending(filename)
            return True
        except ArchivalError as e:
            logger.error(f"{e}")
            return False

    def _write_record(self, filename: str, record: ArchivedRecord) -> None:
        path = self.store.archived_path(filename)
        try:
            write_atomic(path, json.dumps(record.to_dict(), indent=2), self.store.temp_marker)
        except (OSError, TypeError, ValueError) as e:
            raise ArchivalError(f"Could not write archived record {path}: {e}") from e
        logger.info(f"Wrote archived record {path}")

    def _remove_pending(self, filename: str) -> None:
        path = self.store.pending_path(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"Pending toast already removed: {path}")
            return
        except OSError as e:
            raise ArchivalError(f"Could not delete {path}: {e}") from e
        logger.info(f"Removed pending toast {path}")

    def read_record(self, filename: str) -> ArchivedRecord:
        """Load the archived record for a pending toast name."""
        path = self.store.archived_path(filename)
        with open(path, encoding="utf-8") as f:
            return ArchivedRecord.from_dict(json.load(f))

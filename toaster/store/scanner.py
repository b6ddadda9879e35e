"""Toast store: discovery of pending toast files in the watched directory."""

import json
import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.errors import ListingError, StatError
from ..core.toast import EPOCH, ToastCandidate

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".toasts"
TEMP_MARKER = ".swp"
ARCHIVED_SUFFIX = ".toasted"


class ToastStore:
    """
    A single directory of pending and archived toast files.

    Pending toasts have arbitrary names. Archived records carry the
    archived suffix and editor/temp files carry the temp marker; neither
    is ever returned as a candidate.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        temp_marker: str = TEMP_MARKER,
        archived_suffix: str = ARCHIVED_SUFFIX,
    ):
        self.path = Path(path or DEFAULT_STORE_PATH).expanduser()
        self.temp_marker = temp_marker
        self.archived_suffix = archived_suffix

    def is_candidate_name(self, name: str) -> bool:
        """Return True if ``name`` looks like a pending toast file."""
        return self.temp_marker not in name and not name.endswith(self.archived_suffix)

    def pending_path(self, filename: str) -> Path:
        return self.path / filename

    def archived_path(self, filename: str) -> Path:
        """Path of the archived record for a pending toast (same stem)."""
        return self.path / f"{Path(filename).stem}{self.archived_suffix}"

    def list_candidates(self) -> List[ToastCandidate]:
        """
        List pending toast files with their effective timestamps.

        Returns:
            Candidates in directory order. Empty if the directory is missing
            or cannot be listed.
        """
        try:
            names = self._list_names()
        except FileNotFoundError:
            return []
        except ListingError as e:
            logger.error(f"{e}")
            return []

        return [
            ToastCandidate(filename=name, timestamp=self._timestamp(name))
            for name in names
            if self.is_candidate_name(name)
        ]

    def _list_names(self) -> List[str]:
        try:
            with os.scandir(self.path) as entries:
                return sorted(entry.name for entry in entries if not entry.is_dir())
        except FileNotFoundError:
            raise
        except OSError as e:
            raise ListingError(f"Cannot list toast store {self.path}: {e}") from e

    def _timestamp(self, filename: str) -> datetime:
        """Modification time, else change/creation time, else the epoch."""
        try:
            return self._stat_timestamp(filename)
        except StatError as e:
            logger.error(f"{e}")
            return EPOCH

    def _stat_timestamp(self, filename: str) -> datetime:
        try:
            info = self.pending_path(filename).stat()
        except OSError as e:
            raise StatError(f"Cannot stat toast {filename}: {e}") from e
        seconds = info.st_mtime or info.st_ctime
        return datetime.fromtimestamp(seconds, timezone.utc)

    def read(self, filename: str) -> bytes:
        """Read the raw contents of a pending toast."""
        return self.pending_path(filename).read_bytes()

    def drop(self, payload: Dict[str, Any], filename: Optional[str] = None) -> str:
        """
        Write a new pending toast.

        The file is written under a temp name carrying the temp marker and
        renamed into place, so a scan never sees it half written.

        Args:
            payload: Toast JSON object in the canonical schema.
            filename: Target name (defaults to a timestamped ``.json`` name).

        Returns:
            The pending file name.
        """
        self.path.mkdir(parents=True, exist_ok=True)
        filename = filename or f"toast-{time.time_ns()}.json"
        write_atomic(self.pending_path(filename), json.dumps(payload, indent=2), self.temp_marker)
        logger.info(f"Dropped toast {filename}")
        return filename


def write_atomic(path: Path, text: str, temp_marker: str = TEMP_MARKER) -> None:
    """Write ``text`` to ``path`` through a temp file and an atomic rename."""
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f"{path.name}.", suffix=temp_marker
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise

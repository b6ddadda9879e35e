"""Host capability interfaces used by the presentation engine."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..core.toast import ToastKind


class NotificationPresenter(ABC):
    """Show a notification and wait for one of a fixed set of labels."""

    @abstractmethod
    def show(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        """
        Display a notification and block until the user responds.

        Args:
            kind: Severity, used to pick the host's info/warning/error style.
            message: Notification body.
            options: Button labels, primary first.

        Returns:
            The chosen label, or None if the notification was dismissed.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return presenter name for logging."""
        pass


class Clipboard(ABC):
    """Host clipboard."""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place ``text`` on the clipboard. Raises PresentationError on failure."""
        pass


class UrlOpener(ABC):
    """Host "open URL" service."""

    @abstractmethod
    def open(self, url: str) -> None:
        """Open ``url`` externally. Raises PresentationError on failure."""
        pass

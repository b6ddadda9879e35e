"""Terminal and headless presenters."""

import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from ..core.toast import ToastKind
from .base import NotificationPresenter

logger = logging.getLogger(__name__)

KIND_PREFIX = {
    ToastKind.INFORMATION: "INFO",
    ToastKind.WARNING: "WARNING",
    ToastKind.ERROR: "ERROR",
}


class ConsolePresenter(NotificationPresenter):
    """
    Show toasts in the terminal and read the choice from stdin.

    The user answers with an option number or label; an empty answer or
    end of input dismisses the toast.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        stream: Optional[TextIO] = None,
    ):
        self._input = input_func
        self._stream = stream

    @property
    def name(self) -> str:
        return "ConsolePresenter"

    def show(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        stream = self._stream or sys.stdout
        print(f"\n[{KIND_PREFIX[kind]}] {message}", file=stream)
        for i, label in enumerate(options, start=1):
            print(f"  {i}) {label}", file=stream)
        stream.flush()

        try:
            answer = self._input("Choose an option (Enter to dismiss): ").strip()
        except (EOFError, KeyboardInterrupt):
            return None

        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        for label in options:
            if answer.lower() == label.lower():
                return label

        logger.warning(f"Unrecognized choice {answer!r}, treating as dismissed")
        return None


class LogPresenter(NotificationPresenter):
    """Headless presenter: logs each toast and reports it as dismissed."""

    @property
    def name(self) -> str:
        return "LogPresenter"

    def show(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        logger.info(f"[{KIND_PREFIX[kind]}] {message} (options: {', '.join(options)})")
        return None

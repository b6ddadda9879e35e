"""Native modal dialogs through osascript (macOS) or zenity (Linux)."""

import logging
import platform
import subprocess
from typing import List, Optional, Sequence

from ..core.errors import PresentationError
from ..core.toast import ToastKind
from .base import NotificationPresenter

logger = logging.getLogger(__name__)

TITLE = "Toaster"

OSASCRIPT_ICONS = {
    ToastKind.INFORMATION: "note",
    ToastKind.WARNING: "caution",
    ToastKind.ERROR: "stop",
}

ZENITY_MODES = {
    ToastKind.INFORMATION: "--info",
    ToastKind.WARNING: "--warning",
    ToastKind.ERROR: "--error",
}


def _applescript_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DialogPresenter(NotificationPresenter):
    """
    Show each toast as a native dialog with one button per option.

    The call blocks until the dialog is answered or closed; there is no
    timeout.
    """

    def __init__(self, system: Optional[str] = None):
        self.system = system or platform.system()

    @property
    def name(self) -> str:
        return f"DialogPresenter({self.system})"

    def show(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        if self.system == "Darwin":
            return self._show_macos(kind, message, options)
        elif self.system == "Linux":
            return self._show_linux(kind, message, options)
        raise PresentationError(f"No dialog backend for platform {self.system}")

    def _show_macos(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        # macOS lays buttons out right to left; keep the primary rightmost
        buttons = ", ".join(_applescript_string(label) for label in reversed(options))
        script = (
            f"display dialog {_applescript_string(message)} "
            f"with title {_applescript_string(TITLE)} "
            f"buttons {{{buttons}}} "
            f"default button {_applescript_string(options[0])} "
            f"with icon {OSASCRIPT_ICONS[kind]}"
        )
        result = self._run(["osascript", "-e", script])
        if result.returncode != 0:
            # User canceled (Esc) or dialog closed
            return None
        out = result.stdout.strip()
        prefix = "button returned:"
        if out.startswith(prefix) and out[len(prefix):] in options:
            return out[len(prefix):]
        return None

    def _show_linux(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        cmd: List[str] = [
            "zenity",
            ZENITY_MODES[kind],
            "--no-markup",
            f"--title={TITLE}",
            f"--text={message}",
            f"--ok-label={options[0]}",
        ]
        for label in options[1:]:
            cmd.append(f"--extra-button={label}")

        result = self._run(cmd)
        if result.returncode == 0:
            return options[0]
        # Extra buttons exit 1 and print their label; a closed dialog prints nothing
        chosen = result.stdout.strip()
        return chosen if chosen in options else None

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise PresentationError(f"'{cmd[0]}' not found - dialogs unavailable") from e
        except OSError as e:
            raise PresentationError(f"Failed to run {cmd[0]}: {e}") from e

"""Clipboard and URL-opening services of the host."""

import logging
import platform
import shutil
import subprocess
import webbrowser
from typing import List, Optional

from ..core.errors import PresentationError
from .base import Clipboard, UrlOpener

logger = logging.getLogger(__name__)

# Clipboard writers by platform, tried in order
CLIPBOARD_COMMANDS = {
    "Darwin": [["pbcopy"]],
    "Linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
    "Windows": [["clip"]],
}


class SystemClipboard(Clipboard):
    """Clipboard backed by the platform's command line clipboard tools."""

    def __init__(self, system: Optional[str] = None):
        self.system = system or platform.system()

    def _commands(self) -> List[List[str]]:
        return [
            cmd for cmd in CLIPBOARD_COMMANDS.get(self.system, [])
            if shutil.which(cmd[0])
        ]

    def copy(self, text: str) -> None:
        commands = self._commands()
        if not commands:
            raise PresentationError(f"No clipboard tool available on {self.system}")

        last_error = None
        for cmd in commands:
            try:
                subprocess.run(cmd, input=text, text=True, check=True, capture_output=True)
                logger.debug(f"Copied {len(text)} characters with {cmd[0]}")
                return
            except (subprocess.CalledProcessError, OSError) as e:
                logger.debug(f"{cmd[0]} failed: {e}")
                last_error = e
        raise PresentationError(f"Clipboard write failed: {last_error}")


class BrowserOpener(UrlOpener):
    """Open URLs with the default web browser."""

    def open(self, url: str) -> None:
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise PresentationError(f"Could not open {url}: {e}") from e
        if not opened:
            raise PresentationError(f"No browser accepted {url}")
        logger.debug(f"Opened {url}")

"""Notification presenters and host services for Toaster."""

from .actions import BrowserOpener, SystemClipboard
from .base import Clipboard, NotificationPresenter, UrlOpener
from .console import ConsolePresenter, LogPresenter
from .dialog import DialogPresenter

__all__ = [
    "BrowserOpener",
    "Clipboard",
    "ConsolePresenter",
    "DialogPresenter",
    "LogPresenter",
    "NotificationPresenter",
    "SystemClipboard",
    "UrlOpener",
]

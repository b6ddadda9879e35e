"""
Pytest fixtures for toaster tests.

Host capabilities are replaced by scripted fakes; the toast store is a
tmp_path directory whose file ages are set with os.utime.
"""

import json
import os
import time
from threading import Event
from typing import List, Optional, Sequence

import pytest

from toaster.core.engine import PresentationPolicy, Toaster
from toaster.core.errors import PresentationError
from toaster.core.presentation import PresentationEngine
from toaster.core.toast import ToastKind
from toaster.filters import FreshnessFilter, PresentedSet
from toaster.presenters.base import Clipboard, NotificationPresenter, UrlOpener
from toaster.store.archive import ArchivePolicy, ArchiveWriter
from toaster.store.scanner import ToastStore


# ═══════════════════════════════════════════════════════════════════════════════
# Fake host capabilities
# ═══════════════════════════════════════════════════════════════════════════════


class ScriptedPresenter(NotificationPresenter):
    """Returns scripted choices and records every call."""

    def __init__(self, choices: Optional[List[Optional[str]]] = None, default: Optional[str] = None):
        self.choices = list(choices or [])
        self.default = default
        self.calls = []
        self.release: Optional[Event] = None  # when set, show() blocks until released

    @property
    def name(self) -> str:
        return "ScriptedPresenter"

    def show(self, kind: ToastKind, message: str, options: Sequence[str]) -> Optional[str]:
        self.calls.append((kind, message, list(options)))
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.choices:
            return self.choices.pop(0)
        return self.default

    @property
    def messages(self) -> List[str]:
        return [message for _, message, _ in self.calls]


class FirstOptionPresenter(ScriptedPresenter):
    """Always chooses the first (primary) option."""

    def show(self, kind, message, options):
        super().show(kind, message, options)
        return options[0]


class FailingPresenter(NotificationPresenter):
    @property
    def name(self) -> str:
        return "FailingPresenter"

    def show(self, kind, message, options):
        raise PresentationError("UI unavailable")


class RecordingClipboard(Clipboard):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.copied: List[str] = []

    def copy(self, text: str) -> None:
        if self.fail:
            raise PresentationError("clipboard locked")
        self.copied.append(text)


class RecordingOpener(UrlOpener):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.opened: List[str] = []

    def open(self, url: str) -> None:
        if self.fail:
            raise PresentationError("no browser")
        self.opened.append(url)


# ═══════════════════════════════════════════════════════════════════════════════
# Store fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def store_dir(tmp_path):
    path = tmp_path / ".toasts"
    path.mkdir()
    return path


@pytest.fixture
def store(store_dir):
    return ToastStore(store_dir)


@pytest.fixture
def write_toast(store_dir):
    """Write a toast file; ``age`` sets its mtime that many seconds in the past."""

    def _write(filename: str, content, age: float = 0.0):
        path = store_dir / filename
        if isinstance(content, (dict, list)):
            content = json.dumps(content)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        stamp = time.time() - age
        os.utime(path, (stamp, stamp))
        return path

    return _write


# ═══════════════════════════════════════════════════════════════════════════════
# Engine fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def presenter():
    return ScriptedPresenter()


@pytest.fixture
def clipboard():
    return RecordingClipboard()


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def archiver(store):
    return ArchiveWriter(store, ArchivePolicy.ARCHIVE)


@pytest.fixture
def presentation(presenter, clipboard, opener, archiver):
    return PresentationEngine(
        presenter=presenter,
        clipboard=clipboard,
        opener=opener,
        archiver=archiver,
        presented=PresentedSet(),
    )


@pytest.fixture
def make_toaster(store, clipboard, opener):
    """Build a Toaster around a given presenter and policies."""

    def _make(
        presenter: NotificationPresenter,
        policy: PresentationPolicy = PresentationPolicy.SINGLE,
        archive_policy: ArchivePolicy = ArchivePolicy.ARCHIVE,
        window_seconds: float = 60,
    ) -> Toaster:
        engine = PresentationEngine(
            presenter=presenter,
            clipboard=clipboard,
            opener=opener,
            archiver=ArchiveWriter(store, archive_policy),
        )
        return Toaster(
            store=store,
            presentation=engine,
            freshness=FreshnessFilter(window_seconds),
            policy=policy,
        )

    return _make

"""
Tests for presenting a single toast.

Tests cover:
- option list construction and choice resolution
- clipboard / navigation side effects and their failures
- archival after every outcome, including UI failures
- the presented-set guard
"""

import json
from datetime import datetime, timezone

from conftest import FailingPresenter, RecordingClipboard, RecordingOpener
from toaster.core.presentation import PresentationEngine, build_options, resolve_choice
from toaster.core.toast import REDACTED, Toast, ToastKind, ToastOption, ToastPayload
from toaster.filters import PresentedSet
from toaster.parsing import parse_toast

STAMP = datetime(2024, 12, 19, 14, 30, 0, tzinfo=timezone.utc)


def make_toast(store_dir, filename: str, data) -> Toast:
    text = data if isinstance(data, str) else json.dumps(data)
    (store_dir / filename).write_text(text, encoding="utf-8")
    return Toast(filename=filename, timestamp=STAMP, contents=parse_toast(text.encode("utf-8")))


def read_record(store_dir, stem: str) -> dict:
    return json.loads((store_dir / f"{stem}.toasted").read_text(encoding="utf-8"))


class TestOptions:
    def test_default_primary(self):
        primary, secondary = build_options(ToastPayload(message="m"))

        assert primary.label == "OK"
        assert secondary is None

    def test_secondary_without_action_is_dropped(self):
        payload = ToastPayload(message="m", secondary_option=ToastOption(label="Nothing"))

        assert build_options(payload)[1] is None

    def test_resolve_choice(self):
        primary = ToastOption(label="OK")
        secondary = ToastOption(label="Open", navigate_url="https://x")

        assert resolve_choice("OK", primary, secondary) is primary
        assert resolve_choice("Open", primary, secondary) is secondary
        assert resolve_choice(None, primary, secondary) is None
        assert resolve_choice("Other", primary, secondary) is None

    def test_primary_wins_label_clash(self):
        primary = ToastOption(label="Go", navigate_url="https://a")
        secondary = ToastOption(label="Go", navigate_url="https://b")

        assert resolve_choice("Go", primary, secondary) is primary


class TestPresent:
    def test_shows_kind_message_and_options(self, presentation, presenter, store_dir):
        toast = make_toast(
            store_dir,
            "a.json",
            {"type": "warning", "message": "Disk", "url": "https://d", "urlDisplayName": "Details"},
        )

        presentation.present(toast)

        assert presenter.calls == [(ToastKind.WARNING, "Disk", ["OK", "Details"])]

    def test_primary_choice_navigates_and_archives(self, presentation, presenter, opener, store_dir):
        presenter.choices = ["Approve"]
        toast = make_toast(store_dir, "a.json", {"message": "m", "ok": "Approve", "okUrl": "https://ok"})

        outcome = presentation.present(toast)

        assert outcome.chosen_label == "Approve"
        assert outcome.navigated_url == "https://ok"
        assert outcome.navigation_outcome is True
        assert outcome.archived is True
        assert opener.opened == ["https://ok"]
        assert not (store_dir / "a.json").exists()

        record = read_record(store_dir, "a")
        assert record["toastedChoice"] == "Approve"
        assert record["toastedNavigation"] == "https://ok"
        assert record["toast"]["message"] == "m"
        assert "clipboardOutcome" not in record

    def test_secondary_choice_copies_and_navigates(self, presentation, presenter, clipboard, opener, store_dir):
        presenter.choices = ["Logs"]
        toast = make_toast(
            store_dir,
            "b.json",
            {"message": "m", "url": "https://logs", "urlDisplayName": "Logs", "urlClipboard": "run-7"},
        )

        outcome = presentation.present(toast)

        assert clipboard.copied == ["run-7"]
        assert opener.opened == ["https://logs"]
        assert outcome.clipboard_outcome is True
        assert read_record(store_dir, "b")["clipboardOutcome"] is True

    def test_dismissal_fires_no_action(self, presentation, presenter, clipboard, opener, store_dir):
        presenter.choices = [None]
        toast = make_toast(store_dir, "c.json", {"message": "m", "okUrl": "https://ok", "okClipboard": "x"})

        outcome = presentation.present(toast)

        assert outcome.dismissed
        assert clipboard.copied == []
        assert opener.opened == []
        record = read_record(store_dir, "c")
        assert record["toastedChoice"] == ""
        assert "toastedNavigation" not in record

    def test_presenter_failure_still_archives(self, clipboard, opener, archiver, store_dir):
        engine = PresentationEngine(FailingPresenter(), clipboard, opener, archiver)
        toast = make_toast(store_dir, "d.json", {"message": "m"})

        outcome = engine.present(toast)

        assert outcome.dismissed
        assert outcome.archived
        assert "UI unavailable" in outcome.errors[0]
        assert read_record(store_dir, "d")["toastedChoice"] == ""

    def test_clipboard_failure_is_recorded(self, presenter, opener, archiver, store_dir):
        engine = PresentationEngine(presenter, RecordingClipboard(fail=True), opener, archiver)
        presenter.choices = ["OK"]
        toast = make_toast(store_dir, "e.json", {"message": "m", "okClipboard": "x", "okUrl": "https://ok"})

        outcome = engine.present(toast)

        assert outcome.clipboard_outcome is False
        assert opener.opened == ["https://ok"]
        assert outcome.archived
        assert read_record(store_dir, "e")["clipboardOutcome"] is False

    def test_navigation_failure_is_recorded(self, presenter, clipboard, archiver, store_dir):
        engine = PresentationEngine(presenter, clipboard, RecordingOpener(fail=True), archiver)
        presenter.choices = ["OK"]
        toast = make_toast(store_dir, "f.json", {"message": "m", "okUrl": "https://ok"})

        outcome = engine.present(toast)

        assert outcome.navigation_outcome is False
        assert outcome.archived
        assert read_record(store_dir, "f")["toastedNavigation"] == "https://ok"

    def test_redacted_toast(self, presentation, presenter, clipboard, store_dir):
        presenter.choices = ["Copy code and open"]
        toast = make_toast(
            store_dir,
            "login.json",
            {"UserCode": "ABC-123", "VerificationUrl": "https://x/verify", "Message": "Sign in"},
        )

        presentation.present(toast)

        assert clipboard.copied == ["ABC-123"]
        text = (store_dir / "login.toasted").read_text()
        assert json.loads(text)["toast"] == REDACTED
        assert "ABC-123" not in text

    def test_free_text_archives_raw_text(self, presentation, presenter, store_dir):
        presenter.choices = ["OK"]
        toast = make_toast(store_dir, "note.txt", "hello world")

        presentation.present(toast)

        assert read_record(store_dir, "note")["toast"] == "hello world"

    def test_record_timestamps(self, presentation, presenter, store_dir):
        presenter.choices = ["OK"]
        toast = make_toast(store_dir, "g.json", {"message": "m"})

        outcome = presentation.present(toast)

        record = read_record(store_dir, "g")
        assert datetime.fromisoformat(record["toastedTime"]) == outcome.presented_at
        assert datetime.fromisoformat(record["toastedChoiceTime"]) == outcome.responded_at
        assert outcome.responded_at >= outcome.presented_at


class TestPresentedGuard:
    def test_marks_presented_before_showing(self, clipboard, opener, archiver, store_dir):
        presented = PresentedSet()
        seen_during_show = []

        class Probe(FailingPresenter):
            def show(self, kind, message, options):
                seen_during_show.append(presented.get("h.json"))
                return None

        engine = PresentationEngine(Probe(), clipboard, opener, archiver, presented)
        engine.present(make_toast(store_dir, "h.json", {"message": "m"}))

        assert seen_during_show == [STAMP]

    def test_same_toast_is_not_shown_twice(self, presentation, presenter, store_dir):
        toast = make_toast(store_dir, "i.json", {"message": "m"})
        presentation.present(toast)
        (store_dir / "i.json").write_text('{"message": "m"}')

        outcome = presentation.present(toast)

        assert outcome.skipped
        assert len(presenter.calls) == 1
        assert (store_dir / "i.json").exists()

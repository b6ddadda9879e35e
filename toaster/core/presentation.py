"""Presentation of a single toast: show, act on the choice, archive."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..filters.presented import PresentedSet
from ..parsing.parser import DEFAULT_OK_LABEL
from ..presenters.base import Clipboard, NotificationPresenter, UrlOpener
from ..store.archive import ArchiveWriter
from .toast import PresentationOutcome, Toast, ToastOption, ToastPayload

logger = logging.getLogger(__name__)


def build_options(payload: ToastPayload) -> Tuple[ToastOption, Optional[ToastOption]]:
    """
    Work out which options a toast offers.

    The primary option is always offered. The secondary one only when it
    declares a navigation target or clipboard payload.
    """
    primary = payload.primary_option or ToastOption(label=DEFAULT_OK_LABEL)
    secondary = payload.secondary_option
    if secondary is not None and not secondary.has_action:
        secondary = None
    return primary, secondary


def resolve_choice(
    chosen: Optional[str],
    primary: ToastOption,
    secondary: Optional[ToastOption],
) -> Optional[ToastOption]:
    """Map a chosen label back to its option; primary wins a label clash."""
    if chosen is None:
        return None
    if chosen == primary.label:
        return primary
    if secondary is not None and chosen == secondary.label:
        return secondary
    return None


class PresentationEngine:
    """
    Present toasts one at a time through the host capabilities.

    ``present`` never raises: UI, clipboard and navigation failures are
    logged and recorded on the outcome, and the toast is archived
    regardless.
    """

    def __init__(
        self,
        presenter: NotificationPresenter,
        clipboard: Clipboard,
        opener: UrlOpener,
        archiver: ArchiveWriter,
        presented: Optional[PresentedSet] = None,
    ):
        """
        Initialize the presentation engine.

        Args:
            presenter: Shows the notification and returns the chosen label.
            clipboard: Host clipboard.
            opener: Host "open URL" service.
            archiver: Archives or deletes the toast afterwards.
            presented: Presented-set (a fresh one if not given).
        """
        self.presenter = presenter
        self.clipboard = clipboard
        self.opener = opener
        self.archiver = archiver
        self.presented = presented if presented is not None else PresentedSet()

    def present(self, toast: Toast) -> PresentationOutcome:
        """Show a toast, act on the user's choice and archive the result."""
        outcome = PresentationOutcome(
            filename=toast.filename,
            presented_at=datetime.now(timezone.utc),
        )

        try:
            # Claim before showing so a crash mid-presentation cannot loop
            if not self.presented.claim(toast.filename, toast.timestamp):
                outcome.skipped = True
                return outcome

            logger.info(f"Presenting toast {toast}")
            self._present(toast, outcome)
        except Exception as e:
            logger.error(f"Unexpected error presenting {toast.filename}: {e}", exc_info=True)
            outcome.errors.append(str(e))

        if outcome.responded_at is None:
            outcome.responded_at = datetime.now(timezone.utc)

        try:
            outcome.archived = self.archiver.archive(
                toast.filename,
                toast.contents,
                presented_at=outcome.presented_at,
                responded_at=outcome.responded_at,
                chosen_label=outcome.chosen_label,
                navigated_url=outcome.navigated_url,
                clipboard_outcome=outcome.clipboard_outcome,
            )
        except Exception as e:
            logger.error(f"Unexpected error archiving {toast.filename}: {e}", exc_info=True)
            outcome.errors.append(str(e))

        return outcome

    def _present(self, toast: Toast, outcome: PresentationOutcome) -> None:
        payload = toast.contents
        primary, secondary = build_options(payload)
        labels: List[str] = [primary.label]
        if secondary is not None:
            labels.append(secondary.label)

        outcome.presented_at = datetime.now(timezone.utc)
        try:
            chosen = self.presenter.show(payload.kind, payload.message, labels)
        except Exception as e:
            logger.error(f"{self.presenter.name} failed to show {toast.filename}: {e}")
            outcome.errors.append(str(e))
            chosen = None
        outcome.responded_at = datetime.now(timezone.utc)
        outcome.chosen_label = chosen

        option = resolve_choice(chosen, primary, secondary)
        if chosen is None:
            logger.info(f"Toast {toast.filename} dismissed")
        else:
            logger.info(f"Toast {toast.filename} answered: {chosen}")

        if option is None:
            return

        if option.clipboard_text:
            try:
                self.clipboard.copy(option.clipboard_text)
                outcome.clipboard_outcome = True
            except Exception as e:
                logger.error(f"Clipboard write failed for {toast.filename}: {e}")
                outcome.clipboard_outcome = False
                outcome.errors.append(str(e))

        if option.navigate_url:
            outcome.navigated_url = option.navigate_url
            logger.info(f"Opening URL: {option.navigate_url}")
            try:
                self.opener.open(option.navigate_url)
                outcome.navigation_outcome = True
            except Exception as e:
                logger.error(f"Could not open {option.navigate_url}: {e}")
                outcome.navigation_outcome = False
                outcome.errors.append(str(e))

"""Toast data structures."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

REDACTED = "[redacted]"

EPOCH = datetime.fromtimestamp(0, timezone.utc)


class ToastKind(str, Enum):
    """Severity of a toast, mapped to the host's info/warning/error styles."""

    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ToastOption:
    """A button offered with a toast."""

    label: str
    navigate_url: Optional[str] = None
    clipboard_text: Optional[str] = None

    @property
    def has_action(self) -> bool:
        return bool(self.navigate_url or self.clipboard_text)


@dataclass
class ToastPayload:
    """Canonical, normalized toast contents."""

    message: str
    kind: ToastKind = ToastKind.INFORMATION
    primary_option: Optional[ToastOption] = None
    secondary_option: Optional[ToastOption] = None
    redact_on_archive: bool = False
    raw_text: Optional[str] = None  # set only for free-text toasts

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the canonical toast file schema."""
        data: Dict[str, Any] = {"type": self.kind.value, "message": self.message}
        if self.primary_option:
            data["ok"] = self.primary_option.label
            if self.primary_option.navigate_url:
                data["okUrl"] = self.primary_option.navigate_url
            if self.primary_option.clipboard_text:
                data["okClipboard"] = self.primary_option.clipboard_text
        if self.secondary_option:
            data["urlDisplayName"] = self.secondary_option.label
            if self.secondary_option.navigate_url:
                data["url"] = self.secondary_option.navigate_url
            if self.secondary_option.clipboard_text:
                data["urlClipboard"] = self.secondary_option.clipboard_text
        if self.redact_on_archive:
            data["burnAfterReading"] = True
        return data

    def archive_copy(self) -> Union[Dict[str, Any], str]:
        """Return what the archived record stores in its ``toast`` field."""
        if self.redact_on_archive:
            return REDACTED
        if self.raw_text is not None:
            return self.raw_text
        return self.to_dict()


@dataclass(frozen=True)
class ToastCandidate:
    """A pending file found by the scanner, not yet read."""

    filename: str
    timestamp: datetime


@dataclass
class Toast:
    """A pending toast ready to be presented."""

    filename: str
    timestamp: datetime
    contents: ToastPayload

    def __str__(self) -> str:
        return f"{self.filename} [{self.contents.kind.value}]: {self.contents.message}"


@dataclass(frozen=True)
class ArchivedRecord:
    """Outcome of a presentation, persisted as ``<stem>.toasted``."""

    toast: Union[Dict[str, Any], str]
    toasted_time: datetime
    toasted_choice_time: datetime
    toasted_choice: str
    toasted_navigation: Optional[str] = None
    clipboard_outcome: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "toast": self.toast,
            "toastedTime": self.toasted_time.isoformat(),
            "toastedChoiceTime": self.toasted_choice_time.isoformat(),
            "toastedChoice": self.toasted_choice,
        }
        if self.toasted_navigation:
            data["toastedNavigation"] = self.toasted_navigation
        if self.clipboard_outcome is not None:
            data["clipboardOutcome"] = self.clipboard_outcome
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArchivedRecord":
        return cls(
            toast=data["toast"],
            toasted_time=datetime.fromisoformat(data["toastedTime"]),
            toasted_choice_time=datetime.fromisoformat(data["toastedChoiceTime"]),
            toasted_choice=data["toastedChoice"],
            toasted_navigation=data.get("toastedNavigation"),
            clipboard_outcome=data.get("clipboardOutcome"),
        )


@dataclass
class PresentationOutcome:
    """What happened when a toast was presented."""

    filename: str
    presented_at: datetime
    responded_at: Optional[datetime] = None
    chosen_label: Optional[str] = None  # None means dismissed
    navigated_url: Optional[str] = None
    clipboard_outcome: Optional[bool] = None
    navigation_outcome: Optional[bool] = None
    archived: bool = False
    skipped: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def dismissed(self) -> bool:
        return self.chosen_label is None

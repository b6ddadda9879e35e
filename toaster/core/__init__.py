"""Core toast lifecycle for Toaster."""

from .errors import (
    ArchivalError,
    ListingError,
    ParseError,
    PresentationError,
    StatError,
    ToasterError,
    ValidationError,
)
from .toast import (
    ArchivedRecord,
    PresentationOutcome,
    Toast,
    ToastCandidate,
    ToastKind,
    ToastOption,
    ToastPayload,
)

__all__ = [
    "ArchivalError",
    "ArchivedRecord",
    "ListingError",
    "ParseError",
    "PresentationError",
    "PresentationOutcome",
    "StatError",
    "Toast",
    "ToastCandidate",
    "ToastKind",
    "ToastOption",
    "ToastPayload",
    "ToasterError",
    "ValidationError",
]

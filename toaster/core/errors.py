"""Error types for the toast lifecycle."""


class ToasterError(Exception):
    """Base class for toast lifecycle errors."""


class ListingError(ToasterError):
    """The toast store directory could not be listed."""


class StatError(ToasterError):
    """A single toast file could not be stat'ed."""


class ParseError(ToasterError):
    """Toast file contents could not be salvaged into a payload."""


class ValidationError(ToasterError):
    """Toast file parsed but declares an unrecognized kind."""


class PresentationError(ToasterError):
    """Notification UI, clipboard or navigation failed."""


class ArchivalError(ToasterError):
    """Archived record could not be written or the pending file removed."""

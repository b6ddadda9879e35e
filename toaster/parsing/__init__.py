"""Toast file parsing for Toaster."""

from .parser import parse_kind, parse_toast

__all__ = ["parse_kind", "parse_toast"]

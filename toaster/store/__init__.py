"""Toast store access for Toaster."""

from .archive import ArchivePolicy, ArchiveWriter
from .scanner import ToastStore

__all__ = ["ArchivePolicy", "ArchiveWriter", "ToastStore"]

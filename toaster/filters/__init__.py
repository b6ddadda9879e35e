"""Toast filters for Toaster."""

from .freshness import FreshnessFilter
from .presented import PresentedSet

__all__ = ["FreshnessFilter", "PresentedSet"]

"""Toaster: surface JSON toast files dropped in a directory as notifications."""

__version__ = "0.1.0"

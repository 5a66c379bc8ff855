"""Small helpers for mac-installer-scan."""

from . import disk

__all__ = ["disk"]

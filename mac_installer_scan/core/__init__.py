"""Core constants, models, and config for mac-installer-scan."""

from .constants import (
    HOME,
    SCAN_ROOTS,
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_ENV,
    DIRECT_INSTALLER_EXTENSIONS,
    ARCHIVE_EXTENSIONS,
    SCAN_EXTENSIONS,
    MAX_INSTALLER_ENTRIES,
)
from .models import (
    ExtensionClass,
    Verdict,
    ScanRoot,
    Candidate,
    ClassificationVerdict,
    Ok,
    Skip,
)
from . import config

__all__ = [
    "HOME",
    "SCAN_ROOTS",
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_ENV",
    "DIRECT_INSTALLER_EXTENSIONS",
    "ARCHIVE_EXTENSIONS",
    "SCAN_EXTENSIONS",
    "MAX_INSTALLER_ENTRIES",
    "ExtensionClass",
    "Verdict",
    "ScanRoot",
    "Candidate",
    "ClassificationVerdict",
    "Ok",
    "Skip",
    "config",
]

"""mac-installer-scan: find installer artifacts left in download folders."""

from . import utils
from . import services
from . import core
from .core import config
from .services.scanner_service import Scanner, scan_root, scan_all, scan_all_installers
from .services.classifier_service import is_installer_archive

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "core",
    "utils",
    "services",
    "Scanner",
    "scan_root",
    "scan_all",
    "scan_all_installers",
    "is_installer_archive",
]

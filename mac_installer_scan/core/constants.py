"""Path, extension and tool constants for mac-installer-scan."""

import pathlib

HOME = str(pathlib.Path.home())

# Searched in this order; missing ones are skipped at scan time.
SCAN_ROOTS = [
    f"{HOME}/Downloads",
    f"{HOME}/Desktop",
    f"{HOME}/Documents",
    f"{HOME}/Public",
    f"{HOME}/Library/Downloads",
]

DEFAULT_MAX_DEPTH = 2
MAX_DEPTH_LIMIT = 16
MAX_DEPTH_ENV = "MAC_INSTALLER_SCAN_MAX_DEPTH"

DIRECT_INSTALLER_EXTENSIONS = frozenset({"dmg", "pkg", "mpkg", "iso"})
ARCHIVE_EXTENSIONS = frozenset({"zip"})
SCAN_EXTENSIONS = DIRECT_INSTALLER_EXTENSIONS | ARCHIVE_EXTENSIONS

# Archives with more entries than this are treated as data, not installers.
MAX_INSTALLER_ENTRIES = 5
APP_BUNDLE_SUFFIX = ".app"

LISTING_TIMEOUT_S = 30
FD_TIMEOUT_S = 120

FD_NAMES = ["fd", "fdfind"]
ZIPINFO_NAME = "zipinfo"
UNZIP_NAME = "unzip"

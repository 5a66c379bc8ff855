"""Disk and path helpers for mac-installer-scan."""
import os

#size formatter
def human_size(num):
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(num) < 1024.0:
            return f"{num:3.1f} {unit}"
        num /= 1024.0
    return f"{num:.1f} PB"


def file_size(path):
    """Size of path without following symlinks. Returns 0 if unreadable."""
    try:
        return os.lstat(path).st_size
    except OSError:
        return 0

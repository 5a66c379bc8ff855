#!/usr/bin/env python3
"""Depth-bounded file enumeration: fd when installed, os.scandir otherwise.

Walkers only produce raw paths. Every path, whichever walker produced it, goes
through match_entry(), which owns depth limiting, symlink exclusion and
extension matching, so both strategies give the same candidates.
"""
from __future__ import annotations

import os
import shutil
import stat
import subprocess
from typing import Iterator, List, Optional

from ..core.constants import (
    DIRECT_INSTALLER_EXTENSIONS,
    ARCHIVE_EXTENSIONS,
    SCAN_EXTENSIONS,
    FD_NAMES,
    FD_TIMEOUT_S,
)
from ..core.models import Candidate, ExtensionClass


class WalkerError(Exception):
    """The walker could not enumerate a root."""


def extension_class(name: str) -> Optional[ExtensionClass]:
    ext = os.path.splitext(name)[1][1:].lower()
    if ext in DIRECT_INSTALLER_EXTENSIONS:
        return ExtensionClass.DIRECT_INSTALLER
    if ext in ARCHIVE_EXTENSIONS:
        return ExtensionClass.ARCHIVE
    return None


def entry_depth(root: str, path: str) -> int:
    """Depth of path below root; 1 for direct children, 0 or less if outside."""
    rel = os.path.relpath(path, root)
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return 0
    return len(rel.split(os.sep))


def match_entry(root: str, path: str, max_depth: int) -> Optional[Candidate]:
    """Return a Candidate if path is a regular, non-symlink installer file."""
    depth = entry_depth(root, path)
    if depth < 1 or depth > max_depth:
        return None
    kind = extension_class(os.path.basename(path))
    if kind is None:
        return None
    try:
        st = os.lstat(path)
    except OSError:
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return Candidate(path=path, kind=kind, root=root, depth=depth)


class ScandirWalker:
    """Portable recursive walk. Never descends into symlinked directories."""

    name = "scandir"

    def available(self) -> bool:
        return True

    def walk(self, root: str, max_depth: int) -> Iterator[str]:
        def scan(dirpath, depth):
            try:
                with os.scandir(dirpath) as it:
                    entries = list(it)
            except OSError:
                return
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    continue
                if is_dir:
                    if depth < max_depth:
                        yield from scan(entry.path, depth + 1)
                    continue
                yield entry.path

        yield from scan(root, 1)


class FdWalker:
    """Enumerate with fd (``fdfind`` on Debian/Ubuntu)."""

    name = "fd"

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or _which_any(FD_NAMES)

    def available(self) -> bool:
        return self.binary is not None

    def command(self, root: str, max_depth: int) -> List[str]:
        pattern = r"\.(" + "|".join(sorted(SCAN_EXTENSIONS)) + r")$"
        return [
            self.binary,
            "--type", "f",
            "--max-depth", str(max_depth),
            "--hidden",
            "--no-ignore",
            "--ignore-case",
            "--absolute-path",
            "--print0",
            pattern,
            root,
        ]

    def walk(self, root: str, max_depth: int) -> List[str]:
        """Run fd to completion so a failure surfaces before any path is used."""
        if not self.available():
            raise WalkerError("fd is not installed")
        try:
            proc = subprocess.run(
                self.command(root, max_depth),
                capture_output=True,
                timeout=FD_TIMEOUT_S,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            raise WalkerError(str(e)) from e
        if proc.returncode != 0:
            err = proc.stderr.decode(errors="replace").strip()
            raise WalkerError(err or f"exit code {proc.returncode}")
        return [os.fsdecode(raw) for raw in proc.stdout.split(b"\0") if raw]


def _which_any(names):
    for n in names:
        p = shutil.which(n)
        if p:
            return p
    return None


def probe_walker():
    """Fastest walker available on this machine."""
    fd = FdWalker()
    if fd.available():
        return fd
    return ScandirWalker()

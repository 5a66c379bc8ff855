#!/usr/bin/env python3
"""Archive listing through zipinfo or unzip.

Listings are lazy: the caller can stop reading after a few names and the
listing process is killed and reaped as soon as the iterator is closed.
"""
from __future__ import annotations

import shutil
import subprocess
import threading
from typing import Iterator, List, Optional

from ..core.constants import ZIPINFO_NAME, UNZIP_NAME, LISTING_TIMEOUT_S


class ListingError(Exception):
    """The archive could not be listed (corrupt, unreadable, tool failure)."""


def _stream_lines(args: List[str], timeout: float = LISTING_TIMEOUT_S) -> Iterator[str]:
    """Yield stdout lines of args; raise ListingError on a non-zero exit.

    Closing the generator early kills the process. A watchdog timer kills it
    when the listing takes longer than timeout seconds. stderr is drained on
    a separate thread so a chatty tool cannot stall on a full pipe.
    """
    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
        )
    except OSError as e:
        raise ListingError(str(e)) from e
    err_chunks: List[bytes] = []
    drain = threading.Thread(target=lambda: err_chunks.append(proc.stderr.read()), daemon=True)
    drain.start()
    timer = threading.Timer(timeout, proc.kill)
    timer.daemon = True
    timer.start()
    with proc:
        try:
            for raw in proc.stdout:
                yield raw.decode("utf-8", errors="replace").rstrip("\r\n")
            rc = proc.wait()
        finally:
            timer.cancel()
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            drain.join()
    if rc != 0:
        err = b"".join(err_chunks).decode("utf-8", errors="replace").strip()
        raise ListingError(err.splitlines()[-1] if err else f"exit code {rc}")


class ZipinfoLister:
    """``zipinfo -1``: one entry name per line."""

    name = "zipinfo"

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or shutil.which(ZIPINFO_NAME)

    def available(self) -> bool:
        return self.binary is not None

    def entries(self, path: str) -> Iterator[str]:
        lines = _stream_lines([self.binary, "-1", path])
        try:
            for line in lines:
                if line:
                    yield line
        finally:
            lines.close()


class UnzipLister:
    """``unzip -l``: names taken from the table between the dashed rules.

    Archive:  Example.zip
      Length      Date    Time    Name
    ---------  ---------- -----   ----
            0  2024-01-01 00:00   Example.app/
    ---------                     -------
            0                     1 file
    """

    name = "unzip"

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or shutil.which(UNZIP_NAME)

    def available(self) -> bool:
        return self.binary is not None

    def entries(self, path: str) -> Iterator[str]:
        lines = _stream_lines([self.binary, "-l", path])
        try:
            yield from parse_unzip_listing(lines)
        finally:
            lines.close()


def parse_unzip_listing(lines) -> Iterator[str]:
    """Entry names from ``unzip -l`` output.

    The table starts at the dashed rule right after the ``Name`` header; the
    name column starts where the rule's last dash group does, so names keep
    leading spaces. Lines before the header (zip comments) are ignored.
    """
    prev = ""
    offset = None
    gap = 0
    for line in lines:
        is_rule = line.lstrip().startswith("----")
        if offset is None:
            if is_rule and prev.rstrip().endswith("Name"):
                rule = line.rstrip()
                offset = rule.rfind(" ") + 1
                gap = len(rule[:offset].rstrip())
            prev = line
            continue
        if is_rule:
            return
        if len(line) > offset and line[gap - 1] != " " and not line[gap:offset].strip():
            yield line[offset:]
            continue
        # Length wider than its column shifts the row right.
        parts = line.split(None, 3)
        if len(parts) == 4:
            yield parts[3]


class NullLister:
    """Stand-in when no listing tool is installed."""

    name = "none"

    def available(self) -> bool:
        return False

    def entries(self, path: str) -> Iterator[str]:
        raise ListingError("no archive lister available")


def probe_lister():
    """First available lister: zipinfo, then unzip, else NullLister."""
    for lister in (ZipinfoLister(), UnzipLister()):
        if lister.available():
            return lister
    return NullLister()

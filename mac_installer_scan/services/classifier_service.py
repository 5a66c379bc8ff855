#!/usr/bin/env python3
"""Decide whether a ZIP looks like an app installer from its entry names."""
from __future__ import annotations

import subprocess
from itertools import islice
from typing import Iterable, Optional

from ..core.constants import MAX_INSTALLER_ENTRIES, APP_BUNDLE_SUFFIX
from ..core.models import (
    Candidate,
    ClassificationVerdict,
    ClassificationResult,
    Ok,
    Skip,
    Verdict,
)
from .lister_service import ListingError


def is_app_entry(name: str) -> bool:
    """True if any path component of name ends in .app (e.g. Foo.app/Contents/)."""
    for part in name.replace("\\", "/").split("/"):
        if len(part) > len(APP_BUNDLE_SUFFIX) and part.lower().endswith(APP_BUNDLE_SUFFIX):
            return True
    return False


def verdict_for_entries(names: Iterable[str], max_entries: int = MAX_INSTALLER_ENTRIES) -> ClassificationVerdict:
    """Pure decision over a listing; reads at most max_entries + 1 names."""
    count = 0
    app_entry: Optional[str] = None
    for name in islice(names, max_entries + 1):
        count += 1
        if app_entry is None and is_app_entry(name):
            app_entry = name
    if count > max_entries:
        return ClassificationVerdict(Verdict.NOT_INSTALLER, count, app_entry)
    if app_entry is not None:
        return ClassificationVerdict(Verdict.INSTALLER, count, app_entry)
    return ClassificationVerdict(Verdict.NOT_INSTALLER, count, None)


def classify_archive(path: str, lister) -> ClassificationResult:
    """Ok(verdict), or Skip(reason) when the archive cannot be listed."""
    if lister is None or not lister.available():
        return Skip("no archive lister available")
    listing = None
    try:
        listing = lister.entries(path)
        # A listing that fails before the ceiling is a skip, not a partial verdict.
        names = list(islice(listing, MAX_INSTALLER_ENTRIES + 1))
    except (ListingError, OSError, subprocess.SubprocessError) as e:
        return Skip(str(e) or type(e).__name__)
    finally:
        close = getattr(listing, "close", None)
        if close is not None:
            close()
    return Ok(verdict_for_entries(names))


def is_installer_archive(candidate, lister) -> ClassificationVerdict:
    """Verdict for a Candidate or path. Listing failures are NOT_INSTALLER."""
    path = candidate.path if isinstance(candidate, Candidate) else candidate
    return classify_archive(path, lister).verdict

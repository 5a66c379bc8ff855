"""Transient scan types: roots, candidates and classification results."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .constants import DEFAULT_MAX_DEPTH


class ExtensionClass(enum.Enum):
    DIRECT_INSTALLER = "direct-installer"
    ARCHIVE = "archive"


class Verdict(enum.Enum):
    INSTALLER = "installer"
    NOT_INSTALLER = "not-installer"


@dataclass(frozen=True)
class ScanRoot:
    path: str
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class Candidate:
    """A regular file under a scan root with an allow-listed extension."""

    path: str
    kind: ExtensionClass
    root: str = ""
    depth: int = 1

    @property
    def is_archive(self) -> bool:
        return self.kind is ExtensionClass.ARCHIVE


@dataclass(frozen=True)
class ClassificationVerdict:
    """Outcome of inspecting one archive listing.

    ``entry_count`` stops growing once the entry ceiling is exceeded, so a
    large archive reports ceiling + 1 rather than its real size.
    """

    verdict: Verdict
    entry_count: int = 0
    app_entry: Optional[str] = None

    @property
    def is_installer(self) -> bool:
        return self.verdict is Verdict.INSTALLER


NOT_INSTALLER = ClassificationVerdict(Verdict.NOT_INSTALLER)


@dataclass(frozen=True)
class Ok:
    verdict: ClassificationVerdict


@dataclass(frozen=True)
class Skip:
    reason: str

    @property
    def verdict(self) -> ClassificationVerdict:
        return NOT_INSTALLER


ClassificationResult = Union[Ok, Skip]

#!/usr/bin/env python3
"""Scan logic: walk scan roots, classify archives, yield installer artifacts."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..core import config as config_module
from ..core.models import Candidate, ClassificationResult, Ok, ScanRoot
from .walker_service import ScandirWalker, WalkerError, match_entry, probe_walker
from .lister_service import probe_lister
from .classifier_service import classify_archive


@dataclass(frozen=True)
class Finding:
    """One scanned candidate and, for archives, how it was classified."""

    candidate: Candidate
    result: Optional[ClassificationResult] = None

    @property
    def accepted(self) -> bool:
        if not self.candidate.is_archive:
            return True
        return isinstance(self.result, Ok) and self.result.verdict.is_installer


class Scanner:
    """Walker and lister are probed once per Scanner unless given."""

    def __init__(self, config=None, walker=None, lister=None):
        self.config = config or config_module.build()
        self.walker = walker or probe_walker()
        self.lister = lister or probe_lister()
        self.fallback = ScandirWalker()

    def _raw_paths(self, root: str, max_depth: int) -> Iterable[str]:
        try:
            return self.walker.walk(root, max_depth)
        except WalkerError:
            return self.fallback.walk(root, max_depth)

    def scan_root(self, root: ScanRoot) -> Iterator[Candidate]:
        """Candidates under one root; nothing at all if the root is missing."""
        path = os.path.abspath(os.path.expanduser(root.path))
        if not os.path.isdir(path):
            return
        for raw in self._raw_paths(path, root.max_depth):
            cand = match_entry(path, raw, root.max_depth)
            if cand is not None:
                yield cand

    def scan_all(self, roots: Optional[Iterable[ScanRoot]] = None) -> Iterator[Candidate]:
        """Candidates of every root in order. Overlapping roots are not deduplicated."""
        for root in self.config.scan_roots() if roots is None else roots:
            yield from self.scan_root(root)

    def findings(self, roots: Optional[Iterable[ScanRoot]] = None) -> Iterator[Finding]:
        for cand in self.scan_all(roots):
            if cand.is_archive:
                yield Finding(cand, classify_archive(cand.path, self.lister))
            else:
                yield Finding(cand)

    def scan_all_installers(self, roots: Optional[Iterable[ScanRoot]] = None) -> Iterator[str]:
        """Paths of accepted installer artifacts, one per candidate."""
        for finding in self.findings(roots):
            if finding.accepted:
                yield finding.candidate.path


def scan_root(root: ScanRoot, walker=None) -> Iterator[Candidate]:
    return Scanner(config_module.ScanConfig(), walker=walker).scan_root(root)


def scan_all(roots: Iterable[ScanRoot], walker=None) -> Iterator[Candidate]:
    return Scanner(config_module.ScanConfig(), walker=walker).scan_all(roots)


def scan_all_installers(roots: Optional[Iterable[ScanRoot]] = None, config=None) -> Iterator[str]:
    return Scanner(config).scan_all_installers(roots)

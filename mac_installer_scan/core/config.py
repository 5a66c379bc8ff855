"""Configuration for mac-installer-scan: defaults, JSON file, environment."""
from __future__ import annotations

import json
import math
import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from .constants import (
    HOME,
    SCAN_ROOTS,
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    MAX_DEPTH_ENV,
)
from .models import ScanRoot

CONFIG_PATHS = [
    os.path.join(HOME, ".mac-installer-scan.json"),
    os.path.join(HOME, ".config", "mac-installer-scan", "config.json"),
]

DEFAULTS: dict[str, Any] = {
    "max_depth": DEFAULT_MAX_DEPTH,
    "exclude_roots": [],
    "extra_roots": [],
}

VALID_KEYS = frozenset(DEFAULTS.keys())


@dataclass(frozen=True)
class ScanConfig:
    """Settings shared by every root in one invocation."""

    max_depth: int = DEFAULT_MAX_DEPTH
    roots: tuple = tuple(SCAN_ROOTS)
    exclude_roots: frozenset = field(default_factory=frozenset)

    def scan_roots(self) -> list[ScanRoot]:
        return [
            ScanRoot(path=p, max_depth=self.max_depth)
            for p in self.roots
            if os.path.normpath(p) not in self.exclude_roots
        ]


def config_path() -> str:
    """Preferred config file path."""
    return CONFIG_PATHS[0]


def config_exists() -> bool:
    """True if any known config file exists."""
    for p in CONFIG_PATHS:
        if os.path.isfile(p):
            return True
    return False


def parse_depth(value: Any) -> int | None:
    """Return value as a depth in 1..MAX_DEPTH_LIMIT, or None if unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not re.fullmatch(r"-?[0-9]{1,6}", value):
            return None
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
    elif not isinstance(value, int):
        return None
    depth = int(value)
    if 1 <= depth <= MAX_DEPTH_LIMIT:
        return depth
    return None


def _path_list(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    return [os.path.expanduser(x) for x in v if isinstance(x, str) and x][:200]


def load(paths: list[str] | None = None) -> dict[str, Any]:
    """Load config from first readable file. Returns defaults + overrides."""
    out = dict(DEFAULTS)
    for p in paths if paths is not None else CONFIG_PATHS:
        if not os.path.isfile(p):
            continue
        try:
            with open(p, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                continue
            for k, v in raw.items():
                if k not in VALID_KEYS:
                    continue
                if k == "max_depth":
                    depth = parse_depth(v)
                    if depth is not None:
                        out[k] = depth
                elif k in ("exclude_roots", "extra_roots"):
                    out[k] = _path_list(v)
            return out
        except (OSError, ValueError):
            continue
    return out


def save(cfg: dict[str, Any], path: str | None = None) -> None:
    """Write config to path (default: config_path()). Creates parent dirs."""
    p = path or config_path()
    dirname = os.path.dirname(p)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    to_write = {k: cfg.get(k, DEFAULTS[k]) for k in sorted(VALID_KEYS)}
    with open(p, "w", encoding="utf-8") as f:
        json.dump(to_write, f, indent=2)


def init_config(path: str | None = None) -> str:
    """Create default config file. Returns path used."""
    p = path or config_path()
    save(DEFAULTS, p)
    return p


def build(
    cfg: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    max_depth: int | None = None,
    roots: list[str] | None = None,
) -> ScanConfig:
    """Resolve a ScanConfig: defaults < config file < environment < arguments.

    ``roots`` replaces the default and extra roots entirely.
    """
    cfg = load() if cfg is None else cfg
    environ = os.environ if environ is None else environ

    depth = parse_depth(cfg.get("max_depth")) or DEFAULT_MAX_DEPTH
    env_depth = parse_depth(environ.get(MAX_DEPTH_ENV, ""))
    if env_depth is not None:
        depth = env_depth
    if max_depth is not None:
        depth = max_depth

    if roots:
        root_list = [os.path.abspath(os.path.expanduser(r)) for r in roots]
    else:
        root_list = list(SCAN_ROOTS) + list(cfg.get("extra_roots") or [])
    excl = frozenset(os.path.normpath(p) for p in cfg.get("exclude_roots") or [])
    return ScanConfig(max_depth=depth, roots=tuple(root_list), exclude_roots=excl)

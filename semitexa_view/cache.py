"""Resolution cache and compiled-template cache directory.

The resolution cache holds one result together with the inputs it was
computed from. Nothing invalidates it automatically: a lookup with a
different fingerprint misses, and callers call invalidate() when they know
the filesystem changed underneath (theme switch, module install).
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic
from typing import NamedTuple
from typing import TypeVar

from .paths import fallback_cache_dir

logger = logging.getLogger(__name__)

T = TypeVar("T")

CACHE_DIR_MODE = 0o755


class ResolutionFingerprint(NamedTuple):
    """Inputs a resolution result depends on."""

    active_theme: str
    registry_version: str
    project_root: Path


class ResolutionCache(Generic[T]):
    """Holds the most recent resolution result and its fingerprint."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fingerprint: ResolutionFingerprint | None = None
        self._value: T | None = None

    @property
    def fingerprint(self) -> ResolutionFingerprint | None:
        return self._fingerprint

    def get(self, fingerprint: ResolutionFingerprint) -> T | None:
        """Return the cached value if it was computed from `fingerprint`."""
        with self._lock:
            if self._fingerprint == fingerprint:
                return self._value
            return None

    def store(self, fingerprint: ResolutionFingerprint, value: T) -> None:
        with self._lock:
            self._fingerprint = fingerprint
            self._value = value

    def get_or_create(self, fingerprint: ResolutionFingerprint, factory: Callable[[], T]) -> T:
        """Return the cached value, computing and storing it on a miss."""
        with self._lock:
            if self._fingerprint == fingerprint and self._value is not None:
                return self._value
            if self._fingerprint is not None:
                logger.debug(f"[view:cache] inputs changed, rebuilding ({self._fingerprint} -> {fingerprint})")
            value = factory()
            self._fingerprint = fingerprint
            self._value = value
            return value

    def invalidate(self) -> None:
        """Drop the cached value."""
        with self._lock:
            self._fingerprint = None
            self._value = None


class CacheDirStatus(Enum):
    """How the compiled-template cache directory was obtained."""

    CREATED = "created"
    PRESENT = "present"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class CacheDirResult:
    """Cache directory to use and how it was obtained.

    Attributes:
        path: Directory the template engine should write to
        status: Created, already present, or fallback
        error: Why the preferred directory was not used (fallback only)
        usable: False when neither directory is writable; compiled templates
            must not be written anywhere
    """

    path: Path
    status: CacheDirStatus
    error: str | None = None
    usable: bool = True


def _is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def ensure_cache_dir(preferred: Path, fallback: Path | None = None) -> CacheDirResult:
    """Get a writable compiled-template cache directory.

    Uses `preferred` (created when missing). When it cannot be created or is
    not writable, falls back to `fallback` (default: system temp directory).
    Never raises for filesystem failures; the outcome is in the result.
    """
    error: str | None = None
    existed = preferred.is_dir()
    if not existed:
        try:
            preferred.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            error = f"cannot create {preferred}: {e}"

    if error is None:
        if _is_writable_dir(preferred):
            status = CacheDirStatus.PRESENT if existed else CacheDirStatus.CREATED
            return CacheDirResult(path=preferred, status=status)
        error = f"{preferred} is not writable"

    fallback = fallback or fallback_cache_dir()
    logger.warning(f"[view:cache] {error}; using {fallback}")
    try:
        fallback.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        error = f"{error}; cannot create fallback {fallback}: {e}"
        logger.warning(f"[view:cache] {error}")
        return CacheDirResult(path=fallback, status=CacheDirStatus.FALLBACK, error=error, usable=False)

    if not _is_writable_dir(fallback):
        error = f"{error}; fallback {fallback} is not writable"
        logger.warning(f"[view:cache] {error}")
        return CacheDirResult(path=fallback, status=CacheDirStatus.FALLBACK, error=error, usable=False)
    return CacheDirResult(path=fallback, status=CacheDirStatus.FALLBACK, error=error)


def clear_cache_dir(path: Path) -> int:
    """Remove everything inside a compiled-template cache directory.

    Returns:
        Number of top-level entries removed
    """
    if not path.is_dir():
        return 0

    removed = 0
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1
    logger.info(f"[view:cache] cleared {removed} entries from {path}")
    return removed

"""Filesystem probes used by the resolvers.

Every probe treats an OSError (permission denied, broken mount, ...) as
"directory absent" so a partial filesystem problem never aborts resolution.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def is_directory(path: Path) -> bool:
    """Return True if `path` currently exists as a directory."""
    try:
        return path.is_dir()
    except OSError as e:
        logger.debug(f"[view:fs] cannot stat {path}: {e}")
        return False


def list_subdirectories(root: Path) -> list[Path]:
    """List immediate non-hidden subdirectories of `root`, sorted by name.

    Entries whose name starts with a dot are skipped. Returns an empty list
    when `root` is missing or unreadable.
    """
    try:
        entries = list(root.iterdir())
    except OSError as e:
        logger.debug(f"[view:fs] cannot list {root}: {e}")
        return []

    visible = (entry for entry in entries if not entry.name.startswith("."))
    return sorted((entry for entry in visible if is_directory(entry)), key=lambda p: p.name)


def canonicalize(path: Path) -> Path:
    """Resolve symlinks and `.` segments, falling back to the raw path on failure."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        logger.debug(f"[view:fs] cannot canonicalize {path}: {e}")
        return path

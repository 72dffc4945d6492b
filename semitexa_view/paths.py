"""Project path policy.

This module centralizes the filesystem layout conventions. Resolvers receive
paths via injection; this module provides the project's choices.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT_ENV = "SEMITEXA_PROJECT_ROOT"
FALLBACK_CACHE_DIRNAME = "semitexa-template-cache"


@dataclass(frozen=True)
class ProjectPaths:
    """Fixed directory layout of a project rooted at `root`.

    - src/modules/{Module}/   project modules
    - src/theme/              theme overrides
    - var/cache/templates/    compiled template cache
    - .semitexa/              project settings and module manifest
    """

    root: Path

    @property
    def modules_root(self) -> Path:
        return self.root / "src" / "modules"

    @property
    def theme_root(self) -> Path:
        return self.root / "src" / "theme"

    @property
    def cache_dir(self) -> Path:
        return self.root / "var" / "cache" / "templates"

    @property
    def settings_dir(self) -> Path:
        return self.root / ".semitexa"

    @property
    def env_file(self) -> Path:
        return self.root / ".env"

    @property
    def registry_file(self) -> Path:
        return self.settings_dir / "modules.yaml"

    @classmethod
    def discover(cls, start: Path | None = None) -> "ProjectPaths":
        return cls(root=find_project_root(start))


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root.

    Order:
    1. SEMITEXA_PROJECT_ROOT environment variable
    2. Nearest ancestor of `start` (default: cwd) containing src/modules or .semitexa
    3. `start` itself
    """
    if env_root := os.environ.get(PROJECT_ROOT_ENV):
        return Path(env_root).absolute()

    start = (start or Path.cwd()).absolute()
    for candidate in (start, *start.parents):
        if (candidate / "src" / "modules").is_dir() or (candidate / ".semitexa").is_dir():
            return candidate
    return start


def fallback_cache_dir() -> Path:
    """Cache directory used when the project cache is not writable."""
    return Path(tempfile.gettempdir()) / FALLBACK_CACHE_DIRNAME

"""Theme override discovery for project module layouts.

Two mutually exclusive layouts, selected only by whether a theme is active:

- Named: src/theme/{ThemeName}/{ModuleName}/ (one theme, any module)
- Legacy: src/theme/{ModuleName}/ (flat, each directory overrides one module)

Overrides only exist for modules that have a project layout.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from .fs import canonicalize
from .fs import is_directory
from .fs import list_subdirectories

logger = logging.getLogger(__name__)


def _is_single_segment(name: str) -> bool:
    return name not in (".", "..") and "/" not in name and "\\" not in name


def resolve_theme_overrides(
    project_modules: Mapping[str, Path],
    theme_root: Path,
    active_theme: str,
) -> dict[str, Path]:
    """Map module name -> theme override directory.

    Args:
        project_modules: Result of resolve_project_layouts
        theme_root: Root of the theme tree (src/theme)
        active_theme: Active theme name, empty for the legacy flat layout

    Returns:
        Override directories, keyed by module names present in `project_modules`
    """
    if not is_directory(theme_root):
        logger.debug(f"[view:theme] theme root not found: {theme_root}")
        return {}

    if active_theme:
        return _resolve_named_theme(project_modules, theme_root, active_theme)
    return _resolve_legacy_theme(project_modules, theme_root)


def _resolve_named_theme(project_modules: Mapping[str, Path], theme_root: Path, theme: str) -> dict[str, Path]:
    if not _is_single_segment(theme):
        logger.warning(f"[view:theme] ignoring theme name that is not a directory name: {theme!r}")
        return {}

    theme_dir = theme_root / theme
    if not is_directory(theme_dir):
        logger.debug(f"[view:theme] theme '{theme}' not found under {theme_root}")
        return {}

    overrides: dict[str, Path] = {}
    for module in project_modules:
        module_theme_dir = theme_dir / module
        if is_directory(module_theme_dir):
            overrides[module] = canonicalize(module_theme_dir)
    return overrides


def _resolve_legacy_theme(project_modules: Mapping[str, Path], theme_root: Path) -> dict[str, Path]:
    overrides: dict[str, Path] = {}
    for override_dir in list_subdirectories(theme_root):
        if override_dir.name in project_modules:
            overrides[override_dir.name] = canonicalize(override_dir)
        else:
            logger.debug(f"[view:theme] {override_dir.name}: no matching project module, ignored")
    return overrides

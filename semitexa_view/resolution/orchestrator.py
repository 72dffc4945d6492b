"""Compose declared, theme and project template paths into loader bindings.

Registration order (first binding for an alias wins in the loader):
1. Declared module template paths (theme modules first)
2. Theme overrides, under project-layouts-{Module}
3. Project module layouts, under project-layouts-{Module}

Project layouts are registered even when a theme overrides the module, so
templates the theme does not override fall through to the module's own.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from ..models import ModuleDescriptor
from ..models import PathBinding
from .collector import collect_module_bindings
from .fs import is_directory
from .project import resolve_project_layouts
from .theme import resolve_theme_overrides

logger = logging.getLogger(__name__)

LAYOUT_ALIAS_PREFIX = "project-layouts-"

LAYER_DECLARED = "declared"
LAYER_THEME = "theme"
LAYER_PROJECT = "project"


def layout_alias(module: str) -> str:
    """Alias under which a project module's layout templates are registered."""
    return f"{LAYOUT_ALIAS_PREFIX}{module}"


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolution, layer by layer.

    Attributes:
        declared: Bindings from declared module template paths
        theme_overrides: Module name -> theme override directory
        project_layouts: Module name -> project layout directory
        entries: (layer, binding) pairs in final priority order
    """

    declared: tuple[PathBinding, ...] = ()
    theme_overrides: dict[str, Path] = field(default_factory=dict)
    project_layouts: dict[str, Path] = field(default_factory=dict)
    entries: tuple[tuple[str, PathBinding], ...] = ()

    @property
    def bindings(self) -> list[PathBinding]:
        """Final bindings, highest priority first."""
        return [binding for _layer, binding in self.entries]


def resolve_template_layers(
    modules: Iterable[ModuleDescriptor],
    active_theme: str,
    project_modules_root: Path,
    theme_root: Path,
) -> ResolutionResult:
    """Resolve every template layer from the current filesystem state."""
    declared = collect_module_bindings(modules, active_theme)
    project_layouts = resolve_project_layouts(project_modules_root)
    theme_overrides = resolve_theme_overrides(project_layouts, theme_root, active_theme)

    candidates: list[tuple[str, PathBinding]] = [(LAYER_DECLARED, binding) for binding in declared]
    candidates += [
        (LAYER_THEME, PathBinding(directory=path, alias=layout_alias(module)))
        for module, path in theme_overrides.items()
    ]
    candidates += [
        (LAYER_PROJECT, PathBinding(directory=path, alias=layout_alias(module)))
        for module, path in project_layouts.items()
    ]

    # Directories may vanish between discovery and registration (theme switch, redeploy)
    entries = []
    for layer, binding in candidates:
        if is_directory(binding.directory):
            entries.append((layer, binding))
        else:
            logger.debug(f"[view:resolve] dropping vanished directory {binding.directory}")

    logger.debug(
        f"[view:resolve] theme='{active_theme}' declared={len(declared)} "
        f"overrides={len(theme_overrides)} layouts={len(project_layouts)} bindings={len(entries)}"
    )

    return ResolutionResult(
        declared=tuple(declared),
        theme_overrides=theme_overrides,
        project_layouts=project_layouts,
        entries=tuple(entries),
    )


def build_bindings(
    modules: Iterable[ModuleDescriptor],
    active_theme: str,
    project_modules_root: Path,
    theme_root: Path,
) -> list[PathBinding]:
    """Build the ordered (directory, alias) bindings for the template loader."""
    return resolve_template_layers(modules, active_theme, project_modules_root, theme_root).bindings

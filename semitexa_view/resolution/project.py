"""Project module layout discovery.

Each directory under the modules root is a module. A module's templates live
in exactly one of two places:

- Application/View/templates/ (standard module layout)
- Layout/ (legacy layout)

When both exist the standard directory wins, so that layout-relative
references such as `@project-layouts-Blog/layout/base.html.twig` written for
the standard layout keep resolving.
"""

import logging
from pathlib import Path

from .fs import canonicalize
from .fs import is_directory
from .fs import list_subdirectories

logger = logging.getLogger(__name__)

STANDARD_TEMPLATES_SUBPATH = Path("Application") / "View" / "templates"
LEGACY_LAYOUT_SUBPATH = Path("Layout")


def find_module_template_dir(module_dir: Path) -> Path | None:
    """Pick the canonical template directory of one module, or None."""
    for candidate in (module_dir / STANDARD_TEMPLATES_SUBPATH, module_dir / LEGACY_LAYOUT_SUBPATH):
        if is_directory(candidate):
            return canonicalize(candidate)
    return None


def resolve_project_layouts(modules_root: Path) -> dict[str, Path]:
    """Map module name -> template directory for every module under `modules_root`.

    Modules without either template directory are omitted. A missing
    `modules_root` yields an empty map.
    """
    if not is_directory(modules_root):
        logger.debug(f"[view:project] modules root not found: {modules_root}")
        return {}

    layouts: dict[str, Path] = {}
    for module_dir in list_subdirectories(modules_root):
        template_dir = find_module_template_dir(module_dir)
        if template_dir is None:
            logger.debug(f"[view:project] {module_dir.name}: no template directory")
            continue
        layouts[module_dir.name] = template_dir
    return layouts

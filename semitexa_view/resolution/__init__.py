"""Template path resolution and override layering.

Public API:
- collect_module_bindings: Declared module template paths -> bindings
- resolve_project_layouts: Module name -> project layout directory
- resolve_theme_overrides: Module name -> theme override directory
- build_bindings / resolve_template_layers: Compose everything in priority order
- layout_alias: Alias convention for project layouts
"""

from .collector import collect_module_bindings
from .orchestrator import LAYOUT_ALIAS_PREFIX
from .orchestrator import ResolutionResult
from .orchestrator import build_bindings
from .orchestrator import layout_alias
from .orchestrator import resolve_template_layers
from .project import resolve_project_layouts
from .theme import resolve_theme_overrides

__all__ = [
    "LAYOUT_ALIAS_PREFIX",
    "ResolutionResult",
    "build_bindings",
    "collect_module_bindings",
    "layout_alias",
    "resolve_project_layouts",
    "resolve_template_layers",
    "resolve_theme_overrides",
]

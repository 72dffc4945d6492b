"""Template path layering for Semitexa modules and themes.

Public API:
- ModuleDescriptor, PathBinding: Data model
- build_bindings / resolve_template_layers: Ordered template loader bindings
- TemplateEnvironmentFactory, BindingLoader: Jinja2 integration
- ProjectPaths, ViewSettings: Project layout and active theme
"""

from .environment import BindingLoader
from .environment import TemplateEnvironmentFactory
from .models import ModuleDescriptor
from .models import PathBinding
from .paths import ProjectPaths
from .registry import RegistryError
from .registry import load_modules
from .registry import load_registry_file
from .resolution import build_bindings
from .resolution import layout_alias
from .resolution import resolve_template_layers
from .settings import ViewSettings

__all__ = [
    "BindingLoader",
    "ModuleDescriptor",
    "PathBinding",
    "ProjectPaths",
    "RegistryError",
    "TemplateEnvironmentFactory",
    "ViewSettings",
    "build_bindings",
    "layout_alias",
    "load_modules",
    "load_registry_file",
    "resolve_template_layers",
]

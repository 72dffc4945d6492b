"""Jinja2 environment built from resolved template bindings.

Templates are addressed by namespace, the same way the bindings are keyed:

    {% extends "@project-layouts-Blog/layout/base.html.twig" %}
    {% include "@classic/partials/header.html.twig" %}

Within one alias, directories are searched in binding order, so a theme
override shadows the module's own template of the same name while every
other template still falls through to the module.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from typing import Protocol

from jinja2 import BaseLoader
from jinja2 import Environment
from jinja2 import FileSystemBytecodeCache
from jinja2 import StrictUndefined
from jinja2 import TemplateNotFound
from jinja2 import Undefined
from jinja2 import pass_context
from jinja2 import select_autoescape
from jinja2.loaders import split_template_path
from jinja2.runtime import Context
from markupsafe import Markup

from .cache import CacheDirResult
from .cache import ResolutionCache
from .cache import ResolutionFingerprint
from .cache import ensure_cache_dir
from .models import ModuleDescriptor
from .models import PathBinding
from .paths import ProjectPaths
from .registry import registry_version
from .resolution import ResolutionResult
from .resolution import resolve_template_layers
from .settings import ViewSettings
from .settings import get_settings

logger = logging.getLogger(__name__)

# Namespace for template names without an @alias prefix
MAIN_NAMESPACE = "__main__"


def parse_template_name(name: str) -> tuple[str, str]:
    """Split `@alias/path` into (alias, path); plain names go to the main namespace."""
    if not name.startswith("@"):
        return MAIN_NAMESPACE, name
    alias, sep, relative = name[1:].partition("/")
    if not sep or not alias or not relative:
        raise TemplateNotFound(name)
    return alias, relative


class BindingLoader(BaseLoader):
    """Jinja2 loader over ordered (directory, alias) bindings."""

    def __init__(self, bindings: Iterable[PathBinding], encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.namespaces: dict[str, list[Path]] = {}
        for binding in bindings:
            self.namespaces.setdefault(binding.alias, []).append(binding.directory)

    def find_template(self, name: str) -> Path | None:
        """Return the file a template name resolves to, or None."""
        alias, relative = parse_template_name(name)
        pieces = split_template_path(relative)
        for directory in self.namespaces.get(alias, []):
            candidate = Path(directory, *pieces)
            if candidate.is_file():
                return candidate
        return None

    def get_source(self, environment: Environment, template: str) -> tuple[str, str, Callable[[], bool]]:
        filename = self.find_template(template)
        if filename is None:
            raise TemplateNotFound(template)

        with open(filename, encoding=self.encoding) as f:
            source = f.read()
        mtime = os.path.getmtime(filename)

        def uptodate() -> bool:
            try:
                return os.path.getmtime(filename) == mtime
            except OSError:
                return False

        return source, os.path.normpath(filename), uptodate

    def list_templates(self) -> list[str]:
        found = set()
        for alias, directories in self.namespaces.items():
            for directory in directories:
                for path in directory.rglob("*"):
                    if not path.is_file():
                        continue
                    relative = path.relative_to(directory).as_posix()
                    found.add(relative if alias == MAIN_NAMESPACE else f"@{alias}/{relative}")
        return sorted(found)


class SlotRenderer(Protocol):
    """Renders one layout slot of a page (supplied by the layout system)."""

    def __call__(
        self,
        page_handle: str,
        slot: str,
        context: dict[str, Any],
        extra_context: dict[str, Any],
        layout_frame: Any,
    ) -> str: ...


def register_functions(environment: Environment, slot_renderer: SlotRenderer | None) -> None:
    """Register template functions; layout_slot only when a slot renderer exists."""
    if slot_renderer is None:
        return

    @pass_context
    def layout_slot(context: Context, slot: str, extra_context: dict[str, Any] | None = None) -> Markup:
        page_handle = context.get("page_handle") or context.get("layout_handle")
        if not page_handle:
            return Markup("")
        rendered = slot_renderer(
            page_handle, slot, dict(context.get_all()), extra_context or {}, context.get("layout_frame")
        )
        return Markup(rendered)

    environment.globals["layout_slot"] = layout_slot


class TemplateEnvironmentFactory:
    """Builds and caches the Jinja2 environment for a project.

    The environment is rebuilt when the active theme, the module list or the
    project root changes; call reset() after anything else changes on disk
    (new module directory, new theme override).
    """

    def __init__(
        self,
        project: ProjectPaths,
        settings: ViewSettings | None = None,
        modules_provider: Callable[[], Sequence[ModuleDescriptor]] | None = None,
        slot_renderer: SlotRenderer | None = None,
    ) -> None:
        self.project = project
        self.settings = settings or get_settings(project)
        self.modules_provider = modules_provider or (lambda: [])
        self.slot_renderer = slot_renderer
        self.cache_dir: CacheDirResult | None = None
        self._cache: ResolutionCache[Environment] = ResolutionCache()

    def fingerprint(self, modules: Sequence[ModuleDescriptor], active_theme: str) -> ResolutionFingerprint:
        return ResolutionFingerprint(
            active_theme=active_theme,
            registry_version=registry_version(modules),
            project_root=self.project.root,
        )

    def resolve(self) -> ResolutionResult:
        """Resolve template layers from the current state, bypassing the cache."""
        return resolve_template_layers(
            self.modules_provider(),
            self.settings.get_active_theme(),
            self.project.modules_root,
            self.project.theme_root,
        )

    def get(self) -> Environment:
        """Get the environment for the current inputs, building it if needed."""
        modules = list(self.modules_provider())
        active_theme = self.settings.get_active_theme()
        fingerprint = self.fingerprint(modules, active_theme)
        return self._cache.get_or_create(fingerprint, lambda: self._create(modules, active_theme))

    def reset(self) -> None:
        """Drop the cached environment; the next get() rebuilds it."""
        self._cache.invalidate()

    def _create(self, modules: Sequence[ModuleDescriptor], active_theme: str) -> Environment:
        result = resolve_template_layers(modules, active_theme, self.project.modules_root, self.project.theme_root)
        self.cache_dir = ensure_cache_dir(self.project.cache_dir)
        options = self.settings.get_environment_options()
        bytecode_cache = FileSystemBytecodeCache(str(self.cache_dir.path)) if self.cache_dir.usable else None

        environment = Environment(
            loader=BindingLoader(result.bindings),
            bytecode_cache=bytecode_cache,
            auto_reload=options["auto_reload"],
            undefined=StrictUndefined if options["strict_variables"] else Undefined,
            autoescape=select_autoescape(enabled_extensions=("html", "htm", "xml", "twig")),
        )
        register_functions(environment, self.slot_renderer)

        logger.info(
            f"[view:env] built environment theme='{active_theme}' bindings={len(result.entries)} "
            f"cache={self.cache_dir.path if bytecode_cache else None} ({self.cache_dir.status.value})"
        )
        return environment

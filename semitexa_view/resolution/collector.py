"""Declared module template paths -> ordered bindings."""

import logging
from collections.abc import Iterable

from ..models import ModuleDescriptor
from ..models import PathBinding
from .fs import is_directory

logger = logging.getLogger(__name__)


def order_modules(modules: Iterable[ModuleDescriptor], active_theme: str) -> list[ModuleDescriptor]:
    """Order modules for registration: theme modules first, then the rest.

    When `active_theme` is set, only theme modules matching it by name or
    alias are kept. No match simply means no theme module is registered.
    """
    themes: list[ModuleDescriptor] = []
    others: list[ModuleDescriptor] = []
    for module in modules:
        (themes if module.is_theme else others).append(module)

    if active_theme:
        themes = [module for module in themes if module.matches_theme(active_theme)]
        if not themes:
            logger.debug(f"[view:collect] no theme module matches '{active_theme}'")

    return themes + others


def collect_module_bindings(modules: Iterable[ModuleDescriptor], active_theme: str) -> list[PathBinding]:
    """Turn declared module template paths into ordered (path, alias) bindings.

    Args:
        modules: Module descriptors in registry order
        active_theme: Active theme name, empty for none

    Returns:
        Bindings with every theme module binding ahead of non-theme ones.
        Declared paths that are not existing directories are skipped.
    """
    bindings: list[PathBinding] = []
    for module in order_modules(modules, active_theme):
        for path in module.template_paths:
            if not is_directory(path):
                logger.debug(f"[view:collect] {module.name}: skipping missing path {path}")
                continue
            for alias in module.effective_aliases:
                bindings.append(PathBinding(directory=path, alias=alias))
    return bindings

"""Module registry adapter.

The module registry is owned elsewhere; it hands over plain records such as::

    {"name": "blog", "composerType": "semitexa-theme",
     "templatePaths": ["/app/vendor/acme/blog/templates"], "aliases": ["blog", "classic"]}

This module validates those records into ModuleDescriptor instances. A
malformed record is the one hard failure of template resolution.
"""

import hashlib
import json
import logging
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import THEME_MODULE_TYPE
from .models import ModuleDescriptor

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when module registry data cannot be turned into descriptors."""


def descriptor_from_record(record: Mapping[str, Any], base_dir: Path | None = None) -> ModuleDescriptor:
    """Build a ModuleDescriptor from one registry record.

    Accepts both the registry's camelCase keys (composerType, templatePaths)
    and snake_case keys (type, template_paths).

    Args:
        record: Raw registry record
        base_dir: Directory that relative template paths are relative to

    Raises:
        RegistryError: Record is not a mapping or fails validation
    """
    if not isinstance(record, Mapping):
        raise RegistryError(f"Module record must be a mapping, got {type(record).__name__}")

    module_type = record.get("composerType", record.get("type", ""))
    paths = record.get("templatePaths", record.get("template_paths")) or []
    aliases = record.get("aliases")
    if isinstance(paths, str) or isinstance(aliases, str):
        raise RegistryError(f"Module '{record.get('name')}': templatePaths and aliases must be lists")

    try:
        template_paths = [Path(p) for p in paths]
        if base_dir is not None:
            template_paths = [p if p.is_absolute() else base_dir / p for p in template_paths]
        return ModuleDescriptor(
            name=record.get("name"),
            is_theme=module_type == THEME_MODULE_TYPE,
            template_paths=template_paths,
            aliases=aliases,
        )
    except (ValidationError, TypeError) as e:
        raise RegistryError(f"Invalid module record {dict(record)!r}: {e}") from e


def load_modules(records: Iterable[Mapping[str, Any]], base_dir: Path | None = None) -> list[ModuleDescriptor]:
    """Validate registry records into descriptors, preserving registry order."""
    return [descriptor_from_record(record, base_dir) for record in records]


def load_registry_file(path: Path) -> list[ModuleDescriptor]:
    """Load module descriptors from a YAML manifest.

    The manifest has a top-level `modules:` list of registry records.
    Relative template paths are resolved against the manifest's directory.

    Raises:
        RegistryError: File missing, unreadable, or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise RegistryError(f"Cannot read module registry {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RegistryError(f"Invalid YAML in module registry {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise RegistryError(f"Module registry {path} must contain a mapping with a 'modules' list")

    records = data.get("modules") or []
    if not isinstance(records, list):
        raise RegistryError(f"'modules' in {path} must be a list")

    modules = load_modules(records, base_dir=path.parent.absolute())
    logger.debug(f"[view:registry] loaded {len(modules)} modules from {path}")
    return modules


def registry_version(modules: Iterable[ModuleDescriptor]) -> str:
    """Fingerprint of a module list; identical input gives an identical version."""
    payload = [module.model_dump(mode="json") for module in modules]
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()

"""Data models for template path resolution."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

# Registry type tag that marks a module as a theme
THEME_MODULE_TYPE = "semitexa-theme"


class ModuleDescriptor(BaseModel):
    """Installed module as supplied by the module registry.

    Attributes:
        name: Module name
        is_theme: True when the module is a theme (overrides other modules' templates)
        template_paths: Declared template directories, in priority order
        aliases: Namespace aliases to bind the paths under. None (not given)
            means the module name; an explicit empty tuple binds nothing
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Module name")
    is_theme: bool = Field(default=False, description="Module is a theme")
    template_paths: tuple[Path, ...] = Field(default=(), description="Declared template directories")
    aliases: tuple[str, ...] | None = Field(default=None, description="Template namespace aliases")

    @field_validator("aliases")
    @classmethod
    def _dedupe_aliases(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is None:
            return None
        # Alias list is a set with a stable order
        return tuple(dict.fromkeys(str(alias) for alias in value))

    @property
    def effective_aliases(self) -> tuple[str, ...]:
        """Aliases actually bound for this module."""
        if self.aliases is None:
            return (self.name,)
        return self.aliases

    def matches_theme(self, theme: str) -> bool:
        """Check whether this module is the theme selected by `theme`."""
        return theme in (self.aliases or ()) or self.name == theme


@dataclass(frozen=True)
class PathBinding:
    """A single (directory, alias) pair registered with the template loader."""

    directory: Path
    alias: str

    def __str__(self) -> str:
        return f"@{self.alias} -> {self.directory}"

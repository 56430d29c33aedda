"""Pydantic models for the component registry manifest.

The manifest (``registry.yaml``) lists every component the registry can
vendor. Descriptors are validated here, at the provider boundary, so the
sync engine can rely on a non-empty file list of safe relative names.
"""

from __future__ import annotations

import re
from enum import StrEnum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


class ComponentCategory(StrEnum):
    """Catalog category of a component."""

    PRIMITIVE = "primitive"
    INPUT = "input"
    LAYOUT = "layout"
    FEEDBACK = "feedback"
    NAVIGATION = "navigation"
    PATTERN = "pattern"
    DISPLAY = "display"


class ComponentDescriptor(BaseModel):
    """Registry metadata for a single component.

    Attributes:
        name: Unique component name, also the name of its directory.
        description: One-line description for listings.
        version: Opaque version string, only ever compared for equality.
        files: Ordered file names relative to the component directory.
        dependencies: Third-party packages the component needs.
        registry_dependencies: Other components this one builds on.
        category: Catalog category.
        tags: Search tags.
        notes: Post-install instructions shown after ``add``.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(description="Unique component name")
    description: str = Field(default="", description="Human-readable description")
    version: str = Field(description="Component version")
    files: list[str] = Field(min_length=1, description="Files relative to the component dir")
    dependencies: dict[str, str] = Field(
        default_factory=dict, description="Package dependencies (name -> version range)"
    )
    registry_dependencies: list[str] = Field(
        default_factory=list,
        alias="registryDependencies",
        description="Components this component depends on",
    )
    category: ComponentCategory = Field(default=ComponentCategory.DISPLAY)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = Field(default=None, description="Post-install notes")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names double as directory names, so keep them to a safe charset."""
        if not _NAME_PATTERN.match(v):
            raise ValueError(
                f"Invalid component name {v!r}: use lowercase letters, digits and hyphens"
            )
        return v

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Ensure version is not empty."""
        if not v:
            raise ValueError("Component version cannot be empty")
        return v

    @field_validator("files")
    @classmethod
    def validate_files(cls, v: list[str]) -> list[str]:
        """File names must be unique and stay inside the component directory."""
        seen: set[str] = set()
        for filename in v:
            path = PurePosixPath(filename)
            if not filename or path.is_absolute() or ".." in path.parts:
                raise ValueError(f"Invalid component file name: {filename!r}")
            if filename in seen:
                raise ValueError(f"Duplicate component file name: {filename}")
            seen.add(filename)
        return v

    def matches(self, query: str) -> bool:
        """Case-insensitive search over name, description and tags."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


class RegistryManifest(BaseModel):
    """Complete registry manifest.

    Attributes:
        version: Manifest schema version.
        base_url: Remote base URL the registry is published under.
        components: All available components.
    """

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(default="1.0.0")
    base_url: str | None = Field(default=None, alias="baseUrl")
    components: list[ComponentDescriptor] = Field(default_factory=list)

    @field_validator("components")
    @classmethod
    def validate_unique_names(cls, v: list[ComponentDescriptor]) -> list[ComponentDescriptor]:
        """Ensure all component names are unique."""
        names = [c.name for c in v]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate component names: {', '.join(duplicates)}")
        return v

    def get_component(self, name: str) -> ComponentDescriptor | None:
        """Get a component by name."""
        for component in self.components:
            if component.name == name:
                return component
        return None

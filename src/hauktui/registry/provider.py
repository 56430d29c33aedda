"""Component source providers.

A provider answers two questions for the sync engine: what a component
looks like upstream (its descriptor) and what its files currently contain.
The engine never assumes how files are obtained.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog
import yaml
from pydantic import ValidationError

from hauktui.core.exceptions import (
    ComponentFetchError,
    ComponentNotFoundError,
    RegistryError,
)
from hauktui.registry.models import ComponentDescriptor, RegistryManifest

logger = structlog.get_logger()

BUNDLED_REGISTRY_DIR = Path(__file__).parent / "data"
MANIFEST_FILE = "registry.yaml"
COMPONENTS_DIR = "components"


class ComponentSourceProvider(Protocol):
    """Source of upstream component descriptors and file contents."""

    def get_component(self, name: str) -> ComponentDescriptor | None:
        """Return the descriptor for ``name``, or None if it is unknown."""
        ...

    def list_components(self) -> list[ComponentDescriptor]:
        """Return every component in the catalog."""
        ...

    def fetch_files(self, name: str) -> dict[str, str]:
        """Return the component's files as ``{file name: content}``.

        Raises:
            ComponentNotFoundError: If the component is unknown.
            ComponentFetchError: If the files cannot be retrieved.
        """
        ...


class LocalRegistryProvider:
    """Provider backed by a registry directory on disk.

    Layout::

        <registry_dir>/registry.yaml
        <registry_dir>/components/<name>/<file>

    The manifest is read lazily once and cached for the life of the
    provider, so one command sees one consistent catalog snapshot.
    """

    def __init__(self, registry_dir: Path | None = None) -> None:
        """Initialize the provider.

        Args:
            registry_dir: Registry root. Defaults to the registry bundled
                with the package.
        """
        self.registry_dir = registry_dir or BUNDLED_REGISTRY_DIR
        self._manifest: RegistryManifest | None = None
        self._log = logger.bind(service="registry_provider", registry=str(self.registry_dir))

    @property
    def manifest(self) -> RegistryManifest:
        """The parsed registry manifest.

        Raises:
            RegistryError: If the manifest is missing or invalid.
        """
        if self._manifest is None:
            self._manifest = self._load_manifest()
        return self._manifest

    def _load_manifest(self) -> RegistryManifest:
        manifest_path = self.registry_dir / MANIFEST_FILE
        if not manifest_path.exists():
            raise RegistryError(f"Registry manifest not found: {manifest_path}")

        try:
            data = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise RegistryError(f"Could not parse {manifest_path}: {e}") from e

        try:
            manifest = RegistryManifest.model_validate(data or {})
        except ValidationError as e:
            raise RegistryError(f"Invalid registry manifest {manifest_path}: {e}") from e

        self._log.debug("registry_loaded", count=len(manifest.components))
        return manifest

    def get_component(self, name: str) -> ComponentDescriptor | None:
        return self.manifest.get_component(name)

    def list_components(self) -> list[ComponentDescriptor]:
        return list(self.manifest.components)

    def component_source_dir(self, name: str) -> Path:
        """Directory that holds the upstream files of a component."""
        return self.registry_dir / COMPONENTS_DIR / name

    def fetch_files(self, name: str) -> dict[str, str]:
        descriptor = self.get_component(name)
        if descriptor is None:
            raise ComponentNotFoundError(name)

        source_dir = self.component_source_dir(name)
        files: dict[str, str] = {}
        for filename in descriptor.files:
            source_file = source_dir / filename
            if not source_file.is_file():
                raise ComponentFetchError(name, f"missing upstream file {filename}")
            try:
                files[filename] = source_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ComponentFetchError(name, f"cannot read {filename}: {e}") from e

        self._log.debug("component_fetched", component=name, files=len(files))
        return files


def search_components(
    provider: ComponentSourceProvider,
    query: str | None = None,
    category: str | None = None,
) -> list[ComponentDescriptor]:
    """List catalog components matching a search query and/or category."""
    components = provider.list_components()
    if query:
        components = [c for c in components if c.matches(query)]
    if category:
        components = [c for c in components if c.category == category.lower()]
    return components


def validate_components(
    provider: ComponentSourceProvider,
    names: list[str],
) -> tuple[list[ComponentDescriptor], list[str]]:
    """Split requested names into known descriptors and unknown names."""
    valid: list[ComponentDescriptor] = []
    invalid: list[str] = []
    for name in names:
        descriptor = provider.get_component(name)
        if descriptor is None:
            invalid.append(name)
        else:
            valid.append(descriptor)
    return valid, invalid


def resolve_dependencies(provider: ComponentSourceProvider, names: list[str]) -> list[str]:
    """Expand component names with their registry dependencies.

    Dependencies come before their dependents, each name appears once, and
    the relative order of the requested names is kept. Unknown names are
    passed through unchanged so the caller can report them.
    """
    ordered: list[str] = []
    visiting: set[str] = set()

    def visit(name: str) -> None:
        if name in ordered or name in visiting:
            return
        visiting.add(name)
        descriptor = provider.get_component(name)
        if descriptor is not None:
            for dependency in descriptor.registry_dependencies:
                visit(dependency)
        visiting.discard(name)
        ordered.append(name)

    for name in names:
        visit(name)
    return ordered

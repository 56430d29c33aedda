"""Component registry: catalog models and source providers."""

from hauktui.registry.models import ComponentCategory, ComponentDescriptor, RegistryManifest
from hauktui.registry.provider import (
    BUNDLED_REGISTRY_DIR,
    ComponentSourceProvider,
    LocalRegistryProvider,
    resolve_dependencies,
    search_components,
    validate_components,
)

__all__ = [
    "BUNDLED_REGISTRY_DIR",
    "ComponentCategory",
    "ComponentDescriptor",
    "ComponentSourceProvider",
    "LocalRegistryProvider",
    "RegistryManifest",
    "resolve_dependencies",
    "search_components",
    "validate_components",
]

"""hauktui custom exceptions.

Per-item problems inside a batch (unknown name, failed fetch) are reported
as outcomes rather than raised; these exceptions cover the precondition
failures that abort a single request. Storage ``OSError``s are never
wrapped.
"""

from __future__ import annotations

from pathlib import Path


class HauktuiError(Exception):
    """Base exception for hauktui errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(HauktuiError):
    """Raised when the project configuration cannot be read or validated."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfigError):
    """Raised when a command needs an initialized project and there is none."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Project not initialized: {path} not found", path=path)


class LedgerError(HauktuiError):
    """Raised when the lock file exists but cannot be parsed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class RegistryError(HauktuiError):
    """Raised when the component registry manifest is missing or invalid."""


class ComponentNotFoundError(HauktuiError):
    """Raised when a component is not in the registry catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component not found in registry: {name}")


class ComponentNotInstalledError(HauktuiError):
    """Raised when an operation requires a component that is not installed."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component is not installed: {name}")


class ComponentFetchError(HauktuiError):
    """Raised when the source provider cannot return a component's files."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to fetch {name}: {reason}")

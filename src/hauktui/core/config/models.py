"""Pydantic models for the per-project ``hauk.config.json`` file.

The config file lives at the root of the consumer project and tells the
CLI where vendored components go and which registry to read from.
"""

from __future__ import annotations

import json
import os
from pathlib import Path, PurePosixPath

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hauktui.core.exceptions import ConfigError, ConfigNotFoundError

logger = structlog.get_logger()

CONFIG_FILE = "hauk.config.json"
SCHEMA_URL = "https://hauktui.dev/schema/config.json"
DEFAULT_COMPONENT_DIR = "src/tui/components"
DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/hauktui/hauktui/main/packages/registry"

# Overrides registry_path from the config file
REGISTRY_PATH_ENV = "HAUKTUI_REGISTRY_PATH"


class ProjectConfig(BaseModel):
    """Per-project configuration.

    Attributes:
        schema_: JSON schema URL, stored as ``$schema``.
        component_dir: Directory (relative to the project root) that holds
            one sub-directory per vendored component.
        tokens_path: Location of the theme tokens file.
        registry_url: Remote registry location, kept for reference only.
        registry_path: Local registry directory; the bundled registry is
            used when unset.
        aliases: Import path aliases for the consumer's build tooling.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    schema_: str | None = Field(default=SCHEMA_URL, alias="$schema")
    component_dir: str = Field(default=DEFAULT_COMPONENT_DIR, alias="componentDir")
    tokens_path: str | None = Field(default="src/tui/tokens.ts", alias="tokensPath")
    registry_url: str | None = Field(default=DEFAULT_REGISTRY_URL, alias="registryUrl")
    registry_path: str | None = Field(default=None, alias="registryPath")
    aliases: dict[str, str] = Field(default_factory=lambda: {"@/tui": "./src/tui"})

    @field_validator("component_dir")
    @classmethod
    def validate_component_dir(cls, v: str) -> str:
        """Component directory must be a non-empty path inside the project."""
        if not v:
            raise ValueError("componentDir cannot be empty")
        path = PurePosixPath(v.replace("\\", "/"))
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"componentDir must be relative to the project root: {v}")
        return path.as_posix()

    def resolved_registry_path(self, cwd: Path) -> Path | None:
        """Registry directory to read from, or None for the bundled registry."""
        override = os.environ.get(REGISTRY_PATH_ENV)
        if override:
            return Path(override).expanduser()
        if self.registry_path:
            path = Path(self.registry_path).expanduser()
            return path if path.is_absolute() else cwd / path
        return None

    def to_json(self) -> str:
        """Serialize the config the way it is written to disk."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, indent=2) + "\n"


def config_path(cwd: Path) -> Path:
    """Path of the config file for a project root."""
    return cwd / CONFIG_FILE


def is_initialized(cwd: Path) -> bool:
    """Check whether ``hauktui init`` has been run in a project."""
    return config_path(cwd).exists()


def load_config(cwd: Path) -> ProjectConfig:
    """Load and validate the project config.

    Args:
        cwd: Project root directory.

    Returns:
        Validated ProjectConfig.

    Raises:
        ConfigNotFoundError: If the project has not been initialized.
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = config_path(cwd)
    if not path.exists():
        raise ConfigNotFoundError(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse {CONFIG_FILE}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE} must contain a JSON object", path=path)

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid {CONFIG_FILE}: {e}", path=path) from e

    logger.debug("config_loaded", path=str(path), component_dir=config.component_dir)
    return config


def save_config(config: ProjectConfig, cwd: Path) -> Path:
    """Write the project config, replacing any existing file.

    Returns:
        Path of the written file.
    """
    path = config_path(cwd)
    path.write_text(config.to_json(), encoding="utf-8")
    logger.info("config_saved", path=str(path))
    return path

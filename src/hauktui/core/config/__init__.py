"""Project configuration with Pydantic validation."""

from hauktui.core.config.models import (
    CONFIG_FILE,
    ProjectConfig,
    is_initialized,
    load_config,
    save_config,
)

__all__ = [
    "CONFIG_FILE",
    "ProjectConfig",
    "is_initialized",
    "load_config",
    "save_config",
]

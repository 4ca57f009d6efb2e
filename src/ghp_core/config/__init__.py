"""Configuration."""

from .project import CONFIG_FILE, ProjectConfig, load_project_config
from .settings import Settings

__all__ = [
    "CONFIG_FILE",
    "ProjectConfig",
    "Settings",
    "load_project_config",
]

"""Per-repository project configuration loaded from ghp.yml."""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..utils.urls import build_org_project_url, build_project_url

logger = logging.getLogger(__name__)

CONFIG_FILE = "ghp.yml"


class ProjectConfig(BaseModel):
    """Which GitHub project a repository works against."""

    owner: str = Field(..., min_length=1)
    project_number: int = Field(..., ge=1)
    type: Literal["user", "organization"] = "user"

    @property
    def url(self) -> str:
        """Browser URL of the project."""
        if self.type == "organization":
            return build_org_project_url(self.owner, self.project_number)
        return build_project_url(self.owner, self.project_number)


def load_project_config(path: Path) -> ProjectConfig | None:
    """Load project configuration.

    Args:
        path: A ghp.yml file, or a directory containing one

    Returns:
        The configuration, or None if the file is missing or invalid
    """
    config_path = path / CONFIG_FILE if path.is_dir() else path

    if not config_path.exists():
        logger.debug("No %s found at %s", CONFIG_FILE, config_path)
        return None

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s: %s", config_path, e)
        return None
    except OSError as e:
        logger.warning("Error reading %s: %s", config_path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("%s is empty or not a mapping", config_path)
        return None

    try:
        config = ProjectConfig(**data)
    except ValidationError as e:
        logger.warning("Invalid project configuration in %s: %s", config_path, e)
        return None

    logger.info("Loaded %s for %s project #%d", CONFIG_FILE, config.owner, config.project_number)
    return config

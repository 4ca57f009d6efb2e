"""Library settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..models import EmptyListPolicy


class Settings(BaseSettings):
    """Settings read from ``GHP_*`` environment variables."""

    token: str | None = Field(
        default=None,
        description="GitHub token; when unset, GITHUB_TOKEN or the gh CLI is used",
    )

    base_url: str = Field(
        default="api.github.com",
        description="API host (use a custom host for GitHub Enterprise)",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    branch_pattern: str = Field(
        default="{user}/{number}-{title}",
        description="Branch name pattern with {user}, {number}, {title} and {repo}",
    )

    branch_max_length: int = Field(
        default=60,
        ge=1,
        description="Maximum generated branch name length",
    )

    empty_override_policy: EmptyListPolicy = Field(
        default=EmptyListPolicy.IGNORE,
        description="Whether an explicitly empty labels/assignees override clears the list",
    )

    model_config = {
        "env_prefix": "GHP_",
    }

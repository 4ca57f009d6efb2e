"""Normalized project item model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .github import Label

# Rank given to items with no status, or a status missing from the project's options
SENTINEL_RANK = 999

ItemType = Literal["issue", "pull_request", "draft"]
ItemState = Literal["open", "closed", "merged"]


class NormalizedItem(BaseModel):
    """A project item flattened for display, filtering and automation."""

    model_config = ConfigDict(frozen=True)

    id: str  # "PVTI_..." project item node ID
    title: str = "Untitled"
    number: int | None = None
    type: ItemType
    issue_type: str | None = None
    status: str | None = None
    status_index: int = SENTINEL_RANK
    state: ItemState | None = None
    assignees: list[str] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)
    repository: str | None = None
    url: str | None = None
    project_id: str
    project_title: str
    fields: dict[str, str] = Field(default_factory=dict)

    @property
    def is_ranked(self) -> bool:
        """Whether the status matched one of the project's options."""
        return self.status_index != SENTINEL_RANK

    @property
    def sort_key(self) -> tuple[int, str]:
        """Key for ordering items by status rank, then title."""
        return (self.status_index, self.title.lower())

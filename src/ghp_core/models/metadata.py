"""Issue metadata stored in the frontmatter block of an issue body."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IssueMetadata(BaseModel):
    """Labels, assignees, issue type and project field values for an issue.

    Immutable: use ``model_copy(update=...)`` or ``merge_metadata`` to derive
    a changed copy. Labels and assignees are tuples; ``fields`` stays a plain
    dict and must be treated as read-only.
    """

    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...] = ()
    assignees: tuple[str, ...] = ()
    type: str | None = None
    # Project field name -> value; key casing is kept for matching remote field names
    fields: dict[str, str] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.labels or self.assignees or self.type is not None or self.fields)


class MetadataOverrides(BaseModel):
    """Caller-supplied metadata (e.g. from command-line flags).

    ``None`` means "not supplied" for every attribute.
    """

    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...] | None = None
    assignees: tuple[str, ...] | None = None
    type: str | None = None
    fields: dict[str, str] | None = None


class EmptyListPolicy(str, Enum):
    """What an explicitly empty override list does to labels/assignees."""

    IGNORE = "ignore"  # keep the values parsed from text
    CLEAR = "clear"  # replace them with an empty tuple

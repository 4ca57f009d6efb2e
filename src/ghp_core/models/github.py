"""Value records for GitHub repositories, projects and issues."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RepoInfo(BaseModel):
    """A GitHub repository reference."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Repository in "owner/name" form."""
        return f"{self.owner}/{self.name}"


class Label(BaseModel):
    """An issue label as shown on the board."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str = ""


class Project(BaseModel):
    """A GitHub Project (V2) linked to a repository."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    number: int
    url: str


class StatusOption(BaseModel):
    """One option of a project's Status single-select field."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class StatusField(BaseModel):
    """The Status field of a project with its options in display order."""

    model_config = ConfigDict(frozen=True)

    field_id: str
    options: list[StatusOption] = Field(default_factory=list)

    def option_id(self, name: str) -> str | None:
        """Find an option ID by name (case-insensitive)."""
        name_lower = name.lower()
        for option in self.options:
            if option.name.lower() == name_lower:
                return option.id
        return None


class ProjectField(BaseModel):
    """A project field definition.

    ``type`` is the GraphQL typename with the ``ProjectV2`` prefix and the
    ``Field`` suffix removed, e.g. ``SingleSelect`` or ``Iteration``. Plain
    fields (text, number, date) report an empty type. ``data_type`` is
    GitHub's ``ProjectV2FieldType`` (``TEXT``, ``NUMBER``, ``DATE``, ...).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    data_type: str | None = None
    options: list[StatusOption] | None = None


class ProjectView(BaseModel):
    """A saved project view."""

    model_config = ConfigDict(frozen=True)

    name: str
    filter: str | None = None


class IssueComment(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str
    body: str
    created_at: datetime | None = None


class IssueDetails(BaseModel):
    """Full issue or pull request details including body and comments."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str = ""
    state: str
    type: str  # "issue" or "pull_request"
    created_at: datetime | None = None
    author: str = "unknown"
    labels: list[Label] = Field(default_factory=list)
    comments: list[IssueComment] = Field(default_factory=list)
    total_comments: int = 0


class Collaborator(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    name: str | None = None


class IssueReference(BaseModel):
    """Short issue reference used for "#" suggestions."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    state: str


class IssueType(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class CreatedIssue(BaseModel):
    """Node ID and number of a freshly created issue."""

    model_config = ConfigDict(frozen=True)

    id: str
    number: int

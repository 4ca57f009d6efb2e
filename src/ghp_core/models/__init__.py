"""Data models."""

from .github import (
    Collaborator,
    CreatedIssue,
    IssueComment,
    IssueDetails,
    IssueReference,
    IssueType,
    Label,
    Project,
    ProjectField,
    ProjectView,
    RepoInfo,
    StatusField,
    StatusOption,
)
from .item import SENTINEL_RANK, ItemState, ItemType, NormalizedItem
from .metadata import EmptyListPolicy, IssueMetadata, MetadataOverrides
from .raw import (
    DateFieldValue,
    FieldValue,
    ItemContent,
    IterationFieldValue,
    NumberFieldValue,
    RawItemRecord,
    SingleSelectFieldValue,
    TextFieldValue,
    parse_field_value,
)

__all__ = [
    "SENTINEL_RANK",
    "Collaborator",
    "CreatedIssue",
    "DateFieldValue",
    "EmptyListPolicy",
    "FieldValue",
    "IssueComment",
    "IssueDetails",
    "IssueMetadata",
    "IssueReference",
    "IssueType",
    "ItemContent",
    "ItemState",
    "ItemType",
    "IterationFieldValue",
    "Label",
    "MetadataOverrides",
    "NormalizedItem",
    "NumberFieldValue",
    "Project",
    "ProjectField",
    "ProjectView",
    "RawItemRecord",
    "RepoInfo",
    "SingleSelectFieldValue",
    "StatusField",
    "StatusOption",
    "TextFieldValue",
    "parse_field_value",
]

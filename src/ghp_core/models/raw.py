"""Raw GitHub Projects V2 records as returned by the GraphQL API.

Field values are a closed sum type discriminated on ``__typename``. Each arm
knows how to render its own value as text, so supporting a new field kind means
adding one model here and listing it in ``FieldValue``.

Content (issue, pull request, draft) is a single model because the API only
returns the attributes selected for each fragment; attributes that do not
apply to a given kind are simply absent.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .github import Label
from .item import ItemState, ItemType

logger = logging.getLogger(__name__)


class FieldRef(BaseModel):
    """The project field a value belongs to."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None


class _FieldValueBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: FieldRef | None = None

    @property
    def field_name(self) -> str | None:
        return self.field.name if self.field else None

    def as_text(self) -> str | None:
        """Render the value as text, or None if the value is empty."""
        raise NotImplementedError


class SingleSelectFieldValue(_FieldValueBase):
    typename: Literal["ProjectV2ItemFieldSingleSelectValue"] = Field(alias="__typename")
    name: str | None = None

    def as_text(self) -> str | None:
        return self.name or None


class TextFieldValue(_FieldValueBase):
    typename: Literal["ProjectV2ItemFieldTextValue"] = Field(alias="__typename")
    text: str | None = None

    def as_text(self) -> str | None:
        return self.text or None


class NumberFieldValue(_FieldValueBase):
    typename: Literal["ProjectV2ItemFieldNumberValue"] = Field(alias="__typename")
    number: int | float | None = None

    def as_text(self) -> str | None:
        if self.number is None:
            return None
        # 3.0 renders as "3", matching how the web UI shows whole numbers
        if isinstance(self.number, float) and self.number.is_integer():
            return str(int(self.number))
        return str(self.number)


class DateFieldValue(_FieldValueBase):
    typename: Literal["ProjectV2ItemFieldDateValue"] = Field(alias="__typename")
    date: str | None = None

    def as_text(self) -> str | None:
        return self.date or None


class IterationFieldValue(_FieldValueBase):
    typename: Literal["ProjectV2ItemFieldIterationValue"] = Field(alias="__typename")
    title: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    duration: int | None = None

    def as_text(self) -> str | None:
        return self.title or None


FieldValue = Annotated[
    SingleSelectFieldValue
    | TextFieldValue
    | NumberFieldValue
    | DateFieldValue
    | IterationFieldValue,
    Field(discriminator="typename"),
]

_FIELD_VALUE_ADAPTER: TypeAdapter[FieldValue] = TypeAdapter(FieldValue)


def parse_field_value(node: dict[str, Any]) -> FieldValue | None:
    """Parse one raw field-value node.

    Returns None for nodes of an unsupported kind (labels, milestones, the
    empty objects GitHub returns for unselected fragments) and for nodes that
    fail validation.
    """
    try:
        return _FIELD_VALUE_ADAPTER.validate_python(node)
    except ValidationError as e:
        logger.debug("Skipping field value %s: %s", node.get("__typename"), e.error_count())
        return None


class _Login(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str


class _Named(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class _AssigneeConnection(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: list[_Login] = Field(default_factory=list)


class _LabelConnection(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: list[Label] = Field(default_factory=list)


class ItemContent(BaseModel):
    """Content of a project item: an Issue, a PullRequest or a DraftIssue."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    typename: str = Field(default="DraftIssue", alias="__typename")
    title: str | None = None
    number: int | None = None
    url: str | None = None
    state: str | None = None  # "OPEN", "CLOSED" or "MERGED"
    merged: bool | None = None
    issue_type: _Named | None = Field(default=None, alias="issueType")
    assignees: _AssigneeConnection | None = None
    labels: _LabelConnection | None = None
    repository: _Named | None = None

    @property
    def item_type(self) -> ItemType:
        """Map the GraphQL typename to an item type."""
        if self.typename == "Issue":
            return "issue"
        if self.typename == "PullRequest":
            return "pull_request"
        return "draft"

    @property
    def lifecycle_state(self) -> ItemState | None:
        """Open/closed/merged state; merged wins over the raw state.

        Drafts carry no state at all and yield None.
        """
        if not self.state:
            return None
        if self.merged:
            return "merged"
        if self.state == "OPEN":
            return "open"
        return "closed"

    @property
    def assignee_logins(self) -> list[str]:
        return [a.login for a in self.assignees.nodes] if self.assignees else []

    @property
    def label_list(self) -> list[Label]:
        return list(self.labels.nodes) if self.labels else []


class RawItemRecord(BaseModel):
    """A project item before normalization.

    ``field_values`` stays as raw dicts so that one malformed entry can be
    skipped without rejecting the whole item.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    field_values: list[dict[str, Any]] = Field(default_factory=list)
    content: ItemContent | None = None

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> RawItemRecord:
        """Build a record from a GraphQL ``items.nodes`` entry.

        Raises:
            ValidationError: If the node has no usable ``id`` or its content
                cannot be read
        """
        field_values = node.get("fieldValues")
        field_values = field_values.get("nodes") if isinstance(field_values, dict) else None
        if not isinstance(field_values, list):
            field_values = []
        return cls.model_validate(
            {
                "id": node.get("id"),
                "field_values": [fv for fv in field_values if isinstance(fv, dict)],
                "content": node.get("content"),
            }
        )

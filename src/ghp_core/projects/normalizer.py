"""Flatten raw GitHub Projects items into NormalizedItem records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from ..models import NormalizedItem, RawItemRecord, parse_field_value
from .status_order import StatusOrderIndex

logger = logging.getLogger(__name__)

STATUS_FIELD_NAME = "Status"


def extract_field_values(entries: Iterable[dict[str, Any]]) -> dict[str, str]:
    """Collect field values into a field name -> text mapping.

    Entries without a field name, of an unsupported kind, or with an empty
    value are skipped. When two entries share a field name the later wins.
    """
    fields: dict[str, str] = {}
    for entry in entries:
        value = parse_field_value(entry)
        if value is None or not value.field_name:
            continue
        text = value.as_text()
        if text is None:
            continue
        fields[value.field_name] = text
    return fields


class ItemNormalizer:
    """Converts raw project items of one project into NormalizedItem records."""

    def __init__(
        self,
        status_index: StatusOrderIndex,
        project_id: str,
        project_title: str,
    ) -> None:
        self.status_index = status_index
        self.project_id = project_id
        self.project_title = project_title

    def normalize(self, raw: RawItemRecord) -> NormalizedItem | None:
        """Normalize a single item.

        Returns:
            The normalized item, or None if the item has no content (e.g. an
            item whose issue was deleted but is still indexed by the project)
        """
        content = raw.content
        if content is None:
            return None

        fields = extract_field_values(raw.field_values)
        status = fields.get(STATUS_FIELD_NAME) or None

        return NormalizedItem(
            id=raw.id,
            title=content.title or "Untitled",
            number=content.number,
            type=content.item_type,
            issue_type=content.issue_type.name if content.issue_type else None,
            status=status,
            status_index=self.status_index.rank(status),
            state=content.lifecycle_state,
            assignees=content.assignee_logins,
            labels=content.label_list,
            repository=content.repository.name if content.repository else None,
            url=content.url or None,
            project_id=self.project_id,
            project_title=self.project_title,
            fields=fields,
        )

    def normalize_all(self, raws: Iterable[RawItemRecord]) -> list[NormalizedItem]:
        """Normalize a batch, dropping items without content. Order is kept."""
        items: list[NormalizedItem] = []
        for raw in raws:
            item = self.normalize(raw)
            if item is None:
                logger.debug("Dropping project item %s with no content", raw.id)
                continue
            items.append(item)
        return items

    def normalize_nodes(self, nodes: Iterable[dict[str, Any]]) -> list[NormalizedItem]:
        """Normalize GraphQL ``items.nodes`` entries.

        Nodes that cannot be read as a RawItemRecord at all are skipped with
        a warning.
        """
        raws: list[RawItemRecord] = []
        for node in nodes:
            if not isinstance(node, dict):
                logger.warning("Skipping malformed project item: %r", node)
                continue
            try:
                raws.append(RawItemRecord.from_node(node))
            except ValidationError as e:
                logger.warning("Skipping malformed project item %s: %s", node.get("id"), e)
        return self.normalize_all(raws)


def sort_items(items: Iterable[NormalizedItem]) -> list[NormalizedItem]:
    """Order items by status rank; unranked items sort last."""
    return sorted(items, key=lambda item: item.sort_key)

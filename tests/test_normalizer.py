"""Tests for project item normalization."""

import pytest

from ghp_core.models import SENTINEL_RANK, RawItemRecord, StatusOption
from ghp_core.projects import ItemNormalizer, StatusOrderIndex, extract_field_values, sort_items


def _status(name: str, field: str = "Status") -> dict:
    return {
        "__typename": "ProjectV2ItemFieldSingleSelectValue",
        "name": name,
        "field": {"name": field},
    }


def _issue_node(item_id: str = "PVTI_1", **content) -> dict:
    base = {
        "__typename": "Issue",
        "title": "Fix login",
        "number": 42,
        "url": "https://github.com/acme/web/issues/42",
        "state": "OPEN",
        "assignees": {"nodes": [{"login": "alice"}]},
        "labels": {"nodes": [{"name": "bug", "color": "d73a4a"}]},
        "repository": {"name": "web"},
    }
    base.update(content)
    return {"id": item_id, "fieldValues": {"nodes": [_status("In Progress")]}, "content": base}


@pytest.fixture
def normalizer() -> ItemNormalizer:
    options = [StatusOption(id=str(i), name=n) for i, n in enumerate(["Todo", "In Progress", "Done"])]
    return ItemNormalizer(StatusOrderIndex.from_options(options), "PVT_1", "Roadmap")


class TestExtractFieldValues:
    """Tests for extract_field_values."""

    def test_one_extractor_per_kind(self):
        """Each supported field kind renders as text."""
        fields = extract_field_values(
            [
                _status("Todo"),
                {"__typename": "ProjectV2ItemFieldTextValue", "text": "notes", "field": {"name": "Notes"}},
                {"__typename": "ProjectV2ItemFieldNumberValue", "number": 5, "field": {"name": "Points"}},
                {"__typename": "ProjectV2ItemFieldDateValue", "date": "2024-05-01", "field": {"name": "Due"}},
                {
                    "__typename": "ProjectV2ItemFieldIterationValue",
                    "title": "Sprint 3",
                    "startDate": "2024-05-01",
                    "duration": 14,
                    "field": {"name": "Iteration"},
                },
            ]
        )
        assert fields == {
            "Status": "Todo",
            "Notes": "notes",
            "Points": "5",
            "Due": "2024-05-01",
            "Iteration": "Sprint 3",
        }

    def test_integral_float_has_no_decimal_point(self):
        """3.0 renders as "3", 2.5 as "2.5"."""
        fields = extract_field_values(
            [
                {"__typename": "ProjectV2ItemFieldNumberValue", "number": 3.0, "field": {"name": "A"}},
                {"__typename": "ProjectV2ItemFieldNumberValue", "number": 2.5, "field": {"name": "B"}},
            ]
        )
        assert fields == {"A": "3", "B": "2.5"}

    def test_zero_is_kept(self):
        """A zero number is a value, not an empty one."""
        fields = extract_field_values(
            [{"__typename": "ProjectV2ItemFieldNumberValue", "number": 0, "field": {"name": "A"}}]
        )
        assert fields == {"A": "0"}

    def test_skips_entries_without_field_name(self):
        """Entries with no field or a nameless field are ignored."""
        fields = extract_field_values(
            [
                {"__typename": "ProjectV2ItemFieldTextValue", "text": "x"},
                {"__typename": "ProjectV2ItemFieldTextValue", "text": "y", "field": {}},
            ]
        )
        assert fields == {}

    def test_skips_unknown_and_malformed_entries(self):
        """Unsupported kinds, empty objects and bad values are skipped."""
        fields = extract_field_values(
            [
                {},
                {"__typename": "ProjectV2ItemFieldLabelValue", "field": {"name": "Labels"}},
                {"__typename": "ProjectV2ItemFieldNumberValue", "number": "lots", "field": {"name": "N"}},
                _status("Done"),
            ]
        )
        assert fields == {"Status": "Done"}

    def test_skips_empty_values(self):
        """Empty strings and missing values do not produce a key."""
        fields = extract_field_values(
            [
                {"__typename": "ProjectV2ItemFieldTextValue", "text": "", "field": {"name": "Notes"}},
                {"__typename": "ProjectV2ItemFieldDateValue", "field": {"name": "Due"}},
            ]
        )
        assert fields == {}

    def test_last_write_wins(self):
        """A repeated field name keeps the later value."""
        fields = extract_field_values([_status("Todo"), _status("Done")])
        assert fields == {"Status": "Done"}


class TestItemNormalizer:
    """Tests for ItemNormalizer."""

    def test_normalize_issue(self, normalizer):
        """An issue is flattened with status rank and project context."""
        item = normalizer.normalize(RawItemRecord.from_node(_issue_node()))
        assert item is not None
        assert item.id == "PVTI_1"
        assert item.type == "issue"
        assert item.title == "Fix login"
        assert item.number == 42
        assert item.status == "In Progress"
        assert item.status_index == 1
        assert item.state == "open"
        assert item.assignees == ["alice"]
        assert [label.name for label in item.labels] == ["bug"]
        assert item.labels[0].color == "d73a4a"
        assert item.repository == "web"
        assert item.project_id == "PVT_1"
        assert item.project_title == "Roadmap"
        assert item.fields == {"Status": "In Progress"}

    def test_merged_wins_over_closed(self, normalizer):
        """A merged pull request is "merged" even though its state is not OPEN."""
        node = _issue_node(__typename="PullRequest", state="MERGED", merged=True)
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.type == "pull_request"
        assert item.state == "merged"

    def test_closed_pull_request(self, normalizer):
        """A closed, unmerged pull request is "closed"."""
        node = _issue_node(__typename="PullRequest", state="CLOSED", merged=False)
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.state == "closed"

    def test_draft_defaults(self, normalizer):
        """Drafts have no number, state, url or repository."""
        node = {"id": "PVTI_D", "fieldValues": {"nodes": []}, "content": {"__typename": "DraftIssue", "title": ""}}
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.type == "draft"
        assert item.title == "Untitled"
        assert item.number is None
        assert item.state is None
        assert item.url is None
        assert item.repository is None
        assert item.status is None
        assert item.status_index == SENTINEL_RANK

    def test_unknown_content_kind_is_draft(self, normalizer):
        """Content types other than Issue and PullRequest are treated as drafts."""
        node = {"id": "PVTI_X", "content": {"__typename": "Discussion", "title": "Idea"}}
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.type == "draft"

    def test_status_key_is_exact(self, normalizer):
        """Only a field named exactly "Status" sets the status."""
        node = _issue_node()
        node["fieldValues"]["nodes"] = [_status("Done", field="status")]
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.status is None
        assert item.status_index == SENTINEL_RANK
        assert item.fields == {"status": "Done"}

    def test_unknown_status_ranks_at_sentinel(self, normalizer):
        """A status missing from the options is kept but unranked."""
        node = _issue_node()
        node["fieldValues"]["nodes"] = [_status("Blocked")]
        item = normalizer.normalize(RawItemRecord.from_node(node))
        assert item.status == "Blocked"
        assert item.status_index == SENTINEL_RANK
        assert not item.is_ranked

    def test_null_content_is_none(self, normalizer):
        """Items without content normalize to None."""
        raw = RawItemRecord.from_node({"id": "PVTI_gone", "content": None})
        assert normalizer.normalize(raw) is None

    def test_normalize_all_drops_null_content_and_keeps_order(self, normalizer):
        """Output is input order minus items without content."""
        raws = [
            RawItemRecord.from_node(_issue_node("A", title="a")),
            RawItemRecord.from_node({"id": "B", "content": None}),
            RawItemRecord.from_node(_issue_node("C", title="c")),
            RawItemRecord.from_node({"id": "D"}),
            RawItemRecord.from_node(_issue_node("E", title="e")),
        ]
        items = normalizer.normalize_all(raws)
        assert [i.id for i in items] == ["A", "C", "E"]
        assert len(items) == len(raws) - 2

    def test_normalize_nodes_skips_unreadable_nodes(self, normalizer):
        """A node without an id is skipped without failing the batch."""
        items = normalizer.normalize_nodes([{"content": {"__typename": "Issue"}}, _issue_node("OK")])
        assert [i.id for i in items] == ["OK"]

    def test_normalize_nodes_skips_null_entries(self, normalizer, caplog):
        """Null and non-object entries in items.nodes are skipped with a warning."""
        with caplog.at_level("WARNING", logger="ghp_core"):
            items = normalizer.normalize_nodes([None, "junk", _issue_node("OK")])
        assert [i.id for i in items] == ["OK"]
        assert "Skipping malformed project item" in caplog.text

    def test_normalize_nodes_bad_field_values_container(self, normalizer):
        """An item whose fieldValues is not an object keeps its content and no status."""
        node = _issue_node("OK")
        node["fieldValues"] = ["oops"]
        items = normalizer.normalize_nodes([node])
        assert [i.id for i in items] == ["OK"]
        assert items[0].status is None

    def test_malformed_field_entry_does_not_drop_item(self, normalizer):
        """One bad field value is skipped, the rest of the item survives."""
        node = _issue_node()
        node["fieldValues"]["nodes"].insert(0, {"__typename": "ProjectV2ItemFieldTextValue", "text": ["not", "text"]})
        items = normalizer.normalize_nodes([node])
        assert len(items) == 1
        assert items[0].status == "In Progress"


class TestSortItems:
    """Tests for sort_items."""

    def test_unranked_items_sort_last(self, normalizer):
        """Items with an unknown or missing status follow every ranked item."""
        nodes = [
            _issue_node("none", title="No status"),
            _issue_node("done", title="Done item"),
            _issue_node("todo", title="Todo item"),
        ]
        nodes[0]["fieldValues"]["nodes"] = []
        nodes[1]["fieldValues"]["nodes"] = [_status("Done")]
        nodes[2]["fieldValues"]["nodes"] = [_status("todo")]
        items = sort_items(normalizer.normalize_nodes(nodes))
        assert [i.id for i in items] == ["todo", "done", "none"]

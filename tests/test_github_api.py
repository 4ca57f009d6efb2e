"""Tests for GitHubAPI operations."""

from unittest.mock import MagicMock

import pytest

from ghp_core.github.api import GitHubAPI
from ghp_core.github.client import (
    AuthErrorType,
    GitHubAuthError,
    GitHubClientError,
    GitHubNotAuthenticatedError,
    GitHubNotFoundError,
)
from ghp_core.github.queries import (
    GET_PROJECT_FIELDS,
    GET_PROJECT_ITEMS,
    UPDATE_ISSUE_BODY,
)
from ghp_core.github.session import GitHubSession
from ghp_core.models import SENTINEL_RANK, RepoInfo

REPO = RepoInfo(owner="acme", name="web")

FIELDS_RESPONSE = {
    "node": {
        "fields": {
            "nodes": [
                {"__typename": "ProjectV2Field", "id": "F_title", "name": "Title", "dataType": "TITLE"},
                {
                    "__typename": "ProjectV2SingleSelectField",
                    "id": "F_status",
                    "name": "Status",
                    "dataType": "SINGLE_SELECT",
                    "options": [{"id": "o1", "name": "Todo"}, {"id": "o2", "name": "Done"}],
                },
                {},
            ]
        }
    }
}


def _item(item_id: str, number: int, status: str | None = None) -> dict:
    values = []
    if status:
        values.append(
            {
                "__typename": "ProjectV2ItemFieldSingleSelectValue",
                "name": status,
                "field": {"name": "Status"},
            }
        )
    return {
        "id": item_id,
        "fieldValues": {"nodes": values},
        "content": {"__typename": "Issue", "title": f"Issue {number}", "number": number, "state": "OPEN"},
    }


@pytest.fixture
def client():
    client = MagicMock()
    client.is_closed = False
    return client


@pytest.fixture
def auth_errors():
    return []


@pytest.fixture
def api(client, auth_errors):
    session = GitHubSession(client=client, username="alice")
    return GitHubAPI(session, on_auth_error=auth_errors.append)


class TestSessionContract:
    """Operations require an open session."""

    def test_closed_session_raises_not_authenticated(self, api, client):
        """Coercing operations still raise when the session is closed."""
        client.is_closed = True
        with pytest.raises(GitHubNotAuthenticatedError):
            api.get_issue_details(REPO, 1)
        with pytest.raises(GitHubNotAuthenticatedError):
            api.get_projects(REPO)

    def test_active_label_name(self, api):
        """The active label is scoped to the user."""
        assert api.active_label_name == "@alice:active"


class TestProjectReads:
    """Tests for propagating project reads."""

    def test_get_projects(self, api, client):
        """Projects are parsed from the repository."""
        client.query.return_value = {
            "repository": {
                "projectsV2": {
                    "nodes": [{"id": "PVT_1", "title": "Roadmap", "number": 1, "url": "https://x"}]
                }
            }
        }
        projects = api.get_projects(REPO)
        assert [p.title for p in projects] == ["Roadmap"]

    def test_get_projects_auth_error_notifies_and_raises(self, api, client, auth_errors):
        """Auth errors reach the callback and still propagate."""
        error = GitHubAuthError("scopes", AuthErrorType.INSUFFICIENT_SCOPES)
        client.query.side_effect = error
        with pytest.raises(GitHubAuthError):
            api.get_projects(REPO)
        assert auth_errors == [error]

    def test_get_projects_other_errors_propagate(self, api, client, auth_errors):
        """Non-auth errors propagate without the callback."""
        client.query.side_effect = GitHubNotFoundError("nope")
        with pytest.raises(GitHubNotFoundError):
            api.get_projects(REPO)
        assert auth_errors == []

    def test_get_project_fields(self, api, client):
        """Field typenames are shortened and empty nodes skipped."""
        client.query.return_value = FIELDS_RESPONSE
        fields = api.get_project_fields("PVT_1")
        assert [(f.name, f.type, f.data_type) for f in fields] == [
            ("Title", "", "TITLE"),
            ("Status", "SingleSelect", "SINGLE_SELECT"),
        ]

    def test_get_status_field(self, api, client):
        """The Status single-select field is returned with ordered options."""
        client.query.return_value = FIELDS_RESPONSE
        status = api.get_status_field("PVT_1")
        assert status.field_id == "F_status"
        assert status.option_id("done") == "o2"

    def test_get_status_field_missing(self, api, client):
        """Projects without a Status field give None."""
        client.query.return_value = {"node": {"fields": {"nodes": []}}}
        assert api.get_status_field("PVT_1") is None

    def test_get_project_items_paginates_and_ranks(self, api, client):
        """All pages are fetched and items ranked by the Status options."""

        def query(document, variables=None):
            if document == GET_PROJECT_FIELDS:
                return FIELDS_RESPONSE
            if document == GET_PROJECT_ITEMS and variables["cursor"] is None:
                return {
                    "node": {
                        "items": {
                            "pageInfo": {"hasNextPage": True, "endCursor": "c1"},
                            "nodes": [_item("A", 1, "Done"), {"id": "gone", "content": None}],
                        }
                    }
                }
            return {
                "node": {
                    "items": {
                        "pageInfo": {"hasNextPage": False, "endCursor": None},
                        "nodes": [_item("B", 2, "todo"), _item("C", 3)],
                    }
                }
            }

        client.query.side_effect = query
        items = api.get_project_items("PVT_1", "Roadmap")

        assert [i.id for i in items] == ["A", "B", "C"]
        assert [i.status_index for i in items] == [1, 0, SENTINEL_RANK]
        assert all(i.project_title == "Roadmap" for i in items)

    def test_find_item_by_number(self, api, client):
        """Items are looked up across the repository's projects."""

        def query(document, variables=None):
            if document == GET_PROJECT_FIELDS:
                return FIELDS_RESPONSE
            if document == GET_PROJECT_ITEMS:
                return {"node": {"items": {"nodes": [_item("A", 1), _item("B", 7)]}}}
            return {
                "repository": {
                    "projectsV2": {"nodes": [{"id": "PVT_1", "title": "R", "number": 1, "url": "u"}]}
                }
            }

        client.query.side_effect = query
        assert api.find_item_by_number(REPO, 7).id == "B"
        assert api.find_item_by_number(REPO, 99) is None


class TestDegradingOperations:
    """Tests for operations that coerce failures to empty results."""

    def test_get_issue_details(self, api, client):
        """Issue details are flattened."""
        client.query.return_value = {
            "repository": {
                "issueOrPullRequest": {
                    "__typename": "Issue",
                    "title": "Bug",
                    "body": None,
                    "state": "OPEN",
                    "createdAt": "2024-05-01T10:00:00Z",
                    "author": None,
                    "labels": {"nodes": [{"name": "bug", "color": "f00"}]},
                    "comments": {
                        "totalCount": 1,
                        "nodes": [{"author": {"login": "bob"}, "body": "hi", "createdAt": "2024-05-02T10:00:00Z"}],
                    },
                }
            }
        }
        details = api.get_issue_details(REPO, 1)
        assert details.body == ""
        assert details.author == "unknown"
        assert details.type == "issue"
        assert details.comments[0].author == "bob"
        assert details.total_comments == 1

    def test_get_issue_details_error_gives_none(self, api, client, auth_errors):
        """Failures become None; auth failures still reach the callback."""
        error = GitHubAuthError("sso", AuthErrorType.SSO_REQUIRED)
        client.query.side_effect = error
        assert api.get_issue_details(REPO, 1) is None
        assert auth_errors == [error]

    def test_update_issue_body(self, api, client):
        """The body is written against the issue node ID."""
        client.query.return_value = {"repository": {"issue": {"id": "I_1"}}}
        assert api.update_issue_body(REPO, 1, "new body") is True
        client.mutate.assert_called_once_with(UPDATE_ISSUE_BODY, {"issueId": "I_1", "body": "new body"})

    def test_update_issue_body_unknown_issue(self, api, client):
        """A missing issue gives False without a mutation."""
        client.query.return_value = {"repository": {"issue": None}}
        assert api.update_issue_body(REPO, 1, "x") is False
        client.mutate.assert_not_called()

    def test_update_issue_body_failure(self, api, client):
        """Mutation errors become False."""
        client.query.return_value = {"repository": {"issue": {"id": "I_1"}}}
        client.mutate.side_effect = GitHubClientError("boom")
        assert api.update_issue_body(REPO, 1, "x") is False

    def test_get_project_views_error_gives_empty(self, api, client):
        """List reads degrade to empty lists."""
        client.query.side_effect = GitHubClientError("boom")
        assert api.get_project_views("PVT_1") == []

    def test_create_issue(self, api, client):
        """Issues are created in the repository by ID."""
        client.query.return_value = {"repository": {"id": "R_1"}}
        client.mutate.return_value = {"createIssue": {"issue": {"id": "I_9", "number": 9}}}
        created = api.create_issue(REPO, "Title", "Body")
        assert (created.id, created.number) == ("I_9", 9)
        assert client.mutate.call_args.args[1]["repositoryId"] == "R_1"

    def test_ensure_label_exists(self, api, client):
        """An existing label needs no REST call."""
        client.query.return_value = {"repository": {"label": {"id": "L_1"}}}
        assert api.ensure_label(REPO, "@alice:active") is True
        client.post_rest.assert_not_called()

    @pytest.mark.parametrize("status_code, expected", [(201, True), (422, True), (500, False)])
    def test_ensure_label_creates(self, api, client, status_code, expected):
        """201 and 422 (already exists) count as success."""
        client.query.return_value = {"repository": {"label": None}}
        client.post_rest.return_value = MagicMock(status_code=status_code)
        assert api.ensure_label(REPO, "@alice:active") is expected
        assert client.post_rest.call_args.args[0] == "/repos/acme/web/labels"
        assert client.post_rest.call_args.args[1]["color"] == "1f883d"

    def test_add_label_requires_existing_label(self, api, client):
        """Labels that do not exist are not added."""
        client.query.return_value = {"repository": {"issue": {"id": "I_1"}, "label": None}}
        assert api.add_label_to_issue(REPO, 1, "missing") is False
        client.mutate.assert_not_called()

    def test_find_issues_with_label(self, api, client):
        """Issue numbers carrying the label are returned."""
        client.query.return_value = {"repository": {"issues": {"nodes": [{"number": 3}, {"number": 5}]}}}
        assert api.find_issues_with_label(REPO, "bug") == [3, 5]

    def test_get_collaborators_falls_back_to_assignable_users(self, api, client):
        """Assignable users are used when collaborators are not visible."""
        client.query.return_value = {
            "repository": {
                "collaborators": None,
                "assignableUsers": {"nodes": [{"login": "bob", "name": None}]},
            }
        }
        assert [c.login for c in api.get_collaborators(REPO)] == ["bob"]

    def test_add_assignees_skips_unknown_users(self, api, client):
        """Only resolvable logins are assigned."""

        def query(document, variables=None):
            if "login" in (variables or {}):
                if variables["login"] == "bob":
                    return {"user": {"id": "U_bob"}}
                raise GitHubNotFoundError(
                    f"Could not resolve to a User with the login of '{variables['login']}'."
                )
            return {"repository": {"issue": {"id": "I_1"}}}

        client.query.side_effect = query
        assert api.add_assignees(REPO, 1, ["ghost", "bob"]) is True
        assert client.mutate.call_args.args[1] == {"assignableId": "I_1", "assigneeIds": ["U_bob"]}

    def test_add_assignees_null_user_is_skipped(self, api, client):
        """A login that resolves to no user is skipped like a not-found one."""

        def query(document, variables=None):
            if "login" in (variables or {}):
                return {"user": {"id": "U_bob"}} if variables["login"] == "bob" else {"user": None}
            return {"repository": {"issue": {"id": "I_1"}}}

        client.query.side_effect = query
        assert api.add_assignees(REPO, 1, ["bob", "ghost"]) is True
        assert client.mutate.call_args.args[1] == {"assignableId": "I_1", "assigneeIds": ["U_bob"]}

    def test_add_assignees_all_unknown(self, api, client, auth_errors):
        """Nothing is assigned when no login resolves."""

        def query(document, variables=None):
            if "login" in (variables or {}):
                raise GitHubNotFoundError("Could not resolve to a User")
            return {"repository": {"issue": {"id": "I_1"}}}

        client.query.side_effect = query
        assert api.add_assignees(REPO, 1, ["ghost"]) is False
        client.mutate.assert_not_called()
        assert auth_errors == []

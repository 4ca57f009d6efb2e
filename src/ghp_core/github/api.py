"""GitHub Projects V2 operations on top of an authenticated session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ..models import (
    Collaborator,
    CreatedIssue,
    IssueComment,
    IssueDetails,
    IssueReference,
    IssueType,
    Label,
    NormalizedItem,
    Project,
    ProjectField,
    ProjectView,
    RepoInfo,
    StatusField,
    StatusOption,
)
from ..projects import ItemNormalizer, StatusOrderIndex
from .client import (
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubNotAuthenticatedError,
    GitHubNotFoundError,
)
from .queries import (
    ADD_ASSIGNEES,
    ADD_COMMENT,
    ADD_ITEM_TO_PROJECT,
    ADD_LABELS,
    CREATE_ISSUE,
    GET_COLLABORATORS,
    GET_ISSUE_AND_LABEL,
    GET_ISSUE_DETAILS,
    GET_ISSUE_FOR_UPDATE,
    GET_ISSUE_NODE_ID,
    GET_ISSUE_TYPES,
    GET_ISSUES_WITH_LABEL,
    GET_LABEL,
    GET_PROJECT_FIELDS,
    GET_PROJECT_ITEMS,
    GET_PROJECT_VIEWS,
    GET_RECENT_ISSUES,
    GET_REPOSITORY,
    GET_REPOSITORY_PROJECTS,
    GET_USER_ID,
    REMOVE_LABELS,
    UPDATE_ISSUE,
    UPDATE_ISSUE_BODY,
    UPDATE_ISSUE_TYPE,
    UPDATE_ITEM_FIELD,
    UPDATE_ITEM_STATUS,
)
from .session import GitHubSession

logger = logging.getLogger(__name__)

STATUS_FIELD_NAME = "Status"
ACTIVE_LABEL_COLOR = "1f883d"


class GitHubAPI:
    """GitHub Projects API bound to one session.

    Project listing, items and fields raise on failure; authentication errors
    are reported to ``on_auth_error`` first. Every other operation degrades to
    an empty list, None or False on a remote failure so that list views keep
    working. Calling anything after the session is closed raises
    GitHubNotAuthenticatedError.
    """

    def __init__(
        self,
        session: GitHubSession,
        on_auth_error: Callable[[GitHubAuthError], None] | None = None,
    ) -> None:
        """Initialize the API.

        Args:
            session: Authenticated session to issue requests with
            on_auth_error: Called with scope/SSO/expiry errors before they
                propagate or are swallowed
        """
        self._session = session
        self._on_auth_error = on_auth_error

    @property
    def username(self) -> str:
        return self._session.username

    @property
    def active_label_name(self) -> str:
        """Label marking the issue the current user is working on."""
        return f"@{self.username}:active"

    # --- Helpers ---

    def _client(self) -> GitHubClient:
        if not self._session.is_open:
            raise GitHubNotAuthenticatedError()
        return self._session.client

    def _notify(self, error: GitHubClientError) -> None:
        if isinstance(error, GitHubAuthError) and self._on_auth_error is not None:
            self._on_auth_error(error)

    def _degrade(self, operation: str, error: GitHubClientError) -> None:
        """Report a swallowed failure."""
        self._notify(error)
        logger.warning("%s failed: %s", operation, error)

    def _issue_node_id(self, repo: RepoInfo, issue_number: int) -> str | None:
        result = self._client().query(
            GET_ISSUE_FOR_UPDATE,
            {"owner": repo.owner, "name": repo.name, "number": issue_number},
        )
        issue = (result.get("repository") or {}).get("issue")
        return issue["id"] if issue else None

    # --- Projects ---

    def get_projects(self, repo: RepoInfo) -> list[Project]:
        """Get projects linked to a repository."""
        client = self._client()
        try:
            result = client.query(
                GET_REPOSITORY_PROJECTS, {"owner": repo.owner, "name": repo.name}
            )
        except GitHubClientError as e:
            self._notify(e)
            raise

        nodes = ((result.get("repository") or {}).get("projectsV2") or {}).get("nodes") or []
        return [Project.model_validate(node) for node in nodes if node]

    def get_project_fields(self, project_id: str) -> list[ProjectField]:
        """Get all fields of a project."""
        client = self._client()
        try:
            result = client.query(GET_PROJECT_FIELDS, {"projectId": project_id})
        except GitHubClientError as e:
            self._notify(e)
            raise

        fields: list[ProjectField] = []
        nodes = ((result.get("node") or {}).get("fields") or {}).get("nodes") or []
        for node in nodes:
            if not node or "id" not in node:
                continue
            typename = node.get("__typename", "")
            options = node.get("options")
            fields.append(
                ProjectField(
                    id=node["id"],
                    name=node.get("name", ""),
                    type=typename.replace("ProjectV2", "").replace("Field", ""),
                    data_type=node.get("dataType"),
                    options=[StatusOption.model_validate(o) for o in options]
                    if options is not None
                    else None,
                )
            )
        return fields

    def get_status_field(self, project_id: str) -> StatusField | None:
        """Get the project's Status single-select field with its ordered options."""
        for field in self.get_project_fields(project_id):
            if field.type == "SingleSelect" and field.name == STATUS_FIELD_NAME:
                if field.options is None:
                    return None
                return StatusField(field_id=field.id, options=field.options)
        return None

    def get_status_index(self, project_id: str) -> StatusOrderIndex:
        return StatusOrderIndex.from_status_field(self.get_status_field(project_id))

    def get_project_items(self, project_id: str, project_title: str) -> list[NormalizedItem]:
        """Get all items of a project, normalized and ranked by status."""
        normalizer = ItemNormalizer(self.get_status_index(project_id), project_id, project_title)
        client = self._client()

        items: list[NormalizedItem] = []
        cursor = None
        page_count = 0
        while True:
            page_count += 1
            try:
                result = client.query(
                    GET_PROJECT_ITEMS, {"projectId": project_id, "cursor": cursor}
                )
            except GitHubClientError as e:
                self._notify(e)
                raise

            items_data = (result.get("node") or {}).get("items") or {}
            nodes = items_data.get("nodes") or []
            logger.debug("Page %d: fetched %d items", page_count, len(nodes))
            items.extend(normalizer.normalize_nodes(nodes))

            page_info = items_data.get("pageInfo") or {}
            if page_info.get("hasNextPage") and page_info.get("endCursor"):
                cursor = page_info["endCursor"]
            else:
                break

        logger.info("Fetched %d items from project %s", len(items), project_title)
        return items

    def find_item_by_number(self, repo: RepoInfo, issue_number: int) -> NormalizedItem | None:
        """Find the project item for an issue across the repository's projects."""
        for project in self.get_projects(repo):
            for item in self.get_project_items(project.id, project.title):
                if item.number == issue_number:
                    return item
        return None

    def get_project_views(self, project_id: str) -> list[ProjectView]:
        client = self._client()
        try:
            result = client.query(GET_PROJECT_VIEWS, {"projectId": project_id})
        except GitHubClientError as e:
            self._degrade("get_project_views", e)
            return []

        nodes = ((result.get("node") or {}).get("views") or {}).get("nodes") or []
        return [ProjectView.model_validate(node) for node in nodes if node]

    def update_item_status(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> bool:
        """Set a single-select field (normally Status) on a project item."""
        client = self._client()
        try:
            client.mutate(
                UPDATE_ITEM_STATUS,
                {
                    "projectId": project_id,
                    "itemId": item_id,
                    "fieldId": field_id,
                    "optionId": option_id,
                },
            )
        except GitHubClientError as e:
            self._degrade("update_item_status", e)
            return False
        return True

    def set_field_value(
        self, project_id: str, item_id: str, field_id: str, value: dict[str, Any]
    ) -> bool:
        """Set any project field value.

        Args:
            value: A ProjectV2FieldValue input, e.g. ``{"text": "..."}``,
                ``{"number": 3}`` or ``{"singleSelectOptionId": "..."}``
        """
        client = self._client()
        try:
            client.mutate(
                UPDATE_ITEM_FIELD,
                {"projectId": project_id, "itemId": item_id, "fieldId": field_id, "value": value},
            )
        except GitHubClientError as e:
            self._degrade("set_field_value", e)
            return False
        return True

    def add_to_project(self, project_id: str, content_id: str) -> str | None:
        """Add an issue or PR to a project. Returns the new project item ID."""
        client = self._client()
        try:
            result = client.mutate(
                ADD_ITEM_TO_PROJECT, {"projectId": project_id, "contentId": content_id}
            )
        except GitHubClientError as e:
            self._degrade("add_to_project", e)
            return None
        item = (result.get("addProjectV2ItemById") or {}).get("item") or {}
        return item.get("id")

    # --- Issues ---

    def create_issue(self, repo: RepoInfo, title: str, body: str | None = None) -> CreatedIssue | None:
        client = self._client()
        try:
            repo_result = client.query(GET_REPOSITORY, {"owner": repo.owner, "name": repo.name})
            repo_data = repo_result.get("repository")
            if not repo_data:
                logger.warning("Repository not found: %s", repo.full_name)
                return None

            result = client.mutate(
                CREATE_ISSUE,
                {"repositoryId": repo_data["id"], "title": title, "body": body or ""},
            )
        except GitHubClientError as e:
            self._degrade("create_issue", e)
            return None

        issue = (result.get("createIssue") or {}).get("issue")
        if not issue:
            return None
        logger.info("Created issue %s#%d", repo.full_name, issue["number"])
        return CreatedIssue.model_validate(issue)

    def get_issue_details(self, repo: RepoInfo, issue_number: int) -> IssueDetails | None:
        """Get an issue or PR with its body and comments."""
        client = self._client()
        try:
            result = client.query(
                GET_ISSUE_DETAILS,
                {"owner": repo.owner, "name": repo.name, "number": issue_number},
            )
        except GitHubClientError as e:
            self._degrade("get_issue_details", e)
            return None

        issue = (result.get("repository") or {}).get("issueOrPullRequest")
        if not issue:
            return None

        comments = issue.get("comments") or {}
        try:
            return IssueDetails(
                title=issue.get("title", ""),
                body=issue.get("body") or "",
                state=issue.get("state", ""),
                type="pull_request" if issue.get("__typename") == "PullRequest" else "issue",
                created_at=issue.get("createdAt"),
                author=(issue.get("author") or {}).get("login") or "unknown",
                labels=[
                    Label.model_validate(label)
                    for label in (issue.get("labels") or {}).get("nodes") or []
                ],
                comments=[
                    IssueComment(
                        author=(c.get("author") or {}).get("login") or "unknown",
                        body=c.get("body") or "",
                        created_at=c.get("createdAt"),
                    )
                    for c in comments.get("nodes") or []
                ],
                total_comments=comments.get("totalCount", 0),
            )
        except ValidationError as e:
            logger.warning("Unreadable details for %s#%d: %s", repo.full_name, issue_number, e)
            return None

    def update_issue_body(self, repo: RepoInfo, issue_number: int, body: str) -> bool:
        """Replace an issue's body."""
        client = self._client()
        try:
            issue_id = self._issue_node_id(repo, issue_number)
            if issue_id is None:
                return False
            client.mutate(UPDATE_ISSUE_BODY, {"issueId": issue_id, "body": body})
        except GitHubClientError as e:
            self._degrade("update_issue_body", e)
            return False
        return True

    def update_issue(
        self,
        repo: RepoInfo,
        issue_number: int,
        title: str | None = None,
        body: str | None = None,
    ) -> bool:
        """Update an issue's title and/or body."""
        client = self._client()
        try:
            issue_id = self._issue_node_id(repo, issue_number)
            if issue_id is None:
                return False
            client.mutate(UPDATE_ISSUE, {"issueId": issue_id, "title": title, "body": body})
        except GitHubClientError as e:
            self._degrade("update_issue", e)
            return False
        return True

    def add_comment(self, repo: RepoInfo, issue_number: int, body: str) -> bool:
        client = self._client()
        try:
            result = client.query(
                GET_ISSUE_NODE_ID,
                {"owner": repo.owner, "name": repo.name, "number": issue_number},
            )
            subject = (result.get("repository") or {}).get("issueOrPullRequest") or {}
            subject_id = subject.get("id")
            if not subject_id:
                return False
            client.mutate(ADD_COMMENT, {"subjectId": subject_id, "body": body})
        except GitHubClientError as e:
            self._degrade("add_comment", e)
            return False
        return True

    def get_collaborators(self, repo: RepoInfo) -> list[Collaborator]:
        """Get collaborators, or assignable users when collaborators are hidden."""
        client = self._client()
        try:
            result = client.query(GET_COLLABORATORS, {"owner": repo.owner, "name": repo.name})
        except GitHubClientError as e:
            self._degrade("get_collaborators", e)
            return []

        repository = result.get("repository") or {}
        users = (repository.get("collaborators") or {}).get("nodes") or (
            (repository.get("assignableUsers") or {}).get("nodes") or []
        )
        return [Collaborator.model_validate(user) for user in users if user]

    def get_recent_issues(self, repo: RepoInfo, limit: int = 20) -> list[IssueReference]:
        client = self._client()
        try:
            result = client.query(
                GET_RECENT_ISSUES, {"owner": repo.owner, "name": repo.name, "limit": limit}
            )
        except GitHubClientError as e:
            self._degrade("get_recent_issues", e)
            return []

        nodes = ((result.get("repository") or {}).get("issues") or {}).get("nodes") or []
        return [IssueReference.model_validate(node) for node in nodes if node]

    # --- Labels ---

    def ensure_label(
        self, repo: RepoInfo, label_name: str, color: str = ACTIVE_LABEL_COLOR
    ) -> bool:
        """Make sure a label exists in the repository, creating it if needed."""
        client = self._client()
        try:
            result = client.query(
                GET_LABEL, {"owner": repo.owner, "name": repo.name, "labelName": label_name}
            )
            if (result.get("repository") or {}).get("label"):
                return True

            # Labels can only be created through the REST API
            response = client.post_rest(
                f"/repos/{repo.owner}/{repo.name}/labels",
                {
                    "name": label_name,
                    "color": color,
                    "description": f"Active working indicator for {self.username}",
                },
            )
        except GitHubClientError as e:
            self._degrade("ensure_label", e)
            return False

        # 422 means the label was created concurrently
        return response.status_code in (201, 422)

    def _label_mutation(
        self, mutation: str, repo: RepoInfo, issue_number: int, label_name: str
    ) -> bool:
        client = self._client()
        try:
            result = client.query(
                GET_ISSUE_AND_LABEL,
                {
                    "owner": repo.owner,
                    "name": repo.name,
                    "number": issue_number,
                    "labelName": label_name,
                },
            )
            repository = result.get("repository") or {}
            issue = repository.get("issue")
            label = repository.get("label")
            if not issue or not label:
                return False
            client.mutate(mutation, {"labelableId": issue["id"], "labelIds": [label["id"]]})
        except GitHubClientError as e:
            self._degrade("label update", e)
            return False
        return True

    def add_label_to_issue(self, repo: RepoInfo, issue_number: int, label_name: str) -> bool:
        return self._label_mutation(ADD_LABELS, repo, issue_number, label_name)

    def remove_label_from_issue(self, repo: RepoInfo, issue_number: int, label_name: str) -> bool:
        return self._label_mutation(REMOVE_LABELS, repo, issue_number, label_name)

    def find_issues_with_label(self, repo: RepoInfo, label_name: str) -> list[int]:
        """Numbers of open issues carrying a label."""
        client = self._client()
        try:
            result = client.query(
                GET_ISSUES_WITH_LABEL,
                {"owner": repo.owner, "name": repo.name, "labels": [label_name]},
            )
        except GitHubClientError as e:
            self._degrade("find_issues_with_label", e)
            return []

        nodes = ((result.get("repository") or {}).get("issues") or {}).get("nodes") or []
        return [node["number"] for node in nodes if node and "number" in node]

    # --- Issue types ---

    def get_issue_types(self, repo: RepoInfo) -> list[IssueType]:
        client = self._client()
        try:
            result = client.query(GET_ISSUE_TYPES, {"owner": repo.owner, "name": repo.name})
        except GitHubClientError as e:
            self._degrade("get_issue_types", e)
            return []

        nodes = ((result.get("repository") or {}).get("issueTypes") or {}).get("nodes") or []
        return [IssueType.model_validate(node) for node in nodes if node]

    def set_issue_type(self, repo: RepoInfo, issue_number: int, issue_type_id: str) -> bool:
        client = self._client()
        try:
            issue_id = self._issue_node_id(repo, issue_number)
            if issue_id is None:
                return False
            client.mutate(UPDATE_ISSUE_TYPE, {"issueId": issue_id, "issueTypeId": issue_type_id})
        except GitHubClientError as e:
            self._degrade("set_issue_type", e)
            return False
        return True

    # --- Assignees ---

    def add_assignees(self, repo: RepoInfo, issue_number: int, logins: list[str]) -> bool:
        """Assign users to an issue. Unknown logins are skipped."""
        if not logins:
            return True
        client = self._client()
        try:
            issue_id = self._issue_node_id(repo, issue_number)
            if issue_id is None:
                return False

            user_ids = []
            for login in logins:
                try:
                    user = client.query(GET_USER_ID, {"login": login}).get("user")
                except GitHubNotFoundError:
                    user = None
                if user:
                    user_ids.append(user["id"])
                else:
                    logger.warning("Unknown GitHub user: %s", login)
            if not user_ids:
                return False

            client.mutate(ADD_ASSIGNEES, {"assignableId": issue_id, "assigneeIds": user_ids})
        except GitHubClientError as e:
            self._degrade("add_assignees", e)
            return False
        return True

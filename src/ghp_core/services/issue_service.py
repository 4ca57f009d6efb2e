"""Service for creating and updating issues from frontmatter-bearing content."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..codecs import compose_issue_content, merge_metadata, parse_issue_metadata
from ..github import GitHubAPI, GitHubClientError
from ..models import (
    CreatedIssue,
    EmptyListPolicy,
    IssueMetadata,
    MetadataOverrides,
    ProjectField,
    RepoInfo,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueCreationResult:
    """Outcome of creating an issue.

    ``failed`` names the metadata entries GitHub did not accept, e.g.
    ``label:bug`` or ``field:Priority``. The issue itself exists either way.
    """

    issue: CreatedIssue
    item_id: str | None
    metadata: IssueMetadata
    failed: list[str] = field(default_factory=list)


class IssueService:
    """Creates issues and keeps their frontmatter metadata applied on GitHub.

    The metadata block stays at the top of the stored issue body, so it can be
    read back and merged with later overrides.
    """

    def __init__(
        self,
        api: GitHubAPI,
        empty_list_policy: EmptyListPolicy = EmptyListPolicy.IGNORE,
    ) -> None:
        self.api = api
        self.empty_list_policy = empty_list_policy

    def create_issue(
        self,
        repo: RepoInfo,
        title: str,
        content: str = "",
        overrides: MetadataOverrides | None = None,
        project_id: str | None = None,
    ) -> IssueCreationResult | None:
        """
        Create an issue from editor content plus caller overrides.

        The frontmatter in ``content`` is merged with ``overrides``, the issue
        is created and added to ``project_id`` when given, then labels,
        assignees, issue type and project fields are applied.

        Returns:
            The result, or None if GitHub did not create the issue
        """
        parsed = parse_issue_metadata(content)
        metadata = merge_metadata(
            parsed.metadata, overrides, empty_list_policy=self.empty_list_policy
        )
        if metadata.is_empty and not parsed.extra_lines:
            body = parsed.body
        else:
            body = compose_issue_content(metadata, parsed.body, parsed.extra_lines)

        created = self.api.create_issue(repo, title, body)
        if created is None:
            return None

        item_id = None
        if project_id is not None:
            item_id = self.api.add_to_project(project_id, created.id)
            if item_id is None:
                logger.warning("Could not add %s#%d to project", repo.full_name, created.number)

        failed = self.apply_metadata(
            repo, created.number, metadata, project_id=project_id, item_id=item_id
        )
        logger.info(
            "Issue created: %s#%d (labels=%d, type=%s, failed=%d)",
            repo.full_name,
            created.number,
            len(metadata.labels),
            metadata.type,
            len(failed),
        )
        return IssueCreationResult(
            issue=created, item_id=item_id, metadata=metadata, failed=failed
        )

    def get_editable_content(self, repo: RepoInfo, issue_number: int) -> str | None:
        """Issue body with a complete metadata block, ready for an editor."""
        details = self.api.get_issue_details(repo, issue_number)
        if details is None:
            return None
        parsed = parse_issue_metadata(details.body)
        return compose_issue_content(parsed.metadata, parsed.body, parsed.extra_lines)

    def update_issue_metadata(
        self,
        repo: RepoInfo,
        issue_number: int,
        overrides: MetadataOverrides,
        project_id: str | None = None,
        item_id: str | None = None,
    ) -> IssueMetadata | None:
        """Merge overrides into the metadata stored in an issue body.

        The block is rewritten from the merged metadata. Block lines that are
        not ``key: value``, such as a branch marker, are written back after
        the metadata lines. The rest of the body is kept as is.

        Returns:
            The merged metadata, or None if the issue could not be read or written
        """
        details = self.api.get_issue_details(repo, issue_number)
        if details is None:
            return None

        parsed = parse_issue_metadata(details.body)
        merged = merge_metadata(
            parsed.metadata, overrides, empty_list_policy=self.empty_list_policy
        )
        new_body = compose_issue_content(merged, parsed.body, parsed.extra_lines)
        if not self.api.update_issue_body(repo, issue_number, new_body):
            return None

        failed = self.apply_metadata(
            repo, issue_number, merged, project_id=project_id, item_id=item_id
        )
        if failed:
            logger.warning(
                "Metadata not applied to %s#%d: %s", repo.full_name, issue_number, failed
            )
        return merged

    def apply_metadata(
        self,
        repo: RepoInfo,
        issue_number: int,
        metadata: IssueMetadata,
        project_id: str | None = None,
        item_id: str | None = None,
    ) -> list[str]:
        """Push metadata to GitHub.

        Labels must already exist in the repository. Project fields are only
        set when the project item is known.

        Returns:
            Names of the entries that could not be applied
        """
        failed: list[str] = []

        for label in metadata.labels:
            if not self.api.add_label_to_issue(repo, issue_number, label):
                failed.append(f"label:{label}")

        if metadata.assignees and not self.api.add_assignees(
            repo, issue_number, list(metadata.assignees)
        ):
            failed.extend(f"assignee:{login}" for login in metadata.assignees)

        if metadata.type:
            type_id = self._resolve_issue_type(repo, metadata.type)
            if type_id is None or not self.api.set_issue_type(repo, issue_number, type_id):
                failed.append(f"type:{metadata.type}")

        if metadata.fields:
            if project_id is None or item_id is None:
                failed.extend(f"field:{name}" for name in metadata.fields)
            else:
                failed.extend(self._apply_fields(project_id, item_id, metadata.fields))

        return failed

    def _resolve_issue_type(self, repo: RepoInfo, type_name: str) -> str | None:
        wanted = type_name.lower()
        for issue_type in self.api.get_issue_types(repo):
            if issue_type.name.lower() == wanted:
                return issue_type.id
        logger.debug("Unknown issue type for %s: %s", repo.full_name, type_name)
        return None

    def _apply_fields(self, project_id: str, item_id: str, fields: dict[str, str]) -> list[str]:
        try:
            project_fields = {f.name.lower(): f for f in self.api.get_project_fields(project_id)}
        except GitHubClientError as e:
            logger.warning("Could not read project fields: %s", e)
            return [f"field:{name}" for name in fields]

        failed: list[str] = []
        for name, raw_value in fields.items():
            project_field = project_fields.get(name.lower())
            value = field_input_value(project_field, raw_value) if project_field else None
            if value is None or not self.api.set_field_value(
                project_id, item_id, project_field.id, value
            ):
                failed.append(f"field:{name}")
        return failed


def field_input_value(project_field: ProjectField, raw_value: str) -> dict[str, Any] | None:
    """Convert frontmatter text into a ``ProjectV2FieldValue`` input.

    Single-select values are matched to option names case-insensitively.
    Returns None when the text does not fit the field (unknown option,
    non-numeric number) or the field kind cannot be set from text.
    """
    if project_field.options is not None:
        wanted = raw_value.lower()
        for option in project_field.options:
            if option.name.lower() == wanted:
                return {"singleSelectOptionId": option.id}
        return None

    data_type = (project_field.data_type or "TEXT").upper()
    if data_type == "NUMBER":
        try:
            return {"number": float(raw_value)}
        except ValueError:
            return None
    if data_type == "DATE":
        return {"date": raw_value}
    if data_type == "TEXT":
        return {"text": raw_value}
    return None

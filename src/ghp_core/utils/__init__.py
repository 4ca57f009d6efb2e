"""Utility functions."""

from .slug import sanitize_for_branch_name
from .urls import (
    ParsedIssueUrl,
    build_issue_url,
    build_org_project_url,
    build_project_url,
    build_pull_request_url,
    build_repo_url,
    parse_github_url,
    parse_issue_url,
)

__all__ = [
    "ParsedIssueUrl",
    "build_issue_url",
    "build_org_project_url",
    "build_project_url",
    "build_pull_request_url",
    "build_repo_url",
    "parse_github_url",
    "parse_issue_url",
    "sanitize_for_branch_name",
]

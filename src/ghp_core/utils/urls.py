"""Parse and build github.com URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import RepoInfo

GITHUB_HOST = "https://github.com"

# Matches https, ssh and scp-style remotes:
#   https://github.com/owner/repo(.git)
#   git@github.com:owner/repo(.git)
#   ssh://git@github.com/owner/repo(.git)
REPO_URL_PATTERN = re.compile(
    r"github\.com[:/](?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?/?$"
)

ISSUE_URL_PATTERN = re.compile(
    r"github\.com/(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+)"
    r"/(?P<kind>issues|pull)/(?P<number>\d+)"
)


@dataclass(frozen=True)
class ParsedIssueUrl:
    """Components of an issue or pull request URL."""

    repo: RepoInfo
    number: int
    is_pull_request: bool = False


def parse_github_url(url: str) -> RepoInfo | None:
    """Extract owner and repository name from a GitHub remote URL.

    Returns:
        RepoInfo, or None if the URL does not point at a github.com repository
    """
    match = REPO_URL_PATTERN.search(url.strip())
    if not match:
        return None
    return RepoInfo(owner=match.group("owner"), name=match.group("name"))


def parse_issue_url(url: str) -> ParsedIssueUrl | None:
    """Parse ``https://github.com/owner/repo/issues/N`` (or ``/pull/N``)."""
    match = ISSUE_URL_PATTERN.search(url.strip())
    if not match:
        return None
    return ParsedIssueUrl(
        repo=RepoInfo(owner=match.group("owner"), name=match.group("name")),
        number=int(match.group("number")),
        is_pull_request=match.group("kind") == "pull",
    )


def build_repo_url(repo: RepoInfo) -> str:
    return f"{GITHUB_HOST}/{repo.owner}/{repo.name}"


def build_issue_url(repo: RepoInfo, issue_number: int) -> str:
    return f"{build_repo_url(repo)}/issues/{issue_number}"


def build_pull_request_url(repo: RepoInfo, pr_number: int) -> str:
    return f"{build_repo_url(repo)}/pull/{pr_number}"


def build_project_url(owner: str, project_number: int) -> str:
    """URL of a user-owned project."""
    return f"{GITHUB_HOST}/users/{owner}/projects/{project_number}"


def build_org_project_url(org: str, project_number: int) -> str:
    """URL of an organization-owned project."""
    return f"{GITHUB_HOST}/orgs/{org}/projects/{project_number}"

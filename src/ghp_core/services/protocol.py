"""Remote capabilities the services depend on."""

from typing import Protocol

from ..models import IssueDetails, RepoInfo


class IssueBodyStore(Protocol):
    """Reads and replaces issue bodies.

    GitHubAPI implements this; tests can pass any object with the same two
    methods.
    """

    def get_issue_details(self, repo: RepoInfo, issue_number: int) -> IssueDetails | None:
        """Get the issue, or None if it cannot be read."""
        ...

    def update_issue_body(self, repo: RepoInfo, issue_number: int, body: str) -> bool:
        """Replace the issue body.

        Returns:
            True if the update was accepted.
        """
        ...

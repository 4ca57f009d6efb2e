"""Service for linking git branches to issues."""

import logging

from ..codecs import parse_branch_link, remove_branch_link, set_branch_link
from ..models import RepoInfo
from .protocol import IssueBodyStore

logger = logging.getLogger(__name__)


class BranchLinker:
    """Reads and writes the branch link stored in an issue body.

    Every write reads the current body, rewrites it locally and replaces it.
    There is no compare-and-swap: an edit made on GitHub between the read and
    the write is overwritten.
    """

    def __init__(self, store: IssueBodyStore) -> None:
        self.store = store

    def link(self, repo: RepoInfo, issue_number: int, branch: str) -> bool:
        """Link ``branch`` to an issue, replacing any existing link."""
        details = self.store.get_issue_details(repo, issue_number)
        if details is None:
            logger.debug("link: issue not found: %s#%d", repo.full_name, issue_number)
            return False

        new_body = set_branch_link(details.body, branch)
        if not self.store.update_issue_body(repo, issue_number, new_body):
            return False

        logger.info("Linked %s to %s#%d", branch, repo.full_name, issue_number)
        return True

    def unlink(self, repo: RepoInfo, issue_number: int) -> bool:
        """Remove the branch link from an issue.

        Returns:
            False if the issue is unreadable, has no link, or the write fails
        """
        details = self.store.get_issue_details(repo, issue_number)
        if details is None:
            logger.debug("unlink: issue not found: %s#%d", repo.full_name, issue_number)
            return False

        current = parse_branch_link(details.body)
        if current is None:
            logger.debug("unlink: no branch linked to %s#%d", repo.full_name, issue_number)
            return False

        if not self.store.update_issue_body(repo, issue_number, remove_branch_link(details.body)):
            return False

        logger.info("Unlinked %s from %s#%d", current, repo.full_name, issue_number)
        return True

    def get_branch_for_issue(self, repo: RepoInfo, issue_number: int) -> str | None:
        details = self.store.get_issue_details(repo, issue_number)
        if details is None:
            return None
        return parse_branch_link(details.body)

    def has_link(self, repo: RepoInfo, issue_number: int) -> bool:
        return self.get_branch_for_issue(repo, issue_number) is not None

"""Services built on the GitHub API."""

from .branch_linker import BranchLinker
from .issue_service import IssueCreationResult, IssueService, field_input_value
from .protocol import IssueBodyStore

__all__ = [
    "BranchLinker",
    "IssueBodyStore",
    "IssueCreationResult",
    "IssueService",
    "field_input_value",
]

"""Codecs for state embedded in issue bodies."""

from .branch_link import (
    BRANCH_LINK_PATTERN,
    format_branch_link,
    parse_branch_link,
    remove_branch_link,
    set_branch_link,
)
from .metadata import (
    ParsedIssueContent,
    compose_issue_content,
    generate_metadata_template,
    merge_metadata,
    parse_fields_option,
    parse_issue_metadata,
)

__all__ = [
    "BRANCH_LINK_PATTERN",
    "ParsedIssueContent",
    "compose_issue_content",
    "format_branch_link",
    "generate_metadata_template",
    "merge_metadata",
    "parse_branch_link",
    "parse_fields_option",
    "parse_issue_metadata",
    "remove_branch_link",
    "set_branch_link",
]

"""ghp-core: GitHub Projects items, issue metadata and branch links."""

from .codecs import (
    compose_issue_content,
    generate_metadata_template,
    merge_metadata,
    parse_branch_link,
    parse_fields_option,
    parse_issue_metadata,
    remove_branch_link,
    set_branch_link,
)
from .models import (
    SENTINEL_RANK,
    EmptyListPolicy,
    IssueMetadata,
    MetadataOverrides,
    NormalizedItem,
    RawItemRecord,
    RepoInfo,
)
from .projects import ItemNormalizer, StatusOrderIndex, sort_items

__version__ = "0.1.0"

__all__ = [
    "SENTINEL_RANK",
    "EmptyListPolicy",
    "IssueMetadata",
    "ItemNormalizer",
    "MetadataOverrides",
    "NormalizedItem",
    "RawItemRecord",
    "RepoInfo",
    "StatusOrderIndex",
    "compose_issue_content",
    "generate_metadata_template",
    "merge_metadata",
    "parse_branch_link",
    "parse_fields_option",
    "parse_issue_metadata",
    "remove_branch_link",
    "set_branch_link",
    "sort_items",
]

"""Issue metadata stored as a frontmatter block at the top of an issue body.

Format::

    ---
    labels: bug, enhancement
    assignees: user1, user2
    type: Feature
    Status: Todo
    Priority: High
    ---

    Issue body here...

``labels``, ``assignees`` and ``type`` are reserved keys (matched
case-insensitively). Every other key is a project field name and keeps its
casing, since it is later matched against the project's fields.

This is not YAML: values are the rest of the line, lists are comma-separated,
and there is no escaping of ``:`` or ``,`` inside values.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..models import EmptyListPolicy, IssueMetadata, MetadataOverrides

# Opening "---" line, optional content lines, closing "---" line, then the body
FRONTMATTER_PATTERN = re.compile(
    r"^---\r?\n(?:(?P<block>.*?)\r?\n)?---(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL,
)

# key: value, where key is word characters only and value is non-empty
METADATA_LINE_PATTERN = re.compile(r"^(\w+):\s*(.+)$")

# key with nothing after the colon; dropped, the template writes it again
EMPTY_METADATA_LINE_PATTERN = re.compile(r"^\w+:\s*$")


@dataclass(frozen=True)
class ParsedIssueContent:
    """Metadata parsed from issue content plus the remaining body.

    ``extra_lines`` keeps the non-blank block lines that are not ``key: value``
    (free-form notes, a branch marker), in their original order.
    """

    metadata: IssueMetadata
    body: str
    extra_lines: tuple[str, ...] = ()


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_issue_metadata(content: str) -> ParsedIssueContent:
    """Parse a leading frontmatter block from issue content.

    Content without a frontmatter block at its (left-trimmed) start is
    returned unchanged as the body, with empty metadata. Lines inside the
    block that are not ``key: value`` do not contribute metadata and are
    returned in ``extra_lines``.

    Examples:
        >>> parsed = parse_issue_metadata("---\\nlabels: bug, urgent\\n---\\nBody")
        >>> parsed.metadata.labels
        ('bug', 'urgent')
        >>> parsed.body
        'Body'
        >>> parse_issue_metadata("hello world").body
        'hello world'
    """
    match = FRONTMATTER_PATTERN.match(content.lstrip())
    if not match:
        return ParsedIssueContent(metadata=IssueMetadata(), body=content)

    labels: list[str] = []
    assignees: list[str] = []
    issue_type: str | None = None
    fields: dict[str, str] = {}
    extra_lines: list[str] = []

    for line in (match.group("block") or "").split("\n"):
        line = line.rstrip("\r")
        line_match = METADATA_LINE_PATTERN.match(line)
        if not line_match:
            if line.strip() and not EMPTY_METADATA_LINE_PATTERN.match(line):
                extra_lines.append(line)
            continue

        key, value = line_match.groups()
        key_lower = key.lower()

        if key_lower == "labels":
            labels = _split_list(value)
        elif key_lower == "assignees":
            assignees = _split_list(value)
        elif key_lower == "type":
            issue_type = value.strip()
        else:
            fields[key] = value.strip()

    metadata = IssueMetadata(labels=labels, assignees=assignees, type=issue_type, fields=fields)
    return ParsedIssueContent(
        metadata=metadata,
        body=match.group("body").strip(),
        extra_lines=tuple(extra_lines),
    )


def generate_metadata_template(
    existing: IssueMetadata | MetadataOverrides | None = None,
    extra_lines: Sequence[str] = (),
) -> str:
    """Render a frontmatter block to pre-fill an editor.

    The three reserved keys are always present, left blank when there is no
    value, followed by one line per project field in mapping order and then
    any ``extra_lines`` as given.
    """
    labels = (existing.labels if existing else None) or []
    assignees = (existing.assignees if existing else None) or []
    issue_type = (existing.type if existing else None) or ""
    fields = (existing.fields if existing else None) or {}

    lines = [
        "---",
        f"labels: {', '.join(labels)}",
        f"assignees: {', '.join(assignees)}",
        f"type: {issue_type}",
    ]
    lines.extend(f"{key}: {value}" for key, value in fields.items())
    lines.extend(extra_lines)
    lines.append("---")
    return "\n".join(lines)


def compose_issue_content(
    metadata: IssueMetadata | MetadataOverrides | None,
    body: str,
    extra_lines: Sequence[str] = (),
) -> str:
    """Join a frontmatter block and a body into editable issue content."""
    block = generate_metadata_template(metadata, extra_lines)
    body = body.strip()
    if not body:
        return block + "\n"
    return f"{block}\n\n{body}"


def parse_fields_option(fields_option: str) -> dict[str, str]:
    """Parse a ``key=value,key=value`` option string.

    The first ``=`` splits key from value, so values may contain ``=``.
    Pairs without ``=`` or with an empty key are skipped.

    Examples:
        >>> parse_fields_option("priority=High,size=xs")
        {'priority': 'High', 'size': 'xs'}
        >>> parse_fields_option("priority=High=VeryHigh")
        {'priority': 'High=VeryHigh'}
    """
    fields: dict[str, str] = {}
    for pair in fields_option.split(","):
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        fields[key] = value.strip()
    return fields


def merge_metadata(
    from_content: IssueMetadata,
    overrides: MetadataOverrides | IssueMetadata | None,
    *,
    empty_list_policy: EmptyListPolicy = EmptyListPolicy.IGNORE,
) -> IssueMetadata:
    """Merge metadata parsed from content with caller overrides.

    - labels/assignees: a non-empty override list replaces the parsed list.
      An empty override list is ignored under ``EmptyListPolicy.IGNORE``
      (the default) and clears the list under ``EmptyListPolicy.CLEAR``.
    - type: the override wins whenever it is not None, including "".
    - fields: shallow merge, override keys win.
    """
    if overrides is None:
        return from_content

    def pick(override: Sequence[str] | None, parsed: Sequence[str]) -> tuple[str, ...]:
        if override is None:
            return tuple(parsed)
        if override or empty_list_policy is EmptyListPolicy.CLEAR:
            return tuple(override)
        return tuple(parsed)

    return IssueMetadata(
        labels=pick(overrides.labels, from_content.labels),
        assignees=pick(overrides.assignees, from_content.assignees),
        type=overrides.type if overrides.type is not None else from_content.type,
        fields={**from_content.fields, **(overrides.fields or {})},
    )

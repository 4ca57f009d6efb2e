"""Branch links stored as a hidden HTML comment in an issue body.

The marker looks like::

    <!-- ghp-branch: feature/my-branch -->

It is invisible in the rendered issue, so the link lives on GitHub itself and
every client (CLI, editor extensions) sees the same value. The marker never
matches the ``key: value`` line grammar of the metadata frontmatter, so both
codecs can be applied to one body in either order.
"""

import re

BRANCH_LINK_PATTERN = re.compile(r"<!--\s*ghp-branch:\s*(.+?)\s*-->")


def format_branch_link(branch: str) -> str:
    """Render the marker for ``branch``."""
    return f"<!-- ghp-branch: {branch} -->"


def parse_branch_link(body: str | None) -> str | None:
    """Return the linked branch, or None if the body has no marker.

    Examples:
        >>> parse_branch_link("Fixes login\\n\\n<!-- ghp-branch: fix/login -->")
        'fix/login'
        >>> parse_branch_link("no marker") is None
        True
    """
    if not body:
        return None
    match = BRANCH_LINK_PATTERN.search(body)
    return match.group(1).strip() if match else None


def set_branch_link(body: str | None, branch: str) -> str:
    """Set or replace the branch link in a body.

    An existing marker is replaced where it stands; otherwise the marker is
    appended after a blank line. Exactly one marker remains afterwards.
    """
    current = body or ""
    marker = format_branch_link(branch)

    match = BRANCH_LINK_PATTERN.search(current)
    if match is None:
        return f"{current.strip()}\n\n{marker}"

    head = current[: match.start()]
    # Drop any further markers left behind by older clients
    tail = BRANCH_LINK_PATTERN.sub("", current[match.end() :])
    return f"{head}{marker}{tail}"


def remove_branch_link(body: str | None) -> str:
    """Strip the branch link marker from a body and trim the result."""
    if not body:
        return ""
    return BRANCH_LINK_PATTERN.sub("", body).strip()

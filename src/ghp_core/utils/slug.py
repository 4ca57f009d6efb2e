"""Utilities for generating git-safe branch name fragments."""

import re

MAX_SLUG_LENGTH = 50


def sanitize_for_branch_name(text: str) -> str:
    """
    Convert text to a fragment usable inside a branch name.

    Anything outside ``[a-z0-9-]`` becomes a hyphen, so accented letters are
    replaced rather than transliterated. The result is at most 50 characters.

    Example: "Fix Login Bug!" -> "fix-login-bug"
    """
    # Convert to lowercase
    text = text.lower()

    # Replace any character that isn't alphanumeric or hyphen
    text = re.sub(r"[^a-z0-9-]", "-", text)

    # Collapse multiple hyphens and remove leading/trailing ones
    text = re.sub(r"-+", "-", text).strip("-")

    return text[:MAX_SLUG_LENGTH]

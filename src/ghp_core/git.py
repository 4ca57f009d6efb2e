"""Local git repository helpers.

Every function takes an optional ``cwd`` so the same helpers work from a
terminal (current directory) or an editor integration (workspace folder).
Queries degrade to None, False, 0 or an empty list when git fails; commands
that change the working tree raise GitCommandError.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from .models import RepoInfo
from .utils.slug import sanitize_for_branch_name
from .utils.urls import parse_github_url

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_MAX_LENGTH = 60

REMOTE_HEAD_PATTERN = re.compile(r"refs/remotes/origin/(.+)")


class GitCommandError(Exception):
    """A git command exited with a non-zero status or git is not installed."""

    pass


def _run_git(args: list[str], cwd: Path | str | None = None) -> str:
    """Run a git command and return its stdout."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise GitCommandError("git is not installed") from e
    except subprocess.CalledProcessError as e:
        logger.debug("git %s failed: %s", " ".join(args), (e.stderr or "").strip())
        raise GitCommandError(f"git {args[0]} failed: {(e.stderr or '').strip()}") from e
    return result.stdout


def detect_repository(cwd: Path | str | None = None) -> RepoInfo | None:
    """Detect the GitHub repository from the ``origin`` remote."""
    try:
        url = _run_git(["remote", "get-url", "origin"], cwd).strip()
    except GitCommandError:
        return None
    return parse_github_url(url)


def get_current_branch(cwd: Path | str | None = None) -> str | None:
    """Current branch name, or None on a detached HEAD."""
    try:
        return _run_git(["branch", "--show-current"], cwd).strip() or None
    except GitCommandError:
        return None


def has_uncommitted_changes(cwd: Path | str | None = None) -> bool:
    try:
        return bool(_run_git(["status", "--porcelain"], cwd).strip())
    except GitCommandError:
        return False


def branch_exists(branch_name: str, cwd: Path | str | None = None) -> bool:
    """Check if a branch exists locally."""
    try:
        _run_git(["show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}"], cwd)
    except GitCommandError:
        return False
    return True


def create_branch(branch_name: str, cwd: Path | str | None = None) -> None:
    """Create and check out a new branch."""
    _run_git(["checkout", "-b", branch_name], cwd)
    logger.info("Created branch %s", branch_name)


def checkout_branch(branch_name: str, cwd: Path | str | None = None) -> None:
    _run_git(["checkout", branch_name], cwd)
    logger.info("Checked out %s", branch_name)


def pull_latest(cwd: Path | str | None = None) -> None:
    _run_git(["pull"], cwd)


def fetch_origin(cwd: Path | str | None = None) -> None:
    _run_git(["fetch", "origin"], cwd)


def _count_commits(revision_range: str, cwd: Path | str | None) -> int:
    try:
        fetch_origin(cwd)
        output = _run_git(["rev-list", "--count", revision_range], cwd).strip()
    except GitCommandError:
        return 0
    try:
        return int(output)
    except ValueError:
        return 0


def get_commits_behind(branch: str, cwd: Path | str | None = None) -> int:
    """Number of commits on ``origin/<branch>`` missing locally."""
    return _count_commits(f"{branch}..origin/{branch}", cwd)


def get_commits_ahead(branch: str, cwd: Path | str | None = None) -> int:
    """Number of local commits not yet on ``origin/<branch>``."""
    return _count_commits(f"origin/{branch}..{branch}", cwd)


def is_git_repository(cwd: Path | str | None = None) -> bool:
    try:
        _run_git(["rev-parse", "--git-dir"], cwd)
    except GitCommandError:
        return False
    return True


def get_repository_root(cwd: Path | str | None = None) -> Path | None:
    try:
        return Path(_run_git(["rev-parse", "--show-toplevel"], cwd).strip())
    except GitCommandError:
        return None


def _split_branches(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_local_branches(cwd: Path | str | None = None) -> list[str]:
    try:
        return _split_branches(_run_git(["branch", "--format=%(refname:short)"], cwd))
    except GitCommandError:
        return []


def get_remote_branches(cwd: Path | str | None = None) -> list[str]:
    """Remote branches without the ``origin/`` prefix, HEAD excluded.

    Fetches (with prune) first so deleted remote branches disappear.
    """
    try:
        _run_git(["fetch", "--prune"], cwd)
        output = _run_git(["branch", "-r", "--format=%(refname:short)"], cwd)
    except GitCommandError:
        return []
    return [
        branch.removeprefix("origin/")
        for branch in _split_branches(output)
        if "HEAD" not in branch
    ]


def get_all_branches(cwd: Path | str | None = None) -> list[str]:
    """Local and remote branches, deduplicated, local first."""
    branches = get_local_branches(cwd)
    seen = set(branches)
    for branch in get_remote_branches(cwd):
        if branch not in seen:
            seen.add(branch)
            branches.append(branch)
    return branches


def get_default_branch(cwd: Path | str | None = None) -> str:
    """Default branch from ``origin/HEAD``, falling back to main, then master."""
    try:
        ref = _run_git(["symbolic-ref", "refs/remotes/origin/HEAD"], cwd).strip()
        match = REMOTE_HEAD_PATTERN.search(ref)
        if match:
            return match.group(1)
    except GitCommandError:
        pass

    if branch_exists("main", cwd):
        return "main"
    return "master"


def generate_branch_name(
    pattern: str,
    *,
    user: str,
    number: int | None,
    title: str,
    repo: str,
    max_length: int = DEFAULT_BRANCH_MAX_LENGTH,
) -> str:
    """Fill a branch pattern such as ``{user}/{number}-{title}``.

    Draft items have no number and use ``draft`` in its place. Names longer
    than ``max_length`` are truncated without leaving a trailing hyphen.

    Example:
        >>> generate_branch_name("{user}/{number}-{title}", user="alice",
        ...                      number=42, title="Fix login bug", repo="web")
        'alice/42-fix-login-bug'
    """
    branch = (
        pattern.replace("{user}", user, 1)
        .replace("{number}", str(number) if number is not None else "draft", 1)
        .replace("{title}", sanitize_for_branch_name(title), 1)
        .replace("{repo}", repo, 1)
    )

    if len(branch) > max_length:
        branch = branch[:max_length].removesuffix("-")

    return branch

"""Authenticated GitHub sessions.

A session is an explicit value: it is created once from a token provider and
passed to every object that talks to GitHub. There is no process-wide
"current user" state.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Any, Protocol

from .client import GitHubClient, GitHubClientError
from .queries import VIEWER_QUERY

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Source of GitHub tokens (environment, gh CLI, an IDE auth session...)."""

    def get_token(self) -> str | None:
        """Return a token, or None if none is available."""
        ...


@dataclass(frozen=True)
class StaticTokenProvider:
    """Token provider returning a fixed token."""

    token: str | None

    def get_token(self) -> str | None:
        return self.token or None


class EnvironmentTokenProvider:
    """Token from the environment or the gh CLI.

    Tries in order:
    1. GITHUB_TOKEN environment variable
    2. gh auth token (if gh CLI is installed and authenticated)
    """

    def get_token(self) -> str | None:
        # Try GITHUB_TOKEN env var first
        token = os.environ.get("GITHUB_TOKEN")
        if token:
            logger.debug("Using token from GITHUB_TOKEN environment variable")
            return token

        # Try gh CLI
        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                check=True,
            )
            token = result.stdout.strip()
            if token:
                logger.debug("Using token from gh CLI")
                return token
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("gh CLI not available or not authenticated")

        return None


@dataclass
class GitHubSession:
    """An open, verified connection to GitHub on behalf of one user."""

    client: GitHubClient
    username: str

    @classmethod
    def authenticate(
        cls,
        token_provider: TokenProvider,
        base_url: str = "api.github.com",
    ) -> GitHubSession | None:
        """Open a session and verify the token by asking who the viewer is.

        Returns:
            The session, or None if no token is available or GitHub rejects it
        """
        token = token_provider.get_token()
        if not token:
            logger.error("No GitHub token found")
            return None

        client = GitHubClient(token, base_url)
        try:
            result = client.query(VIEWER_QUERY)
        except GitHubClientError as e:
            logger.warning("GitHub authentication failed: %s", e)
            client.close()
            return None

        login = (result.get("viewer") or {}).get("login")
        if not login:
            logger.warning("GitHub authentication returned no viewer login")
            client.close()
            return None

        logger.info("Authenticated to GitHub as %s", login)
        return cls(client=client, username=login)

    @property
    def is_open(self) -> bool:
        return not self.client.is_closed

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> GitHubSession:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

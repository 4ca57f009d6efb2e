"""GitHub GraphQL API client."""

from __future__ import annotations

import logging
import re
import time
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Scopes GitHub Projects V2 needs for reading and updating items
PROJECT_SCOPES = ("read:project", "project")


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class AuthErrorType(str, Enum):
    """Kinds of authentication failure reported to callers."""

    INSUFFICIENT_SCOPES = "INSUFFICIENT_SCOPES"
    SSO_REQUIRED = "SSO_REQUIRED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    UNKNOWN = "UNKNOWN"


class GitHubAuthError(GitHubClientError):
    """Authentication failed.

    Attributes:
        type: What went wrong
        required_scopes: Scopes the token is missing, when known
        sso_url: URL to authorize the token for an organization, when known
    """

    def __init__(
        self,
        message: str,
        type: AuthErrorType = AuthErrorType.UNKNOWN,
        required_scopes: list[str] | None = None,
        sso_url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.type = type
        self.required_scopes = required_scopes
        self.sso_url = sso_url


class GitHubNotAuthenticatedError(GitHubAuthError):
    """An operation was attempted without an open session."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, AuthErrorType.UNKNOWN)


class GitHubNotFoundError(GitHubClientError):
    """Resource not found."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Permission denied."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Rate limit exceeded."""

    pass


def _parse_sso_url(header: str | None) -> str | None:
    """Extract the authorization URL from an ``X-GitHub-SSO`` header.

    The header looks like ``required; url=https://github.com/orgs/acme/sso?...``.
    """
    if not header:
        return None
    match = re.search(r"url=(\S+)", header)
    return match.group(1) if match else None


def classify_auth_error(
    errors: list[dict[str, Any]],
    sso_header: str | None = None,
) -> GitHubAuthError | None:
    """Recognize authentication problems in a GraphQL ``errors`` payload.

    Returns:
        A GitHubAuthError for missing scopes or SSO enforcement, None for
        any other kind of error
    """
    for error in errors:
        if error.get("type") == "INSUFFICIENT_SCOPES":
            return GitHubAuthError(
                "Your GitHub token is missing required scopes. "
                "GitHub Projects requires the read:project scope.",
                AuthErrorType.INSUFFICIENT_SCOPES,
                required_scopes=list(PROJECT_SCOPES),
            )

    for error in errors:
        message = error.get("message") or ""
        if "SSO" in message or "SAML" in message:
            return GitHubAuthError(
                "SSO authentication required for this organization.",
                AuthErrorType.SSO_REQUIRED,
                sso_url=_parse_sso_url(sso_header),
            )

    return None


class GitHubClient:
    """GitHub GraphQL API client.

    Provides a thin wrapper around the GitHub GraphQL API with:
    - Token authentication
    - Enterprise support via custom base_url
    - Error handling with an authentication error taxonomy
    """

    def __init__(self, token: str, base_url: str = "api.github.com"):
        """Initialize the GitHub client.

        Args:
            token: GitHub personal access token
            base_url: API base URL (default: api.github.com, use custom for Enterprise)
        """
        self.token = token
        self.base_url = base_url
        self._graphql_url = f"https://{base_url}/graphql"
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=30.0,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query or mutation.

        Args:
            query: GraphQL query/mutation string
            variables: Query variables

        Returns:
            Response data (the 'data' field from GraphQL response)

        Raises:
            GitHubNotAuthenticatedError: The client was already closed
            GitHubAuthError: Token expired, missing scopes or SSO required
            GitHubNotFoundError: Resource not found
            GitHubForbiddenError: Permission denied
            GitHubRateLimitError: Rate limit exceeded
            GitHubClientError: Other errors
        """
        if self.is_closed:
            raise GitHubNotAuthenticatedError()

        # Extract operation name for logging (e.g., "query GetProject" -> "GetProject")
        op_match = re.search(r"(?:query|mutation)\s+(\w+)", query)
        op_name = op_match.group(1) if op_match else "anonymous"

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        # Variables at DEBUG only; issue bodies can be large and private
        logger.debug("GraphQL %s: variables=%s", op_name, variables)

        start_time = time.monotonic()
        try:
            response = self._client.post(self._graphql_url, json=payload)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("GraphQL %s failed after %.0fms: %s", op_name, elapsed_ms, e)
            raise GitHubClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        # Handle HTTP errors
        if response.status_code == 401:
            logger.error("GraphQL %s: 401 Unauthorized (%.0fms)", op_name, elapsed_ms)
            raise GitHubAuthError(
                "Authentication failed. Your GitHub token is invalid or has expired.",
                AuthErrorType.TOKEN_EXPIRED,
            )
        if response.status_code == 403:
            # Check if rate limited
            if "rate limit" in response.text.lower():
                logger.error("GraphQL %s: 403 Rate Limited (%.0fms)", op_name, elapsed_ms)
                raise GitHubRateLimitError("GitHub API rate limit exceeded. Try again later.")
            logger.error("GraphQL %s: 403 Forbidden (%.0fms)", op_name, elapsed_ms)
            raise GitHubForbiddenError(
                "Permission denied. Check that your token has the required scopes:\n"
                "  - read:project (for reading project data)\n"
                "  - project (for modifying project items)\n"
                "  - repo (for issue operations)"
            )
        if response.status_code == 404:
            logger.error("GraphQL %s: 404 Not Found (%.0fms)", op_name, elapsed_ms)
            raise GitHubNotFoundError("Resource not found")

        if response.status_code >= 400:
            logger.error("GraphQL %s: HTTP %d (%.0fms)", op_name, response.status_code, elapsed_ms)
            raise GitHubClientError(f"HTTP {response.status_code}: {response.text}")

        # Parse GraphQL response
        try:
            result = response.json()
        except ValueError as e:
            logger.error("GraphQL %s: Invalid JSON response (%.0fms)", op_name, elapsed_ms)
            raise GitHubClientError(f"Invalid JSON response: {e}") from e

        # Check for GraphQL errors
        if "errors" in result:
            errors = result["errors"]
            error_messages = [e.get("message", str(e)) for e in errors]

            auth_error = classify_auth_error(errors, response.headers.get("X-GitHub-SSO"))
            if auth_error is not None:
                logger.error(
                    "GraphQL %s: %s - %s (%.0fms)",
                    op_name,
                    auth_error.type.value,
                    error_messages,
                    elapsed_ms,
                )
                raise auth_error

            # Check for specific error types
            for error in errors:
                error_type = error.get("type", "")
                message = error.get("message", "")

                if error_type == "NOT_FOUND" or "not found" in message.lower():
                    logger.error(
                        "GraphQL %s: Not Found - %s (%.0fms)", op_name, message, elapsed_ms
                    )
                    raise GitHubNotFoundError(message)
                if error_type == "FORBIDDEN" or "permission" in message.lower():
                    logger.error(
                        "GraphQL %s: Forbidden - %s (%.0fms)", op_name, message, elapsed_ms
                    )
                    raise GitHubForbiddenError(message)

            logger.error("GraphQL %s: errors=%s (%.0fms)", op_name, error_messages, elapsed_ms)
            raise GitHubClientError(f"GraphQL errors: {'; '.join(error_messages)}")

        # Success
        logger.info("GraphQL %s: 200 OK (%.0fms)", op_name, elapsed_ms)
        return result.get("data") or {}

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query (alias for execute)."""
        return self.execute(query, variables)

    def mutate(self, mutation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL mutation (alias for execute)."""
        return self.execute(mutation, variables)

    def post_rest(self, path: str, body: dict[str, Any]) -> httpx.Response:
        """POST to a REST endpoint on the same host.

        GitHub Enterprise serves REST under ``/api/v3``; github.com serves it
        from the API host root.
        """
        if self.is_closed:
            raise GitHubNotAuthenticatedError()
        if self.base_url == "api.github.com":
            url = f"https://api.github.com{path}"
        else:
            url = f"https://{self.base_url}/api/v3{path}"
        logger.debug("REST POST %s", path)
        try:
            return self._client.post(
                url,
                json=body,
                headers={"Accept": "application/vnd.github.v3+json"},
            )
        except httpx.RequestError as e:
            logger.error("REST POST %s failed: %s", path, e)
            raise GitHubClientError(f"Request failed: {e}") from e

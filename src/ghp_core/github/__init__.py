"""GitHub API client and remote operations."""

from .api import GitHubAPI
from .client import (
    PROJECT_SCOPES,
    AuthErrorType,
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotAuthenticatedError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    classify_auth_error,
)
from .session import EnvironmentTokenProvider, GitHubSession, StaticTokenProvider, TokenProvider

__all__ = [
    "PROJECT_SCOPES",
    "AuthErrorType",
    "EnvironmentTokenProvider",
    "GitHubAPI",
    "GitHubAuthError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubNotAuthenticatedError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubSession",
    "StaticTokenProvider",
    "TokenProvider",
    "classify_auth_error",
]

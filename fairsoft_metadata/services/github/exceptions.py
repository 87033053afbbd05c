"""Exceptions raised by the GitHub client."""

from __future__ import annotations


class GithubError(Exception):
    """Base exception for GitHub API failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GithubConfigurationError(GithubError):
    """Raised when required app credentials are missing or unreadable."""


class GithubAuthError(GithubError):
    """Raised when GitHub rejects the credentials (401/403)."""


class GithubNotFoundError(GithubError):
    """Raised when the requested resource does not exist (404)."""


class GithubRequestError(GithubError):
    """
    Raised for any other failed call.

    Covers transport errors (status_code is None), unexpected HTTP statuses
    and GraphQL responses carrying an ``errors`` array.
    """

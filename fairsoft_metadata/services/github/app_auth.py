"""GitHub App authentication.

A GitHub App authenticates with a short-lived RS256 JWT signed by its private
key; that JWT is exchanged for per-installation access tokens.
See https://docs.github.com/en/apps/creating-github-apps/authenticating-with-a-github-app
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx
from jose import jwt

from fairsoft_metadata.config import GithubAppConfig
from fairsoft_metadata.services.github.exceptions import GithubConfigurationError
from fairsoft_metadata.services.github.github_client import GithubClient

logger = logging.getLogger(__name__)

# GitHub rejects app JWTs valid for more than 10 minutes
JWT_LIFETIME = timedelta(minutes=9)
# Backdate iat to tolerate clock drift
JWT_CLOCK_SKEW = timedelta(seconds=60)


class GithubAppAuth:
    """Authenticate as one GitHub App and hand out installation clients."""

    def __init__(
        self,
        config: GithubAppConfig,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.api_url = api_url
        self.transport = transport
        self._private_key: Optional[str] = None

    def _read_private_key(self) -> str:
        if self._private_key is None:
            if not self.config.is_configured:
                raise GithubConfigurationError(
                    "GitHub App credentials are not configured (app id / private key path)."
                )
            try:
                with open(self.config.private_key_path, encoding="utf-8") as handle:
                    self._private_key = handle.read()
            except OSError as exc:
                raise GithubConfigurationError(
                    f"Cannot read GitHub App private key: {exc}"
                ) from exc
        return self._private_key

    def create_jwt(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "iat": int((now - JWT_CLOCK_SKEW).timestamp()),
            "exp": int((now + JWT_LIFETIME).timestamp()),
            "iss": str(self.config.app_id),
        }
        return jwt.encode(payload, self._read_private_key(), algorithm="RS256")

    def app_client(self) -> GithubClient:
        """Client authenticated as the app itself (app-level endpoints only)."""
        return GithubClient(self.create_jwt(), api_url=self.api_url, transport=self.transport)

    async def get_repo_installation(self, owner: str, repo: str) -> Dict[str, Any]:
        async with self.app_client() as gh:
            return await gh.get_repo_installation(owner, repo)

    async def get_installation_token(self, installation_id: int | str) -> str:
        async with self.app_client() as gh:
            data = await gh.create_installation_token(installation_id)
        logger.debug("Installation token issued for installation %s", installation_id)
        return data["token"]

    async def installation_client(self, installation_id: int | str) -> GithubClient:
        token = await self.get_installation_token(installation_id)
        return GithubClient(token, api_url=self.api_url, transport=self.transport)


def user_client(
    token: str,
    api_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GithubClient:
    """Client acting with a user's personal access token."""
    return GithubClient(token, api_url=api_url, transport=transport)

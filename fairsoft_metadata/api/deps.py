"""Shared dependencies for the API routers."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fairsoft_metadata.config import settings
from fairsoft_metadata.services.github.app_auth import GithubAppAuth, user_client
from fairsoft_metadata.services.github.exceptions import GithubError
from fairsoft_metadata.services.github.github_client import GithubClient
from fairsoft_metadata.services.pipeline_exceptions import from_github_error


def get_extractor_auth() -> GithubAppAuth:
    return GithubAppAuth(settings.extractor_app())


def get_updater_auth() -> GithubAppAuth:
    return GithubAppAuth(settings.updater_app())


async def find_installation_id(auth: GithubAppAuth, owner: str, repo: str):
    try:
        installation = await auth.get_repo_installation(owner, repo)
    except GithubError as exc:
        raise from_github_error(
            exc, f"Failed to get installation for {owner}/{repo}"
        ) from exc
    return installation.get("id")


@asynccontextmanager
async def open_installation_client(
    auth: GithubAppAuth, installation_id
) -> AsyncIterator[GithubClient]:
    try:
        client = await auth.installation_client(installation_id)
    except GithubError as exc:
        raise from_github_error(
            exc, f"Failed to get client for installation {installation_id}"
        ) from exc
    async with client:
        yield client


@asynccontextmanager
async def open_user_client(token: str) -> AsyncIterator[GithubClient]:
    client = user_client(token)
    async with client:
        yield client

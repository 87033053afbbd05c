"""Async GitHub API client (GraphQL + REST) built on httpx."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from fairsoft_metadata.config import settings
from fairsoft_metadata.services.github.exceptions import (
    GithubAuthError,
    GithubNotFoundError,
    GithubRequestError,
)
from fairsoft_metadata.services.github.queries import (
    BLOB_TEXT_QUERY,
    REPOSITORY_QUERY,
    TREE_QUERY,
)

logger = logging.getLogger(__name__)

GITHUB_JSON = "application/vnd.github+json"


def _raise_for_status(response: httpx.Response, what: str) -> None:
    status = response.status_code
    if status < 400:
        return

    detail = response.text
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        detail = body["message"]

    message = f"{what} failed ({status}): {detail}"
    if status in (401, 403):
        raise GithubAuthError(message, status_code=status)
    if status == 404:
        raise GithubNotFoundError(message, status_code=status)
    raise GithubRequestError(message, status_code=status)


def _tree_expression(path: str) -> str:
    return f"HEAD:{path}" if path else "HEAD:"


class GithubClient:
    """
    Thin wrapper over the GitHub API for one credential.

    Use as an async context manager so the underlying connection pool is
    closed when the request is done:

        async with GithubClient(token) as gh:
            repository = await gh.query_repository("octo", "hello")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: Optional[str] = None,
        graphql_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = (api_url or settings.GITHUB_API_URL).rstrip("/")
        self.graphql_url = graphql_url or settings.GITHUB_GRAPHQL_URL
        headers = {"Accept": GITHUB_JSON, "X-GitHub-Api-Version": "2022-11-28"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout or settings.GITHUB_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "GithubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(self, method: str, url: str, what: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise GithubRequestError(f"{what} failed: {exc}") from exc
        _raise_for_status(response, what)
        return response

    async def _rest_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        response = await self._send(
            method, url, f"{method} {path}", params=params, json=json
        )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Run a GraphQL query and return its ``data`` member."""
        response = await self._send(
            "POST",
            self.graphql_url,
            "GraphQL query",
            json={"query": query, "variables": variables},
        )
        payload = response.json()
        errors = payload.get("errors") or []
        if errors:
            messages = "; ".join(error.get("message", "") for error in errors)
            if any(error.get("type") == "NOT_FOUND" for error in errors):
                raise GithubNotFoundError(messages, status_code=404)
            raise GithubRequestError(f"GraphQL query failed: {messages}")
        return payload.get("data") or {}

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    async def query_repository(
        self, owner: str, repo: str, commit_limit: Optional[int] = None
    ) -> Dict[str, Any]:
        data = await self.graphql(
            REPOSITORY_QUERY,
            {
                "owner": owner,
                "repo": repo,
                "commitLimit": commit_limit or settings.COMMIT_LIMIT,
            },
        )
        repository = data.get("repository")
        if repository is None:
            raise GithubNotFoundError(
                f"Repository {owner}/{repo} not found", status_code=404
            )
        return repository

    async def list_directory(self, owner: str, repo: str, path: str = "") -> List[Dict[str, Any]]:
        """``{name, type}`` entries of a tree at HEAD; [] if the path is no tree."""
        data = await self.graphql(
            TREE_QUERY, {"owner": owner, "repo": repo, "path": _tree_expression(path)}
        )
        tree = (data.get("repository") or {}).get("object")
        if not tree:
            return []
        return tree.get("entries") or []

    async def get_file_text(self, owner: str, repo: str, path: str) -> Optional[str]:
        """Text of a blob at HEAD, or None when the file does not exist."""
        data = await self.graphql(
            BLOB_TEXT_QUERY, {"owner": owner, "repo": repo, "path": _tree_expression(path)}
        )
        blob = (data.get("repository") or {}).get("object")
        if not blob:
            return None
        return blob.get("text")

    async def get_contents(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """REST contents entry for a file, or None on 404."""
        params = {"ref": ref} if ref else None
        try:
            return await self._rest_request(
                "GET", f"/repos/{owner}/{repo}/contents/{path}", params=params
            )
        except GithubNotFoundError:
            return None

    async def get_repo_installation(self, owner: str, repo: str) -> Dict[str, Any]:
        """Installation of the authenticated app on a repository (needs an app JWT)."""
        return await self._rest_request("GET", f"/repos/{owner}/{repo}/installation")

    async def create_installation_token(self, installation_id: int | str) -> Dict[str, Any]:
        """Access token for one installation (needs an app JWT)."""
        return await self._rest_request(
            "POST", f"/app/installations/{installation_id}/access_tokens"
        )

    async def get_branch(self, owner: str, repo: str, branch: str) -> Dict[str, Any]:
        return await self._rest_request("GET", f"/repos/{owner}/{repo}/branches/{branch}")

    async def list_branches(self, owner: str, repo: str) -> List[str]:
        """Names of all branches, following the ``Link: rel="next"`` pages."""
        path = f"/repos/{owner}/{repo}/branches"
        url: Optional[str] = f"{self.api_url}{path}"
        params: Optional[Dict[str, Any]] = {"per_page": 100}
        names: List[str] = []
        while url:
            response = await self._send("GET", url, f"GET {path}", params=params)
            names.extend(branch.get("name") for branch in response.json() or [])
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None
        logger.debug("Branches of %s/%s: %s", owner, repo, names)
        return names

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    async def create_branch(
        self, owner: str, repo: str, branch_name: str, sha: str
    ) -> Dict[str, Any]:
        return await self._rest_request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json={"ref": f"refs/heads/{branch_name}", "sha": sha},
        )

    async def create_or_update_file(
        self,
        owner: str,
        repo: str,
        branch: str,
        path: str,
        content: str,
        message: str,
        committer: Optional[Dict[str, str]] = None,
        sha: Optional[str] = None,
    ) -> Dict[str, Any]:
        """PUT a base64 encoded file; pass the blob sha to update an existing file."""
        body: Dict[str, Any] = {
            "message": message,
            "content": content,
            "branch": branch,
        }
        if committer:
            body["committer"] = committer
        if sha:
            body["sha"] = sha
        return await self._rest_request(
            "PUT", f"/repos/{owner}/{repo}/contents/{path}", json=body
        )

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._rest_request(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            json={"title": title, "head": head, "base": base, "body": body},
        )

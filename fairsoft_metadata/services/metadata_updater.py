"""
Metadata updater - proposes a generated metadata file as a pull request.

Steps:
1. Encode the content to add.
2. Resolve the target branch (sha + name).
3. Create a new ``evaluator-N`` branch from that sha.
4. Create or update the file on the new branch.
5. Open a pull request from the new branch into the target branch.

Each step aborts the sequence when it fails.
"""

from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fairsoft_metadata.config import settings
from fairsoft_metadata.core.tracing import TracingContext
from fairsoft_metadata.services.github.exceptions import GithubError
from fairsoft_metadata.services.github.github_client import GithubClient
from fairsoft_metadata.services.pipeline_exceptions import (
    ValidationFailure,
    from_github_error,
)

logger = logging.getLogger(__name__)

BRANCH_PATTERN = re.compile(r"^evaluator(?:-(\d+))?$")

DEFAULT_PR_TITLE = "Metadata/Citation for this software"
UPDATER_APP_URL = "https://github.com/apps/metadata-updater-for-fairsoft"


def default_commit_message(filename: str) -> str:
    return (
        f"Description of this software (`{filename}`) generated by "
        f"[Metadata Updater for FAIRsoft]({UPDATER_APP_URL}) added."
    )


def generate_branch_name(branches: List[str]) -> str:
    """
    Next free ``evaluator-N`` branch name.

    ``evaluator`` counts as number 0, so ['evaluator', 'evaluator-1'] gives
    'evaluator-2' and a repository without evaluator branches gets
    'evaluator-1'.
    """
    if not isinstance(branches, list):
        raise ValidationFailure("Invalid input: branch names must be a list.")

    numbers = []
    for branch in branches:
        match = BRANCH_PATTERN.match(branch or "")
        if match:
            numbers.append(int(match.group(1) or 0))

    next_number = max(numbers) + 1 if numbers else 1
    return f"evaluator-{next_number}"


def encode_content(metadata: Any) -> str:
    """Base64 text for the contents API; non-string metadata is written as JSON."""
    if isinstance(metadata, str):
        text = metadata
    else:
        text = json.dumps(metadata, indent=2, ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@dataclass
class PullRequestPlan:
    owner: str
    repo: str
    filename: str
    branch: str
    metadata: Any
    title: Optional[str] = None
    message: Optional[str] = None

    @property
    def final_title(self) -> str:
        return self.title or DEFAULT_PR_TITLE

    @property
    def final_message(self) -> str:
        return self.message or default_commit_message(self.filename)


class MetadataUpdater:
    def __init__(self, client: GithubClient):
        self.client = client

    async def get_target_branch(self, owner: str, repo: str, branch: str) -> Dict[str, str]:
        logger.info("Fetching details of branch %s", branch)
        data = await self.client.get_branch(owner, repo, branch)
        return {"sha": data["commit"]["sha"], "name": data["name"]}

    async def create_file(
        self, owner: str, repo: str, branch: str, path: str, content: str, message: str
    ) -> Dict[str, Any]:
        existing = await self.client.get_contents(owner, repo, path, ref=branch)
        sha = existing.get("sha") if isinstance(existing, dict) else None
        logger.info("%s %s", "Updating" if sha else "Creating", path)
        return await self.client.create_or_update_file(
            owner,
            repo,
            branch,
            path,
            content,
            message,
            committer={"name": settings.COMMITTER_NAME, "email": settings.COMMITTER_EMAIL},
            sha=sha,
        )

    async def _step(self, description: str, coroutine):
        try:
            return await coroutine
        except GithubError as exc:
            logger.error("%s failed: %s", description, exc)
            raise from_github_error(exc, f"Failed to {description}") from exc

    async def open_pull_request(self, plan: PullRequestPlan) -> Dict[str, Any]:
        TracingContext.set(owner=plan.owner, repo=plan.repo, operation="open_pull_request")
        owner, repo = plan.owner, plan.repo
        content = encode_content(plan.metadata)

        target = await self._step(
            f"get branch '{plan.branch}' of {owner}/{repo}",
            self.get_target_branch(owner, repo, plan.branch),
        )
        branches = await self._step(
            f"list branches of {owner}/{repo}", self.client.list_branches(owner, repo)
        )
        new_branch = generate_branch_name(branches)

        await self._step(
            f"create branch '{new_branch}' in {owner}/{repo}",
            self.client.create_branch(owner, repo, new_branch, target["sha"]),
        )
        await self._step(
            f"create or update '{plan.filename}' in {owner}/{repo}",
            self.create_file(
                owner, repo, new_branch, plan.filename, content, plan.final_message
            ),
        )
        pull_request = await self._step(
            f"create pull request from '{new_branch}' to '{target['name']}' in {owner}/{repo}",
            self.client.create_pull_request(
                owner, repo, new_branch, target["name"], plan.final_title, plan.final_message
            ),
        )

        logger.info("Pull request created: %s", pull_request.get("html_url"))
        return {
            "new_branch_name": new_branch,
            "head_branch_name": target["name"],
            "url": pull_request.get("html_url"),
            "pullrequest_message": pull_request,
        }

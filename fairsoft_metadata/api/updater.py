"""Metadata Updater for FAIRsoft endpoints."""

from fastapi import APIRouter, Depends, Query

from fairsoft_metadata.api.deps import (
    find_installation_id,
    get_updater_auth,
    open_installation_client,
)
from fairsoft_metadata.dtos import DataResponse, PullRequestRequest, PullRequestResponse
from fairsoft_metadata.services.github.app_auth import GithubAppAuth
from fairsoft_metadata.services.metadata_updater import MetadataUpdater, PullRequestPlan

router = APIRouter()


@router.get("/metadata-updater-for-fairsoft/installation/id", response_model=DataResponse)
async def get_installation_id(
    owner: str = Query(...),
    repo: str = Query(...),
    auth: GithubAppAuth = Depends(get_updater_auth),
):
    """Installation ID of the updater app for a repository."""
    installation_id = await find_installation_id(auth, owner, repo)
    return DataResponse(data=installation_id)


@router.post("/metadata/pull", response_model=PullRequestResponse)
async def create_metadata_pull_request(
    payload: PullRequestRequest,
    auth: GithubAppAuth = Depends(get_updater_auth),
):
    """Open a pull request that adds the given metadata file to the repository."""
    plan = PullRequestPlan(
        owner=payload.owner,
        repo=payload.repo,
        filename=payload.filename,
        branch=payload.branch,
        metadata=payload.metadata,
        title=payload.title,
        message=payload.message,
    )
    async with open_installation_client(auth, payload.installation_id) as gh:
        result = await MetadataUpdater(gh).open_pull_request(plan)
    return PullRequestResponse(**result)

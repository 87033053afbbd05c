"""Metadata Extractor for FAIRsoft endpoints."""

from fastapi import APIRouter, Depends, Query

from fairsoft_metadata.api.deps import (
    find_installation_id,
    get_extractor_auth,
    open_installation_client,
    open_user_client,
)
from fairsoft_metadata.dtos import (
    ContentRequest,
    ContentResponse,
    DataResponse,
    MetadataRequest,
    UserContentRequest,
    UserMetadataRequest,
)
from fairsoft_metadata.services.github.app_auth import GithubAppAuth
from fairsoft_metadata.services.metadata_extractor import (
    ExtractionOptions,
    MetadataExtractor,
    get_file_content,
)

router = APIRouter()


@router.get("/metadata-extractor-for-fairsoft/installation/id", response_model=DataResponse)
async def get_installation_id(
    owner: str = Query(...),
    repo: str = Query(...),
    auth: GithubAppAuth = Depends(get_extractor_auth),
):
    """Installation ID of the extractor app for a repository."""
    installation_id = await find_installation_id(auth, owner, repo)
    return DataResponse(data=installation_id)


@router.post("/metadata", response_model=DataResponse)
async def extract_metadata(
    payload: MetadataRequest,
    auth: GithubAppAuth = Depends(get_extractor_auth),
):
    """Repository metadata using the app installation's access token."""
    options = ExtractionOptions(
        include_readme_extraction=payload.readme_extract,
        assign_list_ids=payload.prepare,
    )
    async with open_installation_client(auth, payload.installation_id) as gh:
        metadata = await MetadataExtractor(gh).extract(payload.owner, payload.repo, options)
    return DataResponse(data=metadata)


@router.post("/metadata/user", response_model=DataResponse)
async def extract_metadata_as_user(payload: UserMetadataRequest):
    """Repository metadata using the user's access token."""
    options = ExtractionOptions(include_readme_extraction=True, assign_list_ids=payload.prepare)
    async with open_user_client(payload.user_token) as gh:
        metadata = await MetadataExtractor(gh).extract(payload.owner, payload.repo, options)
    return DataResponse(data=metadata)


@router.post("/metadata/content", response_model=ContentResponse)
async def get_content(
    payload: ContentRequest,
    auth: GithubAppAuth = Depends(get_extractor_auth),
):
    """Content of a repository file; JSON files are returned parsed."""
    async with open_installation_client(auth, payload.installation_id) as gh:
        content = await get_file_content(
            gh, payload.owner, payload.repo, payload.path, payload.ref
        )
    return ContentResponse(content=content)


@router.post("/metadata/content/user", response_model=ContentResponse)
async def get_content_as_user(payload: UserContentRequest):
    async with open_user_client(payload.user_token) as gh:
        content = await get_file_content(
            gh, payload.owner, payload.repo, payload.path, payload.ref
        )
    return ContentResponse(content=content)

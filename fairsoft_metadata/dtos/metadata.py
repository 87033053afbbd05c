"""Request/response DTOs for the metadata endpoints.

Body keys keep the names existing clients send (``installationID``,
``userToken``, ``readme_extract``).
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class RepositoryRef(BaseModel):
    owner: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)


class MetadataRequest(RepositoryRef):
    """Extract metadata using the extractor app installation."""

    installation_id: Union[int, str] = Field(..., alias="installationID")
    prepare: bool = True
    readme_extract: bool = False

    class Config:
        populate_by_name = True


class UserMetadataRequest(RepositoryRef):
    """Extract metadata with a user's token (README extraction always on)."""

    user_token: str = Field(..., alias="userToken")
    prepare: bool = True

    class Config:
        populate_by_name = True


class ContentRequest(RepositoryRef):
    path: str = Field(..., min_length=1)
    installation_id: Union[int, str] = Field(..., alias="installationID")
    ref: Optional[str] = None

    class Config:
        populate_by_name = True


class UserContentRequest(RepositoryRef):
    path: str = Field(..., min_length=1)
    user_token: str = Field(..., alias="userToken")
    ref: Optional[str] = None

    class Config:
        populate_by_name = True


class PullRequestRequest(RepositoryRef):
    """Open a pull request adding a generated metadata file."""

    filename: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1, description="Target (base) branch")
    installation_id: Union[int, str] = Field(..., alias="installationID")
    metadata: Any
    title: Optional[str] = None
    message: Optional[str] = None

    class Config:
        populate_by_name = True


class DataResponse(BaseModel):
    data: Any = None
    status: int = 200


class ContentResponse(BaseModel):
    status: int = 200
    code: int = 200
    message: str = "success"
    content: Any = None


class PullRequestResponse(BaseModel):
    status: int = 200
    code: int = 200
    message: str = "success"
    new_branch_name: str
    head_branch_name: str
    url: Optional[str] = None
    pullrequest_message: Any = None

from .metadata import (
    ContentRequest,
    ContentResponse,
    DataResponse,
    MetadataRequest,
    PullRequestRequest,
    PullRequestResponse,
    RepositoryRef,
    UserContentRequest,
    UserMetadataRequest,
)

__all__ = [
    "ContentRequest",
    "ContentResponse",
    "DataResponse",
    "MetadataRequest",
    "PullRequestRequest",
    "PullRequestResponse",
    "RepositoryRef",
    "UserContentRequest",
    "UserMetadataRequest",
]

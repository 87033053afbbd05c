"""
Transform a GitHub GraphQL repository object into FAIRsoft metadata.

The input is the ``repository`` object returned by REPOSITORY_QUERY (see
services/github/queries.py). Missing sub-objects are treated as empty.
"""

from typing import Any, Iterable, List, Mapping, Optional

from fairsoft_metadata.entities import Author, LicenseEntry, MetadataRecord, Topic


def remove_null(values: Iterable[Any]) -> List[Any]:
    return [value for value in values if value is not None]


def _nodes(connection: Optional[Mapping]) -> List[Mapping]:
    if not connection:
        return []
    return [node for node in connection.get("nodes") or [] if node]


def build_topics(repository: Mapping) -> List[Topic]:
    """One topic per repositoryTopics node; vocabulary is left blank."""
    topics = []
    for node in _nodes(repository.get("repositoryTopics")):
        topic = node.get("topic") or {}
        topics.append(Topic(uri=node.get("url"), term=topic.get("name"), vocabulary=""))
    return topics


def _commit_authors(repository: Mapping) -> List[Mapping]:
    target = (repository.get("defaultBranchRef") or {}).get("target") or {}
    edges = (target.get("history") or {}).get("edges") or []
    return [(edge.get("node") or {}).get("author") or {} for edge in edges if edge]


def build_authors(repository: Mapping) -> List[Author]:
    """
    Contributors from the default branch history, unique by email.

    The first author seen for an email wins. Authors without an email share
    the '' bucket, so only the first of them is kept.
    """
    authors: List[Author] = []
    seen_emails = set()
    for contributor in _commit_authors(repository):
        email = contributor.get("email") or ""
        if email in seen_emails:
            continue
        seen_emails.add(email)
        authors.append(
            Author(name=contributor.get("name"), type="person", email=email, maintainer=False)
        )
    return authors


def build_license(repository: Mapping) -> List[LicenseEntry]:
    license_info = repository.get("licenseInfo")
    if not license_info:
        return []
    return [LicenseEntry(name=license_info.get("name"), url=license_info.get("url"))]


def build_versions(repository: Mapping) -> List[str]:
    return [node.get("tagName") for node in _nodes(repository.get("releases"))]


def default_branch_name(repository: Mapping) -> Optional[str]:
    return (repository.get("defaultBranchRef") or {}).get("name")


def normalize(repository: Mapping) -> MetadataRecord:
    """Map a GraphQL repository object onto a fresh MetadataRecord."""
    return MetadataRecord(
        name=repository.get("name"),
        label=remove_null([repository.get("name")]),
        description=remove_null([repository.get("description")]),
        links=remove_null([repository.get("mirrorUrl")]),
        webpage=remove_null([repository.get("homepageUrl")]),
        is_disabled=repository.get("isDisabled"),
        is_empty=repository.get("isEmpty"),
        is_locked=repository.get("isLocked"),
        is_private=repository.get("isPrivate"),
        is_template=repository.get("isTemplate"),
        version=remove_null(build_versions(repository)),
        license=build_license(repository),
        repository=remove_null([repository.get("url")]),
        topics=build_topics(repository),
        authors=build_authors(repository),
    )

"""
Documentation file discovery.

Classifies files from the repository root and a few well-known documentation
directories against a fixed catalog of documentation types.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from fairsoft_metadata.entities import DocumentationEntry
from fairsoft_metadata.services.github.exceptions import GithubError

logger = logging.getLogger(__name__)

DOC_DIRECTORIES = ("docs", "documentation", "example")

# Ordered: the first type whose variants contain the file name wins
DOC_TYPES: Dict[str, Sequence[str]] = {
    "readme": ("README.md", "README.txt"),
    "contributing": ("CONTRIBUTING.md", "CONTRIBUTING.txt"),
    "license": ("LICENSE.md", "LICENSE.txt", "LICENSE"),
    "code_of_conduct": ("CODE_OF_CONDUCT.md", "CODE_OF_CONDUCT.txt"),
    "changelog": ("CHANGELOG.md", "CHANGELOG.txt"),
    "installation": ("INSTALL.md", "INSTALL.txt", "INSTALL"),
    "usage": ("USAGE.md", "USAGE.txt", "USAGE"),
    "api": ("API.md", "API.txt", "API"),
    "faq": ("FAQ.md", "FAQ.txt", "FAQ"),
    "tutorial": ("TUTORIAL.md", "TUTORIAL.txt", "TUTORIAL"),
    "requirements": ("REQUIREMENTS.md", "REQUIREMENTS.txt", "REQUIREMENTS"),
    "citation": ("CITATION.md", "CITATION.txt", "CITATION", "CITATION.cff"),
}

_UPPER_DOC_TYPES = {
    doc_type: frozenset(name.upper() for name in names)
    for doc_type, names in DOC_TYPES.items()
}

DOC_EXTENSIONS = (".md", ".txt")
FILE_ENTRY_TYPES = ("blob", "file")


def match_doc_type(filename: str) -> Optional[str]:
    upper = filename.upper()
    for doc_type, names in _UPPER_DOC_TYPES.items():
        if upper in names:
            return doc_type
    return None


def _is_candidate(entry: Mapping) -> bool:
    if entry.get("type") not in FILE_ENTRY_TYPES:
        return False
    name = entry.get("name") or ""
    return name.endswith(DOC_EXTENSIONS) or match_doc_type(name) is not None


def blob_url(owner: str, repo: str, branch: str, directory: str, filename: str) -> str:
    prefix = f"{directory}/" if directory else ""
    return f"https://github.com/{owner}/{repo}/blob/{branch}/{prefix}{filename}"


def classify_directory(
    owner: str,
    repo: str,
    entries: Iterable[Mapping],
    directory: str = "",
    branch: str = "main",
) -> List[DocumentationEntry]:
    """Classify the documentation files of a single directory listing."""
    documentation = []
    for entry in entries:
        if not _is_candidate(entry):
            continue
        name = entry["name"]
        doc_type = match_doc_type(name) or directory or "root"
        documentation.append(
            DocumentationEntry(
                type=doc_type, url=blob_url(owner, repo, branch, directory, name)
            )
        )
    return documentation


def classify(
    owner: str,
    repo: str,
    root_entries: Iterable[Mapping],
    directory_entries: Optional[Mapping[str, Iterable[Mapping]]] = None,
    branch: str = "main",
) -> List[DocumentationEntry]:
    """
    Classify root files followed by each known documentation directory.

    Args:
        root_entries: ``{name, type}`` listing of the repository root.
        directory_entries: listing per directory name; directories missing
            from the mapping are treated as empty.
        branch: branch used in the generated blob URLs.
    """
    directory_entries = directory_entries or {}
    documentation = classify_directory(owner, repo, root_entries, "", branch)
    for directory in DOC_DIRECTORIES:
        documentation.extend(
            classify_directory(
                owner, repo, directory_entries.get(directory) or [], directory, branch
            )
        )
    return documentation


async def _safe_listing(client, owner: str, repo: str, path: str) -> List[dict]:
    try:
        return await client.list_directory(owner, repo, path)
    except GithubError as exc:
        logger.warning("Could not list '%s' in %s/%s: %s", path or "/", owner, repo, exc)
        return []


async def fetch_documentation(
    client, owner: str, repo: str, branch: str = "main"
) -> List[DocumentationEntry]:
    """
    List the root and documentation directories concurrently and classify them.

    Result order is root, then DOC_DIRECTORIES order, whatever order the
    listings complete in.
    """
    listings = await asyncio.gather(
        _safe_listing(client, owner, repo, ""),
        *(_safe_listing(client, owner, repo, directory) for directory in DOC_DIRECTORIES),
    )
    root_entries, *directory_listings = listings
    return classify(
        owner,
        repo,
        root_entries,
        dict(zip(DOC_DIRECTORIES, directory_listings)),
        branch,
    )

"""
Metadata extraction pipeline.

fetch -> normalize -> documentation -> README publications -> CITATION.cff
-> dedupe publications -> (optional) list ids.

Only the primary repository query is fatal. README, CITATION.cff and
documentation listings are optional enrichment: when they cannot be fetched
they are treated as absent.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fairsoft_metadata.config import settings
from fairsoft_metadata.core.tracing import TracingContext
from fairsoft_metadata.entities import MetadataRecord
from fairsoft_metadata.pipeline.bibtex import extract_publications
from fairsoft_metadata.pipeline.citation import map_citation
from fairsoft_metadata.pipeline.documentation import fetch_documentation
from fairsoft_metadata.pipeline.list_ids import assign_ids
from fairsoft_metadata.pipeline.normalizer import default_branch_name, normalize
from fairsoft_metadata.pipeline.publications import dedupe
from fairsoft_metadata.services.github.exceptions import GithubError
from fairsoft_metadata.services.github.github_client import GithubClient
from fairsoft_metadata.services.pipeline_exceptions import (
    ParseFailure,
    UpstreamFetchFailure,
    from_github_error,
)

logger = logging.getLogger(__name__)

README_PATH = "README.md"
CITATION_PATH = "CITATION.cff"


@dataclass(frozen=True)
class ExtractionOptions:
    include_readme_extraction: bool = False
    assign_list_ids: bool = True


class MetadataExtractor:
    """Builds the FAIRsoft metadata document of one repository."""

    def __init__(self, client: GithubClient, commit_limit: Optional[int] = None):
        self.client = client
        self.commit_limit = commit_limit or settings.COMMIT_LIMIT

    async def fetch_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        try:
            return await self.client.query_repository(owner, repo, self.commit_limit)
        except GithubError as exc:
            raise from_github_error(
                exc, f"Failed to fetch repository {owner}/{repo}"
            ) from exc

    async def fetch_optional_text(self, owner: str, repo: str, path: str) -> Optional[str]:
        try:
            text = await self.client.get_file_text(owner, repo, path)
        except GithubError as exc:
            logger.warning("Error fetching %s: %s", path, exc)
            return None
        logger.info("%s %s", path, "found" if text is not None else "not found")
        return text

    async def build_record(
        self, owner: str, repo: str, include_readme_extraction: bool = False
    ) -> MetadataRecord:
        repository = await self.fetch_repository(owner, repo)
        logger.info("Repository object retrieved. Transforming to metadata")
        record = normalize(repository)

        branch = default_branch_name(repository) or "main"
        record.documentation = await fetch_documentation(
            self.client, owner, repo, branch
        )

        if include_readme_extraction:
            readme = await self.fetch_optional_text(owner, repo, README_PATH)
            record.publication = extract_publications(readme)

        citation = await self.fetch_optional_text(owner, repo, CITATION_PATH)
        if citation is not None:
            record.citation = citation
            record = map_citation(citation, record)

        record.publication = dedupe(record.publication)
        return record

    async def extract(
        self, owner: str, repo: str, options: Optional[ExtractionOptions] = None
    ) -> Dict[str, Any]:
        """
        Run the whole pipeline and return the JSON-ready metadata document.

        Raises:
            UpstreamFetchFailure: the repository itself could not be fetched.
            PipelineConfigurationError: GitHub credentials are missing.
        """
        options = options or ExtractionOptions()
        TracingContext.set(owner=owner, repo=repo, operation="extract_metadata")

        record = await self.build_record(owner, repo, options.include_readme_extraction)

        if options.assign_list_ids:
            logger.info("Preparing metadata list ids")
            return assign_ids(record)
        return record.to_document()


def decode_content(path: str, encoded: str) -> Any:
    """Decode a base64 contents payload; JSON files are parsed."""
    try:
        text = base64.b64decode(encoded or "").decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ParseFailure(f"Cannot decode content of {path}: {exc}") from exc

    if path.endswith(".json"):
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseFailure(f"Invalid JSON in {path}: {exc}") from exc
    return text


async def get_file_content(
    client: GithubClient, owner: str, repo: str, path: str, ref: Optional[str] = None
) -> Any:
    """Content of a repository file through the REST contents API."""
    TracingContext.set(owner=owner, repo=repo, operation="get_file_content")
    try:
        contents = await client.get_contents(owner, repo, path, ref)
    except GithubError as exc:
        raise from_github_error(exc, f"Failed to retrieve {path} in {owner}/{repo}") from exc

    if contents is None:
        raise UpstreamFetchFailure(f"{path} not found in {owner}/{repo}", status_code=404)
    if not isinstance(contents, dict) or "content" not in contents:
        raise ParseFailure(f"{path} in {owner}/{repo} is not a file")
    return decode_content(path, contents["content"])

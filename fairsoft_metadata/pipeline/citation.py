"""Map CITATION.cff content onto a MetadataRecord."""

import logging
from typing import Optional

import yaml
from pydantic import ValidationError

from fairsoft_metadata.entities import (
    Author,
    CitationData,
    LicenseEntry,
    MetadataRecord,
    PublicationEntry,
)
from fairsoft_metadata.services.pipeline_exceptions import ParseFailure

logger = logging.getLogger(__name__)


def parse_citation(yaml_text: Optional[str]) -> CitationData:
    """
    Parse CITATION.cff YAML into CitationData.

    Raises:
        ParseFailure: on invalid YAML or a non-mapping document. Malformed
            authors or preferred-citation entries are skipped instead.
    """
    try:
        document = yaml.safe_load(yaml_text or "")
    except yaml.YAMLError as exc:
        raise ParseFailure(f"Invalid CITATION.cff YAML: {exc}") from exc

    if not isinstance(document, dict):
        raise ParseFailure("CITATION.cff must be a YAML mapping")

    try:
        return CitationData.model_validate(document)
    except ValidationError as exc:
        raise ParseFailure(f"Unexpected CITATION.cff structure: {exc}") from exc


def map_citation(yaml_text: Optional[str], metadata: MetadataRecord) -> MetadataRecord:
    """
    Merge CITATION.cff content into a copy of metadata.

    Licenses, title, version and preferred-citation are appended. Authors
    listed in the citation file replace the commit-derived authors entirely.
    If the file cannot be parsed the original record is returned as is.
    """
    try:
        citation = parse_citation(yaml_text)
    except ParseFailure as exc:
        logger.warning("Error parsing CITATION.cff: %s", exc)
        return metadata

    updated = metadata.model_copy(deep=True)

    for license_name in citation.license:
        updated.license.append(LicenseEntry(name=license_name, url=""))

    if citation.title:
        updated.label.append(citation.title)

    if citation.authors:
        updated.authors = [
            Author(name=author.display_name, email="", maintainer=False, type="person")
            for author in citation.authors
        ]

    if citation.version:
        updated.version.append(citation.version)

    if citation.preferred_citation is not None:
        preferred = citation.preferred_citation
        updated.publication.append(
            PublicationEntry(
                title=preferred.title,
                year=preferred.year,
                doi=preferred.doi,
                url=preferred.url,
            )
        )

    return updated

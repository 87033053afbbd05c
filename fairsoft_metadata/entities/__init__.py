"""Domain entities - the FAIRsoft metadata schema"""

from .metadata import (
    Author,
    CitationAuthor,
    CitationData,
    DocumentationEntry,
    LicenseEntry,
    MetadataRecord,
    PreferredCitation,
    PublicationEntry,
    Semantics,
    Topic,
)

__all__ = [
    "Author",
    "CitationAuthor",
    "CitationData",
    "DocumentationEntry",
    "LicenseEntry",
    "MetadataRecord",
    "PreferredCitation",
    "PublicationEntry",
    "Semantics",
    "Topic",
]

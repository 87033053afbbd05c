"""
FAIRsoft metadata entities.

MetadataRecord is the canonical document produced by the extraction
pipeline. Field aliases keep the camelCase keys downstream consumers expect
(``isDisabled``, ``contribPolicy``) while the Python side stays snake_case.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def _as_text(value: Any) -> str:
    """YAML/BibTeX scalars (ints, floats, dates) become strings, None becomes ''."""
    if value is None:
        return ""
    return str(value)


class Author(BaseModel):
    name: Optional[str] = None
    type: str = "person"
    email: str = ""
    maintainer: bool = False


class LicenseEntry(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = ""


class Topic(BaseModel):
    uri: Optional[str] = None
    term: Optional[str] = None
    vocabulary: str = ""


class DocumentationEntry(BaseModel):
    """A documentation file found in the repository tree."""

    type: str
    url: str

    class Config:
        frozen = True


class PublicationEntry(BaseModel):
    title: str = ""
    year: str = ""
    doi: str = ""
    url: str = ""

    @field_validator("title", "year", "doi", "url", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class Semantics(BaseModel):
    inputs: List[Any] = Field(default_factory=list)
    outputs: List[Any] = Field(default_factory=list)
    topics: List[Any] = Field(default_factory=list)
    operations: List[Any] = Field(default_factory=list)


class MetadataRecord(BaseModel):
    """
    Canonical FAIRsoft metadata for one repository.

    Every list field is always present, even when empty.
    """

    name: Optional[str] = None
    label: List[str] = Field(default_factory=list)
    description: List[str] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    webpage: List[str] = Field(default_factory=list)

    is_disabled: Optional[bool] = Field(None, alias="isDisabled")
    is_empty: Optional[bool] = Field(None, alias="isEmpty")
    is_locked: Optional[bool] = Field(None, alias="isLocked")
    is_private: Optional[bool] = Field(None, alias="isPrivate")
    is_template: Optional[bool] = Field(None, alias="isTemplate")

    version: List[str] = Field(default_factory=list)
    license: List[LicenseEntry] = Field(default_factory=list)
    repository: List[str] = Field(default_factory=list)
    topics: List[Topic] = Field(default_factory=list)
    operations: List[Any] = Field(default_factory=list)
    authors: List[Author] = Field(default_factory=list)

    bioschemas: bool = False
    contrib_policy: List[Any] = Field(default_factory=list, alias="contribPolicy")
    dependencies: List[Any] = Field(default_factory=list)
    documentation: List[DocumentationEntry] = Field(default_factory=list)
    download: List[Any] = Field(default_factory=list)
    edam_operations: List[Any] = Field(default_factory=list)
    edam_topics: List[Any] = Field(default_factory=list)
    https: bool = True
    input: List[Any] = Field(default_factory=list)
    inst_instr: bool = False
    operational: bool = False
    os: List[Any] = Field(default_factory=list)
    output: List[Any] = Field(default_factory=list)
    publication: List[PublicationEntry] = Field(default_factory=list)
    semantics: Semantics = Field(default_factory=Semantics)
    source: List[str] = Field(default_factory=lambda: ["github"])
    src: List[Any] = Field(default_factory=list)
    ssl: bool = True
    tags: List[Any] = Field(default_factory=list)
    test: List[Any] = Field(default_factory=list)
    type: str = ""

    # Raw CITATION.cff text; omitted from the document when absent
    citation: Optional[str] = None

    class Config:
        populate_by_name = True

    def to_document(self) -> Dict[str, Any]:
        """Serialize with the public (aliased) keys."""
        document = self.model_dump(by_alias=True)
        if document.get("citation") is None:
            document.pop("citation", None)
        return document


# =============================================================================
# CITATION.cff
# =============================================================================


class CitationAuthor(BaseModel):
    given_names: str = Field("", alias="given-names")
    family_names: str = Field("", alias="family-names")
    # Entity authors (organisations) carry a single name
    name: str = ""

    class Config:
        populate_by_name = True

    @field_validator("given_names", "family_names", "name", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @property
    def display_name(self) -> str:
        if not self.given_names and not self.family_names and self.name:
            return self.name
        return f"{self.given_names} {self.family_names}"


class PreferredCitation(BaseModel):
    title: str = ""
    year: str = ""
    doi: str = ""
    url: str = ""

    @field_validator("title", "year", "doi", "url", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class CitationData(BaseModel):
    """
    The subset of a CITATION.cff document that is mapped onto metadata.

    Author items and preferred-citation that are not mappings are dropped so
    the remaining fields still map.
    """

    license: List[str] = Field(default_factory=list)
    title: Optional[str] = None
    authors: List[CitationAuthor] = Field(default_factory=list)
    version: Optional[str] = None
    preferred_citation: Optional[PreferredCitation] = Field(
        None, alias="preferred-citation"
    )

    class Config:
        populate_by_name = True

    @field_validator("license", mode="before")
    @classmethod
    def license_as_list(cls, value: Any) -> List[str]:
        # CFF allows a single SPDX id or a list of them
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [_as_text(item) for item in value if item]
        return [_as_text(value)] if value else []

    @field_validator("authors", mode="before")
    @classmethod
    def authors_as_list(cls, value: Any) -> List[Any]:
        # Only mapping items describe an author; anything else is skipped
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("preferred_citation", mode="before")
    @classmethod
    def preferred_citation_mapping(cls, value: Any) -> Optional[Any]:
        return value if isinstance(value, dict) else None

    @field_validator("title", "version", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

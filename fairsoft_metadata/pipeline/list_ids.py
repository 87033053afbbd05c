"""
List-ID preparation.

Turns the list fields consumed by the FAIRsoft front end from

    [term1, term2, ...]

into

    [{"term": term1, "id": 0}, {"term": term2, "id": 1}, ...]

Call exactly once per document: a second pass wraps the wrapped items again.
"""

from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel

from fairsoft_metadata.entities import MetadataRecord

LIST_ID_FIELDS = (
    "edam_topics",
    "edam_operations",
    "documentation",
    "description",
    "webpage",
    "license",
    "src",
    "links",
    "topics",
    "operations",
    "input",
    "output",
    "repository",
    "dependencies",
    "os",
    "authors",
    "publication",
)


def _plain(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(by_alias=True)
    return item


def assign_ids(metadata: Union[MetadataRecord, Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of metadata with LIST_ID_FIELDS wrapped as {term, id}."""
    if isinstance(metadata, MetadataRecord):
        document = metadata.to_document()
    else:
        document = dict(metadata)

    for field in LIST_ID_FIELDS:
        if field not in document:
            continue
        document[field] = [
            {"term": _plain(item), "id": index}
            for index, item in enumerate(document[field] or [])
        ]

    return document

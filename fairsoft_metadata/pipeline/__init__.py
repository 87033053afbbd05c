"""Pure transformation steps of the metadata pipeline."""

from .bibtex import extract_entries, extract_publications, parse_publications
from .citation import map_citation
from .documentation import classify, fetch_documentation
from .list_ids import LIST_ID_FIELDS, assign_ids
from .normalizer import normalize
from .publications import dedupe

__all__ = [
    "LIST_ID_FIELDS",
    "assign_ids",
    "classify",
    "dedupe",
    "extract_entries",
    "extract_publications",
    "fetch_documentation",
    "map_citation",
    "normalize",
    "parse_publications",
]

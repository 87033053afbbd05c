"""Publication deduplication."""

from typing import Iterable, List

from fairsoft_metadata.entities import PublicationEntry


def publication_key(publication: PublicationEntry) -> str:
    # Case-sensitive, no normalization: entries with neither title nor doi
    # all share the key "-"
    return f"{publication.title}-{publication.doi}"


def dedupe(publications: Iterable[PublicationEntry]) -> List[PublicationEntry]:
    """Keep the first publication per (title, doi), preserving order."""
    unique: List[PublicationEntry] = []
    seen = set()
    for publication in publications:
        key = publication_key(publication)
        if key in seen:
            continue
        seen.add(key)
        unique.append(publication)
    return unique

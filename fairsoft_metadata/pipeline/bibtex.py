"""
BibTeX extraction from free-form text (README files).

Two steps:
- extract_entries: find ``@article{...}`` / ``@inproceedings{...}`` blocks by
  brace counting, so entries embedded in Markdown survive surrounding noise.
- parse_publications: parse each block with bibtexparser and keep the
  title/year/doi/url fields as PublicationEntry objects.
"""

import logging
import re
import unicodedata
from typing import Dict, Iterable, List, Optional

from bibtexparser.bparser import BibTexParser

from fairsoft_metadata.entities import PublicationEntry
from fairsoft_metadata.services.pipeline_exceptions import ParseFailure

logger = logging.getLogger(__name__)

ENTRY_START = re.compile(r"@(article|inproceedings)\s*{[^,]+,", re.IGNORECASE)

PUBLICATION_FIELDS = ("title", "year", "doi", "url")


def _normalize_text(text: Optional[str]) -> str:
    content = "" if text is None else str(text)
    content = content.replace("`", "")
    return unicodedata.normalize("NFKD", content)


def extract_entries(text: Optional[str]) -> List[str]:
    """
    Return every complete BibTeX article/inproceedings entry found in text.

    Counting starts at 1 for the brace opened by the entry header. An entry
    whose braces never balance before the end of the text is dropped.
    """
    content = _normalize_text(text)
    entries: List[str] = []

    for match in ENTRY_START.finditer(content):
        brace_count = 1
        for index in range(match.end(), len(content)):
            char = content[index]
            if char == "{":
                brace_count += 1
            elif char == "}":
                brace_count -= 1

            if brace_count == 0:
                entries.append(content[match.start() : index + 1])
                break

    if entries:
        logger.info("Extracted %d BibTeX entries", len(entries))
    else:
        logger.debug("No BibTeX entries found")

    return entries


def strip_braces(value: str) -> str:
    """Remove one layer of surrounding curly braces, if present."""
    if value.startswith("{") and value.endswith("}"):
        return value[1:-1].strip()
    return value


def parse_entry(entry: str) -> Dict[str, str]:
    """
    Parse one balanced BibTeX entry into a flat, lower-cased field mapping.

    Raises:
        ParseFailure: if the text does not contain a recognisable entry.
    """
    # BibTexParser keeps state between calls, so use a fresh one per entry
    parser = BibTexParser(common_strings=True)
    try:
        database = parser.parse(entry)
    except Exception as exc:
        raise ParseFailure(f"Invalid BibTeX entry: {exc}") from exc

    if not database.entries:
        raise ParseFailure("No BibTeX entry could be parsed")

    return {key.lower(): value for key, value in database.entries[0].items()}


def parse_publications(entries: Iterable[str]) -> List[PublicationEntry]:
    """Build publications from raw entries, skipping any that fail to parse."""
    publications: List[PublicationEntry] = []

    for entry in entries:
        try:
            fields = parse_entry(entry)
        except ParseFailure as exc:
            logger.warning("Skipping BibTeX entry: %s", exc)
            continue

        values = {
            name: strip_braces(str(fields.get(name, "")))
            for name in PUBLICATION_FIELDS
        }
        publications.append(PublicationEntry(**values))

    return publications


def extract_publications(text: Optional[str]) -> List[PublicationEntry]:
    """Publications cited as BibTeX anywhere in text."""
    return parse_publications(extract_entries(text))

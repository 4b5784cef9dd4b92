"""Catalog loading and resolution entry points.

Ties the pieces together in the order an installer uses them:

    fetch text -> build catalog (tables or JSON index) -> resolve -> URL

Fetching happens strictly before resolution, through an injected FetchText,
so every function that takes already-retrieved text is fully offline.
"""

import json
import logging

from wheel_matrix.catalog.extraction import DEFAULT_H1, DEFAULT_H2, extract_tables
from wheel_matrix.catalog.providers import StructuredCatalog, TableCatalog
from wheel_matrix.errors import CatalogFormatError
from wheel_matrix.fetch import FetchText, fetch_text, read_source
from wheel_matrix.resolve.matcher import resolve
from wheel_matrix.resolve.schema import MatchResult, RequestDescriptor

logger = logging.getLogger(__name__)


def load_table_catalog(text: str, h1: str = DEFAULT_H1, h2: str = DEFAULT_H2) -> TableCatalog:
    """Extract pipe tables from markdown text and wrap them as a catalog."""
    return TableCatalog(extract_tables(text, h1=h1, h2=h2))


def load_structured_catalog(text: str) -> StructuredCatalog:
    """Parse a JSON wheel index."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogFormatError(f"Wheel index is not valid JSON: {exc}") from exc
    catalog = StructuredCatalog(document)
    logger.info("Loaded wheel index with %d packages", len(catalog.packages))
    return catalog


def load_catalog(
    source: str,
    structured: bool = False,
    fetch: FetchText = fetch_text,
    h1: str = DEFAULT_H1,
    h2: str = DEFAULT_H2,
) -> TableCatalog | StructuredCatalog:
    """Read *source* (URL or path) and build the matching catalog kind."""
    text = read_source(source, fetch)
    if structured:
        return load_structured_catalog(text)
    return load_table_catalog(text, h1=h1, h2=h2)


def resolve_source(source: str, request: RequestDescriptor, structured: bool = False, fetch: FetchText = fetch_text) -> MatchResult:
    """Fetch a catalog and resolve *request* against it."""
    return resolve(load_catalog(source, structured=structured, fetch=fetch), request)


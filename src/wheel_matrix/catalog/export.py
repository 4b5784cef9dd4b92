"""Audit serialisation of extracted tables.

Writes the normalised table set as
``{"tables": [{"section", "subsection", "index", "header", "rows"}]}`` so a
maintainer can see exactly what the extractor recovered from a catalog.
Resolution never reads this file; load_tables() exists for offline replays.
"""

import json
import logging
from pathlib import Path

from wheel_matrix.catalog.schema import HeadingPath, Row, Table
from wheel_matrix.errors import CatalogFormatError

logger = logging.getLogger(__name__)


def tables_to_dict(tables: list[Table]) -> dict:
    """Convert tables into the audit document shape."""
    return {
        "tables": [
            {
                "section": table.section,
                "subsection": table.subsection,
                "index": table.index,
                "header": list(table.header),
                "rows": [row.as_dict() for row in table.rows],
            }
            for table in tables
        ]
    }


def tables_from_dict(document: dict) -> list[Table]:
    """Rebuild tables from an audit document.

    Row values are looked up by column name, so a header with duplicate
    names reloads the first column's value into every duplicate.
    """
    entries = document.get("tables") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        raise CatalogFormatError("Audit document must contain a 'tables' list")

    tables: list[Table] = []
    for entry in entries:
        header = tuple(entry["header"])
        rows = tuple(Row.reconcile(header, [str(row.get(name, "")) for name in header]) for row in entry.get("rows", []))
        tables.append(
            Table(
                heading_path=HeadingPath(section=entry["section"], subsection=entry.get("subsection")),
                index=entry["index"],
                header=header,
                rows=rows,
            )
        )
    return tables


def save_tables(tables: list[Table], path: Path) -> None:
    """Write the audit document to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fopen:
        json.dump(tables_to_dict(tables), fopen, indent=2)
    logger.info("Wrote %d tables to %s", len(tables), path)


def load_tables(path: Path) -> list[Table]:
    """Read an audit document written by save_tables()."""
    with open(path, "r", encoding="utf-8") as fopen:
        document = json.load(fopen)
    tables = tables_from_dict(document)
    logger.info("Loaded %d tables from %s", len(tables), path)
    return tables

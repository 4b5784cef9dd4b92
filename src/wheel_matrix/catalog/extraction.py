"""Heading-aware pipe-table extraction from markdown compatibility documents.

Walks the document once, line by line, tracking the current heading path and
a buffer of consecutive table lines.  Headings and any non-table line flush
the buffer, so rows are never attributed to a heading that comes after them.

    ## flash-attention            <- level-1 heading: section
    ### 2.8.x                     <- level-2 heading: subsection
    | Torch | CUDA | Link |       <- header
    |-------|------|------|       <- divider (optional, skipped)
    | 2.8.0 | 12.8 | [whl](...) | <- data rows
"""

import enum
import logging

from wheel_matrix.catalog.patterns import DIVIDER_CELL_RE, HEADER_MARKUP_CHARS
from wheel_matrix.catalog.schema import HeadingPath, Row, Table

logger = logging.getLogger(__name__)

DEFAULT_H1 = "## "
DEFAULT_H2 = "### "


# ─── Line Helpers ─────────────────────────────────────────────────────────────


def is_table_line(line: str) -> bool:
    """Return True if the line is pipe-table syntax (starts with '|' after trimming)."""
    return line.strip().startswith("|")


def split_cells(line: str) -> list[str]:
    """Split a pipe-table line into trimmed cells, dropping the outer pipes."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split("|")]


def clean_header_cell(cell: str) -> str:
    """Strip pipe bleed-over and emphasis / code-span markers from a header cell."""
    return cell.strip().strip(HEADER_MARKUP_CHARS).strip()


def is_divider(line: str) -> bool:
    """Return True for a header divider such as '|---|:--:|'."""
    cells = split_cells(line)
    return bool(cells) and all(DIVIDER_CELL_RE.match(cell) for cell in cells)


def parse_chunk(lines: list[str]) -> tuple[tuple[str, ...], list[Row]] | None:
    """Parse a run of table lines into (header, rows).

    Line 0 is the header; line 1 is skipped if it is a divider; every other
    line becomes a row reconciled to the header width.  Returns None when the
    run is too short or the header has fewer than 2 columns.
    """
    if len(lines) < 2:
        return None
    header = tuple(clean_header_cell(cell) for cell in split_cells(lines[0]))
    if len(header) < 2:
        return None
    body = lines[2:] if is_divider(lines[1]) else lines[1:]
    rows = [Row.reconcile(header, split_cells(line)) for line in body]
    return header, rows


# ─── Extractor State ──────────────────────────────────────────────────────────


class Mode(enum.Enum):
    OUTSIDE = "outside"
    COLLECTING = "collecting"


class _ExtractionState:
    """Mutable state for a single pass over one document."""

    def __init__(self) -> None:
        self.path = HeadingPath(section="")
        self.mode = Mode.OUTSIDE
        self.buffer: list[str] = []
        self.ordinals: dict[HeadingPath, int] = {}
        self.tables: list[Table] = []

    def collect(self, line: str) -> None:
        self.buffer.append(line)
        self.mode = Mode.COLLECTING

    def flush(self) -> None:
        """Turn the buffered table lines into a Table under the current path."""
        if self.mode is Mode.OUTSIDE:
            return
        lines, self.buffer, self.mode = self.buffer, [], Mode.OUTSIDE

        parsed = parse_chunk(lines)
        if parsed is None:
            # Undersized chunk: dropped, never an error
            logger.debug("Skipping %d-line chunk under %s (header too small)", len(lines), self.path)
            return

        header, rows = parsed
        index = self.ordinals.get(self.path, 0)
        self.ordinals[self.path] = index + 1
        self.tables.append(Table(heading_path=self.path, index=index, header=header, rows=tuple(rows)))


# ─── Public API ───────────────────────────────────────────────────────────────


def extract_tables(text: str, h1: str = DEFAULT_H1, h2: str = DEFAULT_H2) -> list[Table]:
    """Extract every pipe table in *text*, stamped with its heading path.

    *h1* and *h2* are the line prefixes of section and subsection headings.
    Tables come back in document order; ``Table.index`` counts tables per
    heading path, continuing across separate runs under the same path.
    """
    if not h1.strip() or not h2.strip():
        raise ValueError("Heading markers must contain non-whitespace characters")

    # Test the longer marker first so "##" never swallows "###"
    markers = sorted([(h1, 1), (h2, 2)], key=lambda item: len(item[0]), reverse=True)
    state = _ExtractionState()

    for line in text.splitlines():
        stripped = line.strip()
        level = _heading_level(stripped, markers)

        if level == 1:
            state.flush()
            state.path = HeadingPath(section=_heading_text(stripped, h1))
        elif level == 2:
            state.flush()
            state.path = HeadingPath(section=state.path.section, subsection=_heading_text(stripped, h2))
        elif is_table_line(line):
            state.collect(line)
        else:
            # Blank lines and prose both end a run of table lines
            state.flush()

    state.flush()
    logger.info("Extracted %d tables across %d heading paths", len(state.tables), len(state.ordinals))
    return state.tables


def _heading_level(stripped: str, markers: list[tuple[str, int]]) -> int | None:
    """Return 1 or 2 if the trimmed line is a heading, else None."""
    for marker, level in markers:
        if _is_heading(stripped, marker):
            return level
    return None


def _is_heading(stripped: str, marker: str) -> bool:
    """Match *marker* at the start of a trimmed line.

    A marker with trailing whitespace (``"## "``) also matches a bare heading
    line with no text after it, but the character after the marker token must
    be whitespace (``"###"`` is not a ``"## "`` heading).
    """
    token = marker.strip()
    if not stripped.startswith(token):
        return False
    rest = stripped[len(token) :]
    if marker != marker.rstrip():
        return rest == "" or rest[0].isspace()
    return True


def _heading_text(stripped: str, marker: str) -> str:
    return stripped[len(marker.strip()) :].strip()

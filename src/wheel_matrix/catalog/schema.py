"""Pydantic models for extracted catalog tables and normalised artifacts.

Tables and artifacts are built once per resolution run and never mutated, so
every model here is frozen.  Row widths are reconciled against the header at
construction time (short rows padded, long rows truncated); the validators
below only guarantee that the reconciliation actually happened.
"""

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, model_validator


class HeadingPath(BaseModel):
    """The (section, subsection) scope a table was declared under."""

    model_config = ConfigDict(frozen=True)

    section: str
    subsection: str | None = None


class Row(BaseModel):
    """One table row as an ordered column -> cell mapping.

    The keys are the owning table's header, fixed when the row is built.
    Duplicate column names are kept positionally; lookups by name return the
    first column carrying that name.
    """

    model_config = ConfigDict(frozen=True)

    header: tuple[str, ...]
    cells: tuple[str, ...]

    @model_validator(mode="after")
    def validate_width(self) -> "Row":
        """Ensure the row has exactly len(header) cells."""
        if len(self.cells) != len(self.header):
            raise ValueError(f"Row has {len(self.cells)} cells, expected {len(self.header)} (matching header)")
        return self

    @classmethod
    def reconcile(cls, header: tuple[str, ...], cells: list[str]) -> "Row":
        """Build a row from raw cells, padding with '' or truncating to the header width."""
        width = len(header)
        fitted = list(cells[:width]) + [""] * (width - len(cells))
        return cls(header=header, cells=tuple(fitted))

    def get(self, column: str, default: str | None = None) -> str | None:
        """Return the cell under the first column named *column*."""
        for name, value in zip(self.header, self.cells):
            if name == column:
                return value
        return default

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (column, cell) pairs in header order."""
        return iter(zip(self.header, self.cells))

    def as_dict(self) -> dict[str, str]:
        """Plain dict view; the first of any duplicated column names wins."""
        out: dict[str, str] = {}
        for name, value in self.items():
            out.setdefault(name, value)
        return out


class Table(BaseModel):
    """A pipe table recovered from the catalog document."""

    model_config = ConfigDict(frozen=True)

    heading_path: HeadingPath
    index: int
    header: tuple[str, ...]
    rows: tuple[Row, ...] = ()

    @model_validator(mode="after")
    def validate_shape(self) -> "Table":
        """Reject undersized headers and rows built against a different header."""
        if len(self.header) < 2:
            raise ValueError(f"Table header needs at least 2 columns, got {len(self.header)}")
        for i, row in enumerate(self.rows):
            if row.header != self.header:
                raise ValueError(f"Row {i} was built for header {list(row.header)}, expected {list(self.header)}")
        return self

    @property
    def section(self) -> str:
        return self.heading_path.section

    @property
    def subsection(self) -> str | None:
        return self.heading_path.subsection


class Artifact(BaseModel):
    """A downloadable build, normalised from either catalog kind.

    ``None`` in an optional field means the catalog does not publish that
    attribute for this artifact, which the matcher treats as unconstrained.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str
    url: str
    variant_label: str | None = None
    framework_version: str | None = None
    accelerator_tag: str | None = None
    language_tag: str | None = None
    raw_record: dict[str, Any] = {}

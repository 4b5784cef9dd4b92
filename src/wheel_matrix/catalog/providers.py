"""Candidate providers: turn a catalog into a stream of Artifact records.

Two catalog kinds are supported, each behind its own provider:

  TableCatalog       -- tables extracted from a markdown compatibility matrix,
                        one section per package, optional subsection per
                        release line.
  StructuredCatalog  -- a JSON index shaped
                        ``{"packages": [{"name": ..., "wheels": [{...}]}]}``.

Both yield artifacts in document / declaration order, which the matchers rely
on for deterministic first-match and tie-breaking behaviour.
"""

import logging
import re
from typing import Any, Iterator

from wheel_matrix.catalog.patterns import BARE_URL_RE, COLUMN_ROLES, MAJOR_MINOR_RE, PAREN_URL_RE, VARIANT_FIELDS
from wheel_matrix.catalog.schema import Artifact, Row, Table
from wheel_matrix.catalog.tags import major_minor
from wheel_matrix.errors import CatalogFormatError

logger = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"[\s_.\-]+")


# ─── Shared Helpers ───────────────────────────────────────────────────────────


def normalize_name(name: str) -> str:
    """Lower-case a package name and drop separators ('Flash_Attn' -> 'flashattn')."""
    return _SEPARATORS_RE.sub("", name.lower())


def section_matches(requested: str, section: str) -> bool:
    """Separator-insensitive equality between a package name and a table section."""
    want = normalize_name(requested)
    return bool(want) and want == normalize_name(section)


def names_match(requested: str, declared: str) -> bool:
    """Separator-insensitive equality, or containment in either direction."""
    want, have = normalize_name(requested), normalize_name(declared)
    if not want or not have:
        return False
    return want == have or want in have or have in want


def extract_url(cell: str) -> str | None:
    """Pull a download URL out of a table cell.

    Prefers the first parenthesised ``(scheme://...)`` URL, as found in
    markdown links; otherwise accepts a cell that is itself a bare URL.
    """
    match = PAREN_URL_RE.search(cell)
    if match:
        return match.group(1)
    stripped = cell.strip()
    if BARE_URL_RE.match(stripped):
        return stripped
    return None


def detect_roles(header: tuple[str, ...]) -> dict[str, int]:
    """Map each recognised column role to a header position.

    Roles and their patterns are evaluated in COLUMN_ROLES order.  A header
    claimed by an earlier role is not offered to later ones.
    """
    roles: dict[str, int] = {}
    claimed: set[int] = set()
    for role, patterns in COLUMN_ROLES:
        for pattern in patterns:
            position = next(
                (i for i, name in enumerate(header) if i not in claimed and re.search(pattern, name, re.IGNORECASE)),
                None,
            )
            if position is not None:
                roles[role] = position
                claimed.add(position)
                break
    return roles


def _published(value: Any) -> str | None:
    """Return a stripped string, or None when the attribute is absent or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _role_cell(row: Row, roles: dict[str, int], role: str) -> str | None:
    if role not in roles:
        return None
    return _published(row.cells[roles[role]])


# ─── Table-backed Provider ────────────────────────────────────────────────────


class TableCatalog:
    """Artifacts from tables extracted out of a markdown compatibility matrix."""

    def __init__(self, tables: list[Table]) -> None:
        self.tables = tuple(tables)

    def package_tables(self, package_name: str) -> list[Table]:
        """All tables whose section names the package, in discovery order."""
        return [table for table in self.tables if section_matches(package_name, table.section)]

    def scoped_tables(self, package_name: str, variant_filter: str | None = None) -> list[Table]:
        """Package tables narrowed to subsections containing *variant_filter*.

        With no filter this is the same as package_tables().
        """
        tables = self.package_tables(package_name)
        if not variant_filter:
            return tables
        needle = variant_filter.lower()
        return [t for t in tables if t.subsection is not None and needle in t.subsection.lower()]

    def iter_artifacts(self, package_name: str, variant_filter: str | None = None, restricted: bool = True) -> Iterator[Artifact]:
        """Yield artifacts table by table, row by row.

        ``restricted=True`` applies the variant filter to subsections;
        ``restricted=False`` covers every table of the package.
        """
        tables = self.scoped_tables(package_name, variant_filter) if restricted else self.package_tables(package_name)
        for table in tables:
            yield from self._table_artifacts(package_name, table)

    def _table_artifacts(self, package_name: str, table: Table) -> Iterator[Artifact]:
        roles = detect_roles(table.header)
        if "link" not in roles:
            logger.debug("Skipping table %s #%d: no link column in %s", table.heading_path, table.index, list(table.header))
            return

        for row in table.rows:
            url = extract_url(row.cells[roles["link"]])
            if url is None:
                continue
            raw = row.as_dict()
            raw["_section"] = table.section
            raw["_subsection"] = table.subsection
            yield Artifact(
                package_name=table.section or package_name,
                url=url,
                variant_label=_role_cell(row, roles, "variant") or table.subsection,
                framework_version=_role_cell(row, roles, "framework"),
                accelerator_tag=_role_cell(row, roles, "accelerator"),
                language_tag=_role_cell(row, roles, "language"),
                raw_record=raw,
            )


# ─── Structured-catalog Provider ──────────────────────────────────────────────


def _variant_marker(variant_filter: str) -> str | None:
    """Release-line marker for a dotted filter: '2.2' -> '2++' (as in 'sageattention2++')."""
    match = MAJOR_MINOR_RE.fullmatch(variant_filter.strip())
    if match is None:
        return None
    return f"{match.group(1)}++"


def wheel_matches_variant(wheel: dict[str, Any], variant_filter: str) -> bool:
    """True if a version/variant/note field contains the filter or its '++' marker.

    The '++' marker only counts for wheels whose own ``version`` is absent or
    on the same major.minor line as the filter.
    """
    needle = variant_filter.strip().lower()
    marker = _variant_marker(variant_filter)
    own_version = _published(wheel.get("version"))
    if marker is not None and own_version is not None and major_minor(own_version) != major_minor(variant_filter):
        marker = None
    for field in VARIANT_FIELDS:
        value = _published(wheel.get(field))
        if value is None:
            continue
        lowered = value.lower()
        if needle in lowered or (marker is not None and marker in lowered):
            return True
    return False


class StructuredCatalog:
    """Artifacts from a parsed JSON wheel index."""

    def __init__(self, document: dict[str, Any]) -> None:
        packages = document.get("packages") if isinstance(document, dict) else None
        if not isinstance(packages, list):
            raise CatalogFormatError("Catalog document must contain a 'packages' list")
        for i, package in enumerate(packages):
            if not isinstance(package, dict) or not isinstance(package.get("wheels", []), list):
                raise CatalogFormatError(f"Package entry {i} must be an object with a 'wheels' list", {"index": i})
        self.packages = packages

    def iter_artifacts(self, package_name: str, variant_filter: str | None = None) -> Iterator[Artifact]:
        """Yield artifacts for every matching package, in declaration order."""
        for package in self.packages:
            declared = str(package.get("name", ""))
            if not names_match(package_name, declared):
                continue
            for wheel in package.get("wheels", []):
                if not isinstance(wheel, dict):
                    logger.debug("Skipping non-object wheel entry in %s", declared)
                    continue
                url = _published(wheel.get("url"))
                if url is None:
                    logger.debug("Skipping wheel without url in %s: %s", declared, wheel)
                    continue
                if variant_filter and not wheel_matches_variant(wheel, variant_filter):
                    continue
                yield Artifact(
                    package_name=declared,
                    url=url,
                    variant_label=_published(wheel.get("variant")) or _published(wheel.get("version")),
                    framework_version=_published(wheel.get("torch")),
                    accelerator_tag=_published(wheel.get("cuda")),
                    language_tag=_published(wheel.get("python")),
                    raw_record=dict(wheel),
                )

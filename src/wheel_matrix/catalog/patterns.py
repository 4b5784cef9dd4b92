"""Compiled regex patterns and constant tables for catalog parsing.

These patterns identify structural elements of a markdown compatibility
matrix (table lines, divider rows, link cells) and the version / tag shapes
used when comparing catalog cells against a request.  Used by extraction.py,
tags.py, providers.py and the resolve predicates.
"""

import re

# ─── Table Syntax ─────────────────────────────────────────────────────────────

# One cell of a divider row such as "|---|:--:|": "---", ":--:", "---:"
DIVIDER_CELL_RE = re.compile(r"^(?=[-:]{3,}$):?-+:?$")

# Emphasis and code-span markers that bleed into header cells ("**Torch**", "`CUDA`")
HEADER_MARKUP_CHARS = "*_`|"


# ─── Links ────────────────────────────────────────────────────────────────────

# Parenthesised URL inside a markdown link, e.g. "[wheel](https://x/a.whl)"
PAREN_URL_RE = re.compile(r"\((\w[\w+.-]*://[^)\s]+)\)")

# A cell that is nothing but a URL
BARE_URL_RE = re.compile(r"^\w[\w+.-]*://\S+$")


# ─── Version Tags ─────────────────────────────────────────────────────────────

# Dotted accelerator tag, e.g. "12.9"
DOTTED_TAG_RE = re.compile(r"^\d+\.\d+$")

# Compact CUDA tag, e.g. "cu129"
COMPACT_TAG_RE = re.compile(r"^cu(\d+)$", re.IGNORECASE)

# First major.minor pair inside a version string ("2.8.0+cu129" -> 2, 8)
MAJOR_MINOR_RE = re.compile(r"(\d+)\.(\d+)")

# Language-version-neutral build markers: "abi3", "py3" (not "py311" or "py3.11"), "cp39+"
ABI_NEUTRAL_RE = re.compile(r"abi3|py3(?![\d.])|cp\d+\+", re.IGNORECASE)


# ─── Column Roles ─────────────────────────────────────────────────────────────

# Evaluated top to bottom; within a role, patterns are tried in order and the
# first unclaimed header (left to right) that matches wins.  New roles or
# spellings are added here, not in providers.py.
COLUMN_ROLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("framework", (r"pytorch", r"^torch$", r"^torch\s+version")),
    ("accelerator", (r"cuda", r"^cu$", r"rocm")),
    ("language", (r"python", r"^py$")),
    ("variant", (r"^version$", r"variant", r"release")),
    ("link", (r"download", r"link", r"href", r"wheel", r"\.whl")),
)

# Raw-record keys that flag a prebuilt binary ABI build in the JSON index
ABI_FLAG_KEYS = ("abi3", "cxx11abi", "cxx11_abi", "prebuilt_abi")

# Wheel fields searched by a variant filter in the JSON index
VARIANT_FIELDS = ("version", "variant", "note")

"""Accelerator tag conversion and version-prefix helpers.

CUDA wheels are published under compact tags (``cu129``) while catalogs and
drivers report dotted versions (``12.9``).  The compact form always puts the
minor version in the last digit, so ``cu118`` is 11.8 and ``cu129`` is 12.9.
"""

from wheel_matrix.catalog.patterns import COMPACT_TAG_RE, DOTTED_TAG_RE, MAJOR_MINOR_RE
from wheel_matrix.errors import InvalidTag

# The only accelerator step-down: wheels built for 12.8 run on a 12.9 runtime
STEP_DOWN = {"12.9": "12.8"}


def to_dotted(tag: str) -> str:
    """Return the dotted form of an accelerator tag ('cu129' -> '12.9').

    Dotted input is returned unchanged.  Raises InvalidTag for anything else,
    including compact tags with fewer than two digits.
    """
    stripped = tag.strip()
    if DOTTED_TAG_RE.match(stripped):
        return stripped
    match = COMPACT_TAG_RE.match(stripped)
    if match is None or len(match.group(1)) < 2:
        raise InvalidTag(tag)
    digits = match.group(1)
    return f"{int(digits[:-1])}.{digits[-1]}"


def to_compact(tag: str) -> str:
    """Return the compact form of an accelerator tag ('12.9' -> 'cu129')."""
    major, minor = to_dotted(tag).split(".")
    return f"cu{major}{minor}"


def step_down(dotted: str) -> str | None:
    """Return the single fallback tag for *dotted*, or None if there is none."""
    return STEP_DOWN.get(dotted)


def major_minor(version: str) -> str | None:
    """Extract 'X.Y' from a version string such as '2.8.0' or 'torch 2.8'."""
    match = MAJOR_MINOR_RE.search(version)
    if match is None:
        return None
    return f"{match.group(1)}.{match.group(2)}"

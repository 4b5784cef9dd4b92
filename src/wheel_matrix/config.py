"""Runtime configuration for catalog fetching and extraction.

Values come from the environment, with a project-root ``.env`` loaded first
so local overrides do not need to be exported.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Markdown compatibility matrix (pipe tables under headings)
CATALOG_URL = os.getenv("WHEEL_MATRIX_CATALOG_URL", "")

# Structured JSON wheel index
INDEX_URL = os.getenv("WHEEL_MATRIX_INDEX_URL", "")

FETCH_TIMEOUT = float(os.getenv("WHEEL_MATRIX_FETCH_TIMEOUT", "20"))

LOG_LEVEL = os.getenv("WHEEL_MATRIX_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def heading_markers() -> tuple[str, str]:
    """Return the (level-1, level-2) heading markers.

    ``WHEEL_MATRIX_HEADING_MARKERS`` holds both markers separated by a comma,
    e.g. ``"## ,### "``.  Surrounding whitespace is significant, so it is not
    stripped.
    """
    raw = os.getenv("WHEEL_MATRIX_HEADING_MARKERS", "## ,### ")
    parts = raw.split(",")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"WHEEL_MATRIX_HEADING_MARKERS must hold two comma-separated markers, got {raw!r}")
    return parts[0], parts[1]

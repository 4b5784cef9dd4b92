"""Default catalog fetch capability.

The resolver itself never touches the network; callers hand it text they
already retrieved.  ``fetch_text`` is the stock ``FetchText`` used by the CLI
and pipeline, and any ``Callable[[str], str]`` can stand in for it in tests
or in an orchestrator with its own transport and retry policy.
"""

import logging
from pathlib import Path
from typing import Callable

import requests

from wheel_matrix import config
from wheel_matrix.errors import FetchError

logger = logging.getLogger(__name__)

FetchText = Callable[[str], str]


def fetch_text(url: str, timeout: float | None = None) -> str:
    """GET *url* and return the decoded body, raising FetchError on any failure."""
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    logger.info("Fetching catalog from %s (timeout=%.0fs)", url, timeout)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.Timeout as exc:
        raise FetchError(url, f"timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    return resp.text


def read_source(source: str, fetch: FetchText = fetch_text) -> str:
    """Return catalog text from an http(s) URL via *fetch*, or from a local file."""
    if source.startswith(("http://", "https://")):
        return fetch(source)
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(source, str(exc)) from exc

"""Exception taxonomy for catalog parsing, fetching, and resolution.

Undersized table chunks are never raised; the extractor drops them and logs
at DEBUG level.  Everything else surfaces as a subclass of WheelMatrixError.
"""

from typing import Any


class WheelMatrixError(Exception):
    """Base exception for all wheel-matrix errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidTag(WheelMatrixError):
    """Accelerator tag is neither dotted ('12.9') nor compact ('cu129')."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unrecognised accelerator tag {tag!r}", {"tag": tag})
        self.tag = tag


class FetchError(WheelMatrixError):
    """Catalog retrieval failed (connection error, timeout, or bad status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}", {"url": url})
        self.url = url
        self.reason = reason


class CatalogFormatError(WheelMatrixError):
    """Structured catalog document does not have the expected shape."""


class ResolutionFailure(WheelMatrixError):
    """No artifact satisfied any permitted fallback tier."""

    def __init__(self, failure) -> None:
        super().__init__(failure.describe())
        self.failure = failure

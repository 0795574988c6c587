"""Package-specific exception types."""

from __future__ import annotations


class DocsError(ValueError):
    """Base class for ocpi-docs errors.

    The conversion core never raises; these errors come from the layers that
    read and write files around it.
    """


class FileTooLargeError(DocsError):
    """Raised when a source file exceeds the configured maximum size.

    Args:
        size: Size of the file in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File size {self.size} exceeds the limit of {self.limit} bytes")


class SourceReadError(DocsError):
    """Raised when a source file cannot be read or decoded."""

"""Exception types raised by gtfkit."""

from __future__ import annotations


class GtfError(Exception):
    """Base class for all gtfkit errors."""


class GtfParseError(GtfError):
    """Structural fault in GTF text. Parsing is aborted and no document is returned."""

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"Line {line_number}: {reason}")


class FormatError(GtfError):
    """Unknown format name or an operation the format does not support."""


class FormatNotImplementedError(FormatError):
    """The format is registered but its conversion is not implemented yet."""

"""
Exceptions raised while importing a document.

Format problems that make the rest of the stream meaningless raise
:py:class:`FatalFormatError`. Problems that only affect a single value (an
unknown tagged block, a truncated RLE run, a short channel plane) are logged
and decoding continues.
"""

from enum import Enum


class ErrorKind(Enum):
    """Category of a failed import."""

    FORMAT = "format"
    RESOURCE = "resource"


class PSDImportError(Exception):
    """Base class of the errors raised by psd_import."""

    kind = ErrorKind.FORMAT


class FatalFormatError(PSDImportError, ValueError):
    """The input is not a supported document."""


class UnexpectedEndOfInput(FatalFormatError):
    """A read would go past the end of the input."""

    def __init__(self, expected: int, actual: int, offset: int = -1):
        self.expected = expected
        self.actual = actual
        self.offset = offset
        message = "Unexpected end of input: expected %d bytes, got %d" % (
            expected,
            actual,
        )
        if offset >= 0:
            message += " at offset %d" % offset
        super().__init__(message)


class ResourceError(PSDImportError, OSError):
    """The input cannot be opened or read."""

    kind = ErrorKind.RESOURCE

"""Errors raised by the read-later list."""

from __future__ import annotations


class ReadLaterError(Exception):
    """Base error for this package."""


class MissingFieldError(ReadLaterError):
    """Raised when a record is missing its url or title."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} not set")


class InvalidValueError(ReadLaterError):
    """Raised for a value the list file cannot hold, such as a newline in a title."""

    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} {value!r}: {reason}")


class ParseError(ReadLaterError):
    """Raised when a segment of a list file cannot be parsed into a record."""

    def __init__(self, segment: int, cause: Exception):
        self.segment = segment
        self.cause = cause
        super().__init__(f"could not parse record {segment}: {cause}")


class LinkNotFoundError(ReadLaterError):
    """Raised when a tag change names a url that is not in the list."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Link {url} not found")

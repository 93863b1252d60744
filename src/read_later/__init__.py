"""Read-later lists in the Open Read-Later text format."""

from .datamodels import LinkEntry, LinkEntryBuilder
from .errors import LinkNotFoundError, MissingFieldError, ParseError, ReadLaterError
from .read_later_list import ReadLaterList, keyword_predicate

__all__ = [
    "LinkEntry",
    "LinkEntryBuilder",
    "LinkNotFoundError",
    "MissingFieldError",
    "ParseError",
    "ReadLaterError",
    "ReadLaterList",
    "keyword_predicate",
]

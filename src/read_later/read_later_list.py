from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .datamodels import LinkEntry
from .errors import LinkNotFoundError, MissingFieldError, ParseError
from .records import parse_record, render_record, split_tags

logger = logging.getLogger("read_later")

DELIMITER = "---"
RECORD_SEPARATOR = f"\n{DELIMITER}\n"

Predicate = Callable[[LinkEntry], bool]


def _normalized(entry: LinkEntry, extra_tags: Iterable[str] = ()) -> LinkEntry:
    return (
        LinkEntry.builder()
        .set_url(entry.url)
        .set_title(entry.title)
        .add_tags(entry.tags)
        .add_tags(extra_tags)
        .build()
    )


def _split_segments(text: str) -> List[str]:
    segments: List[str] = []
    current: List[str] = []
    for line in text.splitlines():
        if line.strip() == DELIMITER:
            segments.append("\n".join(current))
            current = []
        else:
            current.append(line)
    segments.append("\n".join(current))
    return segments


def keyword_predicate(keyword: str) -> Predicate:
    """Match entries whose url, title or tags contain keyword, ignoring case."""
    pattern = re.compile(re.escape(keyword), re.IGNORECASE)

    def matches(entry: LinkEntry) -> bool:
        return any(
            pattern.search(value)
            for value in (entry.url, entry.title, ", ".join(entry.tags))
        )

    return matches


class ReadLaterList:
    """Link entries keyed by url."""

    def __init__(self) -> None:
        self.links: Dict[str, LinkEntry] = {}

    @classmethod
    def parse(cls, text: str) -> ReadLaterList:
        """Parse the text of a whole list file.

        Records are separated by lines holding only ``---``. Blank segments are
        skipped, and a url seen twice keeps its last record.

        Raises:
            ParseError: for the first segment that is not a valid record. Nothing
                is returned for the segments before it.
        """
        read_later_list = cls()
        if not text.strip():
            return read_later_list

        for number, segment in enumerate(_split_segments(text), start=1):
            if not segment.strip():
                continue
            try:
                entry = parse_record(segment)
            except MissingFieldError as e:
                logger.error("Failed to parse record %d: %s", number, e)
                raise ParseError(number, e) from e
            read_later_list.add_or_update(entry)

        logger.debug("Parsed %d links", len(read_later_list))
        return read_later_list

    def serialize(self) -> str:
        """Render all entries, sorted by their text so output stays diff-stable."""
        return RECORD_SEPARATOR.join(sorted(render_record(e) for e in self.links.values()))

    def add_or_update(self, entry: LinkEntry) -> ReadLaterList:
        """Insert entry, replacing any entry with the same url.

        The entry is normalized the way a parsed record would be.

        Raises:
            MissingFieldError, InvalidValueError: if entry could not be
                written to the list file and read back unchanged.
        """
        entry = _normalized(entry)
        self.links[entry.url] = entry
        return self

    add_link = add_or_update
    update_link = add_or_update

    def get(self, url: str) -> Optional[LinkEntry]:
        return self.links.get(url)

    def delete(self, url: str) -> bool:
        """Remove the entry for url. Returns False if there was none."""
        return self.links.pop(url, None) is not None

    def _require(self, url: str) -> LinkEntry:
        entry = self.links.get(url)
        if entry is None:
            raise LinkNotFoundError(url)
        return entry

    def add_tags(self, url: str, tags: Iterable[str]) -> LinkEntry:
        """Append the tags entry does not have yet, keeping the existing order.

        Comma-separated tags are split like the tags line of a record.

        Raises:
            LinkNotFoundError: if there is no entry for url.
            InvalidValueError: if a tag spans several lines. The entry is left
                unchanged.
        """
        entry = self._require(url)
        new_tags = [piece for tag in tags for piece in split_tags(tag)]
        entry.tags = _normalized(entry, extra_tags=new_tags).tags
        return entry

    def remove_tags(self, url: str, tags: Iterable[str]) -> LinkEntry:
        """Drop every tag of the entry that is in tags.

        Raises:
            LinkNotFoundError: if there is no entry for url.
        """
        entry = self._require(url)
        unwanted = {piece for tag in tags for piece in split_tags(tag)}
        entry.tags = [tag for tag in entry.tags if tag not in unwanted]
        return entry

    def search(self, predicate: Predicate) -> Iterator[LinkEntry]:
        return (entry for entry in self if predicate(entry))

    def __iter__(self) -> Iterator[LinkEntry]:
        return iter(sorted(self.links.values(), key=render_record))

    def __len__(self) -> int:
        return len(self.links)

    def __contains__(self, url: object) -> bool:
        return url in self.links

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadLaterList):
            return NotImplemented
        return self.links == other.links

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"ReadLaterList({len(self)} links)"

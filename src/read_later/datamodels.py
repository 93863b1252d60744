from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import InvalidValueError, MissingFieldError


# --- Data models ---
@dataclass
class LinkEntry:
    url: str
    title: str
    tags: List[str] = field(default_factory=list)

    @classmethod
    def builder(cls) -> LinkEntryBuilder:
        return LinkEntryBuilder()

    def __str__(self) -> str:
        from .records import render_record

        return render_record(self)


class LinkEntryBuilder:
    """Collects the fields of a record before validating them into a LinkEntry."""

    def __init__(self) -> None:
        self.url: Optional[str] = None
        self.title: Optional[str] = None
        self.tags: List[str] = []

    def set_url(self, url: str) -> LinkEntryBuilder:
        self.url = url.strip()
        return self

    def set_title(self, title: str) -> LinkEntryBuilder:
        self.title = title.strip()
        return self

    def add_tag(self, tag: str) -> LinkEntryBuilder:
        tag = tag.strip()
        if tag and tag not in self.tags:
            self.tags.append(tag)
        return self

    def add_tags(self, tags: Iterable[str]) -> LinkEntryBuilder:
        for tag in tags:
            self.add_tag(tag)
        return self

    def build(self) -> LinkEntry:
        """Return the LinkEntry.

        Raises:
            MissingFieldError: if url or title was never set, or is empty.
            InvalidValueError: if a value spans several lines or a tag holds
                the tag separator.
        """
        if not self.url:
            raise MissingFieldError("url")
        if not self.title:
            raise MissingFieldError("title")
        for name, value in (("url", self.url), ("title", self.title)):
            _check_single_line(name, value)
        for tag in self.tags:
            _check_single_line("tag", tag)
            if "," in tag:
                raise InvalidValueError("tag", tag, "tags cannot contain ','")
        return LinkEntry(url=self.url, title=self.title, tags=list(self.tags))


def _check_single_line(name: str, value: str) -> None:
    if len(value.splitlines()) > 1:
        raise InvalidValueError(name, value, "must fit on one line")

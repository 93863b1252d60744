"""Record parsing and rendering.

A record is one link entry in the Open Read-Later format:

    url: https://example.com
    title: Example
    tags: tag1, tag2

The first ``:`` on a line separates key from value. Lines without one, and
keys other than ``url``, ``title`` and ``tags``, are ignored so that files
written by newer tools still load.
"""

from __future__ import annotations

import logging
import re

from .datamodels import LinkEntry, LinkEntryBuilder

logger = logging.getLogger("read_later")

FIELD_PATTERN = re.compile(r"^\s*(.+?)\s*:\s*(.*?)\s*$")
TAG_SEPARATOR = ","


def split_tags(value: str) -> list[str]:
    """Split a comma-separated tag value, dropping empty pieces."""
    return [tag.strip() for tag in value.split(TAG_SEPARATOR) if tag.strip()]


def parse_record(text: str) -> LinkEntry:
    """Parse the text of one record into a LinkEntry.

    Raises:
        MissingFieldError: if the record has no url or no title.
    """
    builder = LinkEntryBuilder()
    for line in text.splitlines():
        match = FIELD_PATTERN.match(line)
        if not match:
            continue
        key, value = match.group(1), match.group(2)
        if key == "url":
            builder.set_url(value)
        elif key == "title":
            builder.set_title(value)
        elif key == "tags":
            builder.add_tags(split_tags(value))
        else:
            logger.debug("Ignoring unknown field %r", key)
    return builder.build()


def render_record(entry: LinkEntry) -> str:
    """Render a LinkEntry back to its record form."""
    text = f"url: {entry.url}\ntitle: {entry.title}"
    if entry.tags:
        text += "\ntags: " + ", ".join(entry.tags)
    return text

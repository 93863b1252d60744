"""Reading and writing the list file.

The new contents are rendered in full before anything is written, then written
to a temporary file next to the list and moved over it, so a failed run never
leaves a half-written list behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile

from .read_later_list import ReadLaterList

logger = logging.getLogger("read_later")


def read_list_file(path: str) -> str:
    """Return the text of the list file; a missing file reads as empty."""
    if not os.path.exists(path):
        logger.info("List file %s does not exist yet", path)
        return ""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_list_file(path: str, text: str) -> None:
    """Replace the list file with text.

    A symlinked list is written through the link, and an existing file keeps
    its permissions.
    """
    if text and not text.endswith("\n"):
        text += "\n"

    target = os.path.realpath(path)
    directory = os.path.dirname(target)
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".read_later_", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if os.path.exists(target):
            shutil.copymode(target, tmp_path)
        else:
            os.chmod(tmp_path, _new_file_mode())
        os.replace(tmp_path, target)
    except OSError:
        logger.error("Failed to write list file %s", path)
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), path)


def load_list(path: str) -> ReadLaterList:
    """Read and parse the list file.

    Raises:
        OSError: if the file exists but cannot be read.
        ParseError: if the file holds a malformed record.
    """
    read_later_list = ReadLaterList.parse(read_list_file(path))
    logger.info("Loaded %d links from %s", len(read_later_list), path)
    return read_later_list


def save_list(path: str, read_later_list: ReadLaterList) -> None:
    write_list_file(path, read_later_list.serialize())
    logger.info("Saved %d links to %s", len(read_later_list), path)

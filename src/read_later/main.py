#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.prompt import Prompt

from .config import get_setting, load_config, resolve_list_path, setup_logging
from .datamodels import LinkEntry
from .errors import InvalidValueError, LinkNotFoundError, ReadLaterError
from .read_later_list import RECORD_SEPARATOR, ReadLaterList, keyword_predicate
from .records import split_tags
from .storage import load_list, save_list

logger = logging.getLogger("read_later")

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _parse_tags(values: Optional[Iterable[str]]) -> List[str]:
    tags: List[str] = []
    for value in values or []:
        tags.extend(split_tags(value))
    return tags


def _print_text(text: str) -> None:
    console.print(text, markup=False, highlight=False)


def _print_links(entries: Iterable[LinkEntry]) -> int:
    """Print entries as list file records. Returns how many were printed."""
    records = [str(entry) for entry in entries]
    if records:
        _print_text(RECORD_SEPARATOR.join(records))
    return len(records)


# --- Commands ---
# Each command returns True when it changed the list and the file must be rewritten.
def list_links(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    if not len(read_later_list):
        console.print("Read-later list empty")
        return False
    _print_text(read_later_list.serialize())
    return False


def save_link(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    console.print(f"Saving link {args.url}", markup=False)
    title = args.title
    while not (title and title.strip()):
        title = Prompt.ask("Enter link title")

    if args.tags is not None:
        tags = _parse_tags(args.tags)
    elif get_setting(config, "prompt_for_tags"):
        tags = split_tags(Prompt.ask("Enter tags (comma-separated)", default=""))
    else:
        tags = []

    entry = LinkEntry.builder().set_url(args.url).set_title(title).add_tags(tags).build()
    read_later_list.add_or_update(entry)
    logger.info("Saved link %s", entry.url)
    return True


def show_link(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    entry = read_later_list.get(args.url)
    if entry is None:
        console.print(f"Link {args.url} not found", markup=False)
    else:
        _print_text(str(entry))
    return False


def delete_link(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    if not read_later_list.delete(args.url):
        console.print(f"Link {args.url} not found", markup=False)
        return False
    console.print(f"Deleted link {args.url}", markup=False)
    logger.info("Deleted link %s", args.url)
    return True


def tag_link(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    tags = _parse_tags(args.tags)
    if args.tag_command == "add":
        entry = read_later_list.add_tags(args.url, tags)
    else:
        entry = read_later_list.remove_tags(args.url, tags)
    logger.info("Tags of %s are now %s", entry.url, entry.tags)
    _print_text(str(entry))
    return True


def search_links(read_later_list: ReadLaterList, args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    if not _print_links(read_later_list.search(keyword_predicate(args.keyword))):
        console.print(f"No links match {args.keyword}", markup=False)
    return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readlater",
        description="Stores, queries, and manipulates read-later lists in the Open Read-Later format",
    )
    parser.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="location of the list file (default: ~/.read_later_list)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="lists link entries")
    list_parser.set_defaults(func=list_links)

    save_parser = subparsers.add_parser(
        "save", aliases=["add", "update"], help="saves or replaces a link entry"
    )
    save_parser.add_argument("url", help="the URL of the link to save")
    save_parser.add_argument("--title", help="the title of the link to save")
    save_parser.add_argument(
        "--tags",
        nargs="+",
        metavar="TAGS",
        help="tags to apply to the link, comma-separated",
    )
    save_parser.set_defaults(func=save_link)

    show_parser = subparsers.add_parser("show", help="shows a link entry")
    show_parser.add_argument("url", help="the URL of the link to show")
    show_parser.set_defaults(func=show_link)

    delete_parser = subparsers.add_parser("delete", help="deletes a link entry")
    delete_parser.add_argument("url", help="the URL of the link to delete")
    delete_parser.set_defaults(func=delete_link)

    tag_parser = subparsers.add_parser("tag", help="adds or removes tags on a link entry")
    tag_subparsers = tag_parser.add_subparsers(dest="tag_command", required=True)
    for name, help_text in (("add", "adds tags to a link"), ("remove", "removes tags from a link")):
        tag_command = tag_subparsers.add_parser(name, help=help_text)
        tag_command.add_argument("url", help="the URL of the link")
        tag_command.add_argument("tags", nargs="+", help="tags, space- or comma-separated")
        tag_command.set_defaults(func=tag_link)

    search_parser = subparsers.add_parser("search", help="searches link entries by keyword")
    search_parser.add_argument("keyword", help="text to look for in urls, titles and tags")
    search_parser.set_defaults(func=search_links)

    subparsers.add_parser("browse", help="browses the list interactively")

    return parser


def browse(read_later_list: ReadLaterList, list_path: str, config: Dict[str, Any]) -> None:
    from .app import ReadLaterApp

    app = ReadLaterApp(read_later_list, list_path, theme=get_setting(config, "theme"))
    app.run()


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    if not args.command:
        parser.print_usage()
        return 2

    config = load_config()
    list_path = resolve_list_path(args.file, config)
    logger.info("Using list file %s", list_path)

    try:
        read_later_list = load_list(list_path)
        if args.command == "browse":
            browse(read_later_list, list_path, config)
            return 0
        if args.func(read_later_list, args, config):
            save_list(list_path, read_later_list)
    except (LinkNotFoundError, InvalidValueError) as e:
        err_console.print(str(e), markup=False)
        return 1
    except (OSError, ReadLaterError) as e:
        logger.exception("Command %s failed: %s", args.command, e)
        err_console.print(
            f"Encountered error: {e}. Please file an issue if this keeps happening.",
            markup=False,
        )
        return 1
    except (EOFError, KeyboardInterrupt):
        logger.warning("Command %s aborted at a prompt", args.command)
        err_console.print("Aborted, list file left unchanged.")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

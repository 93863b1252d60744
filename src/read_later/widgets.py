from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from .datamodels import LinkEntry


def link_text(entry: LinkEntry) -> Text:
    """Render an entry for the terminal: title, url, then tags if any."""
    text = Text()
    text.append(entry.title, style="bold")
    text.append("\n")
    text.append(entry.url, style="cyan underline")
    if entry.tags:
        text.append("\n")
        text.append(", ".join(f"#{tag}" for tag in entry.tags), style="magenta")
    return text


# --- UI Widgets ---
class LinkDetails(Static):
    link: Optional[LinkEntry] = None

    def show_link(self, entry: Optional[LinkEntry]) -> None:
        self.link = entry
        self.update(link_text(entry) if entry else "")

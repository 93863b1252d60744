from __future__ import annotations

import logging
import webbrowser
from typing import Iterable, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Input

from .datamodels import LinkEntry
from .read_later_list import ReadLaterList, keyword_predicate
from .storage import save_list
from .widgets import LinkDetails

logger = logging.getLogger("read_later")


class ReadLaterApp(App):
    TITLE = "Read Later"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("o", "open_link", "Open in browser"),
        Binding("d", "delete_link", "Delete"),
        Binding("/", "focus_filter", "Search"),
        Binding("escape", "clear_filter", "Clear search", show=False),
    ]

    def __init__(
        self,
        read_later_list: ReadLaterList,
        list_path: str,
        theme: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.read_later_list = read_later_list
        self.list_path = list_path
        self._configured_theme = theme

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Filter links...", id="link-filter")
        yield DataTable(id="links-table")
        yield LinkDetails(id="link-details")
        yield Footer()

    def on_mount(self) -> None:
        if self._configured_theme and self._configured_theme in self.available_themes:
            self.theme = self._configured_theme
        self.sub_title = self.list_path

        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.add_column("Title", key="title")
        table.add_column("URL", key="url")
        table.add_column("Tags", key="tags")
        self._update_table(self.read_later_list)
        table.focus()

    def _update_table(self, entries: Iterable[LinkEntry]) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for entry in entries:
            table.add_row(entry.title, entry.url, ", ".join(entry.tags), key=entry.url)
        self.query_one(LinkDetails).show_link(self.selected_link())

    def selected_link(self) -> Optional[LinkEntry]:
        """Return the entry under the table cursor, if any."""
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self.read_later_list.get(str(row_key.value))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self.query_one(LinkDetails).show_link(self.read_later_list.get(str(event.row_key.value)))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "link-filter":
            return
        query = event.value.strip()
        if not query:
            self._update_table(self.read_later_list)
            return
        self._update_table(self.read_later_list.search(keyword_predicate(query)))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "link-filter":
            self.query_one(DataTable).focus()

    def action_open_link(self) -> None:
        entry = self.selected_link()
        if entry:
            webbrowser.open(entry.url)

    def action_delete_link(self) -> None:
        """Delete the selected link and save the list."""
        entry = self.selected_link()
        if entry is None:
            return

        self.read_later_list.delete(entry.url)
        try:
            save_list(self.list_path, self.read_later_list)
        except OSError as e:
            logger.error("Failed to save %s: %s", self.list_path, e)
            self.read_later_list.add_or_update(entry)
            self.notify(f"Could not save list: {e}", severity="error")
            return

        self.query_one(DataTable).remove_row(entry.url)
        self.query_one(LinkDetails).show_link(self.selected_link())
        self.notify(f"Deleted {entry.title}.")

    def action_focus_filter(self) -> None:
        """Focus the filter input."""
        filter_input = self.query_one("#link-filter", Input)
        filter_input.display = True
        filter_input.focus()

    def action_clear_filter(self) -> None:
        filter_input = self.query_one("#link-filter", Input)
        filter_input.value = ""
        filter_input.display = False
        self.query_one(DataTable).focus()

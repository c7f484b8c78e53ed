"""jqlive panel - type JSON and a jq query, see the result as you type.

Layout: formatting settings on top, input JSON on the left, and on the
right the query, the jq status line, the output and a jq cheat sheet.
"""

import logging
import webbrowser
from typing import Callable, Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
    Switch,
    TextArea,
)

from ..models import Indentation
from ..pipeline import OutputState, QueryPipeline
from .cheatsheet import CHEAT_SHEET, JQ_MANUAL_URL

logger = logging.getLogger(__name__)

INDENTATION_CHOICES = [
    ("2 spaces", Indentation.TWO_SPACES),
    ("4 spaces", Indentation.FOUR_SPACES),
    ("1 tab", Indentation.ONE_TAB),
    ("Minified", Indentation.MINIFIED),
]


class JsonQueryApp(App):
    """Interactive jq panel backed by a QueryPipeline."""

    TITLE = "jqlive"
    SUB_TITLE = "JSON query tester"

    CSS = """
    #config { height: auto; padding: 0 1; }
    #config Label { padding: 1 1 0 2; }
    #indentation { width: 20; }
    #panes { height: 1fr; }
    #input-json { width: 1fr; }
    #right { width: 1fr; }
    #error { height: auto; min-height: 1; padding: 0 1; color: $warning; }
    #error.failure { color: $error; text-style: bold; }
    #output-json { height: 1fr; }
    #cheat-sheet { height: 14; }
    """

    BINDINGS = [
        Binding("f1", "open_manual", "jq manual", show=True),
        Binding("ctrl+t", "toggle_sort_keys", "Sort keys", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(self, pipeline: QueryPipeline):
        super().__init__()
        self.pipeline = pipeline
        self._initial_document = pipeline.controller.document
        self._initial_query = pipeline.controller.query
        self._unsubscribe: Optional[Callable[[], None]] = None

    def compose(self) -> ComposeResult:
        settings = self.pipeline.settings.settings
        yield Header()
        with Horizontal(id="config"):
            yield Label("Indentation")
            yield Select(
                INDENTATION_CHOICES,
                value=settings.indentation_mode,
                allow_blank=False,
                id="indentation",
            )
            yield Label("Sort keys")
            yield Switch(value=settings.sort_keys, id="sort-keys")
        with Horizontal(id="panes"):
            yield TextArea(self._initial_document, id="input-json")
            with Vertical(id="right"):
                yield Input(
                    value=self._initial_query, placeholder="jq query", id="query"
                )
                yield Static("", id="error")
                yield TextArea("", read_only=True, id="output-json")
                yield DataTable(id="cheat-sheet", zebra_stripes=True)
                yield Button("Open jq manual", id="manual")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#cheat-sheet", DataTable)
        table.add_columns("Syntax", "Example", "Description")
        table.add_rows(CHEAT_SHEET)

        self._unsubscribe = self.pipeline.output.subscribe(self._show_output)
        self.pipeline.controller.load(self._initial_document, self._initial_query)

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.pipeline.aclose()

    def receive_data(self, data_type: str, payload: object) -> None:
        """Load JSON handed over by another tool into the input pane."""
        if self.pipeline.controller.receive_data(data_type, payload) is not None:
            self.query_one("#input-json", TextArea).load_text(str(payload))

    def _show_output(self, state: OutputState) -> None:
        output = self.query_one("#output-json", TextArea)
        if output.text != state.output_text:
            output.load_text(state.output_text)

        error = self.query_one("#error", Static)
        error.update(Text(state.error_text))
        error.set_class(state.failure is not None, "failure")

    @on(TextArea.Changed, "#input-json")
    def _on_document_changed(self, event: TextArea.Changed) -> None:
        text = event.text_area.text
        if text != self.pipeline.controller.document:
            self.pipeline.controller.document_changed(text)

    @on(Input.Changed, "#query")
    def _on_query_changed(self, event: Input.Changed) -> None:
        if event.value != self.pipeline.controller.query:
            self.pipeline.controller.query_changed(event.value)

    @on(Select.Changed, "#indentation")
    def _on_indentation_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, Indentation):
            return
        if event.value != self.pipeline.settings.get("indentationMode"):
            self.pipeline.settings.set("indentationMode", event.value.value)

    @on(Switch.Changed, "#sort-keys")
    def _on_sort_keys_changed(self, event: Switch.Changed) -> None:
        if event.value != self.pipeline.settings.get("sortKeys"):
            self.pipeline.settings.set("sortKeys", event.value)

    @on(Button.Pressed, "#manual")
    def _on_manual_pressed(self) -> None:
        self.action_open_manual()

    def action_open_manual(self) -> None:
        if not webbrowser.open(JQ_MANUAL_URL):
            self.notify(JQ_MANUAL_URL, title="jq manual")

    def action_toggle_sort_keys(self) -> None:
        switch = self.query_one("#sort-keys", Switch)
        switch.value = not switch.value

"""FuzzySelect widget: searchable select backed by SelectionMachine.

The widget only renders. Matching, cursor resolution and selection rules
all live in SelectionMachine; key presses are forwarded as on_* calls and
the dropdown is redrawn from search_result and active_index.
"""

from __future__ import annotations

from typing import Any, Iterable

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.markup import escape
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

from ..models.search import ItemsFound, NotSearched
from ..models.selection import Many, Selection, Single
from ..services import fuzzy
from ..services.config import SelectConfig
from ..services.events import (
    ItemRemovedEvent,
    ItemSelectedEvent,
    SelectionClearedEvent,
)
from ..services.navigation import SelectionMachine, resolve_active_index


def format_label(label: str, positions: Iterable[int]) -> str:
    """Render label as markup with matched characters in bold.

    Positions index into the case-folded label; if folding changed the
    length they cannot be mapped back and the label is left plain.
    """
    marked = set(positions)
    if not marked or len(label.casefold()) != len(label):
        return escape(label)
    parts = []
    for i, char in enumerate(label):
        text = "\\[" if char == "[" else char
        parts.append(f"[b]{text}[/b]" if i in marked else text)
    return "".join(parts)


class MatchOption(Static):
    """A single ranked match in the dropdown."""

    DEFAULT_CSS = """
    MatchOption {
        width: 100%;
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    MatchOption.active {
        color: $text;
        background: $surface-lighten-1;
    }
    """

    def __init__(self, item: Any, markup_label: str, **kwargs) -> None:
        super().__init__(markup_label, **kwargs)
        self.item = item


class FuzzySelect(Widget, can_focus=True):
    """Select with fuzzy search and keyboard navigation.

    Keyboard:
        up/down, ctrl+p/ctrl+n  - Move the active match
        enter/tab               - Commit the active match
        escape                  - Cancel typing
        ctrl+x                  - Remove the last selected item (multi)
        ctrl+l                  - Clear the selection

    Messages:
        Selected(item, selection): an item was committed
        Removed(item, selection): an item left a multi selection
        Cleared(): the selection was reset
    """

    class Selected(Message):
        """Emitted when an item is committed."""

        def __init__(self, item: Any, selection: Selection) -> None:
            self.item = item
            self.selection = selection
            super().__init__()

    class Removed(Message):
        """Emitted when an item is removed from a multi selection."""

        def __init__(self, item: Any, selection: Selection) -> None:
            self.item = item
            self.selection = selection
            super().__init__()

    class Cleared(Message):
        """Emitted when the selection is cleared."""

    DEFAULT_CSS = """
    FuzzySelect {
        height: auto;
        max-height: 20;
    }

    FuzzySelect #select-input {
        width: 100%;
        margin: 0;
    }

    FuzzySelect #selection {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    FuzzySelect #selection.hidden {
        display: none;
    }

    FuzzySelect #dropdown {
        display: none;
        height: auto;
        max-height: 12;
        border: round $surface-lighten-1;
        background: $surface;
        overflow-y: auto;
    }

    FuzzySelect #dropdown.visible {
        display: block;
    }

    FuzzySelect .empty-results {
        color: $text-disabled;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("down", "move_down", "Down", show=False),
        Binding("up", "move_up", "Up", show=False),
        Binding("ctrl+n", "move_down", "Down", show=False),
        Binding("ctrl+p", "move_up", "Up", show=False),
        Binding("enter", "confirm", "Select"),
        Binding("tab", "confirm", "Select", show=False),
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+x", "remove_last", "Remove", show=False),
        Binding("ctrl+l", "clear_selection", "Clear", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[Any] = (),
        config: SelectConfig | None = None,
        placeholder: str = "type to search...",
        not_found_text: str = "no matches",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._config = config or SelectConfig()
        self._machine = SelectionMachine(self._config, candidates)
        self._placeholder = placeholder
        self._not_found_text = not_found_text

        bus = self._machine.events
        bus.subscribe(ItemSelectedEvent, self._on_item_selected)
        bus.subscribe(ItemRemovedEvent, self._on_item_removed)
        bus.subscribe(SelectionClearedEvent, self._on_selection_cleared)

    @property
    def machine(self) -> SelectionMachine:
        return self._machine

    @property
    def selection(self) -> Selection:
        return self._machine.selection

    def compose(self) -> ComposeResult:
        yield Static("", id="selection", classes="hidden")
        yield Input(placeholder=self._placeholder, id="select-input")
        yield Vertical(id="dropdown")

    def on_mount(self) -> None:
        self._refresh_selection()

    def set_candidates(self, candidates: Iterable[Any]) -> None:
        """Replace the candidate list and redraw matches."""
        self._machine.set_candidates(candidates)
        self._refresh_matches()

    # -- bus -> Textual messages ---------------------------------------

    def _on_item_selected(self, event: ItemSelectedEvent) -> None:
        self.post_message(self.Selected(event.item, self._machine.selection))

    def _on_item_removed(self, event: ItemRemovedEvent) -> None:
        self.post_message(self.Removed(event.item, self._machine.selection))

    def _on_selection_cleared(self, event: SelectionClearedEvent) -> None:
        self.post_message(self.Cleared())

    # -- input ---------------------------------------------------------

    def on_focus(self, event: events.Focus) -> None:
        """Focus the input when widget receives focus."""
        self.query_one("#select-input", Input).focus()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        self._machine.on_focus()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self._machine.on_blur()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "select-input":
            return
        event.stop()
        self._machine.on_query_change(event.value)
        self._refresh_matches()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "select-input":
            return
        event.stop()
        self.action_confirm()

    # -- actions -------------------------------------------------------

    def action_move_down(self) -> None:
        self._machine.on_move_down()
        self._update_active()

    def action_move_up(self) -> None:
        self._machine.on_move_up()
        self._update_active()

    def action_confirm(self) -> None:
        if not self._machine.on_confirm():
            return
        self._show_committed_label()
        self._refresh_selection()
        self._refresh_matches()

    def action_cancel(self) -> None:
        self._machine.on_escape()
        self._show_committed_label()
        self._refresh_matches()

    def action_remove_last(self) -> None:
        selection = self._machine.selection
        if isinstance(selection, Many) and selection.items:
            self._machine.on_remove(selection.items[-1])
            self._refresh_selection()
            self._refresh_matches()

    def action_clear_selection(self) -> None:
        self._machine.on_clear()
        if not self._machine.state.is_typing:
            self._show_committed_label()
        self._refresh_selection()
        self._refresh_matches()

    # -- rendering -----------------------------------------------------

    def _show_committed_label(self) -> None:
        """Show the committed label (single) or nothing while not typing."""
        selection = self._machine.selection
        text = self._config.to_label(selection.item) if isinstance(selection, Single) else ""
        input_widget = self.query_one("#select-input", Input)
        with self.prevent(Input.Changed):
            input_widget.value = text

    def _refresh_selection(self) -> None:
        chips = self.query_one("#selection", Static)
        selection = self._machine.selection
        if isinstance(selection, Many) and selection.items:
            labels = [escape(self._config.to_label(item)) for item in selection.items]
            chips.update(" · ".join(labels))
            chips.remove_class("hidden")
        else:
            chips.add_class("hidden")

    def _refresh_matches(self) -> None:
        """Rebuild the dropdown from the current search result."""
        dropdown = self.query_one("#dropdown", Vertical)
        dropdown.remove_children()

        result = self._machine.search_result
        if isinstance(result, NotSearched):
            dropdown.remove_class("visible")
            return

        dropdown.add_class("visible")
        if result.is_empty:
            dropdown.mount(Static(self._not_found_text, classes="empty-results"))
            return

        active = resolve_active_index(result, self._machine.highlight_counter)
        query = fuzzy.transform(self._config, self._machine.query) or ""
        options = []
        for i, item in enumerate(result.items):
            label = self._config.to_label(item)
            positions = fuzzy.match(
                query, label, self._config.penalties, self._config.separators
            ).positions
            option = MatchOption(item, format_label(label, positions))
            if i == active:
                option.add_class("active")
            options.append(option)
        dropdown.mount(*options)

    def _update_active(self) -> None:
        """Move the active class without rebuilding the list."""
        result = self._machine.search_result
        if not isinstance(result, ItemsFound):
            return
        active = resolve_active_index(result, self._machine.highlight_counter)
        options = self.query_one("#dropdown", Vertical).query(MatchOption)
        for i, option in enumerate(options):
            option.set_class(i == active, "active")

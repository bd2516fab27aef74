"""Selection and navigation state machine for one select widget.

Navigation is relative: move up/down only shifts an unbounded counter.
The counter is resolved to a concrete index against the *current* match
list each time an active candidate is needed, so the list may grow or
shrink between key presses without the cursor ever going out of range.

States: idle (query is None) or typing (query is a string), crossed with a
selection of NoSelection, Single or Many. There is no terminal state.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models.exceptions import ConfigValidationError
from ..models.navigation import NavigationState
from ..models.search import ItemsFound, SearchResult
from ..models.selection import NO_SELECTION, Many, Selection, Single, empty_selection
from .config import SelectConfig
from .events import (
    BlurEvent,
    EventBus,
    FocusEvent,
    ItemRemovedEvent,
    ItemSelectedEvent,
    QueryChangedEvent,
    SelectionClearedEvent,
)
from .query import QueryPipeline, filtered_candidates

logger = logging.getLogger(__name__)

__all__ = [
    "SelectionMachine",
    "filtered_candidates",
    "non_negative_remainder",
    "resolve_active_index",
    "resolve_active_candidate",
]


def non_negative_remainder(n: int, m: int) -> int:
    """Euclidean remainder: always in [0, m) for m > 0."""
    return ((n % m) + m) % m


def resolve_active_index(result: SearchResult, highlight_counter: int | None) -> int | None:
    """Index of the active candidate within result, if any."""
    if not isinstance(result, ItemsFound) or result.is_empty:
        return None
    count = len(result.items)
    if count == 1 or highlight_counter is None:
        return 0
    return non_negative_remainder(highlight_counter, count)


def resolve_active_candidate(result: SearchResult, highlight_counter: int | None) -> Any | None:
    """The candidate a confirm would commit.

    - NOT_SEARCHED or no matches: None
    - one match: that match, whatever the counter says
    - otherwise: top match when the counter is unset, else the counter
      wrapped around the match count
    """
    index = resolve_active_index(result, highlight_counter)
    if index is None:
        return None
    return result.items[index]


class SelectionMachine:
    """Holds query, cursor and selection for one widget instance.

    Every widget gets its own machine; hosts keep it and route input
    events to the on_* methods. Reads (search_result, active_candidate)
    are recomputed from the current state on each call.
    """

    def __init__(
        self,
        config: SelectConfig,
        candidates: Iterable[Any] = (),
        events: EventBus | None = None,
        selection: Selection | None = None,
    ) -> None:
        if selection is None:
            selection = empty_selection(config.multi)
        elif config.multi != isinstance(selection, Many):
            mode = "multi" if config.multi else "single"
            raise ConfigValidationError(
                f"Initial selection {type(selection).__name__} does not fit {mode}-select mode",
                "use Many(...) with multi=True, Single(...) otherwise",
            )

        self._config = config
        self._pipeline = QueryPipeline(config)
        self._candidates = list(candidates)
        self._state = NavigationState()
        self._selection = selection
        self._events = events or EventBus()

    # -- state ----------------------------------------------------------

    @property
    def config(self) -> SelectConfig:
        return self._config

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def query(self) -> str | None:
        return self._state.query

    @property
    def highlight_counter(self) -> int | None:
        return self._state.highlight_counter

    @property
    def candidates(self) -> list[Any]:
        return list(self._candidates)

    def set_candidates(self, candidates: Iterable[Any]) -> None:
        """Replace the candidate list; the counter re-resolves on next read."""
        self._candidates = list(candidates)

    # -- reads ----------------------------------------------------------

    @property
    def selectable(self) -> list[Any]:
        """Candidates not already chosen."""
        return filtered_candidates(self._candidates, self._selection)

    @property
    def search_result(self) -> SearchResult:
        return self._pipeline.run(self._state.query, self._candidates, self._selection)

    @property
    def active_index(self) -> int | None:
        return resolve_active_index(self.search_result, self._state.highlight_counter)

    @property
    def active_candidate(self) -> Any | None:
        return resolve_active_candidate(self.search_result, self._state.highlight_counter)

    # -- input events ---------------------------------------------------

    def on_query_change(self, text: str) -> None:
        self._state = self._state.with_query(text)
        self._events.emit(QueryChangedEvent(query=text))

    def on_focus(self) -> None:
        self._events.emit(FocusEvent())

    def on_blur(self) -> None:
        self._events.emit(BlurEvent())

    def on_move_down(self) -> None:
        self._state = self._state.moved(1)

    def on_move_up(self) -> None:
        self._state = self._state.moved(-1)

    def on_escape(self) -> None:
        """Cancel typing; the selection is kept."""
        if self._state.query is None:
            return
        self._state = self._state.with_query(None)
        self._events.emit(QueryChangedEvent(query=None))

    def on_confirm(self) -> bool:
        """Commit the active candidate.

        Returns True when the selection changed. Candidates may themselves
        be None, so "nothing active" is decided by the index.
        """
        result = self.search_result
        index = resolve_active_index(result, self._state.highlight_counter)
        if index is None:
            return False
        item = result.items[index]

        if isinstance(self._selection, Many):
            if item in self._selection:
                # Unreachable through search, members are filtered out
                return False
            self._selection = self._selection.add(item)
            self._state = self._state.reset()
        else:
            self._selection = Single(item)
            self._state = self._state.with_query(None)

        logger.debug(f"Committed {self._config.to_label(item)!r}")
        self._events.emit(ItemSelectedEvent(item=item))
        return True

    def on_remove(self, item: Any) -> bool:
        """Drop item from a multi-select selection. Returns True if removed."""
        if not isinstance(self._selection, Many) or item not in self._selection:
            return False
        self._selection = self._selection.remove(item)
        self._events.emit(ItemRemovedEvent(item=item))
        return True

    def on_clear(self) -> None:
        """Reset the selection; the query is kept."""
        self._selection = Many() if self._config.multi else NO_SELECTION
        self._events.emit(SelectionClearedEvent())

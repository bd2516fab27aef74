"""Navigation state for one select widget."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class NavigationState:
    """Query text and cursor counter.

    query is None while the input is not in typing mode (placeholder or a
    committed label is showing). highlight_counter is an unbounded signed
    counter; it is never clamped and only resolved against the live match
    list when an active candidate is needed.
    """

    query: str | None = None
    highlight_counter: int | None = None

    @property
    def is_typing(self) -> bool:
        return self.query is not None

    def with_query(self, query: str | None) -> NavigationState:
        return replace(self, query=query)

    def moved(self, delta: int) -> NavigationState:
        """Shift the counter by delta, starting from 0 when unset."""
        return replace(self, highlight_counter=(self.highlight_counter or 0) + delta)

    def reset(self) -> NavigationState:
        return NavigationState()

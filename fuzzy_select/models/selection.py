"""What the user has committed to.

Selection is a closed union of NoSelection, Single and Many. All variants
are immutable; operations return new values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class NoSelection:
    """Nothing selected yet."""


NO_SELECTION = NoSelection()


@dataclass(frozen=True)
class Single:
    """One committed item (single-select mode)."""

    item: Any


@dataclass(frozen=True)
class Many:
    """Committed items in selection order (multi-select mode).

    Duplicates are never stored: adding a member is a no-op.
    """

    items: tuple[Any, ...] = ()

    def __contains__(self, item: Any) -> bool:
        return item in self.items

    def add(self, item: Any) -> Many:
        """Return a selection with item appended, unless already present."""
        if item in self.items:
            return self
        return Many(self.items + (item,))

    def remove(self, item: Any) -> Many:
        """Return a selection without item; unchanged if absent."""
        if item not in self.items:
            return self
        return Many(tuple(i for i in self.items if i != item))


Selection = Union[NoSelection, Single, Many]


def empty_selection(multi: bool) -> Selection:
    """Initial selection for a widget in the given mode."""
    return Many() if multi else NO_SELECTION

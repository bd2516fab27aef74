"""Search outcomes produced by the matching engine.

SearchResult is a closed union:
- NotSearched: the query transform suppressed the search, render no dropdown
- ItemsFound: a search ran, items are ranked (may be empty, render "not found")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class NotSearched:
    """No search was performed."""


NOT_SEARCHED = NotSearched()


@dataclass(frozen=True)
class ItemsFound:
    """Matches in rank order, already filtered and cut."""

    items: tuple[Any, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items


SearchResult = Union[NotSearched, ItemsFound]


@dataclass(frozen=True)
class MatchResult:
    """Score of one label plus the offsets of its matched characters.

    Offsets index into the case-folded label, which has the same length as
    the original for everything but a handful of special letters.
    """

    score: int
    positions: tuple[int, ...] = field(default_factory=tuple)

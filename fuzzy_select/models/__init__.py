"""Data models for fuzzy-select."""

from .search import (
    NOT_SEARCHED,
    ItemsFound,
    MatchResult,
    NotSearched,
    SearchResult,
)
from .selection import (
    NO_SELECTION,
    Many,
    NoSelection,
    Selection,
    Single,
    empty_selection,
)
from .navigation import NavigationState
from .exceptions import (
    SelectError,
    ConfigError,
    ConfigValidationError,
)

__all__ = [
    # Search results
    "NOT_SEARCHED",
    "NotSearched",
    "ItemsFound",
    "SearchResult",
    "MatchResult",
    # Selection
    "NO_SELECTION",
    "NoSelection",
    "Single",
    "Many",
    "Selection",
    "empty_selection",
    # Navigation
    "NavigationState",
    # Exceptions
    "SelectError",
    "ConfigError",
    "ConfigValidationError",
]

"""fuzzy-select: fuzzy matching and keyboard navigation for select widgets."""

from fuzzy_select.models import (
    NOT_SEARCHED,
    NO_SELECTION,
    ItemsFound,
    Many,
    NotSearched,
    NoSelection,
    Single,
)
from fuzzy_select.services import (
    FuzzyPenalties,
    SelectConfig,
    SelectionMachine,
    matched_items,
    matched_items_with_cutoff,
    resolve_active_candidate,
    score,
)

__version__ = "0.1.0"

__all__ = [
    "NOT_SEARCHED",
    "NO_SELECTION",
    "ItemsFound",
    "Many",
    "NotSearched",
    "NoSelection",
    "Single",
    "FuzzyPenalties",
    "SelectConfig",
    "SelectionMachine",
    "matched_items",
    "matched_items_with_cutoff",
    "resolve_active_candidate",
    "score",
]

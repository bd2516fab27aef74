"""Services for fuzzy-select."""

from fuzzy_select.services.config import (
    FuzzyPenalties,
    SelectConfig,
    identity_transform,
    min_length_transform,
)
from fuzzy_select.services.fuzzy import (
    match,
    score,
    matched_items,
    matched_items_with_cutoff,
)
from fuzzy_select.services.query import QueryPipeline, filtered_candidates
from fuzzy_select.services.navigation import (
    SelectionMachine,
    non_negative_remainder,
    resolve_active_candidate,
)
from fuzzy_select.services.events import EventBus

__all__ = [
    "FuzzyPenalties",
    "SelectConfig",
    "identity_transform",
    "min_length_transform",
    "match",
    "score",
    "matched_items",
    "matched_items_with_cutoff",
    "QueryPipeline",
    "filtered_candidates",
    "SelectionMachine",
    "non_negative_remainder",
    "resolve_active_candidate",
    "EventBus",
]

"""Query pipeline: gate raw input, then feed the matching engine.

Stages:
1. Exclude candidates already in a Many selection
2. Apply the host's transform; None means NOT_SEARCHED
3. Score, filter by threshold, rank
4. Keep the first `cutoff` matches

Stages 2-4 are the matching engine's matched_items_with_cutoff, so a
pipeline run and a direct engine call never disagree. NOT_SEARCHED is
"don't show a dropdown"; ItemsFound, possibly empty, is "show a
not-found state".
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models.search import SearchResult
from ..models.selection import NO_SELECTION, Many, Selection
from . import fuzzy
from .config import SelectConfig, identity_transform, min_length_transform

logger = logging.getLogger(__name__)

__all__ = [
    "QueryPipeline",
    "filtered_candidates",
    "identity_transform",
    "min_length_transform",
]


def filtered_candidates(candidates: Iterable[Any], selection: Selection) -> list[Any]:
    """Candidates still selectable under selection.

    In multi-select mode members of the Many set are removed; otherwise the
    list is returned unchanged.
    """
    if isinstance(selection, Many):
        return [c for c in candidates if c not in selection]
    return list(candidates)


class QueryPipeline:
    """Runs one search for a widget's current query and selection."""

    def __init__(self, config: SelectConfig):
        self._config = config

    @property
    def config(self) -> SelectConfig:
        return self._config

    def run(
        self,
        raw_query: str | None,
        candidates: Iterable[Any],
        selection: Selection = NO_SELECTION,
    ) -> SearchResult:
        """Search candidates for raw_query, honouring the current selection."""
        pool = filtered_candidates(candidates, selection)
        if isinstance(selection, Many):
            logger.debug(f"Excluded {len(selection.items)} selected items from search")
        return fuzzy.matched_items_with_cutoff(self._config, raw_query, pool)

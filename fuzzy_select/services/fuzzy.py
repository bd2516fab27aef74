"""Fuzzy matching engine for select widgets.

Scores a query against a candidate label as a weighted edit distance:
- add: label character the query never asks for
- remove: query character missing from the label
- move: query character found before the previous match (out of order)
- insert: gap between consecutive matches, including before the first one

Query and label are split into words on separator characters. Each query
word is scored against its best label word. Label words no query word
picked cost one add penalty each rather than one per character, so
matches aligned on word boundaries rank first.

Lower score = better match. 0 is an exact match.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models.search import NOT_SEARCHED, ItemsFound, MatchResult, SearchResult
from .config import DEFAULT_SEPARATORS, FuzzyPenalties, SelectConfig

logger = logging.getLogger(__name__)


def _split_words(text: str, separators: frozenset[str]) -> list[tuple[int, str]]:
    """Split text on separators, keeping each word's start offset."""
    words: list[tuple[int, str]] = []
    start: int | None = None
    for i, char in enumerate(text):
        if char in separators:
            if start is not None:
                words.append((start, text[start:i]))
                start = None
        elif start is None:
            start = i
    if start is not None:
        words.append((start, text[start:]))
    return words


def _find_unused(word: str, char: str, start: int, used: set[int]) -> int:
    idx = word.find(char, start)
    while idx != -1 and idx in used:
        idx = word.find(char, idx + 1)
    return idx


def _word_distance(
    needle: str, word: str, penalties: FuzzyPenalties
) -> tuple[int, list[int]]:
    """Score one query word against one label word.

    Each needle character takes the first unused occurrence after the
    previous match, and only falls back to an earlier one (a move) when
    nothing lies ahead.
    """
    used: set[int] = set()
    positions: list[int] = []
    last = -1
    for char in needle:
        idx = _find_unused(word, char, last + 1, used)
        if idx == -1:
            idx = _find_unused(word, char, 0, used)
        if idx != -1:
            used.add(idx)
            positions.append(idx)
            last = idx

    matched = len(positions)
    score = (len(word) - matched) * penalties.add
    score += (len(needle) - matched) * penalties.remove

    previous = -1
    for pos in positions:
        if pos < previous:
            score += penalties.move
        elif pos > previous + 1:
            score += penalties.insert
        previous = pos

    return score, positions


def match(
    query: str,
    label: str,
    penalties: FuzzyPenalties | None = None,
    separators: Iterable[str] = DEFAULT_SEPARATORS,
) -> MatchResult:
    """Score label against query and report matched label offsets."""
    penalties = penalties or FuzzyPenalties()
    separators = frozenset(separators)

    needles = [word for _, word in _split_words(query.casefold(), separators)]
    words = _split_words(label.casefold(), separators)

    if not needles:
        return MatchResult(sum(len(word) for _, word in words) * penalties.add)
    if not words:
        return MatchResult(sum(len(n) for n in needles) * penalties.remove)

    total = 0
    picked: set[int] = set()
    positions: set[int] = set()
    for needle in needles:
        best_score, best_index, best_positions = None, 0, []
        for index, (offset, word) in enumerate(words):
            word_score, word_positions = _word_distance(needle, word, penalties)
            # Strict comparison keeps the earliest word on ties
            if best_score is None or word_score < best_score:
                best_score = word_score
                best_index = index
                best_positions = [offset + p for p in word_positions]
        total += best_score
        picked.add(best_index)
        positions.update(best_positions)

    total += (len(words) - len(picked)) * penalties.add
    return MatchResult(total, tuple(sorted(positions)))


def score(
    query: str,
    label: str,
    penalties: FuzzyPenalties | None = None,
    separators: Iterable[str] = DEFAULT_SEPARATORS,
) -> int:
    """Score label against query. Lower = better."""
    return match(query, label, penalties, separators).score


def transform(config: SelectConfig, query: str | None) -> str | None:
    """Apply the host's query gate. None means do not search."""
    if query is None:
        return None
    return config.transform_query(query)


def rank(
    config: SelectConfig, query: str, candidates: Iterable[Any]
) -> list[tuple[Any, int]]:
    """Score every candidate, keep those under the threshold, best first.

    The sort is stable, so equal scores keep candidate order.
    """
    results: list[tuple[Any, int]] = []
    for candidate in candidates:
        candidate_score = score(
            query, config.to_label(candidate), config.penalties, config.separators
        )
        if candidate_score < config.score_threshold:
            results.append((candidate, candidate_score))

    results.sort(key=lambda pair: pair[1])
    return results


def matched_items(
    config: SelectConfig, query: str | None, candidates: Iterable[Any]
) -> SearchResult:
    """Search candidates with the transformed query."""
    transformed = transform(config, query)
    if transformed is None:
        return NOT_SEARCHED

    candidates = list(candidates)
    ranked = rank(config, transformed, candidates)
    logger.debug(
        f"Search {transformed!r}: {len(ranked)} of {len(candidates)} candidates matched"
    )
    return ItemsFound(tuple(candidate for candidate, _ in ranked))


def apply_cutoff(config: SelectConfig, result: SearchResult) -> SearchResult:
    """Keep the first cutoff items of a search. Never reorders."""
    if isinstance(result, ItemsFound) and config.cutoff is not None:
        return ItemsFound(result.items[: config.cutoff])
    return result


def matched_items_with_cutoff(
    config: SelectConfig, query: str | None, candidates: Iterable[Any]
) -> SearchResult:
    """matched_items truncated to config.cutoff."""
    return apply_cutoff(config, matched_items(config, query, candidates))

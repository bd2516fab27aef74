"""Configuration for fuzzy-select widgets.

One SelectConfig is built per widget instance and never mutated. It holds:
- Matching policy: score threshold, cutoff, fuzzy penalties, separators
- Host functions: to_label (item -> str) and transform_query (str -> str | None)
- Mode: single or multi select

Plain values round-trip through to_dict/from_dict. Host functions cannot be
serialized, so from_dict takes them as keyword arguments. Values that only
restate a default are omitted from to_dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable

from ..models.exceptions import ConfigValidationError

DEFAULT_SCORE_THRESHOLD = 2000
DEFAULT_SEPARATORS = frozenset(" -_/.")

# Engine fallbacks for penalties left unset
DEFAULT_ADD_PENALTY = 10
DEFAULT_REMOVE_PENALTY = 1000
DEFAULT_MOVE_PENALTY = 100
DEFAULT_INSERT_PENALTY = 1

PENALTY_FIELDS = ("add_penalty", "remove_penalty", "move_penalty", "insert_penalty")


def _check_count(name: str, value: Any, suggestion: str) -> None:
    """Reject anything but a non-negative int (bools included)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(
            f"{name} must be an integer, got {value!r}", suggestion
        )
    if value < 0:
        raise ConfigValidationError(f"{name} must be >= 0, got {value}", suggestion)


def identity_transform(query: str) -> str | None:
    """Search with the raw query, even when empty."""
    return query


@dataclass(frozen=True)
class MinLengthTransform:
    """Suppress search until the query has at least min_length characters."""

    min_length: int = 1
    strip: bool = True

    def __call__(self, query: str) -> str | None:
        text = query.strip() if self.strip else query
        if len(text) < self.min_length:
            return None
        return text


def min_length_transform(min_length: int, strip: bool = True) -> MinLengthTransform:
    """Build a query gate requiring min_length characters."""
    _check_count("min_length", min_length, "use 0 to always search")
    return MinLengthTransform(min_length=min_length, strip=strip)


@dataclass(frozen=True)
class FuzzyPenalties:
    """Weights for the four fuzzy edit categories.

    None means "use the engine default" for that category.
    """

    add_penalty: int | None = None
    remove_penalty: int | None = None
    move_penalty: int | None = None
    insert_penalty: int | None = None

    def __post_init__(self) -> None:
        for name in PENALTY_FIELDS:
            value = getattr(self, name)
            if value is not None:
                _check_count(name, value, "leave it unset to use the default weight")

    @property
    def add(self) -> int:
        return DEFAULT_ADD_PENALTY if self.add_penalty is None else self.add_penalty

    @property
    def remove(self) -> int:
        return DEFAULT_REMOVE_PENALTY if self.remove_penalty is None else self.remove_penalty

    @property
    def move(self) -> int:
        return DEFAULT_MOVE_PENALTY if self.move_penalty is None else self.move_penalty

    @property
    def insert(self) -> int:
        return DEFAULT_INSERT_PENALTY if self.insert_penalty is None else self.insert_penalty

    def to_dict(self) -> dict:
        return {
            name: getattr(self, name)
            for name in PENALTY_FIELDS
            if getattr(self, name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FuzzyPenalties":
        return cls(**{name: data.get(name) for name in PENALTY_FIELDS})


@dataclass(frozen=True)
class SelectConfig:
    """Immutable configuration for one select widget."""

    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    cutoff: int | None = None
    transform_query: Callable[[str], str | None] = field(
        default_factory=lambda: MinLengthTransform(1)
    )
    to_label: Callable[[Any], str] = str
    penalties: FuzzyPenalties = field(default_factory=FuzzyPenalties)
    separators: frozenset[str] = DEFAULT_SEPARATORS
    multi: bool = False

    def __post_init__(self) -> None:
        if self.cutoff is not None:
            _check_count("cutoff", self.cutoff, "use None for no limit")
        if not isinstance(self.multi, bool):
            raise ConfigValidationError(f"multi must be a bool, got {self.multi!r}")
        if not callable(self.transform_query):
            raise ConfigValidationError("transform_query must be callable")
        if not callable(self.to_label):
            raise ConfigValidationError("to_label must be callable")
        # Accept any iterable of characters, store a frozenset
        separators = frozenset(self.separators)
        bad = sorted(s for s in separators if len(s) != 1)
        if bad:
            raise ConfigValidationError(
                f"separators must be single characters, got {bad!r}",
                "pass a string such as ' -_'",
            )
        object.__setattr__(self, "separators", separators)

    def with_options(self, **changes: Any) -> "SelectConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize plain values; host functions are left out."""
        result: dict = {}
        if self.score_threshold != DEFAULT_SCORE_THRESHOLD:
            result["score_threshold"] = self.score_threshold
        if self.cutoff is not None:
            result["cutoff"] = self.cutoff
        if isinstance(self.transform_query, MinLengthTransform):
            if self.transform_query.min_length != 1:
                result["min_query_length"] = self.transform_query.min_length
        penalties = self.penalties.to_dict()
        if penalties:
            result["penalties"] = penalties
        if self.separators != DEFAULT_SEPARATORS:
            result["separators"] = "".join(sorted(self.separators))
        if self.multi:
            result["multi"] = True
        return result

    @classmethod
    def from_dict(
        cls,
        data: dict,
        to_label: Callable[[Any], str] | None = None,
        transform_query: Callable[[str], str | None] | None = None,
    ) -> "SelectConfig":
        """Create from a settings dict.

        An explicit transform_query wins over min_query_length.
        """
        threshold = data.get("score_threshold", DEFAULT_SCORE_THRESHOLD)
        if not isinstance(threshold, (int, float)) or isinstance(threshold, bool):
            raise ConfigValidationError(
                f"score_threshold must be a number, got {threshold!r}"
            )

        penalties = data.get("penalties", {})
        if not isinstance(penalties, dict):
            raise ConfigValidationError(
                f"penalties must be a mapping, got {penalties!r}",
                "use keys such as add_penalty and move_penalty",
            )
        separators = data.get("separators", "".join(DEFAULT_SEPARATORS))
        if not isinstance(separators, str):
            raise ConfigValidationError(
                f"separators must be a string, got {separators!r}",
                "pass a string such as ' -_'",
            )

        if transform_query is None:
            transform_query = min_length_transform(data.get("min_query_length", 1))

        return cls(
            score_threshold=threshold,
            cutoff=data.get("cutoff"),
            transform_query=transform_query,
            to_label=to_label or str,
            penalties=FuzzyPenalties.from_dict(penalties),
            separators=frozenset(separators),
            multi=data.get("multi", False),
        )

"""Widgets for fuzzy-select."""

from fuzzy_select.widgets.fuzzy_select import FuzzySelect, MatchOption, format_label

__all__ = [
    "FuzzySelect",
    "MatchOption",
    "format_label",
]

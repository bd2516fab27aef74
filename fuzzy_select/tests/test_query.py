"""Tests for the query pipeline."""

import pytest

from fuzzy_select.models.exceptions import ConfigValidationError
from fuzzy_select.models.search import NOT_SEARCHED, ItemsFound
from fuzzy_select.models.selection import NO_SELECTION, Many, Single
from fuzzy_select.services.config import (
    MinLengthTransform,
    SelectConfig,
    identity_transform,
    min_length_transform,
)
from fuzzy_select.services.fuzzy import matched_items_with_cutoff
from fuzzy_select.services.query import QueryPipeline, filtered_candidates


class TestTransforms:
    """Tests for query gate helpers."""

    def test_identity_keeps_empty_query(self):
        assert identity_transform("") == ""
        assert identity_transform(" ab ") == " ab "

    def test_min_length_suppresses_short_queries(self):
        gate = min_length_transform(4)
        assert gate("ab") is None
        assert gate("abcd") == "abcd"

    def test_min_length_strips_by_default(self):
        gate = min_length_transform(2)
        assert gate("  ab  ") == "ab"
        assert gate("  a  ") is None

    def test_min_length_without_strip(self):
        gate = min_length_transform(3, strip=False)
        assert gate(" a ") == " a "

    def test_min_length_zero_always_searches(self):
        assert min_length_transform(0)("") == ""

    def test_negative_min_length_rejected(self):
        with pytest.raises(ConfigValidationError):
            min_length_transform(-1)

    def test_default_config_gate(self):
        """Default config suppresses blank queries."""
        gate = SelectConfig().transform_query
        assert gate == MinLengthTransform(1)
        assert gate("   ") is None
        assert gate(" a") == "a"


class TestFilteredCandidates:
    """Tests for filtered_candidates()."""

    def test_many_removes_members(self):
        assert filtered_candidates(["A", "B", "C"], Many(("B",))) == ["A", "C"]

    def test_single_unchanged(self):
        assert filtered_candidates(["A", "B", "C"], Single("B")) == ["A", "B", "C"]

    def test_no_selection_unchanged(self):
        assert filtered_candidates(["A", "B"], NO_SELECTION) == ["A", "B"]

    def test_uses_equality(self):
        """Members are matched by equality, not identity."""
        assert filtered_candidates([(1, "a"), (2, "b")], Many(((1, "a"),))) == [(2, "b")]


class TestQueryPipeline:
    """Tests for QueryPipeline.run()."""

    def test_not_searched_when_gate_fails(self, fruits):
        pipeline = QueryPipeline(SelectConfig(transform_query=min_length_transform(4)))
        assert pipeline.run("ab", fruits) is NOT_SEARCHED

    def test_not_searched_when_idle(self, config, fruits):
        assert QueryPipeline(config).run(None, fruits) is NOT_SEARCHED

    def test_empty_match_is_items_found(self, fruits):
        pipeline = QueryPipeline(
            SelectConfig(score_threshold=10, transform_query=identity_transform)
        )
        assert pipeline.run("zzz", fruits) == ItemsFound(())

    def test_ranked_and_cut(self, fruits):
        pipeline = QueryPipeline(SelectConfig(cutoff=2, transform_query=identity_transform))
        assert pipeline.run("ap", fruits).items == ("Apple", "Grape")

    def test_selected_items_never_returned(self, config):
        """Many members are excluded from the ranking."""
        candidates = ["Alpha", "Bravo", "Charlie"]
        pipeline = QueryPipeline(config)

        assert pipeline.run("c", candidates).items == ("Charlie", "Alpha", "Bravo")
        assert pipeline.run("c", candidates, Many(("Bravo",))).items == ("Charlie", "Alpha")

    def test_excluded_items_never_scored(self, config):
        """The label function never sees selected members."""
        seen = []

        def to_label(item):
            seen.append(item)
            return item

        pipeline = QueryPipeline(config.with_options(to_label=to_label))
        pipeline.run("c", ["A", "B", "C"], Many(("B",)))
        assert seen == ["A", "C"]

    def test_empty_query_with_identity_lists_everything(self, config, fruits):
        result = QueryPipeline(config).run("", fruits)
        assert result.items == ("Apple", "Grape", "Banana")

    def test_agrees_with_engine(self, fruits):
        """Without a Many selection a run is exactly the engine's result."""
        config = SelectConfig(cutoff=2, transform_query=identity_transform)
        pipeline = QueryPipeline(config)
        for query in (None, "", "ap", "zzz", "an"):
            assert pipeline.run(query, fruits) == matched_items_with_cutoff(
                config, query, fruits
            )

    def test_all_selected_is_empty_not_unsearched(self, config):
        """Excluding every candidate still counts as a search."""
        result = QueryPipeline(config).run("a", ["A", "B"], Many(("A", "B")))
        assert result == ItemsFound(())

    def test_gate_sees_raw_query(self, fruits):
        calls = []

        def gate(query):
            calls.append(query)
            return None

        pipeline = QueryPipeline(SelectConfig(transform_query=gate))
        assert pipeline.run(" ap ", fruits) is NOT_SEARCHED
        assert calls == [" ap "]

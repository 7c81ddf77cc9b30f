"""
Unit tests for between-graph extraction strategies.
"""

import pytest

from overlap_expansion.exceptions import InvalidStrategyConfigError
from overlap_expansion.models import (
    ExpansionResult,
    ExpansionStats,
    OverlapEvent,
    OverlapMetadata,
    PathRecord,
    TerminationReason,
)
from overlap_expansion.strategies import (
    MinimalPathsStrategy,
    SaliencePreservingStrategy,
    TruncatedComponentStrategy,
    sampled_degree_scores,
)


@pytest.fixture
def raw_result() -> ExpansionResult:
    """Sample of A-B-C-D-E with a side branch C-X-Y, met at C."""
    return ExpansionResult(
        paths=[PathRecord(from_seed=0, to_seed=1, nodes=["A", "B", "C", "D", "E"])],
        sampled_nodes={"A", "B", "C", "D", "E", "X", "Y"},
        sampled_edges={"A->B", "B->C", "E->D", "D->C", "C->X", "X->Y"},
        visited_per_frontier=[{"A", "B", "C", "X", "Y"}, {"E", "D", "C"}],
        stats=ExpansionStats(nodes_expanded=5, edges_traversed=6, iterations=6),
        overlap_metadata=OverlapMetadata(
            termination_reason=TerminationReason.OVERLAP_SATISFIED,
            overlap_events=[OverlapEvent(iteration=5, frontier_a=1, frontier_b=0, meeting_node="C")],
            iterations=6,
            overlap_matrix={"0-1": {"C"}},
        ),
    )


@pytest.fixture
def raw_without_overlap(raw_result) -> ExpansionResult:
    return raw_result.model_copy(update={
        "paths": [],
        "overlap_metadata": OverlapMetadata(termination_reason=TerminationReason.EXHAUSTION),
    })


@pytest.mark.unit
class TestMinimalPaths:

    def test_keeps_only_path_nodes_and_edges(self, raw_result):
        output = MinimalPathsStrategy().extract_between_graph(raw_result)

        assert output.nodes == {"A", "B", "C", "D", "E"}
        assert output.edges == {"A->B", "B->C", "E->D", "D->C"}
        assert output.paths == raw_result.paths

    def test_output_is_subset_of_sample(self, raw_result):
        output = MinimalPathsStrategy().extract_between_graph(raw_result)

        assert output.nodes <= raw_result.sampled_nodes
        assert output.edges <= raw_result.sampled_edges

    def test_no_paths_returns_sample(self, raw_without_overlap):
        output = MinimalPathsStrategy().extract_between_graph(raw_without_overlap)

        assert output.nodes == raw_without_overlap.sampled_nodes
        assert output.edges == raw_without_overlap.sampled_edges
        assert output.paths == []


@pytest.mark.unit
class TestTruncatedComponent:

    def test_radius_bounds_component(self, raw_result):
        output = TruncatedComponentStrategy(max_radius=1).extract_between_graph(raw_result)

        assert output.nodes == {"B", "C", "D", "X"}
        assert output.edges == {"B->C", "D->C", "C->X"}
        assert output.paths == []

    def test_radius_zero_keeps_meeting_nodes(self, raw_result):
        output = TruncatedComponentStrategy(max_radius=0).extract_between_graph(raw_result)

        assert output.nodes == {"C"}
        assert output.edges == set()

    def test_large_radius_keeps_whole_component_and_paths(self, raw_result):
        output = TruncatedComponentStrategy(max_radius=None).extract_between_graph(raw_result)

        assert output.nodes == raw_result.sampled_nodes
        assert output.paths == raw_result.paths

    def test_max_nodes(self, raw_result):
        output = TruncatedComponentStrategy(max_radius=None, max_nodes=3).extract_between_graph(raw_result)

        assert len(output.nodes) == 3
        assert "C" in output.nodes
        assert output.nodes <= raw_result.sampled_nodes

    def test_no_overlap_returns_sample(self, raw_without_overlap):
        output = TruncatedComponentStrategy().extract_between_graph(raw_without_overlap)

        assert output.nodes == raw_without_overlap.sampled_nodes

    def test_invalid_parameters(self):
        with pytest.raises(InvalidStrategyConfigError):
            TruncatedComponentStrategy(max_radius=-1)
        with pytest.raises(InvalidStrategyConfigError):
            TruncatedComponentStrategy(max_nodes=0)


@pytest.mark.unit
class TestSaliencePreserving:

    def test_default_scores_are_sampled_degree(self, raw_result):
        scores = sampled_degree_scores(raw_result)

        assert scores["C"] == 3.0
        assert scores["A"] == 1.0
        assert scores["Y"] == 1.0

    def test_top_node_on_path_keeps_whole_path(self, raw_result):
        output = SaliencePreservingStrategy(top_k=1).extract_between_graph(raw_result)

        assert output.paths == raw_result.paths
        assert output.nodes == {"A", "B", "C", "D", "E"}
        assert output.edges == {"A->B", "B->C", "E->D", "D->C"}

    def test_custom_scorer_off_path(self, raw_result):
        strategy = SaliencePreservingStrategy(top_k=2, scorer=lambda raw: {"X": 5.0, "Y": 4.0})
        output = strategy.extract_between_graph(raw_result)

        assert output.nodes == {"X", "Y"}
        assert output.edges == {"X->Y"}
        assert output.paths == []

    def test_ties_broken_by_node_id(self, raw_result):
        strategy = SaliencePreservingStrategy(top_k=2, scorer=lambda raw: {})
        output = strategy.extract_between_graph(raw_result)

        # Every node scores 0, so "A" and "B" win; "A" pulls in its path
        assert {"A", "B"} <= output.nodes
        assert output.paths == raw_result.paths

    def test_invalid_top_k(self):
        with pytest.raises(InvalidStrategyConfigError):
            SaliencePreservingStrategy(top_k=0)

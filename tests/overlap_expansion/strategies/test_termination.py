"""
Unit tests for termination strategies.
"""

import pytest

from overlap_expansion.frontier import FrontierState
from overlap_expansion.models import OverlapEvent
from overlap_expansion.strategies import (
    CommonConvergenceStrategy,
    FullPairwiseStrategy,
    TransitiveConnectivityStrategy,
)


def frontiers(*visited_sets):
    return [FrontierState(index=i, visited=set(v)) for i, v in enumerate(visited_sets)]


def event(a, b, node="m", iteration=1):
    return OverlapEvent(iteration=iteration, frontier_a=a, frontier_b=b, meeting_node=node)


@pytest.mark.unit
class TestFullPairwise:

    def test_requires_every_pair(self):
        states = frontiers({"A"}, {"B"}, {"C"})
        strategy = FullPairwiseStrategy()

        assert not strategy.should_terminate(states, [event(0, 1), event(1, 2)], 5)
        assert strategy.should_terminate(states, [event(0, 1), event(1, 2), event(2, 0)], 5)

    def test_no_events(self):
        assert not FullPairwiseStrategy().should_terminate(frontiers({"A"}, {"B"}), [], 1)

    def test_single_frontier_never_terminates(self):
        assert not FullPairwiseStrategy().should_terminate(frontiers({"A"}), [], 1)


@pytest.mark.unit
class TestTransitiveConnectivity:

    def test_chain_of_overlaps_is_enough(self):
        states = frontiers({"A"}, {"B"}, {"C"}, {"D"})
        strategy = TransitiveConnectivityStrategy()

        assert not strategy.should_terminate(states, [event(0, 1), event(2, 3)], 3)
        assert strategy.should_terminate(states, [event(0, 1), event(2, 3), event(1, 2)], 3)

    def test_two_frontiers(self):
        states = frontiers({"A"}, {"B"})

        assert TransitiveConnectivityStrategy().should_terminate(states, [event(1, 0)], 1)
        assert not TransitiveConnectivityStrategy().should_terminate(states, [], 1)


@pytest.mark.unit
class TestCommonConvergence:

    def test_node_shared_by_all(self):
        states = frontiers({"A", "X"}, {"B", "X"}, {"C", "X", "Y"})

        assert CommonConvergenceStrategy().should_terminate(states, [], 1)

    def test_pairwise_sharing_is_not_enough(self):
        states = frontiers({"A", "X"}, {"X", "Y"}, {"Y", "C"})

        assert not CommonConvergenceStrategy().should_terminate(states, [event(0, 1), event(1, 2)], 1)


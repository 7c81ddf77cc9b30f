"""
Termination strategies for N >= 2 seeds.

All strategies are pure functions of their arguments, so the orchestrator can
re-evaluate them after the loop to label the termination reason.
"""

from abc import ABC, abstractmethod
from itertools import combinations
from typing import List, Sequence, Set, Tuple

from overlap_expansion.frontier import FrontierState
from overlap_expansion.models import OverlapEvent


class TerminationStrategy(ABC):
    """Decides when the frontiers have overlapped enough to stop."""

    @abstractmethod
    def should_terminate(
        self,
        frontiers: Sequence[FrontierState],
        overlap_events: Sequence[OverlapEvent],
        iteration: int,
    ) -> bool:
        pass


def _overlap_pairs(overlap_events: Sequence[OverlapEvent]) -> Set[Tuple[int, int]]:
    return {
        (min(e.frontier_a, e.frontier_b), max(e.frontier_a, e.frontier_b))
        for e in overlap_events
        if e.frontier_a != e.frontier_b
    }


class FullPairwiseStrategy(TerminationStrategy):
    """Stop once every seed pair has met directly."""

    def should_terminate(self, frontiers, overlap_events, iteration):
        if len(frontiers) < 2:
            return False
        met = _overlap_pairs(overlap_events)
        return all(pair in met for pair in combinations(range(len(frontiers)), 2))


class TransitiveConnectivityStrategy(TerminationStrategy):
    """Stop once the overlap graph over frontiers is connected."""

    def should_terminate(self, frontiers, overlap_events, iteration):
        n = len(frontiers)
        if n < 2:
            return False

        parent: List[int] = list(range(n))

        def find(x: int) -> int:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        components = n
        for a, b in _overlap_pairs(overlap_events):
            if a >= n or b >= n:
                continue
            root_a, root_b = find(a), find(b)
            if root_a != root_b:
                parent[root_b] = root_a
                components -= 1
                if components == 1:
                    return True
        return components == 1


class CommonConvergenceStrategy(TerminationStrategy):
    """Stop once a single node has been visited by every frontier."""

    def should_terminate(self, frontiers, overlap_events, iteration):
        if len(frontiers) < 2:
            return False
        # Scan the smallest visited set against the rest
        ordered = sorted(frontiers, key=lambda f: len(f.visited))
        smallest, rest = ordered[0], ordered[1:]
        return any(all(node in f.visited for f in rest) for node in smallest.visited)

"""
Single-seed (N = 1) handling.

With one seed there is nothing to overlap with, so the run degenerates into
ego-network sampling bounded by graph coverage.
"""

from abc import ABC, abstractmethod
from typing import Optional

from overlap_expansion.exceptions import InvalidStrategyConfigError
from overlap_expansion.frontier import FrontierState


class N1HandlingStrategy(ABC):
    """Decides when a lone frontier has sampled enough."""

    @abstractmethod
    def should_terminate(self, frontier: FrontierState, total_nodes: Optional[int], iteration: int) -> bool:
        pass


class CoverageThresholdStrategy(N1HandlingStrategy):
    """Stop once the visited set covers ``target_fraction`` of the graph."""

    def __init__(self, target_fraction: float = 0.1):
        if not 0 < target_fraction <= 1:
            raise InvalidStrategyConfigError(f"target_fraction must be in (0, 1], got {target_fraction}")
        self.target_fraction = target_fraction

    def should_terminate(self, frontier, total_nodes, iteration):
        # Unknown graph size: coverage can't be measured, let exhaustion or max_iterations bound the run
        if not total_nodes or total_nodes <= 0:
            return False
        return len(frontier.visited) / total_nodes >= self.target_fraction

"""
Overlap detection strategies.

Decide, each time a frontier discovers a node, which other frontiers it now
overlaps with.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from overlap_expansion.exceptions import InvalidStrategyConfigError
from overlap_expansion.frontier import FrontierState


class OverlapDetectionStrategy(ABC):
    """Detects overlap between the active frontier and the others."""

    #: Whether the orchestrator must maintain ``FrontierState.node_distances``
    requires_distances: bool = False

    @abstractmethod
    def detect_overlap(
        self,
        target_id: str,
        active_frontier: FrontierState,
        all_frontiers: Sequence[FrontierState],
        node_to_frontier_index: Dict[str, int],
    ) -> List[int]:
        """
        Report frontiers that overlap with the active one after it discovered ``target_id``.

        Returns:
            Indices of overlapping frontiers in ascending order, never the active index
        """
        pass


class PhysicalMeetingStrategy(OverlapDetectionStrategy):
    """Overlap when the discovered node is already owned by another frontier. O(1)."""

    def detect_overlap(self, target_id, active_frontier, all_frontiers, node_to_frontier_index):
        owner = node_to_frontier_index.get(target_id)
        if owner is None or owner == active_frontier.index:
            return []
        return [owner]


class ThresholdSharingStrategy(OverlapDetectionStrategy):
    """
    Overlap when the Jaccard similarity of two visited sets reaches a threshold.

    Cost is linear in the visited set sizes for every discovered node.
    """

    def __init__(self, threshold: float = 0.1):
        if not 0 < threshold <= 1:
            raise InvalidStrategyConfigError(f"Jaccard threshold must be in (0, 1], got {threshold}")
        self.threshold = threshold

    def detect_overlap(self, target_id, active_frontier, all_frontiers, node_to_frontier_index):
        overlapping = []
        for other in all_frontiers:
            if other.index == active_frontier.index:
                continue
            if jaccard(active_frontier.visited, other.visited) >= self.threshold:
                overlapping.append(other.index)
        return overlapping


class SphereIntersectionStrategy(OverlapDetectionStrategy):
    """
    Overlap when the discovered node lies within another frontier's radius.

    Each frontier is treated as a ball around its seed whose radius is the
    largest hop distance it has reached. A node at distance ``d`` from the
    active seed intersects every other ball of radius ``>= d``.
    """

    requires_distances = True

    def __init__(self, max_distance: Optional[int] = None):
        if max_distance is not None and max_distance < 0:
            raise InvalidStrategyConfigError(f"max_distance must be >= 0, got {max_distance}")
        self.max_distance = max_distance

    def detect_overlap(self, target_id, active_frontier, all_frontiers, node_to_frontier_index):
        # Fail closed without distance tracking
        if active_frontier.node_distances is None:
            return []
        distance = active_frontier.node_distances.get(target_id)
        if distance is None:
            return []
        if self.max_distance is not None and distance > self.max_distance:
            return []

        overlapping = []
        for other in all_frontiers:
            if other.index == active_frontier.index or other.node_distances is None:
                continue
            if other.radius() >= distance:
                overlapping.append(other.index)
        return overlapping


def jaccard(a: set, b: set) -> float:
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union

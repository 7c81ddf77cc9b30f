"""
Per-seed traversal state.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from overlap_expansion.priority_queue import PriorityQueue


@dataclass
class ParentLink:
    """Back-pointer recorded when a node is first discovered by a frontier."""
    parent: str
    edge: str


@dataclass
class FrontierState:
    """
    Mutable state of one seed's search.

    Owned exclusively by the orchestrator; strategies receive it by
    reference for the duration of a call and must not keep it.
    """
    index: int
    frontier: PriorityQueue[str] = field(default_factory=PriorityQueue)
    visited: Set[str] = field(default_factory=set)
    parents: Dict[str, ParentLink] = field(default_factory=dict)
    # Only populated when a distance-aware overlap strategy is configured
    node_distances: Optional[Dict[str, int]] = None

    @property
    def has_pending(self) -> bool:
        return len(self.frontier) > 0

    def radius(self) -> int:
        """Largest hop distance from the seed over visited nodes (0 without tracking)."""
        if not self.node_distances:
            return 0
        return max(self.node_distances.values())

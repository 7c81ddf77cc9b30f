"""
Graph Expander Interface

Defines what the expansion engine needs from a graph source without coupling
to a specific storage backend (in-memory dict, database, remote API, cache).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from overlap_expansion.models import EDGE_SEPARATOR, Neighbor

T = TypeVar("T")

DEFAULT_EPSILON = 1e-10

DEGREE_BUCKETS: Tuple[Tuple[float, str], ...] = (
    (5, "1-5"),
    (10, "6-10"),
    (50, "11-50"),
    (100, "51-100"),
    (500, "101-500"),
    (1000, "501-1000"),
)


def degree_bucket(degree: int) -> str:
    """Histogram bucket label for a node degree."""
    for upper, label in DEGREE_BUCKETS:
        if degree <= upper:
            return label
    return "1000+"


class GraphExpander(ABC, Generic[T]):
    """
    Graph access interface used by the expansion engine.

    Only neighbor and node lookups are async, so implementations may be
    backed by network or disk I/O.
    """

    @abstractmethod
    async def get_neighbors(self, node_id: str) -> List[Neighbor]:
        """
        Fetch the adjacency of a node.

        Args:
            node_id: Node to expand

        Returns:
            Neighbors in a stable order; an unknown node yields an empty list
        """
        pass

    @abstractmethod
    def get_degree(self, node_id: str) -> int:
        """Current (not potential) degree of a node."""
        pass

    @abstractmethod
    def calculate_priority(self, node_id: str) -> float:
        """Expansion priority of a node; lower is expanded sooner."""
        pass

    @abstractmethod
    async def get_node(self, node_id: str) -> Optional[T]:
        """Node payload, or None if the node does not exist."""
        pass

    @abstractmethod
    def add_edge(self, source: str, target: str, relationship_type: str) -> None:
        """Record a traversed edge into the caller's output graph."""
        pass


class InMemoryGraphExpander(GraphExpander[Any]):
    """
    Dict-backed expander.

    Priority is weighted degree over node weight, the same formula used by
    degree-prioritised sampling: ``degree / (weight + epsilon)``.
    """

    def __init__(self, epsilon: float = DEFAULT_EPSILON):
        self.epsilon = epsilon
        self._adjacency: Dict[str, List[Neighbor]] = {}
        self._nodes: Dict[str, Any] = {}
        self._weights: Dict[str, float] = {}
        self._degree_overrides: Dict[str, int] = {}
        self.recorded_edges: List[Tuple[str, str, str]] = []

    @classmethod
    def from_edge_list(
        cls,
        edges: Iterable[Sequence[str]],
        directed: bool = False,
        nodes: Optional[Iterable[str]] = None,
    ) -> "InMemoryGraphExpander":
        """
        Build an expander from ``(source, target[, relationship_type])`` rows.

        Args:
            edges: Edge rows; the relationship type defaults to "edge"
            directed: If False every edge is added in both directions
            nodes: Extra (possibly isolated) nodes to register
        """
        expander = cls()
        for node_id in nodes or ():
            expander.add_node(node_id)
        for row in edges:
            if len(row) < 2:
                raise ValueError(f"Edge row needs at least source and target, got {list(row)!r}")
            relationship_type = row[2] if len(row) > 2 else "edge"
            expander.add_edge_between(row[0], row[1], relationship_type, directed=directed)
        return expander

    def add_node(
        self,
        node_id: str,
        data: Any = None,
        weight: Optional[float] = None,
        degree: Optional[int] = None,
    ) -> None:
        """
        Register a node.

        Raises:
            ValueError: If the id contains the edge key separator, which would make sampled edge keys ambiguous
        """
        if EDGE_SEPARATOR in node_id:
            raise ValueError(f"Node id {node_id!r} must not contain {EDGE_SEPARATOR!r}")
        self._adjacency.setdefault(node_id, [])
        self._nodes[node_id] = node_id if data is None else data
        if weight is not None:
            self._weights[node_id] = weight
        if degree is not None:
            self._degree_overrides[node_id] = degree

    def add_edge_between(
        self,
        source: str,
        target: str,
        relationship_type: str = "edge",
        directed: bool = False,
    ) -> None:
        for node_id in (source, target):
            if node_id not in self._nodes:
                self.add_node(node_id)
        self._adjacency[source].append(Neighbor(target_id=target, relationship_type=relationship_type))
        if not directed:
            self._adjacency[target].append(Neighbor(target_id=source, relationship_type=relationship_type))

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    async def get_neighbors(self, node_id: str) -> List[Neighbor]:
        return list(self._adjacency.get(node_id, []))

    def get_degree(self, node_id: str) -> int:
        if node_id in self._degree_overrides:
            return self._degree_overrides[node_id]
        return len(self._adjacency.get(node_id, []))

    def calculate_priority(self, node_id: str) -> float:
        weight = self._weights.get(node_id, 1.0)
        return self.get_degree(node_id) / (weight + self.epsilon)

    async def get_node(self, node_id: str) -> Optional[Any]:
        return self._nodes.get(node_id)

    def add_edge(self, source: str, target: str, relationship_type: str) -> None:
        self.recorded_edges.append((source, target, relationship_type))

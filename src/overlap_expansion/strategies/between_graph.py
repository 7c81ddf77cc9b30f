"""
Between-graph extraction strategies.

Refine the raw sample (union of every frontier's visited set) into the
subgraph that describes connectivity among the seeds. Strategies only ever
shrink the raw node/edge/path sets; stats and overlap metadata stay untouched.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict, deque
from typing import Callable, Dict, List, Mapping, Optional, Set

from overlap_expansion.exceptions import InvalidStrategyConfigError
from overlap_expansion.models import BetweenGraphOutput, ExpansionResult, PathRecord, split_edge_key

logger = logging.getLogger(__name__)

SalienceScorer = Callable[[ExpansionResult], Mapping[str, float]]


class BetweenGraphStrategy(ABC):
    """Extracts the between-graph from a raw expansion result."""

    @abstractmethod
    def extract_between_graph(self, raw_result: ExpansionResult) -> BetweenGraphOutput:
        pass


def _unchanged(raw_result: ExpansionResult) -> BetweenGraphOutput:
    return BetweenGraphOutput(
        nodes=set(raw_result.sampled_nodes),
        edges=set(raw_result.sampled_edges),
        paths=list(raw_result.paths),
    )


def _edges_within(edges: Set[str], nodes: Set[str]) -> Set[str]:
    kept = set()
    for key in edges:
        source, target = split_edge_key(key)
        if source in nodes and target in nodes:
            kept.add(key)
    return kept


def _undirected_adjacency(raw_result: ExpansionResult) -> Dict[str, List[str]]:
    adjacency: Dict[str, List[str]] = defaultdict(list)
    # Sorted so traversal order does not depend on set iteration order
    for key in sorted(raw_result.sampled_edges):
        source, target = split_edge_key(key)
        if source in raw_result.sampled_nodes and target in raw_result.sampled_nodes:
            adjacency[source].append(target)
            adjacency[target].append(source)
    return adjacency


class MinimalPathsStrategy(BetweenGraphStrategy):
    """Keep only the nodes and edges lying on a reconstructed seed-to-seed path."""

    def extract_between_graph(self, raw_result):
        if not raw_result.paths:
            return _unchanged(raw_result)

        nodes: Set[str] = set()
        steps = set()
        for path in raw_result.paths:
            nodes.update(path.nodes)
            for u, v in zip(path.nodes, path.nodes[1:]):
                steps.add((u, v))
                steps.add((v, u))

        edges = {key for key in raw_result.sampled_edges if split_edge_key(key) in steps}
        return BetweenGraphOutput(
            nodes=nodes & raw_result.sampled_nodes,
            edges=edges,
            paths=list(raw_result.paths),
        )


class TruncatedComponentStrategy(BetweenGraphStrategy):
    """
    Keep the neighbourhood of the overlap meeting nodes.

    Runs a multi-source BFS over the sampled subgraph (edges treated as
    undirected) from every meeting node, bounded by hop radius and node count.
    """

    def __init__(self, max_radius: Optional[int] = 3, max_nodes: Optional[int] = None):
        if max_radius is not None and max_radius < 0:
            raise InvalidStrategyConfigError(f"max_radius must be >= 0, got {max_radius}")
        if max_nodes is not None and max_nodes < 1:
            raise InvalidStrategyConfigError(f"max_nodes must be >= 1, got {max_nodes}")
        self.max_radius = max_radius
        self.max_nodes = max_nodes

    def extract_between_graph(self, raw_result):
        anchors: List[str] = []
        for event in raw_result.overlap_metadata.overlap_events:
            if event.meeting_node in raw_result.sampled_nodes and event.meeting_node not in anchors:
                anchors.append(event.meeting_node)
        if not anchors:
            return _unchanged(raw_result)

        adjacency = _undirected_adjacency(raw_result)
        kept: Set[str] = set()
        queue = deque()
        for anchor in anchors:
            if self.max_nodes is not None and len(kept) >= self.max_nodes:
                break
            kept.add(anchor)
            queue.append((anchor, 0))

        while queue:
            node, depth = queue.popleft()
            if self.max_radius is not None and depth >= self.max_radius:
                continue
            for neighbor in adjacency.get(node, ()):
                if neighbor in kept:
                    continue
                if self.max_nodes is not None and len(kept) >= self.max_nodes:
                    queue.clear()
                    break
                kept.add(neighbor)
                queue.append((neighbor, depth + 1))

        paths = [p for p in raw_result.paths if all(n in kept for n in p.nodes)]
        logger.debug(f"Truncated component: {len(kept)} of {len(raw_result.sampled_nodes)} nodes kept")
        return BetweenGraphOutput(
            nodes=kept,
            edges=_edges_within(raw_result.sampled_edges, kept),
            paths=paths,
        )


def sampled_degree_scores(raw_result: ExpansionResult) -> Dict[str, float]:
    """Default salience proxy: degree of each node within the sampled subgraph."""
    return {node: float(len(neighbors)) for node, neighbors in _undirected_adjacency(raw_result).items()}


class SaliencePreservingStrategy(BetweenGraphStrategy):
    """
    Keep the top-K most salient nodes plus every path touching them.

    The scoring function is pluggable; it receives the raw result and returns
    a score per node (missing nodes score 0). Whole paths are retained so that
    kept paths stay connected.
    """

    def __init__(self, top_k: int = 50, scorer: Optional[SalienceScorer] = None):
        if top_k < 1:
            raise InvalidStrategyConfigError(f"top_k must be >= 1, got {top_k}")
        self.top_k = top_k
        self.scorer = scorer or sampled_degree_scores

    def extract_between_graph(self, raw_result):
        scores = self.scorer(raw_result)
        ranked = sorted(raw_result.sampled_nodes, key=lambda n: (-scores.get(n, 0.0), n))
        top: Set[str] = set(ranked[: self.top_k])

        paths: List[PathRecord] = [p for p in raw_result.paths if any(n in top for n in p.nodes)]
        nodes = set(top)
        for path in paths:
            nodes.update(path.nodes)
        nodes &= raw_result.sampled_nodes

        return BetweenGraphOutput(
            nodes=nodes,
            edges=_edges_within(raw_result.sampled_edges, nodes),
            paths=paths,
        )

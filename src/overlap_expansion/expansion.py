"""
OverlapBasedExpansion - samples the between-graph of N seed nodes.

One degree-prioritised frontier runs per seed. Every iteration expands the
single globally lowest-priority node across all frontiers, so specific,
low-degree nodes are explored before hubs regardless of which seed they hang
off. The run stops as soon as the configured termination strategy judges the
frontiers to overlap enough, instead of exhausting the graph.

With a single seed there is nothing to overlap with; the run becomes a
coverage-bounded ego-network sample driven by the N=1 handling strategy.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from pydantic import BaseModel, ConfigDict, Field

from overlap_expansion.exceptions import ExpansionAlreadyRunError, NoSeedsError
from overlap_expansion.expander import GraphExpander, degree_bucket
from overlap_expansion.frontier import FrontierState, ParentLink
from overlap_expansion.models import (
    ExpansionResult,
    ExpansionStats,
    OverlapEvent,
    OverlapMetadata,
    PathRecord,
    TerminationReason,
    edge_key,
)
from overlap_expansion.strategies import (
    BetweenGraphStrategy,
    N1HandlingStrategy,
    OverlapDetectionStrategy,
    TerminationStrategy,
)

logger = logging.getLogger(__name__)


class ExpansionConfig(BaseModel):
    """Strategy composition and safety limits for one expansion run."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    overlap_detection: OverlapDetectionStrategy
    termination: TerminationStrategy
    n1_handling: N1HandlingStrategy
    between_graph: BetweenGraphStrategy
    max_iterations: Optional[int] = Field(None, ge=1, description="Safety cap on loop iterations; None means unbounded")
    total_nodes: Optional[int] = Field(None, ge=0, description="Graph size, used only by coverage-based N=1 handling")


class OverlapBasedExpansion:
    """
    Multi-seed expansion with overlap-based termination.

    Instances are single-use: all state is built in the constructor and
    mutated only by ``run()``.
    """

    def __init__(self, expander: GraphExpander, seeds: Sequence[str], config: ExpansionConfig):
        """
        Initialize one frontier per seed.

        Args:
            expander: Graph access used for neighbors, degrees and priorities
            seeds: Seed node ids (N >= 1); seeds missing from the graph simply never grow
            config: Strategy configuration

        Raises:
            NoSeedsError: If no seeds are given
        """
        if not seeds:
            raise NoSeedsError("At least one seed node is required")

        self.expander = expander
        self.seeds: List[str] = list(seeds)
        self.config = config

        self.frontiers: List[FrontierState] = []
        # First frontier to discover a node owns it; makes physical meeting O(1)
        self.node_to_frontier_index: Dict[str, int] = {}
        self.overlap_events: List[OverlapEvent] = []
        self.overlap_matrix: Dict[str, Set[str]] = {}
        self.paths: List[PathRecord] = []
        self.path_signatures: Set[str] = set()
        self.sampled_edges: Set[str] = set()
        self.stats = ExpansionStats()
        self.iteration = 0
        self._has_run = False

        track_distances = config.overlap_detection.requires_distances
        for index, seed in enumerate(self.seeds):
            state = FrontierState(index=index)
            state.frontier.push(seed, expander.calculate_priority(seed))
            state.visited.add(seed)
            if track_distances:
                state.node_distances = {seed: 0}
            self.frontiers.append(state)
            self.node_to_frontier_index.setdefault(seed, index)

    async def run(self) -> ExpansionResult:
        """
        Expand until the configured strategies stop the run.

        Returns:
            ExpansionResult refined by the between-graph strategy

        Raises:
            ExpansionAlreadyRunError: If called twice on the same instance
            Exception: Anything raised by the graph expander propagates unchanged
        """
        if self._has_run:
            raise ExpansionAlreadyRunError("OverlapBasedExpansion instances are single-use")
        self._has_run = True

        if len(self.seeds) == 1:
            return await self._run_single_seed()
        return await self._run_multi_seed()

    async def _run_single_seed(self) -> ExpansionResult:
        state = self.frontiers[0]

        while state.has_pending:
            self._next_iteration()

            if self.config.n1_handling.should_terminate(state, self.config.total_nodes, self.iteration):
                logger.debug(f"Coverage reached at iteration {self.iteration}: {len(state.visited)} nodes visited")
                break
            if self._max_iterations_reached():
                break

            node = state.frontier.pop()
            await self._expand_node(node, state, detect_overlap=False)

        return self._build_result(TerminationReason.N1_COVERAGE)

    async def _run_multi_seed(self) -> ExpansionResult:
        while self._has_non_empty_frontier():
            self._next_iteration()

            if self.config.termination.should_terminate(self.frontiers, self.overlap_events, self.iteration):
                break
            if self._max_iterations_reached():
                break

            active_index = self._select_lowest_priority_frontier()
            if active_index is None:
                break

            state = self.frontiers[active_index]
            node = state.frontier.pop()
            await self._expand_node(node, state, detect_overlap=True)

        # Re-evaluated rather than captured in the loop; relies on the termination predicate being pure
        if self.config.termination.should_terminate(self.frontiers, self.overlap_events, self.iteration):
            reason = TerminationReason.OVERLAP_SATISFIED
        elif not self._has_non_empty_frontier():
            reason = TerminationReason.EXHAUSTION
        else:
            reason = TerminationReason.MAX_ITERATIONS

        return self._build_result(reason)

    async def _expand_node(self, node: str, state: FrontierState, detect_overlap: bool) -> None:
        """Pop-side bookkeeping plus discovery of every unvisited neighbor of ``node``."""
        self.stats.nodes_expanded += 1
        self._record_degree(self.expander.get_degree(node))

        neighbors = await self.expander.get_neighbors(node)

        for neighbor in neighbors:
            target_id = neighbor.target_id
            if target_id in state.visited:
                continue

            self.stats.edges_traversed += 1
            self.expander.add_edge(node, target_id, neighbor.relationship_type)
            self.sampled_edges.add(edge_key(node, target_id))

            state.visited.add(target_id)
            state.parents[target_id] = ParentLink(parent=node, edge=neighbor.relationship_type)
            if state.node_distances is not None:
                state.node_distances[target_id] = state.node_distances[node] + 1
            self.node_to_frontier_index.setdefault(target_id, state.index)

            state.frontier.push(target_id, self.expander.calculate_priority(target_id))

            if detect_overlap:
                overlapping = self.config.overlap_detection.detect_overlap(
                    target_id, state, self.frontiers, self.node_to_frontier_index
                )
                for other_index in overlapping:
                    self._record_overlap(state, self.frontiers[other_index], target_id)

    def _record_overlap(self, active: FrontierState, other: FrontierState, meeting_node: str) -> None:
        self.overlap_events.append(OverlapEvent(
            iteration=self.iteration,
            frontier_a=active.index,
            frontier_b=other.index,
            meeting_node=meeting_node,
        ))
        self.overlap_matrix.setdefault(_matrix_key(active.index, other.index), set()).add(meeting_node)
        logger.debug(
            f"Iteration {self.iteration}: frontier {active.index} met frontier {other.index} at {meeting_node!r}"
        )

        path = self._reconstruct_path(active, other, meeting_node)
        if path is None:
            return

        # NOTE: the signature ignores path content, so equal-length paths between the same pair collide
        signature = _path_signature(active.index, other.index, path)
        if signature in self.path_signatures:
            return
        self.path_signatures.add(signature)
        self.paths.append(PathRecord(from_seed=active.index, to_seed=other.index, nodes=path))

    def _reconstruct_path(self, active: FrontierState, other: FrontierState, meeting_node: str) -> Optional[List[str]]:
        """
        Join both frontiers' parent chains at the meeting node.

        Returns:
            Seed-to-seed node list, or None if either end does not land on its seed
        """
        from_active: List[str] = []
        current: Optional[str] = meeting_node
        while current is not None:
            from_active.append(current)
            link = active.parents.get(current)
            current = link.parent if link else None
        from_active.reverse()

        to_other: List[str] = []
        link = other.parents.get(meeting_node)
        while link is not None:
            to_other.append(link.parent)
            link = other.parents.get(link.parent)

        path = from_active + to_other
        if path[0] != self.seeds[active.index] or path[-1] != self.seeds[other.index]:
            return None
        return path

    def _build_result(self, reason: TerminationReason) -> ExpansionResult:
        sampled_nodes: Set[str] = set()
        visited_per_frontier: List[Set[str]] = []
        for state in self.frontiers:
            sampled_nodes.update(state.visited)
            visited_per_frontier.append(set(state.visited))

        raw_result = ExpansionResult(
            paths=self.paths,
            sampled_nodes=sampled_nodes,
            sampled_edges=self.sampled_edges,
            visited_per_frontier=visited_per_frontier,
            stats=self.stats,
            overlap_metadata=OverlapMetadata(
                termination_reason=reason,
                overlap_events=self.overlap_events,
                iterations=self.iteration,
                overlap_matrix=self.overlap_matrix,
            ),
        )

        refined = self.config.between_graph.extract_between_graph(raw_result)

        logger.info(
            f"EXPANSION SUMMARY for {len(self.seeds)} seed(s): "
            f"Reason: {reason.value}, "
            f"Iterations: {self.iteration}, "
            f"Nodes expanded: {self.stats.nodes_expanded}, "
            f"Sampled nodes: {len(sampled_nodes)} -> {len(refined.nodes)}, "
            f"Paths: {len(refined.paths)}, "
            f"Overlap events: {len(self.overlap_events)}"
        )

        return raw_result.model_copy(update={
            "paths": refined.paths,
            "sampled_nodes": refined.nodes,
            "sampled_edges": refined.edges,
        })

    def _next_iteration(self) -> None:
        self.iteration += 1
        self.stats.iterations += 1

    def _max_iterations_reached(self) -> bool:
        limit = self.config.max_iterations
        return limit is not None and self.iteration >= limit

    def _has_non_empty_frontier(self) -> bool:
        return any(state.has_pending for state in self.frontiers)

    def _select_lowest_priority_frontier(self) -> Optional[int]:
        """Index of the frontier whose front node has the lowest priority; ties go to the lowest index."""
        best_index: Optional[int] = None
        best_priority = float("inf")
        for state in self.frontiers:
            priority = state.frontier.peek_priority()
            if priority is not None and (best_index is None or priority < best_priority):
                best_priority = priority
                best_index = state.index
        return best_index

    def _record_degree(self, degree: int) -> None:
        bucket = degree_bucket(degree)
        self.stats.degree_distribution[bucket] = self.stats.degree_distribution.get(bucket, 0) + 1


def _matrix_key(a: int, b: int) -> str:
    return f"{a}-{b}" if a < b else f"{b}-{a}"


def _path_signature(from_seed: int, to_seed: int, nodes: List[str]) -> str:
    low, high = (from_seed, to_seed) if from_seed < to_seed else (to_seed, from_seed)
    return f"{low}-{high}-{len(nodes)}"

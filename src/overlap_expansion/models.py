"""
Result models for overlap-based expansion.
"""

from enum import Enum
from typing import Dict, List, Set

from pydantic import BaseModel, Field


class TerminationReason(str, Enum):
    """Why an expansion run stopped."""
    OVERLAP_SATISFIED = "overlap-satisfied"
    EXHAUSTION = "exhaustion"
    MAX_ITERATIONS = "max-iterations"
    N1_COVERAGE = "n1-coverage"


class Neighbor(BaseModel):
    """One outgoing adjacency entry as reported by a graph expander."""
    target_id: str = Field(..., description="Node the edge points to")
    relationship_type: str = Field("edge", description="Label of the traversed edge")


class OverlapEvent(BaseModel):
    """A detected meeting between two frontiers."""
    iteration: int = Field(..., ge=0, description="Loop iteration in which the overlap was seen")
    frontier_a: int = Field(..., ge=0, description="Index of the frontier that was expanding")
    frontier_b: int = Field(..., ge=0, description="Index of the frontier it overlapped with")
    meeting_node: str = Field(..., description="Node whose discovery triggered the overlap")


class PathRecord(BaseModel):
    """A seed-to-seed path reconstructed from two frontiers' parent chains."""
    from_seed: int = Field(..., ge=0, description="Index of the seed the path starts at")
    to_seed: int = Field(..., ge=0, description="Index of the seed the path ends at")
    nodes: List[str] = Field(..., min_length=1, description="Ordered node ids, seed to seed")


class ExpansionStats(BaseModel):
    """Counters accumulated while expanding."""
    nodes_expanded: int = 0
    edges_traversed: int = 0
    iterations: int = 0
    degree_distribution: Dict[str, int] = Field(
        default_factory=dict,
        description="Histogram of expanded-node degrees keyed by bucket label",
    )


class OverlapMetadata(BaseModel):
    """Provenance of a run: why it stopped and where frontiers met."""
    termination_reason: TerminationReason
    overlap_events: List[OverlapEvent] = Field(default_factory=list)
    iterations: int = 0
    overlap_matrix: Dict[str, Set[str]] = Field(
        default_factory=dict,
        description='Sorted frontier pair key ("0-1") to the set of meeting nodes',
    )


class ExpansionResult(BaseModel):
    """Full output of an expansion run."""
    paths: List[PathRecord] = Field(default_factory=list)
    sampled_nodes: Set[str] = Field(default_factory=set)
    sampled_edges: Set[str] = Field(default_factory=set, description='Edge keys of the form "source->target"')
    visited_per_frontier: List[Set[str]] = Field(default_factory=list)
    stats: ExpansionStats = Field(default_factory=ExpansionStats)
    overlap_metadata: OverlapMetadata


class BetweenGraphOutput(BaseModel):
    """Refined node, edge and path sets produced by a between-graph strategy."""
    nodes: Set[str] = Field(default_factory=set)
    edges: Set[str] = Field(default_factory=set)
    paths: List[PathRecord] = Field(default_factory=list)


EDGE_SEPARATOR = "->"


def edge_key(source: str, target: str) -> str:
    return f"{source}{EDGE_SEPARATOR}{target}"


def split_edge_key(key: str) -> tuple:
    """Inverse of edge_key; only unambiguous for node ids without EDGE_SEPARATOR."""
    source, _, target = key.partition(EDGE_SEPARATOR)
    return source, target

"""
Strategy axes for overlap-based expansion.

- Overlap detection: when do two frontiers count as meeting
- Termination: when have the frontiers met enough
- N=1 handling: when does a lone frontier stop
- Between-graph: which part of the sample is returned
"""

from .overlap_detection import (
    OverlapDetectionStrategy,
    PhysicalMeetingStrategy,
    SphereIntersectionStrategy,
    ThresholdSharingStrategy,
)
from .termination import (
    CommonConvergenceStrategy,
    FullPairwiseStrategy,
    TerminationStrategy,
    TransitiveConnectivityStrategy,
)
from .n1_handling import CoverageThresholdStrategy, N1HandlingStrategy
from .between_graph import (
    BetweenGraphStrategy,
    MinimalPathsStrategy,
    SaliencePreservingStrategy,
    TruncatedComponentStrategy,
    sampled_degree_scores,
)

__all__ = [
    "OverlapDetectionStrategy",
    "PhysicalMeetingStrategy",
    "ThresholdSharingStrategy",
    "SphereIntersectionStrategy",
    "TerminationStrategy",
    "FullPairwiseStrategy",
    "TransitiveConnectivityStrategy",
    "CommonConvergenceStrategy",
    "N1HandlingStrategy",
    "CoverageThresholdStrategy",
    "BetweenGraphStrategy",
    "MinimalPathsStrategy",
    "TruncatedComponentStrategy",
    "SaliencePreservingStrategy",
    "sampled_degree_scores",
]

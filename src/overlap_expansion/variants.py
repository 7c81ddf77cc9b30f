"""
Registry of the named overlap-based expansion variants.

Each variant combines one overlap detection, one termination and one
between-graph strategy (3 x 3 x 3 = 27); N=1 handling is always coverage
based. Ids follow ``overlap-{detection}-{termination}-{between_graph}-v1.0.0``,
e.g. ``overlap-physical-fullpair-minimal-v1.0.0``.
"""

from dataclasses import dataclass
from itertools import product
from typing import Dict, List, Optional, Sequence

from overlap_expansion.config import ExpansionSettings
from overlap_expansion.exceptions import UnknownVariantError
from overlap_expansion.expander import GraphExpander
from overlap_expansion.expansion import ExpansionConfig, OverlapBasedExpansion
from overlap_expansion.strategies import (
    BetweenGraphStrategy,
    CommonConvergenceStrategy,
    CoverageThresholdStrategy,
    FullPairwiseStrategy,
    MinimalPathsStrategy,
    OverlapDetectionStrategy,
    PhysicalMeetingStrategy,
    SaliencePreservingStrategy,
    SphereIntersectionStrategy,
    TerminationStrategy,
    ThresholdSharingStrategy,
    TransitiveConnectivityStrategy,
    TruncatedComponentStrategy,
)

VERSION = "1.0.0"

DETECTION_NAMES = {
    "physical": "Physical Meeting",
    "threshold": "Threshold Sharing",
    "sphere": "Sphere Intersection",
}
TERMINATION_NAMES = {
    "fullpair": "Full Pairwise",
    "transitive": "Transitive Connectivity",
    "converge": "Common Convergence",
}
BETWEEN_GRAPH_NAMES = {
    "minimal": "Minimal Paths",
    "truncated": "Truncated Component",
    "salience": "Salience Preserving",
}

DEFAULT_VARIANT_ID = f"overlap-physical-converge-minimal-v{VERSION}"


@dataclass(frozen=True)
class VariantSpec:
    """One strategy combination."""
    detection: str
    termination: str
    between_graph: str

    @property
    def id(self) -> str:
        return f"overlap-{self.detection}-{self.termination}-{self.between_graph}-v{VERSION}"

    @property
    def name(self) -> str:
        return (
            f"Overlap: {DETECTION_NAMES[self.detection]} + "
            f"{TERMINATION_NAMES[self.termination]} + "
            f"{BETWEEN_GRAPH_NAMES[self.between_graph]}"
        )

    @property
    def tags(self) -> List[str]:
        return ["overlap-based", self.detection, self.termination, self.between_graph]

    @property
    def description(self) -> str:
        return (
            f"Overlap-based expansion with {self.detection} overlap detection, "
            f"{self.termination} termination, and {self.between_graph} between-graph extraction"
        )


VARIANTS: Dict[str, VariantSpec] = {
    spec.id: spec
    for spec in (
        VariantSpec(detection, termination, between_graph)
        for detection, termination, between_graph in product(
            DETECTION_NAMES, TERMINATION_NAMES, BETWEEN_GRAPH_NAMES
        )
    )
}


def get_variant(variant_id: str) -> VariantSpec:
    try:
        return VARIANTS[variant_id]
    except KeyError:
        raise UnknownVariantError(f"Unknown variant '{variant_id}'. Run 'overlap-expansion variants' to list them.") from None


def create_detection_strategy(key: str, settings: ExpansionSettings) -> OverlapDetectionStrategy:
    if key == "physical":
        return PhysicalMeetingStrategy()
    if key == "threshold":
        return ThresholdSharingStrategy(threshold=settings.threshold)
    if key == "sphere":
        return SphereIntersectionStrategy(max_distance=settings.sphere_max_distance)
    raise UnknownVariantError(f"Unknown overlap detection strategy '{key}'")


def create_termination_strategy(key: str) -> TerminationStrategy:
    if key == "fullpair":
        return FullPairwiseStrategy()
    if key == "transitive":
        return TransitiveConnectivityStrategy()
    if key == "converge":
        return CommonConvergenceStrategy()
    raise UnknownVariantError(f"Unknown termination strategy '{key}'")


def create_between_graph_strategy(key: str, settings: ExpansionSettings) -> BetweenGraphStrategy:
    if key == "minimal":
        return MinimalPathsStrategy()
    if key == "truncated":
        return TruncatedComponentStrategy(
            max_radius=settings.truncated_max_radius,
            max_nodes=settings.truncated_max_nodes,
        )
    if key == "salience":
        return SaliencePreservingStrategy(top_k=settings.salience_top_k)
    raise UnknownVariantError(f"Unknown between-graph strategy '{key}'")


def build_config(variant: VariantSpec, settings: Optional[ExpansionSettings] = None, **overrides) -> ExpansionConfig:
    """
    Build a fresh strategy configuration for a variant.

    Args:
        variant: Strategy combination
        settings: Strategy parameters; defaults to ExpansionSettings()
        **overrides: ExpansionConfig fields to set directly (e.g. max_iterations, total_nodes)
    """
    settings = settings or ExpansionSettings()
    values = {
        "overlap_detection": create_detection_strategy(variant.detection, settings),
        "termination": create_termination_strategy(variant.termination),
        "n1_handling": CoverageThresholdStrategy(target_fraction=settings.coverage_fraction),
        "between_graph": create_between_graph_strategy(variant.between_graph, settings),
        "max_iterations": settings.max_iterations,
        "total_nodes": settings.total_nodes,
    }
    values.update(overrides)
    return ExpansionConfig(**values)


def create_expansion(
    variant_id: str,
    expander: GraphExpander,
    seeds: Sequence[str],
    settings: Optional[ExpansionSettings] = None,
    **overrides,
) -> OverlapBasedExpansion:
    """Look up a variant by id and return a ready-to-run expansion."""
    variant = get_variant(variant_id)
    return OverlapBasedExpansion(expander, seeds, build_config(variant, settings, **overrides))

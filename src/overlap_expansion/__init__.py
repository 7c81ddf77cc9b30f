"""
Overlap-based multi-seed expansion.

Samples the bounded "between-graph" connecting N seed nodes by running one
degree-prioritised frontier per seed and stopping once the frontiers overlap.
"""

from .expander import GraphExpander, InMemoryGraphExpander
from .expansion import ExpansionConfig, OverlapBasedExpansion
from .models import ExpansionResult, OverlapEvent, PathRecord, TerminationReason
from .variants import VARIANTS, create_expansion

__all__ = [
    "GraphExpander",
    "InMemoryGraphExpander",
    "ExpansionConfig",
    "OverlapBasedExpansion",
    "ExpansionResult",
    "OverlapEvent",
    "PathRecord",
    "TerminationReason",
    "VARIANTS",
    "create_expansion",
]

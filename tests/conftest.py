"""
Pytest configuration and shared fixtures for expansion tests.

Every fixture builds a fresh expander so tests stay hermetic.
"""

import logging

import pytest

from overlap_expansion.expander import InMemoryGraphExpander
from overlap_expansion.expansion import ExpansionConfig
from overlap_expansion.models import BetweenGraphOutput
from overlap_expansion.strategies import (
    BetweenGraphStrategy,
    CommonConvergenceStrategy,
    CoverageThresholdStrategy,
    MinimalPathsStrategy,
    PhysicalMeetingStrategy,
)

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


class PassThroughBetweenGraph(BetweenGraphStrategy):
    """Returns the raw sample untouched so raw-result properties can be asserted."""

    def extract_between_graph(self, raw_result):
        return BetweenGraphOutput(
            nodes=set(raw_result.sampled_nodes),
            edges=set(raw_result.sampled_edges),
            paths=list(raw_result.paths),
        )


def build_config(**overrides) -> ExpansionConfig:
    """ExpansionConfig with physical meeting, common convergence and minimal paths unless overridden."""
    values = {
        "overlap_detection": PhysicalMeetingStrategy(),
        "termination": CommonConvergenceStrategy(),
        "n1_handling": CoverageThresholdStrategy(),
        "between_graph": MinimalPathsStrategy(),
    }
    values.update(overrides)
    return ExpansionConfig(**values)


@pytest.fixture
def make_config():
    """Factory fixture for ExpansionConfig; keyword arguments override the defaults."""
    return build_config


@pytest.fixture
def pass_through() -> PassThroughBetweenGraph:
    return PassThroughBetweenGraph()


@pytest.fixture
def path_graph() -> InMemoryGraphExpander:
    """Undirected path A - B - C - D - E."""
    return InMemoryGraphExpander.from_edge_list([
        ("A", "B"), ("B", "C"), ("C", "D"), ("D", "E"),
    ])


@pytest.fixture
def disconnected_graph() -> InMemoryGraphExpander:
    """Two components, A - B - C and X - Y, with no edge between them."""
    return InMemoryGraphExpander.from_edge_list([
        ("A", "B"), ("B", "C"), ("X", "Y"),
    ])


@pytest.fixture
def star_graph() -> InMemoryGraphExpander:
    """Hub H with leaves L1..L4 (5 nodes)."""
    return InMemoryGraphExpander.from_edge_list([
        ("H", "L1"), ("H", "L2"), ("H", "L3"), ("H", "L4"),
    ])


@pytest.fixture
def six_cycle() -> InMemoryGraphExpander:
    """Cycle S0 - a - S1 - b - S2 - c - S0; every node has degree 2."""
    return InMemoryGraphExpander.from_edge_list([
        ("S0", "a"), ("a", "S1"), ("S1", "b"), ("b", "S2"), ("S2", "c"), ("c", "S0"),
    ])


@pytest.fixture
def diamond_graph() -> InMemoryGraphExpander:
    """Two equal-length routes between S and T: S - L - T and S - R - T."""
    return InMemoryGraphExpander.from_edge_list([
        ("S", "L"), ("S", "R"), ("L", "T"), ("R", "T"),
    ])

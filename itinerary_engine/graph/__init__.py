"""Graph utilities for segment timing dependencies.

This subpackage builds the in-memory dependency graph of an itinerary
and runs the traversals the cascade adjuster needs on top of it.
"""

from .dependency_graph import (
    DependencyGraph,
    build_dependency_graph,
    explicit_dependencies,
    find_cycle,
    reachable_from,
)

__all__ = [
    "DependencyGraph",
    "build_dependency_graph",
    "explicit_dependencies",
    "find_cycle",
    "reachable_from",
]

"""Segment dependency graph construction.

This module defines the DependencyGraph type and builds it from a
segment list. An edge ``a -> b`` means "when a's end time shifts, b's
start time shifts by the same amount".

Edges come from two sources:

- explicit declarations (``segment.depends_on`` and caller-supplied
  Dependency records);
- chronological adjacency, in AUTO mode only, between consecutive
  segments that take part in no explicit declaration. A constrained
  segment between two free ones breaks the chain.

The graph is rebuilt on every call; nothing is cached.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..domain.models import CascadeMode, Dependency, Segment

DependencyGraph = Dict[str, List[str]]

logger = logging.getLogger(__name__)


def _add_edge(graph: DependencyGraph, source: str, target: str) -> None:
    targets = graph.setdefault(source, [])
    if target not in targets:
        targets.append(target)


def explicit_dependencies(
    segments: Sequence[Segment],
    extra: Iterable[Dependency] = (),
) -> List[Dependency]:
    """Collect declared dependencies, dropping references to unknown IDs."""
    known = {s.id for s in segments}
    declared = [
        Dependency(depended_on_id=dep_id, dependent_id=s.id)
        for s in segments
        for dep_id in s.depends_on
    ]
    declared.extend(extra)

    valid: List[Dependency] = []
    for dep in declared:
        if dep.depended_on_id not in known or dep.dependent_id not in known:
            logger.warning(
                "Ignoring dependency on unknown segment",
                extra={
                    "depended_on": dep.depended_on_id,
                    "dependent": dep.dependent_id,
                },
            )
            continue
        valid.append(dep)
    return valid


def build_dependency_graph(
    segments: Sequence[Segment],
    dependencies: Iterable[Dependency] = (),
    mode: CascadeMode = CascadeMode.AUTO,
) -> DependencyGraph:
    """Build the dependency graph for an itinerary.

    Parameters
    ----------
    segments:
        Current segments of the itinerary, in any order.
    dependencies:
        Extra explicit dependencies supplied by the caller.
    mode:
        AUTO adds chronological edges between unconstrained neighbours;
        DEPENDENCIES_ONLY uses explicit edges alone.

    Returns
    -------
    DependencyGraph
        Every segment ID as a key, mapped to its direct dependents.
    """
    graph: DependencyGraph = {s.id: [] for s in segments}

    constrained: Set[str] = set()
    for dep in explicit_dependencies(segments, dependencies):
        _add_edge(graph, dep.depended_on_id, dep.dependent_id)
        constrained.add(dep.depended_on_id)
        constrained.add(dep.dependent_id)

    if mode == CascadeMode.AUTO:
        ordered = sorted(segments, key=lambda s: s.start)
        for earlier, later in zip(ordered, ordered[1:]):
            if earlier.id in constrained or later.id in constrained:
                continue
            _add_edge(graph, earlier.id, later.id)

    return graph


def find_cycle(graph: DependencyGraph) -> Optional[List[str]]:
    """Return one cycle in the graph, or None if it is acyclic.

    Depth-first search tracking the current recursion stack; an edge
    back into the stack closes a cycle. The returned path repeats its
    first node at the end, e.g. ``["A", "B", "C", "A"]``.
    """
    visited: Set[str] = set()

    for root in graph:
        if root in visited:
            continue

        stack: List[str] = [root]
        on_stack: Set[str] = {root}
        iterators = {root: iter(graph.get(root, []))}
        visited.add(root)

        while stack:
            node = stack[-1]
            child = next(iterators[node], None)

            if child is None:
                stack.pop()
                on_stack.discard(node)
                continue

            if child in on_stack:
                return stack[stack.index(child):] + [child]

            if child not in visited:
                visited.add(child)
                stack.append(child)
                on_stack.add(child)
                iterators[child] = iter(graph.get(child, []))

    return None


def reachable_from(graph: DependencyGraph, start: str) -> List[str]:
    """All nodes reachable from ``start`` (inclusive), in BFS order."""
    if start not in graph:
        return []

    order: List[str] = [start]
    seen: Set[str] = {start}
    i = 0
    while i < len(order):
        for child in graph.get(order[i], []):
            if child not in seen:
                seen.add(child)
                order.append(child)
        i += 1
    return order

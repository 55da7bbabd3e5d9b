"""
Dependency graph: adjacency construction, cycle-tolerant topological order,
dependency depth, and critical path.

Graph shape
-----------
``dict[str, list[str]]`` mapping every recommendation id (isolated ones
included) to the ids it depends on. Lists are de-duplicated and keep
insertion order so traversal is deterministic across processes (string
``set`` iteration order is not).

Cycles
------
A cycle is not an error. ``topological_sort`` skips any edge that points at a
node still in progress, so every id is emitted exactly once and the back
edge is dropped silently (logged at DEBUG). ``find_critical_path`` refuses to
revisit ids already on the current path.

All traversal state (markers, stacks) is local to each call; functions are
safe to call concurrently.
"""

from __future__ import annotations

import logging

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.models.roadmap import RecommendationDependency

logger = logging.getLogger(__name__)

DependencyGraph = dict[str, list[str]]

_IN_PROGRESS = 1
_DONE = 2


def build_dependency_graph(
    recommendations: list[Recommendation],
    dependencies: list[RecommendationDependency],
) -> DependencyGraph:
    """Map every recommendation id to the ids it depends on.

    Edges naming ids outside ``recommendations`` and self edges are dropped.
    Dependency entries for unknown recommendation ids are ignored.
    """
    graph: DependencyGraph = {rec.id: [] for rec in recommendations}

    for dep in dependencies:
        edges = graph.get(dep.recommendation_id)
        if edges is None:
            continue
        for target in dep.depends_on:
            if target in graph and target != dep.recommendation_id and target not in edges:
                edges.append(target)

    return graph


def topological_sort(graph: DependencyGraph) -> list[str]:
    """Linearize ``graph`` so dependencies precede their dependents.

    Iterative depth-first search with a three-state marker per node
    (unvisited / in progress / done). An edge into an in-progress node
    closes a cycle and is skipped; traversal continues.

    Returns:
        Every id in ``graph`` exactly once. Runs in O(V + E).
    """
    state: dict[str, int] = {}
    order: list[str] = []

    for root in graph:
        if root in state:
            continue
        state[root] = _IN_PROGRESS
        stack = [(root, iter(graph[root]))]

        while stack:
            node, children = stack[-1]
            for child in children:
                if child not in graph:
                    continue
                mark = state.get(child)
                if mark is None:
                    state[child] = _IN_PROGRESS
                    stack.append((child, iter(graph[child])))
                    break
                if mark == _IN_PROGRESS:
                    logger.debug("Skipping cyclic edge %s -> %s", node, child)
            else:
                stack.pop()
                state[node] = _DONE
                order.append(node)

    return order


def calculate_depths(sorted_ids: list[str], graph: DependencyGraph) -> dict[str, int]:
    """Length of the longest dependency chain ending at each id.

    ``depth = 0`` without dependencies, otherwise ``1 + max(depth(dep))``.
    Ids are processed in topological order so dependencies resolve first;
    a dependency not yet resolved (only possible across a dropped cycle
    edge) counts as depth 0.
    """
    depths: dict[str, int] = {}
    for node in sorted_ids:
        deps = graph.get(node, [])
        if not deps:
            depths[node] = 0
        else:
            depths[node] = 1 + max(depths.get(dep, 0) for dep in deps)
    return depths


def find_critical_path(
    recommendations: list[Recommendation],
    graph: DependencyGraph,
) -> list[str]:
    """Longest chain of depends-on edges, as recommendation titles.

    Depth-first search from every recommendation, in input order, following
    dependency edges and never revisiting an id already on the current path.
    A path is a candidate when it cannot be extended further. The longest
    candidate by node count wins; on a tie the first one found is kept.

    Returns:
        Titles from the dependent recommendation down to its deepest
        dependency. Empty for empty input.
    """
    titles = {rec.id: rec.title for rec in recommendations}
    longest: list[str] = []

    for rec in recommendations:
        stack: list[list[str]] = [[rec.id]]
        while stack:
            path = stack.pop()
            on_path = set(path)
            nexts = [dep for dep in graph.get(path[-1], []) if dep not in on_path]
            if not nexts:
                if len(path) > len(longest):
                    longest = path
                continue
            # Reversed so the first dependency is explored first.
            for dep in reversed(nexts):
                stack.append(path + [dep])

    return [titles.get(node_id, node_id) for node_id in longest]

from __future__ import annotations

import heapq
from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence

from core.models import TaskDependency

Adjacency = Dict[str, List[str]]

_EXHAUSTED = object()


def build_successor_map(deps: Iterable[TaskDependency]) -> Adjacency:
    """prerequisite id -> ids of the tasks waiting on it, in edge order."""
    graph: Adjacency = {}
    for dep in deps:
        graph.setdefault(dep.depends_on_task_id, []).append(dep.dependent_task_id)
    return graph


def _walk_cycles(
    graph: Adjacency,
    root: str,
    visited: set[str],
    first_only: bool,
) -> list[list[str]]:
    """
    Depth-first walk from ``root`` with an explicit stack.

    A successor that is still on the current path closes a cycle; the cycle
    is reported as the path slice starting at that successor.
    """
    if root in visited:
        return []

    cycles: list[list[str]] = []
    path: list[str] = [root]
    on_path: set[str] = {root}
    visited.add(root)
    frames = [iter(graph.get(root, ()))]

    while frames:
        nxt = next(frames[-1], _EXHAUSTED)
        if nxt is _EXHAUSTED:
            frames.pop()
            on_path.discard(path.pop())
            continue
        if nxt in on_path:
            cycles.append(path[path.index(nxt):])
            if first_only:
                return cycles
            continue
        if nxt in visited:
            continue
        visited.add(nxt)
        on_path.add(nxt)
        path.append(nxt)
        frames.append(iter(graph.get(nxt, ())))

    return cycles


def find_cycles(graph: Adjacency, roots: Sequence[str]) -> list[list[str]]:
    """
    Every distinct cycle met while walking from ``roots`` and then from any
    node of ``graph`` not yet reached. Each node is expanded at most once.
    """
    visited: set[str] = set()
    seen: set[tuple[str, ...]] = set()
    cycles: list[list[str]] = []

    root_set = set(roots)
    remaining = [node for node in graph if node not in root_set]
    for root in [*roots, *remaining]:
        for cycle in _walk_cycles(graph, root, visited, first_only=False):
            key = tuple(cycle)
            if key in seen:
                continue
            seen.add(key)
            cycles.append(cycle)
    return cycles


def has_cycle_from(graph: Adjacency, root: str) -> bool:
    return bool(_walk_cycles(graph, root, set(), first_only=True))


def find_path(graph: Adjacency, start: str, target: str) -> Optional[list[str]]:
    queue = deque([(start, [start])])
    visited: set[str] = set()
    while queue:
        node, path = queue.popleft()
        if node == target:
            return path
        if node in visited:
            continue
        visited.add(node)
        for nxt in graph.get(node, []):
            if nxt not in visited:
                queue.append((nxt, [*path, nxt]))
    return None


def topological_order(
    node_ids: Sequence[str],
    predecessors: Dict[str, List[str]],
    successors: Dict[str, List[str]],
) -> list[str]:
    """
    Kahn's algorithm, deterministic by input position.

    Returns fewer ids than ``node_ids`` when the graph contains a cycle.
    """
    position = {node_id: index for index, node_id in enumerate(node_ids)}
    indegree = {node_id: len(predecessors.get(node_id, [])) for node_id in node_ids}

    heap: list[tuple[int, str]] = [
        (position[node_id], node_id) for node_id, degree in indegree.items() if degree == 0
    ]
    heapq.heapify(heap)

    order: list[str] = []
    while heap:
        _pos, node_id = heapq.heappop(heap)
        order.append(node_id)
        for succ_id in successors.get(node_id, []):
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, (position[succ_id], succ_id))
    return order


__all__ = [
    "Adjacency",
    "build_successor_map",
    "find_cycles",
    "has_cycle_from",
    "find_path",
    "topological_order",
]

from __future__ import annotations

from typing import Dict, List

from core.services.scheduling.models import BackwardPassPolicy, CriticalPathNode


def run_forward_pass(
    nodes: Dict[str, CriticalPathNode],
    topo_order: List[str],
) -> tuple[Dict[str, int], int]:
    """
    EF(t) = duration(t) + max(EF(p) for p in predecessors(t)), max(empty) = 0.

    Edges chain as finish-to-start with no lag. Returns the EF map and the
    project duration (largest EF).
    """
    ef: Dict[str, int] = {}
    for task_id in topo_order:
        node = nodes[task_id]
        start_offset = max((ef[pred_id] for pred_id in node.predecessors), default=0)
        ef[task_id] = start_offset + node.duration

    return ef, max(ef.values(), default=0)


def _backward_minimum(
    nodes: Dict[str, CriticalPathNode],
    topo_order: List[str],
    ef: Dict[str, int],
) -> Dict[str, int]:
    lf: Dict[str, int] = {}
    for task_id in reversed(topo_order):
        node = nodes[task_id]
        if not node.successors:
            lf[task_id] = ef[task_id]
            continue
        lf[task_id] = min(lf[succ_id] - nodes[succ_id].duration for succ_id in node.successors)
    return lf


def _backward_first_visit(
    nodes: Dict[str, CriticalPathNode],
    ef: Dict[str, int],
) -> Dict[str, int]:
    """
    Depth-first from every sink (in task order); the first latest-finish a
    node receives is kept and later candidates are ignored.
    """
    lf: Dict[str, int] = {}
    sinks = [task_id for task_id, node in nodes.items() if not node.successors]

    for sink_id in sinks:
        stack: list[tuple[str, int]] = [(sink_id, ef[sink_id])]
        while stack:
            task_id, candidate = stack.pop()
            if task_id in lf:
                continue
            lf[task_id] = candidate
            node = nodes[task_id]
            pred_lf = candidate - node.duration
            for pred_id in reversed(node.predecessors):
                stack.append((pred_id, pred_lf))
    return lf


def run_backward_pass(
    nodes: Dict[str, CriticalPathNode],
    topo_order: List[str],
    ef: Dict[str, int],
    policy: BackwardPassPolicy = BackwardPassPolicy.MINIMUM,
) -> Dict[str, int]:
    """
    Latest finish per node, seeded at sinks with LF(sink) = EF(sink).

    A node's candidate from successor ``s`` is ``LF(s) - duration(s)``.
    """
    if policy == BackwardPassPolicy.FIRST_VISIT:
        return _backward_first_visit(nodes, ef)
    return _backward_minimum(nodes, topo_order, ef)


__all__ = ["run_forward_pass", "run_backward_pass"]

# scalargrad/core/engine.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Set

import numpy as np

from .arena import Arena
from .node import OpKind, ScalarData

if TYPE_CHECKING:
    from .graph import ScalarGraph
    from .scalar import Scalar

logger = logging.getLogger(__name__)


def topological_order(graph: "ScalarGraph", root: int) -> List[int]:
    """
    Indices reachable from `root`, each listed after every node it depends on.

    Depth-first, operands in recorded order, each node emitted once when its
    visit completes. Iterative so long chains do not hit the recursion limit.
    Every node's operation is read in its own shared critical section.
    """
    order: List[int] = []
    visited: Set[int] = {root}
    stack = [(root, iter(graph.op(root).operands))]
    while stack:
        index, pending = stack[-1]
        for operand in pending:
            if operand not in visited:
                visited.add(operand)
                stack.append((operand, iter(graph.op(operand).operands)))
                break
        else:
            stack.pop()
            order.append(index)
    return order


def _apply_local_rule(arena: Arena[ScalarData], index: int) -> None:
    """
    Push the gradient of node `index` into its operands (chain rule, one step).
    Contributions are added; an operand reached along several paths sums them.
    Float64 edge cases (0 ** -0.5, overflow) yield inf/nan silently: a warning
    escalated to an error here would poison the graph.
    """
    node = arena.get_mut(index)
    g = node.grad
    op = node.op

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if op.kind is OpKind.ADD:
            a, b = op.operands
            arena.get_mut(a).grad += g
            arena.get_mut(b).grad += g
        elif op.kind is OpKind.MUL:
            a, b = op.operands
            arena.get_mut(a).grad += float(arena.get_mut(b).data * g)
            arena.get_mut(b).grad += float(arena.get_mut(a).data * g)
        elif op.kind is OpKind.POW:
            (a,) = op.operands
            k = op.exponent
            arena.get_mut(a).grad += float((k * arena.get_mut(a).data ** (k - 1.0)) * g)
        elif op.kind is OpKind.RELU:
            (a,) = op.operands
            arena.get_mut(a).grad += g if node.data > 0.0 else 0.0
        # OpKind.NONE: leaves have nothing to propagate to


def backward(root: "Scalar") -> None:
    """
    Run one reverse pass from `root`.

    - root.grad is set (not added) to 1.0
    - nodes are visited in reverse topological order, root first
    - each node's local rule runs once, in its own exclusive section
    Nodes not reachable from `root` are left untouched. Gradients of reachable
    nodes accumulate across repeated calls; see zero_grad().
    """
    graph = root.graph
    order = topological_order(graph, root.index)
    graph.set_grad(root.index, 1.0)
    for index in reversed(order):
        with graph.write() as arena:
            _apply_local_rule(arena, index)
    logger.debug("Backward pass from node %d visited %d nodes", root.index, len(order))


def zero_grad(graph: "ScalarGraph") -> None:
    """Set the gradient of every node in `graph` to zero."""
    graph.zero_grad()

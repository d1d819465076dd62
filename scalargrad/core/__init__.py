# scalargrad/core/__init__.py

"""
Core public API for scalargrad.

Exports:
    ScalarGraph    : Owner of one append-only arena of scalar nodes.
    Scalar         : Handle (graph + index) to one differentiable scalar.
    use_graph      : Context manager yielding a fresh graph, closed on exit.
    run_with_graph : Closure form of use_graph.
    backward       : Run a single reverse pass from a root scalar.
    zero_grad      : Reset all gradients in a graph to zero.
    grad, grads,
    grads_list     : Functional helpers returning plain floats.
    value          : Extract the primal value from a Scalar.
"""

from .scalar import Scalar
from .graph import ScalarGraph, use_graph, run_with_graph
from .engine import backward, topological_order, zero_grad
from .node import Op, OpKind, ScalarData
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Scalar",
    "ScalarGraph", "use_graph", "run_with_graph",
    "backward", "topological_order", "zero_grad",
    "Op", "OpKind", "ScalarData",
    "grad", "grads", "grads_list", "value",
]

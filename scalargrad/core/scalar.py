# scalargrad/core/scalar.py
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .node import Op

if TYPE_CHECKING:
    from .graph import ScalarGraph


class Scalar:
    """
    Handle to one differentiable scalar living in a ScalarGraph.

    A Scalar owns nothing: it is the owning graph plus an index into that
    graph's arena. Copies alias the same node. Every arithmetic operation
    mints a new node in the graph instead of mutating this one.

    Attributes
    ----------
    graph : ScalarGraph
        The graph that owns the node.
    index : int
        Position of the node in the graph's arena.
    """

    __slots__ = ("_graph", "_index")

    __array_ufunc__ = None  # numpy operands defer to the reflected operators below

    def __init__(self, graph: "ScalarGraph", index: int):
        self._graph = graph
        self._index = index

    @property
    def graph(self) -> "ScalarGraph":
        return self._graph

    @property
    def index(self) -> int:
        return self._index

    @property
    def data(self) -> np.float64:
        """Forward value; fixed at creation."""
        return self._graph.value(self._index)

    @property
    def grad(self) -> float:
        return self._graph.grad(self._index)

    @grad.setter
    def grad(self, value: float) -> None:
        self._graph.set_grad(self._index, value)

    def set_grad(self, value: float) -> None:
        self._graph.set_grad(self._index, value)

    @property
    def op(self) -> Op:
        return self._graph.op(self._index)

    def __repr__(self):
        node = self._graph.record(self._index)
        return f"Scalar(#{self._index}, data={float(node.data)!r}, grad={float(node.grad)!r})"

    def __eq__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        return self._graph is other._graph and self._index == other._index

    def __hash__(self):
        return hash((id(self._graph), self._index))

    def pow(self, exponent) -> "Scalar":
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def relu(self) -> "Scalar":
        from ..ops.arithmetic import relu
        return relu(self)

    def backward(self) -> None:
        """Seed this node's gradient with 1.0 and propagate it to everything it depends on."""
        from .engine import backward
        backward(self)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

# scalargrad/ops/arithmetic.py
import numbers

import numpy as np

from ..core.errors import GraphMismatchError
from ..core.node import Op, OpKind
from ..core.scalar import Scalar

_FORWARD = {
    OpKind.ADD: lambda a, b: a + b,
    OpKind.MUL: lambda a, b: a * b,
}


def _as_scalar(graph, x) -> Scalar:
    """Ensure x is a Scalar of `graph`; otherwise mint it as a constant leaf."""
    if isinstance(x, Scalar):
        if x.graph is not graph:
            raise GraphMismatchError()
        return x
    return graph.scalar(x)


def _binary(kind: OpKind, x, y) -> Scalar:
    """
    Shared path for every two-operand primitive.

    At least one of x, y is a Scalar. A plain number on either side is first
    minted as a leaf (left operand before right), then the node
    `kind(x, y)` is recorded with its eagerly computed value.
    """
    if isinstance(x, Scalar):
        graph = x.graph
    elif isinstance(y, Scalar):
        graph = y.graph
    else:
        raise TypeError(f"{kind.value} needs at least one Scalar operand")
    x = _as_scalar(graph, x)
    y = _as_scalar(graph, y)
    value = _FORWARD[kind](x.data, y.data)
    return graph.scalar_with_operation(value, Op(kind, (x.index, y.index)))


def add(x, y) -> Scalar:
    return _binary(OpKind.ADD, x, y)


def mul(x, y) -> Scalar:
    return _binary(OpKind.MUL, x, y)


def neg(x):
    """-x, recorded as (-1.0) * x. A plain number is simply negated."""
    if not isinstance(x, Scalar):
        return -x
    return mul(-1.0, x)


def sub(x, y) -> Scalar:
    return add(x, neg(y))


def pow(x: Scalar, exponent) -> Scalar:
    """
    x ** exponent for a constant real exponent.

    Local partial: exponent * x^(exponent-1). Evaluated in float64, so
    0 ** -1 is inf and a negative base with a fractional exponent is nan.
    """
    if not isinstance(exponent, numbers.Real):
        raise TypeError(
            f"Only real-number exponents are supported, but got {type(exponent)}"
        )
    exponent = float(exponent)
    return x.graph.scalar_with_operation(x.data ** exponent, Op.pow(x.index, exponent))


def div(x, y) -> Scalar:
    """x / y, recorded as x * y^(-1)."""
    if isinstance(y, Scalar):
        return mul(x, pow(y, -1.0))
    return mul(x, np.float64(y) ** -1.0)


def relu(x: Scalar) -> Scalar:
    value = x.data
    return x.graph.scalar_with_operation(value if value > 0.0 else 0.0, Op.relu(x.index))

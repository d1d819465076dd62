# scalargrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper builds its expression in a fresh
# graph that is discarded on return, so only plain floats come back.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .graph import ScalarGraph, use_graph
from .scalar import Scalar


def value(x: Any) -> Any:
    """Return the numeric value of a Scalar; pass through plain numbers unchanged."""
    return float(x.data) if isinstance(x, Scalar) else x


def _run_backward(y: Any, what: str) -> None:
    if not isinstance(y, Scalar):
        raise TypeError(f"{what} expects f to return a Scalar, but got {type(y)}")
    y.backward()


def _leaves(graph: ScalarGraph, values: Iterable[float]) -> List[Scalar]:
    return [graph.scalar(v) for v in values]


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Scalar], Scalar], x0: float) -> float:
    """
    Derivative of a scalar function y = f(x) at x0.
    Runs one backward pass within a fresh, isolated graph.
    """
    with use_graph() as g:
        x = g.scalar(x0)
        _run_backward(f(x), "grad(f, x0)")
        return float(x.grad)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Scalar]], Scalar],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE backward pass to obtain all dy/dvar simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Scalar} and returning a Scalar
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_graph() as g:
        names = list(inputs.keys())
        xs = dict(zip(names, _leaves(g, inputs.values())))
        _run_backward(f(xs), "grads(f, inputs)")
        return {k: float(xs[k].grad) for k in names}


def grads_list(f: Callable[[List[Scalar]], Scalar],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_graph() as g:
        xs = _leaves(g, x0_list)
        _run_backward(f(xs), "grads_list(f, x0_list)")
        return [float(x.grad) for x in xs]

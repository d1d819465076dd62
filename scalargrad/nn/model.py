# scalargrad/nn/model.py
"""
Perceptron, layer and multi-layer perceptron built from Scalar handles.

Models only mint leaves (their parameters) and combine scalars with the
public operators; all gradient bookkeeping stays in the graph. Evaluation
returns a ModelOutput whose kind every caller checks explicitly.

Usage:
    >>> with use_graph() as g:
    ...     net = g.mlp(3, [4, 4, 1])
    ...     y = net([g.scalar(v) for v in (1.0, -2.0, 0.5)]).as_vector()[0]
    ...     y.backward()
    ...     [p.grad for p in net.parameters()]
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import InitConfig
from ..core.errors import ModelOutputError
from ..core.graph import ScalarGraph
from ..core.scalar import Scalar

logger = logging.getLogger(__name__)


class OutputKind(Enum):
    NONE = "none"
    SCALAR = "scalar"
    VECTOR = "vector"


@dataclass(frozen=True)
class ModelOutput:
    """
    Result of evaluating a Model: nothing, one scalar, or a vector of scalars.

    Attributes
    ----------
    kind : OutputKind
        Which of the three shapes this output holds.
    values : Tuple[Scalar, ...]
        Empty for NONE, one element for SCALAR, any length for VECTOR.
    """
    kind: OutputKind
    values: Tuple[Scalar, ...] = ()

    @classmethod
    def none(cls) -> "ModelOutput":
        return cls(OutputKind.NONE)

    @classmethod
    def of_scalar(cls, s: Scalar) -> "ModelOutput":
        return cls(OutputKind.SCALAR, (s,))

    @classmethod
    def of_vector(cls, xs: Sequence[Scalar]) -> "ModelOutput":
        return cls(OutputKind.VECTOR, tuple(xs))

    def as_scalar(self) -> Scalar:
        if self.kind is not OutputKind.SCALAR:
            raise ModelOutputError(OutputKind.SCALAR.value, self.kind.value)
        return self.values[0]

    def as_vector(self) -> List[Scalar]:
        if self.kind is not OutputKind.VECTOR:
            raise ModelOutputError(OutputKind.VECTOR.value, self.kind.value)
        return list(self.values)


class Model(ABC):
    """Anything made of Scalar parameters that maps input scalars to a ModelOutput."""

    @abstractmethod
    def __call__(self, x: Sequence) -> ModelOutput:
        ...

    @abstractmethod
    def parameters(self) -> List[Scalar]:
        ...

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.grad = 0.0


def _check_width(name: str, width: int) -> None:
    if width < 1:
        raise ValueError(f"{name} must be >= 1, got {width}")


class Neuron(Model):
    """
    A single perceptron: nin weights and one bias, act = sum(w_i * x_i) + b.

    The weights are minted before the bias, and parameters() lists them in
    that order: [w_0, ..., w_{nin-1}, b]. The bias is the last entry, not the first.

    Attributes:
        graph (ScalarGraph): Graph owning the parameters
        w (List[Scalar]): Weights, one per input
        b (Scalar): Bias
        relu (bool): Apply ReLU to the activation
    """

    def __init__(self, graph: ScalarGraph, nin: int, relu: bool = True,
                 init: Optional[InitConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        _check_width("nin", nin)
        init = init or InitConfig()
        rng = rng if rng is not None else init.make_rng()
        self.graph = graph
        self.w = [graph.scalar(init.sample(rng)) for _ in range(nin)]
        self.b = graph.scalar(init.sample(rng))
        self.relu = relu

    @property
    def nin(self) -> int:
        return len(self.w)

    def __call__(self, x: Sequence) -> ModelOutput:
        if len(x) != self.nin:
            raise ValueError(f"Neuron expects {self.nin} inputs, got {len(x)}")
        act = reduce(lambda a, b: a + b, (wi * xi for wi, xi in zip(self.w, x))) + self.b
        return ModelOutput.of_scalar(act.relu() if self.relu else act)

    def parameters(self) -> List[Scalar]:
        return self.w + [self.b]

    def __repr__(self):
        return f"{'ReLU' if self.relu else 'Linear'}Neuron({self.nin})"


class Layer(Model):
    """nout neurons applied to the same inputs."""

    def __init__(self, graph: ScalarGraph, nin: int, nout: int, relu: bool = True,
                 init: Optional[InitConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        _check_width("nout", nout)
        init = init or InitConfig()
        rng = rng if rng is not None else init.make_rng()
        self.neurons = [Neuron(graph, nin, relu, init, rng) for _ in range(nout)]

    def __call__(self, x: Sequence) -> ModelOutput:
        outs = []
        for n in self.neurons:
            out = n(x)
            if out.kind is OutputKind.SCALAR:
                outs.append(out.as_scalar())
            else:
                raise ModelOutputError(OutputKind.SCALAR.value, out.kind.value)
        return ModelOutput.of_vector(outs)

    def parameters(self) -> List[Scalar]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Model):
    """
    Fully connected layers of sizes [nin] + nouts.

    Hidden layers apply ReLU when `relu` is set; the last layer never does.
    """

    def __init__(self, graph: ScalarGraph, nin: int, nouts: Sequence[int], relu: bool = True,
                 init: Optional[InitConfig] = None):
        if not nouts:
            raise ValueError("nouts must name at least one layer")
        init = init or InitConfig()
        rng = init.make_rng()
        sz = [nin] + list(nouts)
        last = len(nouts) - 1
        self.layers = [
            Layer(graph, sz[i], sz[i + 1], relu and i != last, init, rng)
            for i in range(len(nouts))
        ]
        logger.debug("Built MLP %s with %d parameters", sz, len(self.parameters()))

    def __call__(self, x: Sequence) -> ModelOutput:
        out = ModelOutput.none()
        for layer in self.layers:
            if out.kind is OutputKind.NONE:
                out = layer(x)
            elif out.kind is OutputKind.SCALAR:
                out = layer([out.as_scalar()])
            elif out.kind is OutputKind.VECTOR:
                out = layer(out.as_vector())
            else:
                raise ModelOutputError("none|scalar|vector", str(out.kind))
        return out

    def parameters(self) -> List[Scalar]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"


# Bind model factories to ScalarGraph
ScalarGraph.neuron = lambda self, nin, relu=True, init=None: Neuron(self, nin, relu, init)
ScalarGraph.layer = lambda self, nin, nout, relu=True, init=None: Layer(self, nin, nout, relu, init)
ScalarGraph.mlp = lambda self, nin, nouts, relu=True, init=None: MLP(self, nin, nouts, relu, init)

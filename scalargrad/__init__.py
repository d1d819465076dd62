# scalargrad/__init__.py
# Reverse-mode automatic differentiation over scalars, with a small MLP layer

from .core.scalar import Scalar
from .core.graph import ScalarGraph, use_graph, run_with_graph
from .core.engine import backward, topological_order, zero_grad
from .core.errors import (
    ScalarGradError,
    NodeIndexError,
    GraphPoisonedError,
    GraphClosedError,
    GraphMismatchError,
    ModelOutputError,
)
from .core.seeds import grad, grads, grads_list, value
from .config import InitConfig

# Ensure operator module and model factories are registered
from . import ops
from . import nn
from .nn import Model, ModelOutput, OutputKind, Neuron, Layer, MLP

__version__ = "0.1.0"

__all__ = [
    # Core
    'Scalar',
    'ScalarGraph',
    'use_graph',
    'run_with_graph',
    # Engine
    'backward',
    'topological_order',
    'zero_grad',
    # Functional helpers
    'grad',
    'grads',
    'grads_list',
    'value',
    # Errors
    'ScalarGradError',
    'NodeIndexError',
    'GraphPoisonedError',
    'GraphClosedError',
    'GraphMismatchError',
    'ModelOutputError',
    # Models
    'InitConfig',
    'Model',
    'ModelOutput',
    'OutputKind',
    'Neuron',
    'Layer',
    'MLP',
]

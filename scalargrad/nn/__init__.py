# scalargrad/nn/__init__.py

# Importing the module also binds graph.neuron / graph.layer / graph.mlp
from .model import Model, ModelOutput, OutputKind, Neuron, Layer, MLP

__all__ = [
    "Model", "ModelOutput", "OutputKind",
    "Neuron", "Layer", "MLP",
]

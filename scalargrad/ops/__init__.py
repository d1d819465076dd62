# scalargrad/ops/__init__.py

# Convenience re-exports so users can do: from scalargrad.ops import mul, relu, ...
from .arithmetic import add, sub, mul, div, neg, pow, relu

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "relu",
]

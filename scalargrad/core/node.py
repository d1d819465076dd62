# scalargrad/core/node.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class OpKind(Enum):
    """The tier-1 operations. Every other operator is composed from these."""
    NONE = "none"
    ADD = "add"
    MUL = "mul"
    POW = "pow"
    RELU = "relu"


@dataclass(frozen=True)
class Op:
    """
    How a node was produced.

    Attributes
    ----------
    kind : OpKind
        Operation tag; NONE for leaves.
    operands : Tuple[int, ...]
        Arena indices of the inputs, in call order (zero to two of them).
    exponent : Optional[float]
        Constant exponent, only set for POW.
    """
    kind: OpKind = OpKind.NONE
    operands: Tuple[int, ...] = ()
    exponent: Optional[float] = None

    @classmethod
    def none(cls) -> "Op":
        return cls()

    @classmethod
    def add(cls, a: int, b: int) -> "Op":
        return cls(OpKind.ADD, (a, b))

    @classmethod
    def mul(cls, a: int, b: int) -> "Op":
        return cls(OpKind.MUL, (a, b))

    @classmethod
    def pow(cls, a: int, exponent: float) -> "Op":
        return cls(OpKind.POW, (a,), float(exponent))

    @classmethod
    def relu(cls, a: int) -> "Op":
        return cls(OpKind.RELU, (a,))

    @property
    def is_leaf(self) -> bool:
        return self.kind is OpKind.NONE


@dataclass
class ScalarData:
    """
    One record in the graph's arena.

    Attributes
    ----------
    data : np.float64
        Forward value, evaluated eagerly when the node is minted.
    grad : float
        Gradient accumulator; 0.0 until a backward pass reaches the node.
    op : Op
        The operation (and operand indices) that produced `data`.
    """
    data: np.float64
    grad: float = 0.0
    op: Op = Op()

# scalargrad/core/graph.py
from __future__ import annotations
import logging
import numbers
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, TypeVar

import numpy as np

from .arena import Arena
from .errors import GraphClosedError, NodeIndexError
from .node import Op, ScalarData
from .rwlock import ReadWriteLock
from .scalar import Scalar

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ScalarGraph:
    """
    Owner of every node of one computation.

    All scalars minted here live in a single append-only arena. Handles
    (Scalar) only hold this graph and an index into it. Every access goes
    through one reader/writer lock, taken for exactly one step at a time.

    Usage:
        with use_graph() as g:
            a = g.scalar(3.0)
            b = g.scalar(4.0)
            c = a + b
            c.backward()
            a.grad   # -> 1.0
    """

    def __init__(self):
        self._arena: Optional[Arena[ScalarData]] = Arena()
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self.read() as arena:
            return len(arena)

    def __repr__(self):
        if self.closed:
            return "ScalarGraph(closed)"
        if self.poisoned:
            return "ScalarGraph(poisoned)"
        return f"ScalarGraph(nodes={len(self)})"

    @property
    def closed(self) -> bool:
        return self._arena is None

    @property
    def poisoned(self) -> bool:
        return self._lock.poisoned

    # ------------------------------------------------------------------ #
    # Locked access to the arena
    # ------------------------------------------------------------------ #
    @contextmanager
    def read(self) -> Iterator[Arena[ScalarData]]:
        """Shared access to the arena for the duration of the block."""
        with self._lock.read():
            if self._arena is None:
                raise GraphClosedError()
            yield self._arena

    @contextmanager
    def write(self) -> Iterator[Arena[ScalarData]]:
        """Exclusive access to the arena. An exception escaping the block poisons the graph."""
        # raised outside the exclusive section: raising inside it would poison
        if self._arena is None:
            raise GraphClosedError()
        with self._lock.write():
            arena = self._arena
            if arena is not None:
                yield arena
        # close() won the race for the lock
        if arena is None:
            raise GraphClosedError()

    # ------------------------------------------------------------------ #
    # Minting
    # ------------------------------------------------------------------ #
    def scalar(self, value) -> Scalar:
        """Create a leaf scalar holding `value` with a zero gradient."""
        return self.scalar_with_operation(value, Op.none())

    def scalar_with_operation(self, value, op: Op) -> Scalar:
        """
        Create a derived scalar.

        `value` is the already-evaluated forward result of `op`; nothing is
        recomputed later. Operand indices in `op` must already exist.
        """
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"Scalar values must be real numbers, but got {type(value)}"
            )
        size = len(self)
        for operand in op.operands:
            if not 0 <= operand < size:
                raise NodeIndexError(operand, size)
        with self.write() as arena:
            index = arena.push(ScalarData(data=np.float64(value), grad=0.0, op=op))
        return Scalar(self, index)

    # ------------------------------------------------------------------ #
    # Per-node accessors (one critical section each)
    # ------------------------------------------------------------------ #
    def record(self, index: int) -> ScalarData:
        with self.read() as arena:
            return arena.get(index)

    def value(self, index: int) -> np.float64:
        with self.read() as arena:
            return arena.get_mut(index).data

    def grad(self, index: int) -> float:
        with self.read() as arena:
            return arena.get_mut(index).grad

    def op(self, index: int) -> Op:
        with self.read() as arena:
            return arena.get_mut(index).op

    def set_grad(self, index: int, grad: float) -> None:
        # validated under the shared lock so a bad index cannot poison the graph
        with self.read() as arena:
            arena.get_mut(index)
        with self.write() as arena:
            arena.get_mut(index).grad = float(grad)

    def snapshot(self) -> List[ScalarData]:
        """Copies of every record, taken under a single shared acquisition."""
        with self.read() as arena:
            return [arena.get(i) for i in range(len(arena))]

    def zero_grad(self) -> None:
        """Reset the gradient of every node in the graph to 0.0."""
        with self.write() as arena:
            for node in arena:
                node.grad = 0.0

    def close(self) -> None:
        """Drop all node storage. Handles into this graph become unusable."""
        if self._arena is None:
            return
        if self._lock.poisoned:
            self._arena = None
            logger.debug("Closed poisoned scalar graph")
            return
        with self._lock.write():
            size = len(self._arena)
            self._arena = None
        logger.debug("Closed scalar graph with %d nodes", size)


@contextmanager
def use_graph() -> Iterator[ScalarGraph]:
    """
    Context manager yielding a fresh graph that is closed on exit:
        with use_graph() as g:
            ... build computation ...
            y.backward()
    """
    graph = ScalarGraph()
    try:
        yield graph
    finally:
        graph.close()


def run_with_graph(fn: Callable[[ScalarGraph], R]) -> R:
    """Run `fn` against a fresh graph and return its result; the graph is closed afterwards."""
    with use_graph() as graph:
        return fn(graph)

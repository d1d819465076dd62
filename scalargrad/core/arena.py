# scalargrad/core/arena.py
from __future__ import annotations
import copy
from typing import Generic, Iterator, List, TypeVar

from .errors import NodeIndexError

T = TypeVar("T")


class Arena(Generic[T]):
    """
    Append-only indexed storage: records go in, stable integer indices come out.

    Indices are positions in an internal list and are never reused or
    invalidated, since nothing is ever removed.
    """

    def __init__(self):
        self.nodes: List[T] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[T]:
        return iter(self.nodes)

    def push(self, record: T) -> int:
        """Append `record` and return its index (one past the previous last index)."""
        self.nodes.append(record)
        return len(self.nodes) - 1

    def get(self, index: int) -> T:
        """Return a snapshot copy of the record at `index`."""
        return copy.copy(self.get_mut(index))

    def get_mut(self, index: int) -> T:
        """Return the live record at `index`; mutations are visible to every reader."""
        # negative indices would silently wrap on a list
        if not 0 <= index < len(self.nodes):
            raise NodeIndexError(index, len(self.nodes))
        return self.nodes[index]

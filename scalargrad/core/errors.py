# scalargrad/core/errors.py
"""
Fault taxonomy for the scalar graph.

None of these are "soft" errors a caller is expected to branch on: each one
means an invariant of the graph was broken (a bad index, a writer that failed
mid-update, a handle used after its graph was released, ...). They propagate
to the caller unchanged.
"""


class ScalarGradError(Exception):
    """Base class for every fault raised by scalargrad."""


class NodeIndexError(ScalarGradError, IndexError):
    """
    Raised when a node index falls outside the arena.

    Attributes
    ----------
    index : int
        The offending index.
    size : int
        Number of nodes in the arena at the time of the access.
    """

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"node index {index} out of range for arena of size {size}")
        self.index = index
        self.size = size


class GraphPoisonedError(ScalarGradError, RuntimeError):
    """Raised on any lock acquisition after a writer failed while holding the lock."""

    def __init__(self) -> None:
        super().__init__("graph lock is poisoned: a writer failed while holding it")


class GraphClosedError(ScalarGradError, RuntimeError):
    """Raised when a graph (or a handle into it) is used after close()."""

    def __init__(self) -> None:
        super().__init__("graph has been closed; its node storage is gone")


class GraphMismatchError(ScalarGradError, ValueError):
    """Raised when an operation combines handles that live in different graphs."""

    def __init__(self) -> None:
        super().__init__("cannot combine scalars that belong to different graphs")


class ModelOutputError(ScalarGradError, TypeError):
    """
    Raised when a ModelOutput is read as a kind it does not hold.

    Attributes
    ----------
    expected : str
        Kind requested by the caller.
    actual : str
        Kind actually carried by the output.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"expected model output of kind '{expected}', got '{actual}'")
        self.expected = expected
        self.actual = actual

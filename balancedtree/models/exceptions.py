"""
Custom exceptions for the balanced trees.
"""

from typing import Any


class InvalidValueError(ValueError):
    """
    Raised when None is inserted into a tree that rejects absent values.

    None cannot be ordered against stored values, so it is refused before
    any comparison is attempted.
    """

    def __init__(self, operation: str):
        """
        Initialize invalid value error.

        Args:
            operation: Name of the rejected operation.
        """
        self.operation = operation
        super().__init__(f"Cannot {operation} None: value must be comparable")


class ConcurrentModificationError(RuntimeError):
    """
    Raised when a tree is mutated while an iterator over it is active.

    This is a fail-fast error; the iterator cannot be resumed.
    """

    def __init__(self, expected: int, actual: int):
        """
        Initialize concurrent modification error.

        Args:
            expected: Modification count captured when iteration started.
            actual: Modification count observed on the current step.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Tree changed during iteration "
            f"({actual - expected} modification(s) since iteration began)"
        )


class TreeInvariantError(AssertionError):
    """
    Raised by validate() when a structural invariant does not hold.

    Indicates a programming defect in the tree, never a caller error.
    """

    def __init__(self, invariant: str, value: Any, detail: str = ""):
        """
        Initialize invariant error.

        Args:
            invariant: Short name of the broken property.
            value: Value stored in the offending node.
            detail: Optional human readable explanation.
        """
        self.invariant = invariant
        self.value = value
        message = f"{invariant} violated at node {value!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

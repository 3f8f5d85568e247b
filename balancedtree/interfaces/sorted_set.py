"""
SortedSet abstract base class for self-balancing ordered sets.
"""

from abc import abstractmethod
from typing import Any

from balancedtree.interfaces.ordered_iterable import OrderedIterable


class SortedSet(OrderedIterable):
    """
    Abstract base class for ordered sets of unique comparable values.

    Provides O(log N) operations for insert, remove, and contains.
    Inherits in-order iteration from OrderedIterable.

    Implementations:
    - AVLTree: Strict height balance, shallower trees for lookups
    - RedBlackTree: Looser balance, fewer rotations per update

    Implementations are not thread-safe. Callers that share a tree between
    threads or tasks must serialize mutations themselves.
    """

    @abstractmethod
    def insert(self, value: Any) -> bool:
        """
        Add a value to the set.

        Args:
            value: The value to insert.

        Returns:
            True if the value was added, False if it was already present.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def remove(self, value: Any) -> bool:
        """
        Remove a value from the set.

        Args:
            value: The value to remove.

        Returns:
            True if the value was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """
        Check if a value exists.

        Args:
            value: The value to check.

        Returns:
            True if the value exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored values.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def height(self) -> int:
        """
        Return the height of the root.

        Returns:
            0 for a single node, -1 for an empty set.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every value."""
        pass

    @abstractmethod
    def validate(self) -> None:
        """
        Verify the structural invariants of the tree.

        Raises:
            TreeInvariantError: If any invariant is broken.
        """
        pass

    def is_empty(self) -> bool:
        return self.size() == 0

    def to_list(self) -> list[Any]:
        """Return the stored values in ascending order."""
        return list(self)

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

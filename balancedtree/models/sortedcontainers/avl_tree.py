"""
AVL Tree implementation for sorted sets.

Keeps every node's balance factor within {-1, 0, 1}, giving the
shallowest trees of the two implementations.
"""

import logging
from collections.abc import AsyncIterator, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from balancedtree.interfaces.sorted_set import SortedSet
from balancedtree.models.exceptions import TreeInvariantError
from balancedtree.models.sortedcontainers.traversal import (
    AsyncInOrderIterator,
    InOrderIterator,
    format_tree,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class AVLNode:
    """Node in the AVL Tree."""

    value: Any
    left: "AVLNode | None" = None
    right: "AVLNode | None" = None
    height: int = 0
    balance_factor: int = 0


def _height(node: AVLNode | None) -> int:
    return -1 if node is None else node.height


class AVLTree(SortedSet):
    """
    AVL Tree implementation of SortedSet.

    Properties maintained:
    1. Left subtree values < node value < right subtree values
    2. balance_factor = height(right) - height(left), always in {-1, 0, 1}
    3. height = 1 + max(height(left), height(right)), -1 for an empty subtree

    None is never stored: insert, remove and contains return False for it.
    Not thread-safe.
    """

    def __init__(self, values: Iterable[Any] | None = None) -> None:
        self._root: AVLNode | None = None
        self._size: int = 0
        self._modifications: int = 0

        if values is not None:
            for value in values:
                self.insert(value)

    @property
    def root(self) -> AVLNode | None:
        return self._root

    @property
    def modification_count(self) -> int:
        return self._modifications

    def insert(self, value: Any) -> bool:
        """Add a value. O(log N)"""
        if value is None or self.contains(value):
            return False

        self._root = self._insert(self._root, value)
        self._size += 1
        self._modifications += 1
        return True

    def remove(self, value: Any) -> bool:
        """Remove a value. O(log N)"""
        if value is None or not self.contains(value):
            return False

        self._root = self._remove(self._root, value)
        self._size -= 1
        self._modifications += 1
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False

        current = self._root
        while current is not None:
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return True
        return False

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        return _height(self._root)

    def clear(self) -> None:
        logger.debug("Clearing AVL tree with %d values", self._size)
        self._root = None
        self._size = 0
        self._modifications += 1

    def __iter__(self) -> Iterator[Any]:
        return InOrderIterator(self, None)

    def __aiter__(self) -> AsyncIterator[Any]:
        return AsyncInOrderIterator(self, None)

    def __str__(self) -> str:
        return format_tree(self._root, None)

    def __repr__(self) -> str:
        return f"AVLTree({self.to_list()!r})"

    def _insert(self, node: AVLNode | None, value: Any) -> AVLNode:
        """Insert below node and return the rebalanced subtree root."""
        if node is None:
            return AVLNode(value=value)

        if value < node.value:
            node.left = self._insert(node.left, value)
        else:
            node.right = self._insert(node.right, value)

        self._update(node)
        return self._balance(node)

    def _remove(self, node: AVLNode | None, value: Any) -> AVLNode | None:
        """Remove value below node and return the rebalanced subtree root."""
        if node is None:
            return None

        if value < node.value:
            node.left = self._remove(node.left, value)
        elif value > node.value:
            node.right = self._remove(node.right, value)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left

            # Two children: take over the successor's value, then drop it
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.value = successor.value
            node.right = self._remove(node.right, successor.value)

        self._update(node)
        return self._balance(node)

    def _update(self, node: AVLNode) -> None:
        """Recompute height and balance factor from the children."""
        left_height = _height(node.left)
        right_height = _height(node.right)
        node.height = 1 + max(left_height, right_height)
        node.balance_factor = right_height - left_height

    def _balance(self, node: AVLNode) -> AVLNode:
        """Apply at most one of the four rotation cases at node."""
        if node.balance_factor < -1:
            if node.left.balance_factor <= 0:
                logger.debug("AVL left-left case at %r", node.value)
                return self._rotate_right(node)

            logger.debug("AVL left-right case at %r", node.value)
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)

        if node.balance_factor > 1:
            if node.right.balance_factor >= 0:
                logger.debug("AVL right-right case at %r", node.value)
                return self._rotate_left(node)

            logger.debug("AVL right-left case at %r", node.value)
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)

        return node

    def _rotate_left(self, node: AVLNode) -> AVLNode:
        """Left rotation; returns the promoted right child."""
        right_child = node.right
        node.right = right_child.left
        right_child.left = node

        self._update(node)
        self._update(right_child)
        return right_child

    def _rotate_right(self, node: AVLNode) -> AVLNode:
        """Right rotation; returns the promoted left child."""
        left_child = node.left
        node.left = left_child.right
        left_child.right = node

        self._update(node)
        self._update(left_child)
        return left_child

    def validate(self) -> None:
        """
        Verify ordering, stored heights, balance factors and the node count.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        count = self._validate(self._root, None, None)
        if count != self._size:
            self._fail(
                "size",
                self._root.value if self._root else None,
                f"counted {count} nodes, size() reports {self._size}",
            )

    def _validate(self, node: AVLNode | None, low: Any, high: Any) -> int:
        """Check the subtree within the open interval (low, high); return its node count."""
        if node is None:
            return 0

        if (low is not None and not low < node.value) or (
            high is not None and not node.value < high
        ):
            self._fail("BST ordering", node.value, f"expected within ({low!r}, {high!r})")

        count = (
            self._validate(node.left, low, node.value)
            + self._validate(node.right, node.value, high)
            + 1
        )

        left_height = _height(node.left)
        right_height = _height(node.right)
        if node.height != 1 + max(left_height, right_height):
            self._fail("height", node.value, f"stored {node.height}")
        if node.balance_factor != right_height - left_height:
            self._fail("balance factor", node.value, f"stored {node.balance_factor}")
        if node.balance_factor not in (-1, 0, 1):
            self._fail("AVL balance", node.value, f"balance factor {node.balance_factor}")

        return count

    def _fail(self, invariant: str, value: Any, detail: str) -> None:
        error = TreeInvariantError(invariant, value, detail)
        logger.error(str(error))
        raise error

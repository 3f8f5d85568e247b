"""
Red-Black Tree implementation for sorted sets.

Optimized for write-heavy workloads: at most two rotations per insert and
three per remove, with O(log N) operations.
"""

import logging
from collections.abc import AsyncIterator, Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from balancedtree.interfaces.sorted_set import SortedSet
from balancedtree.models.exceptions import InvalidValueError, TreeInvariantError
from balancedtree.models.sortedcontainers.traversal import (
    AsyncInOrderIterator,
    InOrderIterator,
    format_tree,
)

logger = logging.getLogger(__name__)


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


@dataclass(frozen=True)
class _Sentinel:
    """Immutable BLACK leaf shared by every tree as the absent-node marker."""

    color: Color = Color.BLACK
    value: None = None

    def __repr__(self) -> str:
        return "NIL"


NIL = _Sentinel()


@dataclass(eq=False)
class RBNode:
    """Node in the Red-Black Tree."""

    value: Any
    color: Color = Color.RED
    left: "RBNode | _Sentinel" = NIL
    right: "RBNode | _Sentinel" = NIL
    parent: "RBNode | _Sentinel" = NIL


class RedBlackTree(SortedSet):
    """
    Red-Black Tree implementation of SortedSet.

    Properties maintained:
    1. Every node is either red or black, NIL is black
    2. Root is always black
    3. Red nodes cannot have red children
    4. Every path from a node to a descendant NIL has the same number of black nodes
    5. Left subtree values < node value < right subtree values

    Parent links are kept consistent on every rotation and transplant.
    Inserting None raises InvalidValueError. Not thread-safe.
    """

    NIL = NIL

    def __init__(self, values: Iterable[Any] | None = None) -> None:
        self._root: RBNode | _Sentinel = NIL
        self._size: int = 0
        self._modifications: int = 0

        if values is not None:
            for value in values:
                self.insert(value)

    @property
    def root(self) -> "RBNode | _Sentinel":
        return self._root

    @property
    def modification_count(self) -> int:
        return self._modifications

    def insert(self, value: Any) -> bool:
        """Add a value. O(log N)"""
        if value is None:
            raise InvalidValueError("insert")

        # Find insertion point
        parent: RBNode | _Sentinel = NIL
        current = self._root

        while current is not NIL:
            parent = current
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return False

        new_node = RBNode(value=value, parent=parent)
        if parent is NIL:
            self._root = new_node
        elif value < parent.value:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._modifications += 1

        if parent is NIL:
            new_node.color = Color.BLACK
        else:
            self._fix_insert(new_node)
        return True

    def remove(self, value: Any) -> bool:
        """Remove a value. O(log N)"""
        if value is None:
            return False

        node = self._find_node(value)
        if node is NIL:
            return False

        self._delete_node(node)
        self._size -= 1
        self._modifications += 1
        return True

    def contains(self, value: Any) -> bool:
        if value is None:
            return False
        return self._find_node(value) is not NIL

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        def subtree_height(node: RBNode | _Sentinel) -> int:
            if node is NIL:
                return -1
            return 1 + max(subtree_height(node.left), subtree_height(node.right))

        return subtree_height(self._root)

    def clear(self) -> None:
        logger.debug("Clearing Red-Black tree with %d values", self._size)
        self._root = NIL
        self._size = 0
        self._modifications += 1

    def __iter__(self) -> Iterator[Any]:
        return InOrderIterator(self, NIL)

    def __aiter__(self) -> AsyncIterator[Any]:
        return AsyncInOrderIterator(self, NIL)

    def __str__(self) -> str:
        return format_tree(
            self._root, NIL, lambda node: f"{node.value!r}{node.color.name[0]}"
        )

    def __repr__(self) -> str:
        return f"RedBlackTree({self.to_list()!r})"

    def _find_node(self, value: Any) -> "RBNode | _Sentinel":
        """Find node by value."""
        current = self._root
        while current is not NIL:
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return current
        return NIL

    def _fix_insert(self, node: RBNode) -> None:
        """Fix Red-Black Tree properties after insert."""
        while node.parent.color == Color.RED:
            parent = node.parent
            grandparent = parent.parent

            if parent is grandparent.left:
                uncle = grandparent.right

                if uncle.color == Color.RED:
                    # Case 1: Uncle is red
                    logger.debug("Insert fix-up: red uncle at %r", grandparent.value)
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    node = grandparent
                    continue

                if node is parent.right:
                    # Case 2: Node is an inner child, straighten the shape
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent

                # Case 3: Node is an outer child
                logger.debug("Insert fix-up: black uncle at %r", grandparent.value)
                parent.color = Color.BLACK
                grandparent.color = Color.RED
                self._rotate_right(grandparent)
            else:
                uncle = grandparent.left

                if uncle.color == Color.RED:
                    logger.debug("Insert fix-up: red uncle at %r", grandparent.value)
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    node = grandparent
                    continue

                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent

                logger.debug("Insert fix-up: black uncle at %r", grandparent.value)
                parent.color = Color.BLACK
                grandparent.color = Color.RED
                self._rotate_left(grandparent)

        self._root.color = Color.BLACK

    def _rotate_left(self, node: RBNode) -> None:
        """Left rotation."""
        right_child = node.right

        node.right = right_child.left
        if right_child.left is not NIL:
            right_child.left.parent = node

        right_child.parent = node.parent

        if node.parent is NIL:
            self._root = right_child
        elif node is node.parent.left:
            node.parent.left = right_child
        else:
            node.parent.right = right_child

        right_child.left = node
        node.parent = right_child

    def _rotate_right(self, node: RBNode) -> None:
        """Right rotation."""
        left_child = node.left

        node.left = left_child.right
        if left_child.right is not NIL:
            left_child.right.parent = node

        left_child.parent = node.parent

        if node.parent is NIL:
            self._root = left_child
        elif node is node.parent.right:
            node.parent.right = left_child
        else:
            node.parent.left = left_child

        left_child.right = node
        node.parent = left_child

    def _delete_node(self, node: RBNode) -> None:
        """Delete a node from the tree."""
        if node.left is not NIL and node.right is not NIL:
            # Node has two children - find successor
            successor = node.right
            while successor.left is not NIL:
                successor = successor.left

            # Copy successor's value to node
            node.value = successor.value
            node = successor

        # Node has at most one child
        child = node.left if node.left is not NIL else node.right
        parent = node.parent

        self._transplant(node, child)

        if node.color == Color.BLACK:
            self._fix_delete(child, parent)

        node.left = node.right = node.parent = NIL

    def _transplant(self, node: RBNode, child: "RBNode | _Sentinel") -> None:
        """Put child in node's position in the tree."""
        if node.parent is NIL:
            self._root = child
        elif node is node.parent.left:
            node.parent.left = child
        else:
            node.parent.right = child

        if child is not NIL:
            child.parent = node.parent

    def _fix_delete(
        self, node: "RBNode | _Sentinel", parent: "RBNode | _Sentinel"
    ) -> None:
        """
        Fix Red-Black Tree properties after removing a black node.

        node carries the missing black and may be NIL, so its parent is
        tracked alongside it rather than read from the sentinel.
        """
        while node is not self._root and node.color == Color.BLACK:
            if node is parent.left:
                sibling = parent.right

                if sibling.color == Color.RED:
                    # Case 1: Sibling is red
                    sibling.color = Color.BLACK
                    parent.color = Color.RED
                    self._rotate_left(parent)
                    sibling = parent.right

                if sibling.left.color == Color.BLACK and sibling.right.color == Color.BLACK:
                    # Case 2: Sibling's children are both black
                    sibling.color = Color.RED
                    node = parent
                    parent = node.parent
                    continue

                if sibling.right.color == Color.BLACK:
                    # Case 3: Near nephew red, far nephew black
                    sibling.left.color = Color.BLACK
                    sibling.color = Color.RED
                    self._rotate_right(sibling)
                    sibling = parent.right

                # Case 4: Far nephew red
                logger.debug("Delete fix-up: rotating at %r", parent.value)
                sibling.color = parent.color
                parent.color = Color.BLACK
                sibling.right.color = Color.BLACK
                self._rotate_left(parent)
                node = self._root
            else:
                sibling = parent.left

                if sibling.color == Color.RED:
                    sibling.color = Color.BLACK
                    parent.color = Color.RED
                    self._rotate_right(parent)
                    sibling = parent.left

                if sibling.left.color == Color.BLACK and sibling.right.color == Color.BLACK:
                    sibling.color = Color.RED
                    node = parent
                    parent = node.parent
                    continue

                if sibling.left.color == Color.BLACK:
                    sibling.right.color = Color.BLACK
                    sibling.color = Color.RED
                    self._rotate_left(sibling)
                    sibling = parent.left

                logger.debug("Delete fix-up: rotating at %r", parent.value)
                sibling.color = parent.color
                parent.color = Color.BLACK
                sibling.left.color = Color.BLACK
                self._rotate_right(parent)
                node = self._root

        if node is not NIL:
            node.color = Color.BLACK

    def validate(self) -> None:
        """
        Verify the red-black properties, ordering, parent links and size.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        if self._root is not NIL:
            if self._root.color != Color.BLACK:
                self._fail("black root", self._root.value, "root is red")
            if self._root.parent is not NIL:
                self._fail("parent link", self._root.value, "root has a parent")

        count = 0

        def visit(node: RBNode | _Sentinel, low: Any, high: Any) -> int:
            """Return the black-height of the subtree."""
            nonlocal count
            if node is NIL:
                return 1
            count += 1

            if (low is not None and not low < node.value) or (
                high is not None and not node.value < high
            ):
                self._fail("BST ordering", node.value, f"expected within ({low!r}, {high!r})")

            for child in (node.left, node.right):
                if child is NIL:
                    continue
                if child.parent is not node:
                    self._fail("parent link", child.value, f"parent is not {node.value!r}")
                if node.color == Color.RED and child.color == Color.RED:
                    self._fail("no red-red", node.value, f"red child {child.value!r}")

            left_black = visit(node.left, low, node.value)
            right_black = visit(node.right, node.value, high)
            if left_black != right_black:
                self._fail(
                    "black-height",
                    node.value,
                    f"left {left_black}, right {right_black}",
                )

            return left_black + (1 if node.color == Color.BLACK else 0)

        visit(self._root, None, None)
        if count != self._size:
            self._fail(
                "size",
                self._root.value,
                f"counted {count} nodes, size() reports {self._size}",
            )

    def _fail(self, invariant: str, value: Any, detail: str) -> None:
        error = TreeInvariantError(invariant, value, detail)
        logger.error(str(error))
        raise error

"""
In-order traversal and formatting shared by the tree implementations.
"""

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

from balancedtree.models.exceptions import ConcurrentModificationError


class _InOrderWalk:
    """
    Explicit-stack in-order walk over a binary tree.

    Nodes only need `left`, `right` and `value` attributes. `leaf` is the
    marker standing in for an absent child (None, or a sentinel node).
    """

    def __init__(self, tree: Any, leaf: Any) -> None:
        self._tree = tree
        self._leaf = leaf
        self._stack: list[Any] = []
        self._expected_modifications = tree.modification_count

        self._push_left_path(tree.root)

    def _step(self) -> Any:
        """Return the next value, or the leaf marker once exhausted."""
        actual = self._tree.modification_count
        if actual != self._expected_modifications:
            self._stack.clear()
            raise ConcurrentModificationError(self._expected_modifications, actual)

        if not self._stack:
            return self._leaf

        node = self._stack.pop()

        # Push right subtree's left path
        self._push_left_path(node.right)

        return node

    def _push_left_path(self, node: Any) -> None:
        while node is not self._leaf:
            self._stack.append(node)
            node = node.left


class InOrderIterator(_InOrderWalk, Iterator[Any]):
    """Iterator yielding tree values in ascending order."""

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        node = self._step()
        if node is self._leaf:
            raise StopIteration
        return node.value


class AsyncInOrderIterator(_InOrderWalk, AsyncIterator[Any]):
    """Async iterator yielding tree values in ascending order (no I/O)."""

    def __aiter__(self) -> "AsyncInOrderIterator":
        return self

    async def __anext__(self) -> Any:
        node = self._step()
        if node is self._leaf:
            raise StopAsyncIteration
        return node.value


def _value_label(node: Any) -> str:
    return repr(node.value)


def format_tree(
    root: Any, leaf: Any, label: Callable[[Any], str] | None = None
) -> str:
    """
    Render a tree as nested parentheses.

    A node with children prints as ``value(left,right)`` and an absent
    child prints as ``·``, so inserting 3, 2, 1 into an AVL tree renders as
    ``2(1,3)``. An empty tree renders as ``·``.
    """
    if label is None:
        label = _value_label
    parts: list[str] = []

    def visit(node: Any) -> None:
        if node is leaf:
            parts.append("·")
            return
        parts.append(label(node))
        if node.left is not leaf or node.right is not leaf:
            parts.append("(")
            visit(node.left)
            parts.append(",")
            visit(node.right)
            parts.append(")")

    visit(root)
    return "".join(parts)

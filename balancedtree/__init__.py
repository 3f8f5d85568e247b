"""
Self-balancing binary search trees.

This package provides two ordered sets of unique comparable values:
- AVLTree - balance-factor driven, height < 1.441 log2(N + 2)
- RedBlackTree - color driven, height <= 2 log2(N + 1)

Both support insert, remove and contains in O(log N), plus sync and async
in-order iteration.
"""

from balancedtree.models.sortedcontainers import AVLTree, RedBlackTree

__all__ = ["AVLTree", "RedBlackTree"]

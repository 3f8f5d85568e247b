"""
Data models for the balanced trees.
"""

from balancedtree.models.exceptions import (
    ConcurrentModificationError,
    InvalidValueError,
    TreeInvariantError,
)
from balancedtree.models.sortedcontainers import AVLTree, RedBlackTree

__all__ = [
    "AVLTree",
    "RedBlackTree",
    "ConcurrentModificationError",
    "InvalidValueError",
    "TreeInvariantError",
]

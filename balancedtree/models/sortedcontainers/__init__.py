"""
Sorted container implementations for the balanced trees.
"""

from balancedtree.models.sortedcontainers.avl_tree import AVLTree
from balancedtree.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["AVLTree", "RedBlackTree"]

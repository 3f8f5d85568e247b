"""
Abstract base classes and protocols for the balanced trees.
"""

from balancedtree.interfaces.ordered_iterable import OrderedIterable
from balancedtree.interfaces.sorted_set import SortedSet

__all__ = ["OrderedIterable", "SortedSet"]

"""
OrderedIterable protocol for data structures that iterate in sorted order.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from typing import Any


class OrderedIterable(ABC):
    """
    Protocol for data structures that support in-order iteration.

    Implementations must support:
    - Full iteration via __iter__
    - Async iteration via __aiter__

    Every call returns a fresh iterator positioned at the smallest element,
    so iteration is restartable.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Return an iterator over all elements in ascending order."""
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Any]:
        """Return an async iterator over all elements in ascending order."""
        pass

"""
Shared pytest fixtures for balanced tree tests.
"""

import random

import pytest

from balancedtree.models.sortedcontainers import AVLTree, RedBlackTree

MIN_RAND_NUM = -100_000
MAX_RAND_NUM = 100_000


@pytest.fixture
def avl_tree():
    """Provide a fresh AVLTree instance."""
    return AVLTree()


@pytest.fixture
def rb_tree():
    """Provide a fresh RedBlackTree instance."""
    return RedBlackTree()


@pytest.fixture(params=[AVLTree, RedBlackTree], ids=["avl", "red_black"])
def tree_cls(request):
    """Run the test once per tree implementation."""
    return request.param


@pytest.fixture
def tree(tree_cls):
    """Provide a fresh tree of each implementation."""
    return tree_cls()


@pytest.fixture
def rng():
    """Provide a seeded random generator so failures are reproducible."""
    return random.Random(20240611)


@pytest.fixture
def rand_value(rng):
    """Provide a function drawing values from a wide range."""
    return lambda: rng.randint(MIN_RAND_NUM, MAX_RAND_NUM)


@pytest.fixture
def shuffled_range(rng):
    """Provide a function returning 0..n-1 in random order."""

    def make(n: int) -> list[int]:
        values = list(range(n))
        rng.shuffle(values)
        return values

    return make

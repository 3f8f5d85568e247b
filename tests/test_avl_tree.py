"""
Tests for the AVLTree sorted container.
"""

import math

import pytest

from balancedtree.models.exceptions import TreeInvariantError
from balancedtree.models.sortedcontainers import AVLTree


def assert_shape_2_1_3(tree: AVLTree) -> None:
    root = tree.root
    assert root.value == 2
    assert root.left.value == 1
    assert root.right.value == 3

    assert root.left.left is None
    assert root.left.right is None
    assert root.right.left is None
    assert root.right.right is None


def balance_factors(node) -> list[int]:
    if node is None:
        return []
    return [node.balance_factor] + balance_factors(node.left) + balance_factors(node.right)


class TestNullHandling:
    """None is refused silently."""

    def test_null_insertion(self, avl_tree):
        """Test inserting None returns False."""
        assert avl_tree.insert(None) is False
        assert avl_tree.size() == 0

    def test_null_removal(self, avl_tree):
        """Test removing None returns False."""
        avl_tree.insert(1)
        assert avl_tree.remove(None) is False
        assert avl_tree.size() == 1

    def test_tree_contains_null(self, avl_tree):
        """Test contains(None) returns False."""
        avl_tree.insert(1)
        assert avl_tree.contains(None) is False
        assert None not in avl_tree


class TestRotationCases:
    """Each rebalancing case produces the same balanced three-node shape."""

    def test_left_left_case(self, avl_tree):
        """Test single right rotation."""
        for value in (3, 2, 1):
            avl_tree.insert(value)

        assert_shape_2_1_3(avl_tree)

    def test_left_right_case(self, avl_tree):
        """Test left rotation on the left child, then right rotation."""
        for value in (3, 1, 2):
            avl_tree.insert(value)

        assert_shape_2_1_3(avl_tree)

    def test_right_right_case(self, avl_tree):
        """Test single left rotation."""
        for value in (1, 2, 3):
            avl_tree.insert(value)

        assert_shape_2_1_3(avl_tree)

    def test_right_left_case(self, avl_tree):
        """Test right rotation on the right child, then left rotation."""
        for value in (1, 3, 2):
            avl_tree.insert(value)

        assert_shape_2_1_3(avl_tree)

    def test_rotation_updates_heights(self, avl_tree):
        """Test heights and balance factors after a rotation."""
        for value in (3, 2, 1):
            avl_tree.insert(value)

        assert avl_tree.root.height == 1
        assert avl_tree.root.balance_factor == 0
        assert avl_tree.root.left.height == 0
        assert avl_tree.root.right.height == 0

    def test_removal_rebalances(self, avl_tree):
        """Test removing from the short side triggers a rotation."""
        for value in (2, 1, 3, 4):
            avl_tree.insert(value)

        assert avl_tree.remove(1)

        assert avl_tree.root.value == 3
        assert avl_tree.root.left.value == 2
        assert avl_tree.root.right.value == 4
        avl_tree.validate()

    def test_removal_with_two_children_uses_successor(self, avl_tree):
        """Test a two-child node takes the minimum of its right subtree."""
        for value in (4, 2, 6, 1, 3, 5, 7):
            avl_tree.insert(value)

        assert avl_tree.remove(4)

        assert avl_tree.root.value == 5
        assert avl_tree.to_list() == [1, 2, 3, 5, 6, 7]
        avl_tree.validate()


class TestHeight:
    """Tests for height bookkeeping."""

    def test_empty_tree_height(self, avl_tree):
        """Test an empty tree has height -1."""
        assert avl_tree.height() == -1

    def test_single_node_height(self, avl_tree):
        """Test a leaf has height 0."""
        avl_tree.insert(10)
        assert avl_tree.height() == 0

    def test_remove_only_node(self, avl_tree):
        """Test removing the only node empties the tree."""
        avl_tree.insert(10)
        assert avl_tree.remove(10)

        assert avl_tree.root is None
        assert avl_tree.height() == -1
        assert avl_tree.is_empty()

    def test_tree_height_bound(self, avl_tree, rand_value):
        """Test height stays below 1.441 * log2(n + 2) - 0.329."""
        for _ in range(2500):
            avl_tree.insert(rand_value())
            n = avl_tree.size()

            upper_bound = 1.441 * math.log2(n + 2) - 0.329
            assert avl_tree.height() < upper_bound

    def test_sequential_inserts_stay_logarithmic(self, avl_tree):
        """Test ascending inserts do not degrade to a linked list."""
        for value in range(1023):
            avl_tree.insert(value)

        assert avl_tree.height() == 9


class TestBalanceFactors:
    """Tests for the balance invariant."""

    def test_randomized_balance_factor(self, avl_tree, rand_value):
        """Test all balance factors stay within {-1, 0, 1} on insert."""
        for _ in range(1000):
            avl_tree.insert(rand_value())
            assert set(balance_factors(avl_tree.root)) <= {-1, 0, 1}

    def test_randomized_balance_factor_on_remove(self, avl_tree, shuffled_range):
        """Test all balance factors stay within {-1, 0, 1} on remove."""
        for value in shuffled_range(500):
            avl_tree.insert(value)

        for value in shuffled_range(500):
            assert avl_tree.remove(value)
            assert set(balance_factors(avl_tree.root)) <= {-1, 0, 1}


class TestValidate:
    """Tests that validate() detects corrupted trees."""

    def test_valid_tree_passes(self, avl_tree):
        """Test validate() accepts a well formed tree."""
        for value in [10, 5, 15, 2, 7, 12, 20]:
            avl_tree.insert(value)

        avl_tree.validate()

    def test_detects_wrong_balance_factor(self, avl_tree):
        """Test a stale balance factor is reported."""
        for value in (1, 2, 3):
            avl_tree.insert(value)

        avl_tree.root.balance_factor = 1
        with pytest.raises(TreeInvariantError) as exc_info:
            avl_tree.validate()
        assert exc_info.value.invariant == "balance factor"

    def test_detects_unbalanced_subtree(self, avl_tree):
        """Test an unbalanced but consistently labelled subtree is reported."""
        avl_tree.insert(1)
        avl_tree.root.right = type(avl_tree.root)(value=2, height=1, balance_factor=1)
        avl_tree.root.right.right = type(avl_tree.root)(value=3)
        avl_tree.root.height = 2
        avl_tree.root.balance_factor = 2

        with pytest.raises(TreeInvariantError) as exc_info:
            avl_tree.validate()
        assert exc_info.value.invariant == "AVL balance"

    def test_detects_ordering_violation(self, avl_tree):
        """Test swapped values are reported."""
        for value in (1, 2, 3):
            avl_tree.insert(value)

        avl_tree.root.left.value = 5
        with pytest.raises(TreeInvariantError) as exc_info:
            avl_tree.validate()
        assert exc_info.value.invariant == "BST ordering"
        assert exc_info.value.value == 5


class TestFormatting:
    """Tests for string rendering."""

    def test_str(self, avl_tree):
        """Test the parenthesised shape."""
        for value in (3, 2, 1, 4):
            avl_tree.insert(value)

        assert str(avl_tree) == "2(1,3(·,4))"

    def test_str_empty(self, avl_tree):
        """Test an empty tree renders as a single leaf marker."""
        assert str(avl_tree) == "·"

    def test_repr(self):
        """Test repr lists values in order."""
        assert repr(AVLTree([3, 1, 2])) == "AVLTree([1, 2, 3])"

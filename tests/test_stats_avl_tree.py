"""Tests for AVL-tree statistics and the stats helpers"""
# pylint: skip-file

import math
import unittest

import numpy as np

from avl_trees.avl_tree_base import avl_stats_
from avl_trees.factory import AVLTree
from stats.stats_avl_tree import (
    apply_workload,
    assert_invariants,
    avl_height_bound,
    random_avl_tree_of_size,
    random_keys,
    random_workload,
)
from tests.utils import assert_tree_invariants, build_node


class TestAVLStats(unittest.TestCase):
    def test_empty_tree(self):
        stats = avl_stats_(AVLTree())
        self.assertEqual(stats.node_count, 0)
        self.assertEqual(stats.height, 0)
        self.assertIsNone(stats.least)
        self.assertIsNone(stats.greatest)
        self.assertTrue(stats.is_search_tree)
        self.assertTrue(stats.is_balanced)
        self.assertTrue(stats.heights_consistent)

    def test_valid_tree(self):
        tree = AVLTree([50, 30, 70, 20, 40, 60, 80])
        stats = avl_stats_(tree)
        self.assertEqual(stats.node_count, 7)
        self.assertEqual(stats.height, 3)
        self.assertEqual(stats.max_abs_balance, 0)
        self.assertEqual(stats.least, 20)
        self.assertEqual(stats.greatest, 80)
        self.assertTrue(stats.is_search_tree)
        self.assertTrue(stats.is_balanced)
        self.assertTrue(stats.heights_consistent)


class TestAVLStatsInvalidProperties(unittest.TestCase):
    def setUp(self):
        self.tree = AVLTree()

    def test_unbalanced_chain(self):
        self.tree.root = build_node(1, None, build_node(2, None, build_node(3)))
        stats = avl_stats_(self.tree)
        self.assertFalse(stats.is_balanced)
        self.assertEqual(stats.max_abs_balance, 2)
        self.assertTrue(stats.is_search_tree)
        self.assertTrue(stats.heights_consistent)

    def test_order_violation_in_left_subtree(self):
        self.tree.root = build_node(10, build_node(5, None, build_node(12)), build_node(15))
        stats = avl_stats_(self.tree)
        self.assertFalse(stats.is_search_tree)

    def test_duplicate_values_violate_strict_order(self):
        self.tree.root = build_node(10, build_node(10))
        stats = avl_stats_(self.tree)
        self.assertFalse(stats.is_search_tree)

    def test_stale_cached_height(self):
        self.tree.root = build_node(10, build_node(5), build_node(15))
        self.tree.root.left.height = 3
        stats = avl_stats_(self.tree)
        self.assertFalse(stats.heights_consistent)
        # actual height is recomputed, not read from the cache
        self.assertEqual(stats.height, 2)

    def test_assert_invariants_logs_errors(self):
        self.tree.root = build_node(1, None, build_node(2, None, build_node(3)))
        self.tree._size = 3
        with self.assertLogs(level="ERROR") as cm:
            ok = assert_invariants(self.tree, avl_stats_(self.tree))
        self.assertFalse(ok)
        self.assertTrue(any("is_balanced" in line for line in cm.output))


class TestStatsHelpers(unittest.TestCase):
    def test_avl_height_bound(self):
        self.assertAlmostEqual(avl_height_bound(0), 1.44)
        self.assertAlmostEqual(avl_height_bound(1022), 1.44 * 10)

    def test_random_keys_are_distinct(self):
        keys = random_keys(500, space=1000, rng=np.random.default_rng(1))
        self.assertEqual(len(keys), 500)
        self.assertEqual(len(set(keys)), 500)
        self.assertTrue(all(0 <= k < 1000 for k in keys))

    def test_random_keys_space_too_small(self):
        with self.assertRaises(ValueError):
            random_keys(10, space=10)

    def test_random_tree_of_size(self):
        for n in (0, 1, 10, 1000):
            tree = random_avl_tree_of_size(n, rng=np.random.default_rng(n))
            self.assertEqual(tree.size(), n)
            stats = assert_tree_invariants(self, tree)
            self.assertTrue(assert_invariants(tree, stats))
            self.assertLessEqual(tree.height(), 1.44 * math.log2(n + 2))

    def test_random_workload(self):
        rng = np.random.default_rng(3)
        ops = random_workload(1000, delete_ratio=0.5, rng=rng)
        self.assertEqual(len(ops), 1000)
        self.assertEqual({op for op, _ in ops}, {"insert", "delete"})
        self.assertTrue(all(0 <= key < 2000 for _, key in ops))

        tree = apply_workload(AVLTree(), ops)
        reference = set()
        for op, key in ops:
            if op == "insert":
                reference.add(key)
            else:
                reference.discard(key)
        self.assertEqual(tree.in_order(), sorted(reference))
        assert_tree_invariants(self, tree)


if __name__ == '__main__':
    unittest.main()

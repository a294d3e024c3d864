"""Utility functions for testing AVL-tree invariants."""

import math

from avl_trees.base import AVLNode
from avl_trees.balance import update_height
from avl_trees.avl_tree_base import (
    AVLTreeBase,
    Stats,
    TREE_FLAGS,
    avl_stats_,
)


def assert_tree_invariants_tc(tc, t: AVLTreeBase, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        t.size(), stats.node_count,
        f"Invariant failed: size()={t.size()} ≠ node_count={stats.node_count}"
    )
    tc.assertEqual(
        t.height(), stats.height,
        f"Invariant failed: height()={t.height()} ≠ actual height {stats.height}"
    )
    tc.assertLessEqual(
        stats.max_abs_balance, 1,
        f"Invariant failed: max |balance factor| = {stats.max_abs_balance}"
    )

    if not t.is_empty():
        tc.assertGreater(
            stats.height, 0,
            f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree"
        )
        tc.assertLessEqual(
            stats.height, 1.44 * math.log2(stats.node_count + 2),
            f"Invariant failed: height={stats.height} exceeds AVL bound"
        )
        tc.assertIsNotNone(stats.least, "Invariant failed: least is None for non-empty tree")
        tc.assertIsNotNone(stats.greatest, "Invariant failed: greatest is None for non-empty tree")

        # in-order sequence must be strictly ascending under the tree's comparator
        values = t.in_order()
        cmp = t.comparator
        for a, b in zip(values, values[1:]):
            tc.assertLess(cmp(a, b), 0, f"In-order sequence not strictly ascending at {a!r}, {b!r}")


def assert_tree_invariants(tc, t: AVLTreeBase) -> Stats:
    """Compute stats for `t`, assert all invariants and return the stats."""
    stats = avl_stats_(t)
    assert_tree_invariants_tc(tc, t, stats)
    return stats


def build_node(value, left=None, right=None):
    """Hand-build a node with a correct cached height (for structural tests)."""
    node = AVLNode(value)
    node.left = left
    node.right = right
    update_height(node)
    return node

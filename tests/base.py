"""Shared TestCase for AVL-tree tests"""
# pylint: skip-file

import unittest
import logging

from avl_trees.factory import AVLTree
from tests.utils import assert_tree_invariants

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TreeTestCase(unittest.TestCase):
    """Creates an empty tree and checks all invariants after each test."""

    def setUp(self):
        self.tree = AVLTree()

    def tearDown(self):
        if not getattr(self, 'tree', None):
            return

        stats = assert_tree_invariants(self, self.tree)

        # --- optional invariants ---
        expected_keys = getattr(self, 'expected_keys', None)
        if expected_keys is not None:
            self.assertEqual(
                self.tree.in_order(), sorted(set(expected_keys)),
                f"Keys {self.tree.in_order()} do not match expected {expected_keys}\n"
                f"Tree structure:\n{self.tree.print_structure()}"
            )

        expected_height = getattr(self, 'expected_height', None)
        if expected_height is not None:
            self.assertEqual(
                stats.height, expected_height,
                f"Height {stats.height} does not match expected {expected_height}"
            )

    def insert_all(self, values):
        for value in values:
            self.tree.insert(value)

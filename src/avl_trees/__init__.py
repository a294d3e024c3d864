"""
Self-balancing ordered set backed by an AVL tree.

Insert, delete and membership run in O(log n); in-order iteration yields
the elements in ascending comparator order.
"""

from avl_trees.base import (
    AVLNode,
    AbstractSetDataStructure,
    Comparator,
    EmptyTreeError,
    InvariantError,
    RotationError,
    natural_order,
)
from avl_trees.avl_tree_base import (
    AVLTreeBase,
    Stats,
    avl_stats_,
    collect_keys,
)
from avl_trees.factory import (
    AVLTree,
    make_avl_tree_class,
    create_avl_tree,
)

__all__ = [
    'AVLNode',
    'AbstractSetDataStructure',
    'Comparator',
    'EmptyTreeError',
    'InvariantError',
    'RotationError',
    'natural_order',
    'AVLTreeBase',
    'Stats',
    'avl_stats_',
    'collect_keys',
    'AVLTree',
    'make_avl_tree_class',
    'create_avl_tree',
]

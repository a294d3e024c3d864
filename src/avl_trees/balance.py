"""Height bookkeeping and rotations for AVL subtrees"""

from typing import Optional
import logging

from avl_trees.base import AVLNode, RotationError
from avl_trees.profiling import PROFILER

logger = logging.getLogger(__name__)


def height(node: Optional[AVLNode]) -> int:
    """Cached height of a subtree, 0 for an empty one."""
    if node is None:
        return 0
    return node.height


def update_height(node: AVLNode) -> None:
    node.height = 1 + max(height(node.left), height(node.right))


def balance_factor(node: Optional[AVLNode]) -> int:
    """Left subtree height minus right subtree height, 0 for an empty subtree."""
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def rotate_right(pivot: AVLNode) -> AVLNode:
    """
    Rotate the subtree rooted at `pivot` to the right.

          pivot            new_root
          /    \\           /     \\
     new_root   C   ->    A      pivot
      /    \\                     /    \\
     A      B                   B      C

    Parameters:
        pivot (AVLNode): Root of the subtree; must have a left child.

    Returns:
        AVLNode: The new root of the subtree.

    Raises:
        RotationError: If `pivot` has no left child.
    """
    new_root = pivot.left
    if new_root is None:
        raise RotationError(
            f"rotate_right(): pivot {pivot.value!r} has no left child"
        )
    pivot.left = new_root.right
    new_root.right = pivot

    # pivot is now below new_root, so its height has to settle first
    update_height(pivot)
    update_height(new_root)
    PROFILER.count_rotation()
    logger.debug("Rotated right at %r, new root %r", pivot.value, new_root.value)
    return new_root


def rotate_left(pivot: AVLNode) -> AVLNode:
    """
    Rotate the subtree rooted at `pivot` to the left. Mirror image of
    `rotate_right`.

    Raises:
        RotationError: If `pivot` has no right child.
    """
    new_root = pivot.right
    if new_root is None:
        raise RotationError(
            f"rotate_left(): pivot {pivot.value!r} has no right child"
        )
    pivot.right = new_root.left
    new_root.left = pivot

    update_height(pivot)
    update_height(new_root)
    PROFILER.count_rotation()
    logger.debug("Rotated left at %r, new root %r", pivot.value, new_root.value)
    return new_root


def rebalance(node: AVLNode) -> AVLNode:
    """
    Refresh the height of `node` and restore the AVL invariant at it.

    Expects both subtrees of `node` to be valid AVL trees whose heights
    differ by at most 2, which holds after a single insert or delete below it.
    The single/double rotation choice is taken from the heavy child's own
    balance factor, so the same step serves insertion and deletion.

    Returns:
        AVLNode: The root of the rebalanced subtree.
    """
    update_height(node)
    factor = balance_factor(node)

    # Left heavy
    if factor > 1:
        if balance_factor(node.left) < 0:  # Left-Right
            node.left = rotate_left(node.left)
        return rotate_right(node)

    # Right heavy
    if factor < -1:
        if balance_factor(node.right) > 0:  # Right-Left
            node.right = rotate_right(node.right)
        return rotate_left(node)

    return node

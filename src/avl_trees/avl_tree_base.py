"""AVL-tree base implementation"""

from __future__ import annotations
import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Type
from dataclasses import dataclass

from avl_trees.base import (
    AbstractSetDataStructure,
    AVLNode,
    Comparator,
    EmptyTreeError,
    InvariantError,
    natural_order,
)
from avl_trees.balance import (
    height as subtree_height,
    rebalance,
)
from avl_trees.profiling import (
    PROFILER,
    profiled,
)

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Default for AVLTreeBase(validate=...): run check_invariants() after every mutation
DEBUG = False


class AVLTreeBase(AbstractSetDataStructure):
    """
    An ordered set of distinct elements kept as an AVL tree.

    Elements are ordered by a three-way comparator `cmp(a, b) -> int`. The
    class-level COMPARATOR (natural ordering unless set by the factory) is used
    unless a comparator is passed to the constructor.

    Attributes:
        root (Optional[AVLNode]): Root node, None if the tree is empty.
        validate (bool): Verify all invariants after each insert/delete.
    """
    __slots__ = ("root", "_size", "_cmp", "validate")

    NodeClass: Type[AVLNode] = AVLNode
    COMPARATOR: Comparator = staticmethod(natural_order)

    def __init__(
        self,
        elements: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None,
        validate: bool = DEBUG,
    ) -> None:
        if comparator is not None and not callable(comparator):
            raise TypeError(f"comparator must be callable, got {type(comparator).__name__}")
        self.root: Optional[AVLNode] = None
        self._size: int = 0
        self._cmp: Comparator = comparator if comparator is not None else self.COMPARATOR
        self.validate = validate
        if elements is not None:
            for value in elements:
                self.insert(value)

    @property
    def comparator(self) -> Comparator:
        return self._cmp

    def is_empty(self) -> bool:
        return self.root is None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        return subtree_height(self.root)

    def __str__(self):
        cls = self.__class__.__name__
        if self.is_empty():
            return f"Empty {cls}"
        return f"{cls}(size={self._size}, height={self.height()})"

    __repr__ = __str__

    # Public API
    @profiled("insert")
    def insert(self, value: Any) -> bool:
        """
        Public method (O(log n)): Insert a value unless an equal one is present.

        Args:
            value: The element to insert. Must be comparable by the tree's comparator.

        Returns:
            bool: True if a new node was added, False for a duplicate.

        Raises:
            TypeError: If value is None.
        """
        if value is None:
            raise TypeError("insert(): value must not be None")
        self.root, inserted = self._insert(self.root, value)
        if inserted:
            self._size += 1
        else:
            logger.debug("insert(): %r already present", value)
        if self.validate:
            self.check_invariants()
        return inserted

    @profiled("delete")
    def delete(self, value: Any) -> bool:
        """
        Public method (O(log n)): Remove the element equal to `value`.

        Returns:
            bool: True if an element was removed, False if the tree holds no
                equal element.

        Raises:
            TypeError: If value is None.
            EmptyTreeError: If the tree is empty.
        """
        if value is None:
            raise TypeError("delete(): value must not be None")
        if self.root is None:
            logger.warning(f"delete(): tree is empty, cannot remove {value!r}")
            raise EmptyTreeError(f"delete(): cannot remove {value!r} from an empty tree")
        self.root, removed = self._delete(self.root, value)
        if removed:
            self._size -= 1
        else:
            logger.debug("delete(): %r not found", value)
        if self.validate:
            self.check_invariants()
        return removed

    @profiled("contains")
    def contains(self, value: Any) -> bool:
        """Iterative O(log n) membership test. Raises TypeError for None."""
        if value is None:
            raise TypeError("contains(): value must not be None")
        cmp = self._cmp
        node = self.root
        while node is not None:
            c = cmp(value, node.value)
            if c < 0:
                node = node.left
            elif c > 0:
                node = node.right
            else:
                return True
        return False

    def min(self) -> Any:
        """Smallest element. Raises EmptyTreeError on an empty tree."""
        if self.root is None:
            raise EmptyTreeError("min(): tree is empty")
        return self._find_min_node(self.root).value

    def max(self) -> Any:
        """Greatest element. Raises EmptyTreeError on an empty tree."""
        if self.root is None:
            raise EmptyTreeError("max(): tree is empty")
        node = self.root
        while node.right is not None:
            node = node.right
        return node.value

    def clear(self) -> None:
        self.root = None
        self._size = 0

    def iter_in_order(self) -> Iterator[Any]:
        """
        Lazily yields all elements in ascending order.

        Each call starts a fresh traversal. The tree must not be mutated while
        a traversal is in progress.
        """
        stack: List[AVLNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    def __iter__(self) -> Iterator[Any]:
        return self.iter_in_order()

    def in_order(self) -> List[Any]:
        return list(self.iter_in_order())

    def check_invariants(self) -> None:
        """
        Verify order, balance, cached heights and size against the actual structure.

        Raises:
            InvariantError: On the first violated invariant.
        """
        stats = avl_stats_(self)
        for flag in TREE_FLAGS:
            if not getattr(stats, flag):
                raise InvariantError(
                    f"Invariant failed: {flag} is False\n{self.print_structure()}"
                )
        if stats.node_count != self._size:
            raise InvariantError(
                f"Invariant failed: size()={self._size} ≠ node_count={stats.node_count}"
            )
        if stats.height != self.height():
            raise InvariantError(
                f"Invariant failed: height()={self.height()} ≠ actual height {stats.height}"
            )

    @classmethod
    def get_performance_report(cls, sort_by: str = 'seconds') -> str:
        return PROFILER.report(sort_by=sort_by)

    @classmethod
    def reset_performance_metrics(cls) -> None:
        PROFILER.reset()

    # Private Methods
    def _insert(self, node: Optional[AVLNode], value: Any) -> Tuple[AVLNode, bool]:
        """
        Insert `value` into the subtree rooted at `node`.

        Returns:
            (new_root, inserted): the root to reattach in the parent, and
                whether a node was created.
        """
        if node is None:
            return self.NodeClass(value), True

        c = self._cmp(value, node.value)
        if c < 0:
            node.left, inserted = self._insert(node.left, value)
        elif c > 0:
            node.right, inserted = self._insert(node.right, value)
        else:  # Duplicate value
            return node, False

        return rebalance(node), inserted

    def _delete(self, node: Optional[AVLNode], value: Any) -> Tuple[Optional[AVLNode], bool]:
        """
        Delete `value` from the subtree rooted at `node`.

        Returns:
            (new_root, removed): the root to reattach in the parent (None if the
                subtree became empty), and whether a node was unlinked.
        """
        if node is None:
            return None, False

        c = self._cmp(value, node.value)
        if c < 0:
            node.left, removed = self._delete(node.left, value)
        elif c > 0:
            node.right, removed = self._delete(node.right, value)
        elif node.left is None:
            return node.right, True
        elif node.right is None:
            return node.left, True
        else:
            # Two children: take over the in-order successor's value, then
            # unlink the successor, which has no left child
            successor = self._find_min_node(node.right)
            logger.debug("delete(): replacing %r with successor %r", node.value, successor.value)
            node.value = successor.value
            node.right, removed = self._delete(node.right, successor.value)

        return rebalance(node), removed

    def _find_min_node(self, node: AVLNode) -> AVLNode:
        while node.left is not None:
            node = node.left
        return node

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """
        Render the tree as an indented multi-line string, one node per line
        with its cached height.

        Args:
            indent: Number of spaces to prefix the top line with.
            max_depth: Stop descending below this depth (root = 0); None for no limit.
        """
        prefix = ' ' * indent
        cls = self.__class__.__name__
        if self.is_empty():
            return f"{prefix}Empty {cls}"

        result = [f"{prefix}{cls}(size={self._size}, height={self.height()})"]
        self._structure_lines(self.root, "Root", indent + 4, 0, max_depth, result)
        return "\n".join(result)

    def _structure_lines(
        self,
        node: AVLNode,
        label: str,
        indent: int,
        depth: int,
        max_depth: Optional[int],
        result: List[str],
    ) -> None:
        prefix = ' ' * indent
        if max_depth is not None and depth > max_depth:
            result.append(f"{prefix}... (max depth reached)")
            return

        result.append(f"{prefix}{label}: {node.value!r} (height={node.height})")
        if node.is_leaf():
            return
        for child_label, child in (("Left", node.left), ("Right", node.right)):
            if child is None:
                result.append(f"{prefix}    {child_label}: Empty")
            else:
                self._structure_lines(child, child_label, indent + 4, depth + 1, max_depth, result)


TREE_FLAGS = (
    "is_search_tree",
    "is_balanced",
    "heights_consistent",
)


@dataclass
class Stats:
    node_count: int
    height: int
    max_abs_balance: int
    least: Optional[Any]
    greatest: Optional[Any]
    is_search_tree: bool
    is_balanced: bool
    heights_consistent: bool


def avl_stats_(t: AVLTreeBase) -> Stats:
    """
    Returns aggregated statistics for an AVL tree in **O(n)** time.

    Heights are recomputed from the structure; cached `AVLNode.height` values
    are only compared against them (`heights_consistent`).
    """
    return _subtree_stats(t.root, t.comparator)


def _subtree_stats(node: Optional[AVLNode], cmp: Comparator) -> Stats:
    # ---------- empty subtree return ---------------------------------
    if node is None:
        return Stats(node_count         = 0,
                     height             = 0,
                     max_abs_balance    = 0,
                     least              = None,
                     greatest           = None,
                     is_search_tree     = True,
                     is_balanced        = True,
                     heights_consistent = True)

    left_stats = _subtree_stats(node.left, cmp)
    right_stats = _subtree_stats(node.right, cmp)

    actual_height = 1 + max(left_stats.height, right_stats.height)
    balance = left_stats.height - right_stats.height

    is_search_tree = left_stats.is_search_tree and right_stats.is_search_tree
    if left_stats.node_count and cmp(left_stats.greatest, node.value) >= 0:
        is_search_tree = False
    if right_stats.node_count and cmp(right_stats.least, node.value) <= 0:
        is_search_tree = False

    return Stats(
        node_count=1 + left_stats.node_count + right_stats.node_count,
        height=actual_height,
        max_abs_balance=max(abs(balance), left_stats.max_abs_balance, right_stats.max_abs_balance),
        least=left_stats.least if left_stats.node_count else node.value,
        greatest=right_stats.greatest if right_stats.node_count else node.value,
        is_search_tree=is_search_tree,
        is_balanced=abs(balance) <= 1 and left_stats.is_balanced and right_stats.is_balanced,
        heights_consistent=(
            node.height == actual_height
            and left_stats.heights_consistent
            and right_stats.heights_consistent
        ),
    )


def collect_keys(tree: AVLTreeBase) -> list:
    """All elements of `tree` in ascending order."""
    return list(tree.iter_in_order())

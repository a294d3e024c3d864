"""Factory for the creation of AVL-tree classes bound to a comparator"""

from typing import Any, Iterable, Optional, Type
import logging
import weakref

from avl_trees.avl_tree_base import AVLTreeBase
from avl_trees.base import Comparator, natural_order

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Classes per hashable comparator; an entry lives only as long as its class is referenced
_class_cache: "weakref.WeakValueDictionary[Comparator, Type[AVLTreeBase]]" = weakref.WeakValueDictionary()


def _is_hashable(comparator: Comparator) -> bool:
    try:
        hash(comparator)
    except TypeError:
        return False
    return True


def make_avl_tree_class(comparator: Optional[Comparator] = None) -> Type[AVLTreeBase]:
    """
    Factory function to generate an AVLTreeBase subclass whose default
    ordering is `comparator`.

    Classes for hashable comparators are cached weakly, so repeated calls
    with the same callable return the same class while it is still in use.
    Unhashable comparators get a fresh, uncached class on every call.

    Args:
        comparator: Three-way comparison `cmp(a, b) -> int`; natural ordering if None.

    Returns:
        Type[AVLTreeBase]: subclass with COMPARATOR=comparator.

    Raises:
        TypeError: If comparator is not callable.
    """
    if comparator is None:
        comparator = natural_order
    if not callable(comparator):
        raise TypeError(f"comparator must be callable, got {type(comparator).__name__}")

    cacheable = _is_hashable(comparator)
    if cacheable:
        TreeClass = _class_cache.get(comparator)
        if TreeClass is not None:
            logger.debug(f"Using cached class for comparator {comparator!r}")
            return TreeClass

    if comparator is natural_order:
        name = "AVLTree"
    else:
        name = f"AVLTree_{getattr(comparator, '__name__', type(comparator).__name__)}"

    TreeClass = type(
        name,
        (AVLTreeBase,),
        {
            "COMPARATOR": staticmethod(comparator),
            "__slots__": (),
        }
    )
    logger.debug(f"Created {name} with COMPARATOR={comparator!r}")

    if cacheable:
        _class_cache[comparator] = TreeClass
    return TreeClass


def create_avl_tree(
    elements: Optional[Iterable[Any]] = None,
    comparator: Optional[Comparator] = None,
) -> AVLTreeBase:
    """
    Create a new AVL tree ordered by `comparator`.

    The tree is always an `AVLTree`; a custom comparator is bound to the
    instance, so no class is generated per call.

    Args:
        elements: Optional values to insert, in the given order.
        comparator: Three-way comparison; natural ordering if None.

    Returns:
        A new tree holding the distinct values of `elements`.
    """
    tree = AVLTree(elements, comparator=comparator)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with size {tree.size()}")
    return tree


AVLTree = make_avl_tree_class()

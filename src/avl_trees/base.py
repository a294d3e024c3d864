from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

E = TypeVar("E")

Comparator = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    """
    Three-way comparison using the elements' own ordering.

    Returns:
        int: negative if a < b, zero if equal, positive if a > b.
    """
    return (a > b) - (a < b)


class InvariantError(RuntimeError):
    """Raised when an internal AVL-tree invariant is found broken."""
    pass


class RotationError(InvariantError):
    """Raised when a rotation is requested on a node lacking the required child."""
    pass


class EmptyTreeError(LookupError):
    """Raised when an operation requires a non-empty tree."""
    pass


class AVLNode:
    """
    A vertex of an AVL tree.

    Attributes:
        value: The stored element (order key and payload combined).
        left (Optional[AVLNode]): Root of the left subtree, None if empty.
        right (Optional[AVLNode]): Root of the right subtree, None if empty.
        height (int): Cached height of the subtree rooted here (leaf = 1).
    """
    __slots__ = ("value", "left", "right", "height")  # Define slots for memory efficiency

    def __init__(self, value: Any) -> None:
        self.value = value
        self.left: Optional["AVLNode"] = None
        self.right: Optional["AVLNode"] = None
        self.height: int = 1

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(value={self.value!r}, height={self.height})"


class AbstractSetDataStructure(ABC, Generic[E]):
    """
    Abstract base class for an ordered set of distinct elements.
    """
    __slots__ = ()

    @abstractmethod
    def insert(self, value: E) -> bool:
        """
        Insert a value into the set.

        Parameters:
            value: The element to be inserted.

        Returns:
            bool: True if the value was added, False if an equal value was already present.
        """
        pass

    @abstractmethod
    def delete(self, value: E) -> bool:
        """
        Delete the element equal to the given value.

        Parameters:
            value: The element to be deleted.

        Returns:
            bool: True if an element was removed, False if no equal element exists.
        """
        pass

    @abstractmethod
    def contains(self, value: E) -> bool:
        """Return True if an element equal to `value` is stored."""
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[E]:
        pass

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, value: E) -> bool:
        return self.contains(value)

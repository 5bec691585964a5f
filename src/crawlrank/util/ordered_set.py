"""AVL-balanced ordered set.

The set keeps its values in a self-balancing binary search tree. Every node
exclusively owns its two subtrees and caches its height, so insertion,
deletion and lookup each walk a single root-to-leaf path and rebalance it on
the way back up with rotations.
"""

from typing import Any, Generic, Iterable, Iterator, Optional, Protocol, TypeVar

from crawlrank.errors import InvalidArgumentError

_COMPONENT = "OrderedSet"


class SupportsLessThan(Protocol):
    """Values stored in an OrderedSet must be totally ordered by ``<``."""

    def __lt__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=SupportsLessThan)


class _Node(Generic[T]):
    __slots__ = ("value", "left", "right", "height")

    def __init__(self, value: T):
        self.value: T = value
        self.left: Optional["_Node[T]"] = None
        self.right: Optional["_Node[T]"] = None
        self.height: int = 1


def _height(node: Optional[_Node]) -> int:
    return node.height if node is not None else 0


def _balance(node: Optional[_Node]) -> int:
    """Left height minus right height; positive means left-heavy."""
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _update_height(node: _Node) -> None:
    node.height = max(_height(node.left), _height(node.right)) + 1


def _rotate_left(root: _Node) -> _Node:
    pivot = root.right
    root.right = pivot.left
    pivot.left = root
    # The node that moved down must be updated first.
    _update_height(root)
    _update_height(pivot)
    return pivot


def _rotate_right(root: _Node) -> _Node:
    pivot = root.left
    root.left = pivot.right
    pivot.right = root
    _update_height(root)
    _update_height(pivot)
    return pivot


def _leftmost(node: _Node) -> _Node:
    while node.left is not None:
        node = node.left
    return node


class OrderedSet(Generic[T]):
    """A set of ordered values backed by an AVL tree.

    Duplicates are never stored and ``None`` is rejected by every operation.
    Iterating over the set yields the values in ascending order; each call to
    ``iter()`` starts a fresh traversal.
    """

    def __init__(self, values: Iterable[T] = ()):
        """Initialize the set.

        Args:
            values: Optional initial values. Duplicates are ignored.
        """
        self._root: Optional[_Node[T]] = None
        self._size: int = 0
        for value in values:
            self.insert(value)

    @property
    def size(self) -> int:
        """Number of values in the set."""
        return self._size

    @property
    def height(self) -> int:
        """Height of the tree; 0 for an empty set."""
        return _height(self._root)

    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        stack: list[_Node[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def in_order(self) -> list[T]:
        """Return all values in ascending order."""
        return list(self)

    def insert(self, value: T) -> None:
        """Insert a value. Inserting a value already present is a no-op.

        Args:
            value: The value to insert.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("tried to insert None", component=_COMPONENT)
        self._root = self._insert(self._root, value)

    def delete(self, value: T) -> None:
        """Remove a value. Removing a value that is not present is a no-op.

        Args:
            value: The value to remove.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("tried to delete None", component=_COMPONENT)
        self._root, removed = self._delete(self._root, value)
        if removed:
            self._size -= 1

    def contains(self, value: T) -> bool:
        """Check whether a value is in the set.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError(
                "tried to check whether None is contained", component=_COMPONENT
            )
        return self._find(value) is not None

    def retrieve(self, value: T) -> Optional[T]:
        """Find the stored value equal to ``value``.

        Useful when the stored values carry more data than their sort key.

        Args:
            value: A value comparing equal to the one to retrieve.

        Returns:
            The stored value, or None if no equal value is present.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("tried to retrieve None", component=_COMPONENT)
        node = self._find(value)
        return node.value if node is not None else None

    def _find(self, value: T) -> Optional[_Node[T]]:
        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif node.value < value:
                node = node.right
            else:
                return node
        return None

    def _insert(self, node: Optional[_Node[T]], value: T) -> _Node[T]:
        if node is None:
            self._size += 1
            return _Node(value)

        if value < node.value:
            node.left = self._insert(node.left, value)
        elif node.value < value:
            node.right = self._insert(node.right, value)
        else:
            return node

        _update_height(node)
        return self._rebalance_after_insert(node, value)

    @staticmethod
    def _rebalance_after_insert(node: _Node[T], value: T) -> _Node[T]:
        """Restore balance on the insertion path.

        The inserted value tells which grandchild grew: left-left and
        right-right need a single rotation, left-right and right-left a double
        one.
        """
        balance = _balance(node)
        if balance > 1:
            if value < node.left.value:
                return _rotate_right(node)
            node.left = _rotate_left(node.left)
            return _rotate_right(node)
        if balance < -1:
            if node.right.value < value:
                return _rotate_left(node)
            node.right = _rotate_right(node.right)
            return _rotate_left(node)
        return node

    def _delete(
        self, node: Optional[_Node[T]], value: T
    ) -> tuple[Optional[_Node[T]], bool]:
        if node is None:
            return None, False

        if value < node.value:
            node.left, removed = self._delete(node.left, value)
        elif node.value < value:
            node.right, removed = self._delete(node.right, value)
        else:
            if node.left is None:
                return node.right, True
            if node.right is None:
                return node.left, True
            # Two children: take over the in-order successor, then remove it
            # from the right subtree.
            successor_value = _leftmost(node.right).value
            node.value = successor_value
            node.right, _ = self._delete(node.right, successor_value)
            removed = True

        if not removed:
            return node, False

        _update_height(node)
        return self._rebalance_after_delete(node), True

    @staticmethod
    def _rebalance_after_delete(node: _Node[T]) -> _Node[T]:
        """Restore balance on the deletion path.

        A deletion can leave either side too tall regardless of which subtree
        shrank, so the case is chosen from the taller child's own balance.
        """
        balance = _balance(node)
        if balance > 1:
            if _balance(node.left) >= 0:
                return _rotate_right(node)
            node.left = _rotate_left(node.left)
            return _rotate_right(node)
        if balance < -1:
            if _balance(node.right) <= 0:
                return _rotate_left(node)
            node.right = _rotate_right(node.right)
            return _rotate_left(node)
        return node

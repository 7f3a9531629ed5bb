"""Node - a single vertex of an n-ary tree.

A Node holds a payload value and an ordered list of children that it owns
exclusively. There is no back-pointer to a parent: ownership only flows
downward, and a node merely records whether some parent currently holds it.
"Where is this node" questions are answered with child-index paths (see
narytree._common.paths) or with the handle a mutable traversal passes along.
"""

import weakref
from typing import Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .._common.cursor import EditClock
from .._common.paths import normalize
from ..exceptions import CycleError, IndexOutOfBounds, PathNotFound

T = TypeVar('T')


class Node(Generic[T]):
    """A tree vertex holding ``value`` and zero or more ordered children.

    The child graph reachable from any node is acyclic and every node has at
    most one parent: attaching a node that already has a parent, or that
    contains the receiver, raises CycleError.

    Example:
        >>> root = Node(1).with_children([Node(2), Node(3)])
        >>> [child.value for child in root.children()]
        [2, 3]
    """

    def __init__(self, value: T, children: Optional[Iterable['Node[T]']] = None):
        self._value = value
        self._children: List['Node[T]'] = []
        self._owned = False   # set while some parent holds this node
        self._version = 0     # bumped on every change to the child list
        self._replaced = None  # weakref to the child this node displaced, if any
        if children is not None:
            for child in children:
                self.add_child(child)

    @classmethod
    def new(cls, value: T) -> 'Node[T]':
        """Create a leaf node holding ``value``."""
        return cls(value)

    # Value access

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value

    def set_value(self, value: T) -> None:
        """Replace the payload of this node."""
        self._value = value

    # Children

    def children(self) -> Tuple['Node[T]', ...]:
        """Return a read-only ordered view of the immediate children.

        The tuple holds references to the owned children, not copies.
        """
        return tuple(self._children)

    def children_len(self) -> int:
        """Return the number of immediate children."""
        return len(self._children)

    def is_leaf(self) -> bool:
        return not self._children

    def child(self, index: int) -> 'Node[T]':
        """Return the child at ``index``.

        Raises:
            IndexOutOfBounds: If ``index`` is not a valid child position
        """
        self._check_index(index)
        return self._children[index]

    def add_child(self, node: 'Node[T]') -> int:
        """Append ``node`` as the last child.

        Returns:
            The number of children after the append

        Raises:
            CycleError: If ``node`` already has a parent, or this node is
                reachable from it
        """
        self._check_attachable(node)
        self._children.append(node)
        self._adopted(node)
        return len(self._children)

    def insert_child(self, index: int, node: 'Node[T]') -> None:
        """Insert ``node`` so that it ends up at position ``index``.

        ``index`` may equal the current child count, which appends.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= len(self._children):
            raise IndexOutOfBounds(index, len(self._children))
        self._check_attachable(node)
        self._children.insert(index, node)
        self._adopted(node)

    def remove_child(self, index: int) -> 'Node[T]':
        """Detach and return the child at ``index``.

        The returned node becomes the root of its own independent graph.

        Raises:
            IndexOutOfBounds: If ``index`` >= the current child count
        """
        self._check_index(index)
        removed = self._children.pop(index)
        removed._owned = False
        removed._replaced = None
        self._version += 1
        EditClock.tick()
        return removed

    def replace_child(self, index: int, node: 'Node[T]') -> 'Node[T]':
        """Put ``node`` at position ``index`` and return the child it displaced."""
        self._check_index(index)
        self._check_attachable(node)
        previous = self._children[index]
        self._children[index] = node
        previous._owned = False
        node._replaced = weakref.ref(previous)
        self._adopted(node)
        return previous

    def with_children(self, children: Iterable['Node[T]']) -> 'Node[T]':
        """Append every node in ``children`` and return self (builder style)."""
        for child in children:
            self.add_child(child)
        return self

    def index_of(self, node: 'Node[T]') -> Optional[int]:
        """Return the position of ``node`` among the children, by identity."""
        for index, child in enumerate(self._children):
            if child is node:
                return index
        return None

    # Paths

    def get(self, path: Iterable[int]) -> 'Node[T]':
        """Return the descendant addressed by ``path`` relative to this node.

        Raises:
            PathNotFound: If an index along ``path`` is out of range
        """
        path = normalize(path)
        current = self
        for depth, index in enumerate(path):
            if not 0 <= index < len(current._children):
                raise PathNotFound(path, depth)
            current = current._children[index]
        return current

    def contains(self, node: 'Node[T]') -> bool:
        """Check whether ``node`` is this node or one of its descendants (by identity)."""
        return any(candidate is node for candidate in self.iter_subtree())

    # Metrics

    def size(self) -> int:
        """Return the number of descendants; 0 if, and only if, this is a leaf."""
        return sum(1 for _ in self.iter_subtree()) - 1

    def height(self) -> int:
        """Return the length of the longest branch rooted here; 1 for a leaf."""
        height = 0
        stack = [(self, 1)]
        while stack:
            current, level = stack.pop()
            height = max(height, level)
            stack.extend((child, level + 1) for child in current._children)
        return height

    def iter_subtree(self) -> Iterator['Node[T]']:
        """Iterate this node and its descendants in pre-order.

        A plain snapshot-free walk for internal bookkeeping; traversals with
        mutation semantics live in the sync and aio packages.
        """
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current._children))

    # Copying and comparison

    def copy(self) -> 'Node[T]':
        """Return an independent deep copy of the subtree rooted here.

        Values are shared, structure is not.
        """
        clone = Node(self._value)
        pending = [(self, clone)]
        while pending:
            source, target = pending.pop()
            for child in source._children:
                child_clone = Node(child._value)
                child_clone._owned = True
                target._children.append(child_clone)
                pending.append((child, child_clone))
        return clone

    def __copy__(self) -> 'Node[T]':
        return self.copy()

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if their values and children are equal, recursively."""
        if not isinstance(other, Node):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if left._value != right._value or len(left._children) != len(right._children):
                return False
            pending.extend(zip(left._children, right._children))
        return True

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self._value!r}, children={len(self._children)})"

    # Internals

    def _check_index(self, index: Any) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._children):
            raise IndexOutOfBounds(index, len(self._children))

    def _check_attachable(self, node: Any) -> None:
        if not isinstance(node, Node):
            raise TypeError(f"children must be Node instances, got {type(node).__name__}")
        if node is self:
            raise CycleError(f"cannot attach {self!r} under itself")
        if node._owned:
            raise CycleError(f"{node!r} already has a parent; detach it first")
        # a parentless receiver cannot sit below node, and a leaf holds nothing
        if self._owned and node._children and node.contains(self):
            raise CycleError(f"attaching {node!r} under {self!r} would create a cycle")

    def _adopted(self, node: 'Node[T]') -> None:
        node._owned = True
        self._version += 1
        EditClock.tick()


def node(value: T, *children: Node[T]) -> Node[T]:
    """Build a node with the given children in one expression.

    Example:
        >>> tree = node(10, node(20, node(40)), node(30))
        >>> tree.size()
        3
    """
    return Node(value, children)


__all__ = ['Node', 'node']

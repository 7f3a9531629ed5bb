"""Tree - the owning handle of a Node graph.

A Tree holds at most one root Node and, through it, the whole graph. All
path-addressed structural mutation goes through here (or through the
NodeHandle of a mutable traversal). Every mutation validates its input fully
before changing anything, so a failed call leaves the tree untouched.
"""

import logging
from typing import Any, Generic, Iterable, Optional, TypeVar, Union

from .._common.cursor import slot_for
from .._common.paths import Path, child_of, normalize, split
from ..exceptions import CycleError, EmptyTree, PathNotFound
from .node import Node

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Tree(Generic[T]):
    """Owning handle to a root node and its descendants.

    An empty tree has no root (``root()`` raises EmptyTree); it is reached by
    constructing ``Tree()`` or by removing / taking the root.

    Example:
        >>> tree = Tree.with_root("a")
        >>> tree.insert_at([], "b")
        (0,)
        >>> [n.value for n in tree.traverse()]
        ['a', 'b']
    """

    def __init__(self, root: Optional[Node[T]] = None):
        if root is not None and not isinstance(root, Node):
            raise TypeError(f"root must be a Node, got {type(root).__name__}")
        self._root = root

    @classmethod
    def with_root(cls, value: T) -> 'Tree[T]':
        """Create a tree whose root is a new leaf holding ``value``."""
        return cls(Node(value))

    @classmethod
    def from_node(cls, root: Node[T]) -> 'Tree[T]':
        """Create a tree that takes ownership of an existing node graph."""
        return cls(root)

    # Root access

    def is_empty(self) -> bool:
        return self._root is None

    def root(self) -> Node[T]:
        """Return the root node for reading.

        Raises:
            EmptyTree: If the tree has no root
        """
        if self._root is None:
            raise EmptyTree()
        return self._root

    def root_mut(self) -> Node[T]:
        """Return the root node for editing.

        Same object as ``root()``; the separate name marks call sites that
        intend to mutate.
        """
        return self.root()

    def take_root(self) -> Node[T]:
        """Detach and return the root, leaving the tree empty."""
        root = self.root()
        self._root = None
        logger.debug("Took root %r, tree is now empty", root)
        return root

    def set_root(self, root: Node[T]) -> Optional[Node[T]]:
        """Install ``root`` and return the previous root, if any."""
        if not isinstance(root, Node):
            raise TypeError(f"root must be a Node, got {type(root).__name__}")
        previous, self._root = self._root, root
        return previous

    # Lookup

    def get(self, path: Iterable[int]) -> Node[T]:
        """Return the node addressed by ``path``.

        Raises:
            EmptyTree: If the tree has no root
            PathNotFound: If any index along ``path`` is out of range
        """
        return self.root().get(path)

    def contains(self, node: Node[T]) -> bool:
        """Check whether ``node`` is part of this tree (by identity)."""
        return self._root is not None and self._root.contains(node)

    def path_of(self, node: Node[T]) -> Optional[Path]:
        """Return the current path of ``node``, or None if it is not in the tree."""
        if self._root is None:
            return None
        stack = [(self._root, ())]
        while stack:
            current, path = stack.pop()
            if current is node:
                return path
            for index in range(current.children_len() - 1, -1, -1):
                stack.append((current.child(index), path + (index,)))
        return None

    # Mutation

    def insert_at(self, path: Iterable[int], value: Union[T, Node[T]]) -> Path:
        """Append a new child under the node at ``path``.

        ``value`` is wrapped in a new leaf unless it already is a Node, in
        which case that (detached) subtree is attached as-is.

        Returns:
            The path of the inserted child

        Raises:
            PathNotFound: If ``path`` does not address an existing node
            CycleError: If ``value`` is a node already in this tree
        """
        path = self._resolve_path(path)
        parent = self.get(path)
        child = self._adopt(value)
        count = parent.add_child(child)
        logger.debug("Inserted %r at %s", child, list(path))
        return child_of(path, count - 1)

    def remove_at(self, path: Iterable[int]) -> Node[T]:
        """Detach and return the subtree rooted at ``path``.

        Removing the root path ``[]`` empties the tree.

        Raises:
            PathNotFound: If ``path`` does not address an existing node
        """
        path = self._resolve_path(path)
        if not path:
            return self.take_root()
        parent_path, index = split(path)
        parent = self._parent_for(path, parent_path, index)
        removed = parent.remove_child(index)
        logger.debug("Removed %r from %s", removed, list(path))
        return removed

    def replace_at(self, path: Iterable[int], node: Node[T]) -> Node[T]:
        """Swap the subtree at ``path`` for ``node`` and return the previous one.

        Raises:
            PathNotFound: If ``path`` does not address an existing node
            CycleError: If ``node`` is already part of this tree
        """
        path = self._resolve_path(path)
        if not isinstance(node, Node):
            raise TypeError(f"replacement must be a Node, got {type(node).__name__}")
        if not path:
            previous = self.root()
            self._adopt(node)
            self._root = node
            logger.debug("Replaced root %r with %r", previous, node)
            return previous
        parent_path, index = split(path)
        parent = self._parent_for(path, parent_path, index)
        self._adopt(node)
        previous = parent.replace_child(index, node)
        logger.debug("Replaced %r at %s with %r", previous, list(path), node)
        return previous

    # Traversal

    def traverse(self, strategy: Any = None, path: Iterable[int] = (), config: Any = None):
        """Start a traversal of this tree, or of the subtree at ``path``.

        Args:
            strategy: A TraversalStrategy (or its name); defaults to
                immutable synchronous
            path: Alternative root for the walk
            config: Optional TraversalConfig; its strategy is overridden by
                ``strategy`` when both are given

        Returns:
            One of the four traverser types
        """
        from ..traversal import open_traversal
        return open_traversal(self, strategy=strategy, path=path, config=config)

    # Metrics and comparison

    def size(self) -> int:
        """Return the number of nodes, root included; 0 for an empty tree."""
        if self._root is None:
            return 0
        return self._root.size() + 1

    def height(self) -> int:
        """Return the length of the longest branch; 0 for an empty tree."""
        if self._root is None:
            return 0
        return self._root.height()

    def copy(self) -> 'Tree[T]':
        return Tree(self._root.copy() if self._root is not None else None)

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self._root == other._root

    __hash__ = None

    def __repr__(self) -> str:
        if self._root is None:
            return f"{self.__class__.__name__}(empty)"
        return f"{self.__class__.__name__}(root={self._root.value!r}, size={self.size()})"

    # Internals

    def _resolve_path(self, path: Iterable[int]) -> Path:
        path = normalize(path)
        if self._root is None:
            raise EmptyTree()
        return path

    def _parent_for(self, path: Path, parent_path: Path, index: int) -> Node[T]:
        parent = self.get(parent_path)
        if not 0 <= index < parent.children_len():
            raise PathNotFound(path, len(parent_path))
        return parent

    def _adopt(self, value: Union[T, Node[T]]) -> Node[T]:
        if not isinstance(value, Node):
            return Node(value)
        if value._owned:
            raise CycleError(f"{value!r} already has a parent; detach it first")
        if self.contains(value):
            raise CycleError(f"{value!r} is already part of this tree")
        return value


def resolve_walk_root(source: Union[Tree[T], Node[T]], path: Iterable[int] = ()):
    """Find the node a traversal starts at and the slot it lives in.

    Args:
        source: A Tree, or a Node acting as a detached root
        path: Alternative root inside ``source``

    Returns:
        Tuple of (root node, RootSlot, normalized path)

    Raises:
        EmptyTree: If ``source`` is an empty tree
        PathNotFound: If ``path`` does not address a node
    """
    path = normalize(path)
    if isinstance(source, Tree):
        return source.get(path), slot_for(source.root(), path, tree=source), path
    if isinstance(source, Node):
        return source.get(path), slot_for(source, path), path
    raise TypeError(f"can only traverse a Tree or a Node, got {type(source).__name__}")


__all__ = ['Tree', 'resolve_walk_root']

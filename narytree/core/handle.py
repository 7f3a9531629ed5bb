"""NodeHandle - exclusive edit rights over the node a mutable traversal is on.

Mutable traversers hand out one handle per visit. The handle is valid until
the traverser advances; after that every operation raises StaleHandleError.
Edits are scoped to the visited node's subtree, plus detaching or replacing
the visited node itself. Failed edits raise before anything changes, so the
remaining frontier of the walk is never corrupted.
"""

import logging
from typing import Any, Iterable, Tuple, Union

from .._common.cursor import PreOrderCursor, Visit
from .._common.paths import Path, child_of, normalize, split
from ..exceptions import CycleError, PathNotFound, StaleHandleError, TreeError
from .node import Node

logger = logging.getLogger(__name__)


class NodeHandle:
    """Edit handle for the node currently visited by a mutable traversal."""

    def __init__(self, cursor: PreOrderCursor, visit: Visit):
        self._cursor = cursor
        self._visit = visit
        self._generation = cursor.generation

    # Validity

    @property
    def is_valid(self) -> bool:
        """True while the traversal is still positioned on this handle's node."""
        return (not self._cursor.finished
                and self._cursor.generation == self._generation
                and self._cursor.current is not None
                and self._cursor.current.node is self._visit.node)

    def _live(self) -> Node:
        if not self.is_valid:
            raise StaleHandleError(
                f"handle for {self._visit.node!r} used after the traversal moved on")
        return self._visit.node

    # Read access

    @property
    def node(self) -> Node:
        return self._live()

    @property
    def value(self) -> Any:
        return self._live().value

    @property
    def path(self) -> Path:
        """Path of the node at the moment it was visited."""
        return self._visit.path

    @property
    def depth(self) -> int:
        return self._visit.depth

    def children(self) -> Tuple[Node, ...]:
        return self._live().children()

    # Edits on the visited node

    def set_value(self, value: Any) -> None:
        self._live().set_value(value)

    def add_child(self, child: Union[Any, Node]) -> int:
        """Append a child (a Node, or a value wrapped in a new leaf).

        The new child is visited later in this same walk.

        Returns:
            The child count after the append
        """
        current = self._live()
        count = current.add_child(self._adopt(child))
        logger.debug("Handle appended child %d to %r", count - 1, current)
        return count

    def insert_child(self, index: int, child: Union[Any, Node]) -> None:
        current = self._live()
        current.insert_child(index, self._adopt(child))

    def remove_child(self, index: int) -> Node:
        """Detach and return the child at ``index``; it will not be visited."""
        current = self._live()
        removed = current.remove_child(index)
        logger.debug("Handle removed child %d (%r) from %r", index, removed, current)
        return removed

    def replace_child(self, index: int, child: Node) -> Node:
        current = self._live()
        if not isinstance(child, Node):
            raise TypeError(f"replacement must be a Node, got {type(child).__name__}")
        return current.replace_child(index, self._adopt(child))

    # Path-addressed edits, relative to the visited node

    def get(self, path: Iterable[int]) -> Node:
        return self._live().get(path)

    def insert_at(self, path: Iterable[int], value: Union[Any, Node]) -> Path:
        """Append a child under the descendant at relative ``path``.

        Returns:
            Relative path of the inserted child
        """
        path = normalize(path)
        target = self._live().get(path)
        count = target.add_child(self._adopt(value))
        return child_of(path, count - 1)

    def remove_at(self, path: Iterable[int]) -> Node:
        """Detach the descendant at relative ``path``; ``[]`` detaches the visited node."""
        path = normalize(path)
        if not path:
            return self.detach()
        parent = self._parent_for(path)
        return parent.remove_child(path[-1])

    def replace_at(self, path: Iterable[int], node: Node) -> Node:
        """Swap the descendant at relative ``path``; ``[]`` swaps the visited node.

        A replacement put in place of the visited node is not walked.
        """
        path = normalize(path)
        if not isinstance(node, Node):
            raise TypeError(f"replacement must be a Node, got {type(node).__name__}")
        if not path:
            return self._replace_self(node)
        parent = self._parent_for(path)
        return parent.replace_child(path[-1], self._adopt(node))

    # Edits on the visited node's place in the graph

    def detach(self) -> Node:
        """Remove the visited node from its parent (or from the tree, for the root).

        The visit completes normally but the node's children are no longer
        walked. A walk root with no owner is only pruned.
        """
        current = self._live()
        parent = self._cursor.parent_of_current()
        if parent is not None:
            index = parent.index_of(current)
            if index is not None:
                parent.remove_child(index)
        else:
            self._cursor.slot.release(current)
        self._cursor.prune_current()
        logger.debug("Handle detached %r at %s", current, list(self._visit.path))
        return current

    def skip_children(self) -> None:
        """Keep the visited node in place but do not walk its children."""
        self._live()
        self._cursor.prune_current()

    # Internals

    def _replace_self(self, node: Node) -> Node:
        current = self._live()
        self._adopt(node)
        parent = self._cursor.parent_of_current()
        if parent is not None:
            index = parent.index_of(current)
            if index is None:
                raise TreeError(f"{current!r} was already detached; nothing to replace")
            parent.replace_child(index, node)
        elif not self._cursor.slot.replace(current, node):
            raise TreeError(f"{current!r} is a walk root with no owner to replace it in")
        self._cursor.prune_current()
        logger.debug("Handle replaced %r with %r", current, node)
        return current

    def _parent_for(self, path: Path) -> Node:
        parent_path, index = split(path)
        parent = self._live().get(parent_path)
        if not 0 <= index < parent.children_len():
            raise PathNotFound(path, len(parent_path))
        return parent

    def _adopt(self, value: Union[Any, Node]) -> Node:
        if not isinstance(value, Node):
            return Node(value)
        if value._owned:
            raise CycleError(f"{value!r} already has a parent; detach it first")
        if self._cursor.on_branch(value):
            raise CycleError(f"{value!r} is on the branch being walked")
        return value

    def __repr__(self) -> str:
        state = "live" if self.is_valid else "stale"
        return f"NodeHandle({self._visit.node!r}, path={list(self._visit.path)}, {state})"


__all__ = ['NodeHandle']

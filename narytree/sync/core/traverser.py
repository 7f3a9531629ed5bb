"""Synchronous tree traversal strategies for narytree.

Both traversers drive the shared PreOrderCursor one step per ``next()``
call, on the caller's thread, and differ only in what they hand out:
read-only Node references or a NodeHandle with exclusive edit rights.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Optional, Union

from ..._common.config import TraversalConfig, TraversalStrategy
from ..._common.cursor import PreOrderCursor, Visit
from ...core.handle import NodeHandle
from ...core.node import Node
from ...core.tree import Tree, resolve_walk_root

logger = logging.getLogger(__name__)


class TreeTraverser(ABC):
    """Abstract base class for synchronous traversal strategies.

    A traverser is a lazy, single-use iterator: ``iter()`` returns the
    traverser itself, and once exhausted (or closed) it yields nothing more.
    Start a fresh traverser to walk again.
    """

    strategy: TraversalStrategy

    def __init__(self,
                 source: Union[Tree, Node],
                 path: Iterable[int] = (),
                 config: Optional[TraversalConfig] = None):
        """Initialize traverser over a tree or a detached node.

        Args:
            source: Tree to walk, or a Node acting as a detached root
            path: Alternative root inside ``source``
            config: Depth bounds; the strategy field is ignored

        Raises:
            EmptyTree: If ``source`` is an empty tree
            PathNotFound: If ``path`` does not address a node
            ValueError: If ``config`` is inconsistent
        """
        self.config = (config or TraversalConfig(strategy=self.strategy)).ensure_valid()
        root, slot, base_path = resolve_walk_root(source, path)
        self._cursor = PreOrderCursor(root, slot, self.config.depth, base_path)
        logger.debug("Started %s at %r (path %s)",
                     self.__class__.__name__, root, list(base_path))

    def __iter__(self) -> 'TreeTraverser':
        return self

    def __next__(self) -> Any:
        if self._cursor.finished:
            raise StopIteration
        visit = self._cursor.step()
        if visit is None:
            logger.debug("%s exhausted after %d visits",
                         self.__class__.__name__, self._cursor.visited)
            raise StopIteration
        return self._wrap(visit)

    @abstractmethod
    def _wrap(self, visit: Visit) -> Any:
        """Turn a cursor visit into what the caller receives."""
        pass

    @property
    def visited(self) -> int:
        """Number of nodes handed out so far."""
        return self._cursor.visited

    @property
    def exhausted(self) -> bool:
        return self._cursor.finished

    @property
    def frontier_depth(self) -> int:
        """Walk frames still held; 0 once the walk is exhausted or closed."""
        return self._cursor.frontier_depth

    def close(self) -> None:
        """Abandon the walk and release its state."""
        if not self._cursor.finished:
            logger.debug("%s closed after %d visits",
                         self.__class__.__name__, self._cursor.visited)
        self._cursor.close()

    def __enter__(self) -> 'TreeTraverser':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ImmutableTraverser(TreeTraverser):
    """Read-only pre-order traversal.

    Yields Node references. Nothing in this strategy's interface mutates the
    tree, so the order over the tree as it stood at the start is total.
    """

    strategy = TraversalStrategy.IMMUTABLE_SYNC

    def _wrap(self, visit: Visit) -> Node:
        return visit.node

    def visits(self) -> Iterator[Visit]:
        """Iterate Visit records (node, path, depth) instead of bare nodes.

        Consumes the same underlying walk as iterating the traverser.
        """
        while True:
            visit = self._cursor.step()
            if visit is None:
                return
            yield visit


class MutableTraverser(TreeTraverser):
    """Pre-order traversal that allows structural edits mid-walk.

    Yields a NodeHandle per visit. Edits made through it before the next
    ``next()`` call shape the rest of the walk: appended children are
    visited, removed unvisited descendants are skipped, and a detached
    current node is not descended into.

    Example:
        >>> for handle in MutableTraverser(tree):
        ...     if handle.value == "dir":
        ...         handle.add_child("new file")
    """

    strategy = TraversalStrategy.MUTABLE_SYNC

    def _wrap(self, visit: Visit) -> NodeHandle:
        return NodeHandle(self._cursor, visit)


def create_traverser(source: Union[Tree, Node],
                     mutable: bool = False,
                     path: Iterable[int] = (),
                     config: Optional[TraversalConfig] = None) -> TreeTraverser:
    """Create a synchronous traverser instance.

    Args:
        source: Tree or Node to walk
        mutable: Hand out NodeHandles instead of read-only nodes
        path: Alternative root inside ``source``
        config: Optional depth bounds

    Returns:
        TreeTraverser instance
    """
    traverser_class = MutableTraverser if mutable else ImmutableTraverser
    return traverser_class(source, path=path, config=config)

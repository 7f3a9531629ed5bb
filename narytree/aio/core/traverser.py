"""Async tree traversal strategies.

Async traversers drive the same PreOrderCursor as the sync ones, one visit
per ``__anext__``. The only suspension point is before each visit is
computed; computing a visit never awaits, so a node is either fully handed
out or not handed out at all.

Cancellation is the driver stopping: ``aclose()``, leaving an ``async with``
block, or a CancelledError delivered at the suspension point all release
the walk state at once. Edits already applied through a handle stay applied.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Iterable, Optional, Union

from ..._common.config import TraversalConfig, TraversalStrategy
from ..._common.cursor import PreOrderCursor, Visit
from ...core.handle import NodeHandle
from ...core.node import Node
from ...core.tree import Tree, resolve_walk_root

logger = logging.getLogger(__name__)


class AsyncTreeTraverser(ABC):
    """Abstract base class for async traversal strategies.

    Traversers are single-use async iterators: ``__aiter__`` returns the
    traverser itself and a consumed or closed traverser stays exhausted.
    No background work happens between visits.
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
            config: Depth bounds and ``yield_control``; the strategy field
                is ignored
        """
        self.config = (config or TraversalConfig(strategy=self.strategy)).ensure_valid()
        root, slot, base_path = resolve_walk_root(source, path)
        self._cursor = PreOrderCursor(root, slot, self.config.depth, base_path)
        logger.debug("Started %s at %r (path %s)",
                     self.__class__.__name__, root, list(base_path))

    def __aiter__(self) -> 'AsyncTreeTraverser':
        return self

    async def __anext__(self) -> Any:
        visit = await self._advance()
        if visit is None:
            raise StopAsyncIteration
        return self._wrap(visit)

    async def _advance(self) -> Optional[Visit]:
        """Suspend once, then compute the next visit without awaiting."""
        if self._cursor.finished:
            return None

        if self.config.yield_control:
            try:
                await asyncio.sleep(0)
            except asyncio.CancelledError:
                logger.debug("%s cancelled after %d visits",
                             self.__class__.__name__, self._cursor.visited)
                self._cursor.close()
                raise

        visit = self._cursor.step()
        if visit is None:
            logger.debug("%s exhausted after %d visits",
                         self.__class__.__name__, self._cursor.visited)
        return visit

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

    async def aclose(self) -> None:
        """Abandon the walk and release its state."""
        if not self._cursor.finished:
            logger.debug("%s closed after %d visits",
                         self.__class__.__name__, self._cursor.visited)
        self._cursor.close()

    async def __aenter__(self) -> 'AsyncTreeTraverser':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class AsyncImmutableTraverser(AsyncTreeTraverser):
    """Async read-only pre-order traversal.

    Functionally identical to the sync ImmutableTraverser but suspends
    between visits, so other tasks can run while the walk is in progress.
    """

    strategy = TraversalStrategy.IMMUTABLE_ASYNC

    def _wrap(self, visit: Visit) -> Node:
        return visit.node

    async def visits(self) -> AsyncIterator[Visit]:
        """Iterate Visit records (node, path, depth) instead of bare nodes."""
        while True:
            visit = await self._advance()
            if visit is None:
                return
            yield visit


class AsyncMutableTraverser(AsyncTreeTraverser):
    """Async pre-order traversal that allows structural edits mid-walk.

    Yields a NodeHandle per visit with the same mutation policy as the sync
    MutableTraverser. Between a yield and the next resume the holder of the
    handle is the only mutator; a second driver editing the same tree is out
    of contract.
    """

    strategy = TraversalStrategy.MUTABLE_ASYNC

    def _wrap(self, visit: Visit) -> NodeHandle:
        return NodeHandle(self._cursor, visit)


def create_async_traverser(source: Union[Tree, Node],
                           mutable: bool = False,
                           path: Iterable[int] = (),
                           config: Optional[TraversalConfig] = None) -> AsyncTreeTraverser:
    """Create an async traverser instance.

    Args:
        source: Tree or Node to walk
        mutable: Hand out NodeHandles instead of read-only nodes
        path: Alternative root inside ``source``
        config: Optional depth bounds and yield_control flag

    Returns:
        AsyncTreeTraverser instance
    """
    traverser_class = AsyncMutableTraverser if mutable else AsyncImmutableTraverser
    return traverser_class(source, path=path, config=config)

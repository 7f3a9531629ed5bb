"""Traversal acquisition: one entry point for all four strategies.

The strategy is the pair (access, execution mode); this module maps it to
the concrete traverser class from the sync or aio package.
"""

from typing import Any, Iterable, Optional, Union

from ._common.config import TraversalConfig, TraversalStrategy
from .aio.core.traverser import AsyncImmutableTraverser, AsyncMutableTraverser
from .core.node import Node
from .core.tree import Tree
from .sync.core.traverser import ImmutableTraverser, MutableTraverser

TRAVERSERS = {
    TraversalStrategy.IMMUTABLE_SYNC: ImmutableTraverser,
    TraversalStrategy.MUTABLE_SYNC: MutableTraverser,
    TraversalStrategy.IMMUTABLE_ASYNC: AsyncImmutableTraverser,
    TraversalStrategy.MUTABLE_ASYNC: AsyncMutableTraverser,
}


def open_traversal(source: Union[Tree, Node],
                   strategy: Any = None,
                   path: Iterable[int] = (),
                   config: Optional[TraversalConfig] = None):
    """Create a traverser for ``source`` with the requested strategy.

    Args:
        source: Tree or Node to walk
        strategy: TraversalStrategy member or name; falls back to
            ``config.strategy`` and then to IMMUTABLE_SYNC
        path: Alternative root inside ``source``
        config: Optional depth bounds and yield_control flag

    Returns:
        A sync iterator or an async iterator, depending on the strategy

    Raises:
        ValueError: If ``strategy`` names no known strategy
    """
    if strategy is None:
        strategy = config.strategy if config is not None else TraversalStrategy.IMMUTABLE_SYNC
    strategy = TraversalStrategy.parse(strategy)
    if config is None:
        config = TraversalConfig(strategy=strategy)
    elif config.strategy is not strategy:
        config = TraversalConfig(strategy=strategy, depth=config.depth,
                                 yield_control=config.yield_control)
    return TRAVERSERS[strategy](source, path=path, config=config)


__all__ = ['TRAVERSERS', 'open_traversal']

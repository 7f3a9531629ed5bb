"""High-level async API for narytree.

This module provides simple async functions for common tree operations.
Callbacks may be plain functions or coroutine functions. The nodes of one
level in ``map_tree_async`` and ``reduce_tree_async`` are processed
concurrently with ``asyncio.gather``; results keep child order.
"""

import asyncio
import inspect
from typing import Any, AsyncIterator, Callable, Iterable, List, Optional, Tuple, Union

from .._common.config import DepthConfig, TraversalConfig, TraversalStrategy
from .._common.cursor import Visit
from .._common.paths import Path
from ..core.node import Node
from ..core.tree import Tree, resolve_walk_root
from ..sync.api import iter_post_order
from .core.collector import AsyncDataCollector, AsyncValueCollector
from .core.traverser import (
    AsyncImmutableTraverser,
    AsyncMutableTraverser,
    AsyncTreeTraverser,
)

Source = Union[Tree, Node]


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def traverse_async(source: Source,
                   mutable: bool = False,
                   path: Iterable[int] = (),
                   max_depth: Optional[int] = None,
                   min_depth: int = 0,
                   yield_control: bool = True,
                   config: Optional[TraversalConfig] = None) -> AsyncTreeTraverser:
    """Start an async traversal.

    Args:
        source: Tree or Node to walk
        mutable: If True, yield NodeHandles that allow edits mid-walk
        path: Alternative root inside ``source``
        max_depth: Do not descend below this depth
        min_depth: Do not yield nodes shallower than this depth
        yield_control: Hand control to the event loop before each visit
        config: Full configuration; overrides the other keyword arguments

    Returns:
        An AsyncImmutableTraverser or AsyncMutableTraverser

    Example:
        >>> async with traverse_async(tree) as walk:
        ...     async for node in walk:
        ...         print(node.value)
    """
    if config is None:
        config = TraversalConfig(
            strategy=TraversalStrategy.of(mutable=mutable, asynchronous=True),
            depth=DepthConfig(min_depth=min_depth, max_depth=max_depth),
            yield_control=yield_control,
        )
    traverser_class = AsyncMutableTraverser if mutable else AsyncImmutableTraverser
    return traverser_class(source, path=path, config=config)


def traverse_with_paths_async(source: Source, path: Iterable[int] = (),
                              **kwargs) -> AsyncIterator[Visit]:
    """Async read-only traversal yielding Visit records (node, path, depth)."""
    return traverse_async(source, mutable=False, path=path, **kwargs).visits()


async def collect_values_async(source: Source, path: Iterable[int] = (), **kwargs) -> List[Any]:
    """Return node values in pre-order."""
    return [node.value async for node in traverse_async(source, path=path, **kwargs)]


async def collect_tree_data_async(source: Source,
                                  collector: Optional[AsyncDataCollector] = None,
                                  path: Iterable[int] = (),
                                  **kwargs) -> List[Any]:
    """Traverse read-only and collect data from every visit."""
    collector = collector or AsyncValueCollector()
    return await collector.process_stream(traverse_with_paths_async(source, path=path, **kwargs))


async def for_each_async(source: Source,
                         func: Callable[[Node], Any],
                         path: Iterable[int] = ()) -> None:
    """Call ``func`` on every node in post-order, awaiting it when needed.

    Calls happen one at a time so the post-order sequence is preserved.
    """
    for node in iter_post_order(source, path):
        await _maybe_await(func(node))


async def _levels(root: Node,
                  enter: Optional[Callable[[Node, Any], Any]] = None,
                  base: Any = None) -> List[List[Tuple[Node, int, Any]]]:
    """Split the tree into levels of ``(node, parent_position, entry)``.

    ``parent_position`` indexes the previous level; entries come from
    ``enter(node, parent_entry)``, gathered one level at a time.
    """
    levels = []
    level = [(root, -1)]
    entries = [base]
    while level:
        if enter is not None:
            entries = await asyncio.gather(
                *(_maybe_await(enter(node, entries[parent] if parent >= 0 else base))
                  for node, parent in level))
        else:
            entries = [None] * len(level)
        levels.append([(node, parent, entry)
                       for (node, parent), entry in zip(level, entries)])
        level = [(child, position)
                 for position, (node, _) in enumerate(level)
                 for child in node.children()]
    return levels


async def _fold_levels(levels: List[List[Tuple[Node, int, Any]]],
                       leave: Callable[[Node, Any, List[Any]], Any]) -> Any:
    """Run ``leave(node, entry, child_results)`` bottom-up, one gathered level at a time."""
    child_results = [[] for _ in levels[-1]]
    for depth in range(len(levels) - 1, -1, -1):
        level = levels[depth]
        results = await asyncio.gather(
            *(_maybe_await(leave(node, entry, child_results[position]))
              for position, (node, _, entry) in enumerate(level)))
        if depth == 0:
            return results[0]
        child_results = [[] for _ in levels[depth - 1]]
        for (_, parent, _), result in zip(level, results):
            child_results[parent].append(result)


async def map_tree_async(source: Source,
                         func: Callable[..., Any],
                         path: Iterable[int] = (),
                         order: str = "pre",
                         pre: Optional[Callable[[Node, Any], Any]] = None,
                         base: Any = None) -> Node:
    """Build a new tree with the same shape whose values are ``func(node)``.

    With ``order="pre"`` a node's value is computed before its children's;
    with ``order="post"`` after them. Nodes of one level are mapped
    concurrently. ``pre`` and ``base`` work as in the sync ``map_tree``.
    """
    root, _, _ = resolve_walk_root(source, path)
    if order == "post":
        async def leave(node, entry, children):
            value = await _maybe_await(func(node) if pre is None else func(node, entry))
            return Node(value, children)
        return await _fold_levels(await _levels(root, pre, base), leave)
    if order != "pre":
        raise ValueError(f"order must be 'pre' or 'post', got {order!r}")
    if pre is not None:
        raise ValueError("a pre hook needs order='post'")

    mapped_root = None
    level = [(root, None)]
    while level:
        values = await asyncio.gather(*(_maybe_await(func(node)) for node, _ in level))
        next_level = []
        for (node, parent), value in zip(level, values):
            mapped = Node(value)
            if parent is None:
                mapped_root = mapped
            else:
                parent.add_child(mapped)
            next_level.extend((child, mapped) for child in node.children())
        level = next_level
    return mapped_root


async def reduce_tree_async(source: Source,
                            func: Callable[..., Any],
                            path: Iterable[int] = (),
                            pre: Optional[Callable[[Node, Any], Any]] = None,
                            base: Any = None) -> Any:
    """Fold the tree bottom-up; ``func(node, child_results)`` may be async.

    With a ``pre`` hook, ``func`` is called as
    ``func(node, pre_result, child_results)``.
    """
    root, _, _ = resolve_walk_root(source, path)
    if pre is None:
        return await _fold_levels(await _levels(root), lambda node, _, results: func(node, results))
    return await _fold_levels(await _levels(root, pre, base), func)


async def count_nodes_async(source: Source, **kwargs) -> int:
    """Count nodes reached by an async read-only traversal."""
    count = 0
    async for _ in traverse_async(source, **kwargs):
        count += 1
    return count


async def find_nodes_async(source: Source,
                           predicate: Callable[[Node], Any],
                           **kwargs) -> List[Node]:
    """Return the nodes, in pre-order, for which ``predicate`` is true.

    ``predicate`` may be a coroutine function.
    """
    found = []
    async for node in traverse_async(source, **kwargs):
        if await _maybe_await(predicate(node)):
            found.append(node)
    return found


async def get_leaf_nodes_async(source: Source, **kwargs) -> List[Node]:
    """Return the nodes that have no children, in pre-order."""
    return await find_nodes_async(source, lambda node: node.is_leaf(), **kwargs)


async def get_tree_paths_async(source: Source, **kwargs) -> List[Path]:
    """Return the path of every node, in pre-order."""
    return [visit.path async for visit in traverse_with_paths_async(source, **kwargs)]


__all__ = [
    'traverse_async',
    'traverse_with_paths_async',
    'collect_values_async',
    'collect_tree_data_async',
    'for_each_async',
    'map_tree_async',
    'reduce_tree_async',
    'count_nodes_async',
    'find_nodes_async',
    'get_leaf_nodes_async',
    'get_tree_paths_async',
]

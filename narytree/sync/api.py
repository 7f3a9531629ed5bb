"""High-level API for narytree.

This module provides simple, functional interfaces for common tree
operations. These functions wrap the traverser classes for ease of use in
simple cases. Every function accepts either a Tree or a bare Node.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar, Union

from .._common.config import DepthConfig, TraversalConfig, TraversalStrategy
from .._common.cursor import Visit
from .._common.paths import Path
from ..core.node import Node
from ..core.tree import Tree, resolve_walk_root
from .core.collector import DataCollector, ValueCollector
from .core.traverser import ImmutableTraverser, MutableTraverser, TreeTraverser

R = TypeVar('R')
Source = Union[Tree, Node]


def traverse(source: Source,
             mutable: bool = False,
             path: Iterable[int] = (),
             max_depth: Optional[int] = None,
             min_depth: int = 0,
             config: Optional[TraversalConfig] = None) -> TreeTraverser:
    """Simple interface for synchronous traversal.

    Args:
        source: Tree or Node to walk
        mutable: If True, yield NodeHandles that allow edits mid-walk
        path: Alternative root inside ``source``
        max_depth: Do not descend below this depth
        min_depth: Do not yield nodes shallower than this depth
        config: Full configuration; overrides the depth arguments

    Returns:
        An ImmutableTraverser or MutableTraverser

    Example:
        >>> for node in traverse(tree):
        ...     print(node.value)
    """
    if config is None:
        config = TraversalConfig(
            strategy=TraversalStrategy.of(mutable=mutable),
            depth=DepthConfig(min_depth=min_depth, max_depth=max_depth),
        )
    traverser_class = MutableTraverser if mutable else ImmutableTraverser
    return traverser_class(source, path=path, config=config)


def traverse_with_paths(source: Source, path: Iterable[int] = (), **kwargs) -> Iterator[Visit]:
    """Read-only traversal yielding Visit records (node, path, depth)."""
    return traverse(source, mutable=False, path=path, **kwargs).visits()


def collect_values(source: Source, path: Iterable[int] = (), **kwargs) -> List[Any]:
    """Return node values in pre-order."""
    return [node.value for node in traverse(source, path=path, **kwargs)]


def collect_tree_data(source: Source,
                      collector: Optional[DataCollector] = None,
                      path: Iterable[int] = (),
                      **kwargs) -> List[Any]:
    """Traverse read-only and collect data from every visit.

    Args:
        source: Tree or Node to walk
        collector: What to collect (defaults to node values)
        path: Alternative root inside ``source``
        **kwargs: Depth options (see traverse)

    Returns:
        List of collected items, in pre-order
    """
    collector = collector or ValueCollector()
    return collector.process(traverse_with_paths(source, path=path, **kwargs))


def iter_post_order(source: Source, path: Iterable[int] = ()) -> Iterator[Node]:
    """Yield nodes in post-order (children before their parent).

    The nodes are live references, so values may be edited as they come
    out; a node's children are all yielded before the node itself.
    """
    root, _, _ = resolve_walk_root(source, path)
    stack = [(root, 0)]
    while stack:
        node, next_child = stack[-1]
        if next_child < node.children_len():
            stack[-1] = (node, next_child + 1)
            stack.append((node.child(next_child), 0))
            continue
        stack.pop()
        yield node


def for_each(source: Source, func: Callable[[Node], None], path: Iterable[int] = ()) -> None:
    """Call ``func`` on every node in post-order."""
    for node in iter_post_order(source, path):
        func(node)


def _fold(root: Node,
          leave: Callable[[Node, Any, List[Any]], Any],
          enter: Optional[Callable[[Node, Any], Any]] = None,
          base: Any = None) -> Any:
    """Depth-first fold with an explicit stack.

    ``enter(node, parent_entry)`` runs when a node is first reached (the
    root gets ``base``); ``leave(node, entry, child_results)`` runs once all
    of the node's children have been left.
    """
    stack = [(root, enter(root, base) if enter else None, [])]
    while True:
        node, entry, results = stack[-1]
        if len(results) < node.children_len():
            child = node.child(len(results))
            stack.append((child, enter(child, entry) if enter else None, []))
            continue
        stack.pop()
        result = leave(node, entry, results)
        if not stack:
            return result
        stack[-1][2].append(result)


def map_tree(source: Source,
             func: Callable[..., R],
             path: Iterable[int] = (),
             order: str = "pre",
             pre: Optional[Callable[[Node, Any], Any]] = None,
             base: Any = None) -> Node:
    """Build a new tree with the same shape whose values are ``func(node)``.

    Args:
        source: Tree or Node to map; it is left structurally untouched
        func: Called once per node
        path: Alternative root inside ``source``
        order: ``"pre"`` calls ``func`` on a node before its children,
            ``"post"`` after them
        pre: With ``order="post"``, a hook ``pre(node, parent_result)`` run
            top-down (the root receives ``base``); ``func`` is then called
            as ``func(node, pre_result)``
        base: What the root's ``pre`` call receives

    Raises:
        ValueError: On an unknown ``order``, or a ``pre`` hook without
            ``order="post"``
    """
    root, _, _ = resolve_walk_root(source, path)
    if order == "post":
        if pre is None:
            return _fold(root, lambda node, _, children: Node(func(node), children))
        return _fold(root, lambda node, entry, children: Node(func(node, entry), children),
                     enter=pre, base=base)
    if order != "pre":
        raise ValueError(f"order must be 'pre' or 'post', got {order!r}")
    if pre is not None:
        raise ValueError("a pre hook needs order='post'")

    mapped_root = None
    stack = [(root, None)]
    while stack:
        node, parent = stack.pop()
        mapped = Node(func(node))
        if parent is None:
            mapped_root = mapped
        else:
            parent.add_child(mapped)
        stack.extend((child, mapped) for child in reversed(node.children()))
    return mapped_root


def reduce_tree(source: Source,
                func: Callable[..., R],
                path: Iterable[int] = (),
                pre: Optional[Callable[[Node, Any], Any]] = None,
                base: Any = None) -> R:
    """Fold the tree bottom-up.

    ``func(node, child_results)`` is called in post-order and receives the
    results of the node's children in child order. With a ``pre`` hook,
    ``pre(node, parent_result)`` runs top-down first (the root receives
    ``base``) and ``func`` is called as ``func(node, pre_result, child_results)``.

    Example:
        >>> reduce_tree(tree, lambda n, results: n.value + sum(results))
    """
    root, _, _ = resolve_walk_root(source, path)
    if pre is None:
        return _fold(root, lambda node, _, results: func(node, results))
    return _fold(root, func, enter=pre, base=base)


def cascade(source: Source,
            base: R,
            func: Callable[[Node, R], R],
            path: Iterable[int] = ()) -> Node:
    """Walk top-down, passing each node its parent's result.

    ``func(node, parent_result)`` is called in pre-order; the root receives
    ``base``. ``func`` may edit the node's value.

    Returns:
        The root node the walk started at
    """
    root, _, _ = resolve_walk_root(source, path)
    stack = [(root, base)]
    while stack:
        node, inherited = stack.pop()
        result = func(node, inherited)
        stack.extend((child, result) for child in reversed(node.children()))
    return root


def count_nodes(source: Source, **kwargs) -> int:
    """Count nodes reached by a read-only traversal."""
    return sum(1 for _ in traverse(source, **kwargs))


def find_nodes(source: Source, predicate: Callable[[Node], bool], **kwargs) -> List[Node]:
    """Return the nodes, in pre-order, for which ``predicate`` is true."""
    return [node for node in traverse(source, **kwargs) if predicate(node)]


def get_leaf_nodes(source: Source, **kwargs) -> List[Node]:
    """Return the nodes that have no children, in pre-order."""
    return find_nodes(source, lambda node: node.is_leaf(), **kwargs)


def get_tree_paths(source: Source, **kwargs) -> List[Path]:
    """Return the path of every node, in pre-order."""
    return [visit.path for visit in traverse_with_paths(source, **kwargs)]


def get_tree_stats(source: Source, **kwargs) -> Dict[str, Any]:
    """Summarize the tree's shape.

    Returns:
        Dictionary with total_nodes, leaf_nodes, max_depth and max_children
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'max_children': 0,
    }
    for visit in traverse_with_paths(source, **kwargs):
        stats['total_nodes'] += 1
        children = visit.node.children_len()
        if children == 0:
            stats['leaf_nodes'] += 1
        stats['max_depth'] = max(stats['max_depth'], visit.depth)
        stats['max_children'] = max(stats['max_children'], children)
    return stats


__all__ = [
    'traverse',
    'traverse_with_paths',
    'collect_values',
    'collect_tree_data',
    'iter_post_order',
    'for_each',
    'map_tree',
    'reduce_tree',
    'cascade',
    'count_nodes',
    'find_nodes',
    'get_leaf_nodes',
    'get_tree_paths',
    'get_tree_stats',
]

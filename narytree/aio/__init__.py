"""Asynchronous implementation of narytree traversal.

Async traversers are single-threaded cooperative sequences: each
``__anext__`` suspends once, then performs exactly one visit.
"""

# Core abstractions
from .core import (
    AsyncTreeTraverser,
    AsyncImmutableTraverser,
    AsyncMutableTraverser,
    create_async_traverser,
    AsyncDataCollector,
    AsyncValueCollector,
    AsyncPathCollector,
    AsyncCustomCollector,
)

# High-level API
from .api import (
    traverse_async,
    traverse_with_paths_async,
    collect_values_async,
    collect_tree_data_async,
    for_each_async,
    map_tree_async,
    reduce_tree_async,
    count_nodes_async,
    find_nodes_async,
    get_leaf_nodes_async,
    get_tree_paths_async,
)

# Configuration (re-exported from _common)
from .._common.config import (
    TraversalConfig,
    TraversalStrategy,
    DepthConfig,
)

__all__ = [
    # Core abstractions
    'AsyncTreeTraverser',
    'AsyncImmutableTraverser',
    'AsyncMutableTraverser',
    'create_async_traverser',
    # Collectors
    'AsyncDataCollector',
    'AsyncValueCollector',
    'AsyncPathCollector',
    'AsyncCustomCollector',
    # Configuration
    'TraversalConfig',
    'TraversalStrategy',
    'DepthConfig',
    # High-level API
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

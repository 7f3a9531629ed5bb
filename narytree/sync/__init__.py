"""Synchronous implementation of narytree traversal.

All components here run on the caller's thread: each ``next()`` call
performs exactly one visit and never suspends.
"""

# Core components
from ..core import Node, node, Tree, NodeHandle
from .core.traverser import (
    TreeTraverser,
    ImmutableTraverser,
    MutableTraverser,
    create_traverser,
)
from .core.collector import (
    DataCollector,
    ValueCollector,
    PathCollector,
    DepthCollector,
    ChildCountCollector,
    FullNodeCollector,
    CustomCollector,
)

# Configuration
from .._common.config import (
    TraversalConfig,
    TraversalStrategy,
    DepthConfig,
)

# High-level API
from .api import (
    traverse,
    traverse_with_paths,
    collect_values,
    collect_tree_data,
    iter_post_order,
    for_each,
    map_tree,
    reduce_tree,
    cascade,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_paths,
    get_tree_stats,
)

__all__ = [
    # Core
    'Node',
    'node',
    'Tree',
    'NodeHandle',
    'TreeTraverser',
    'ImmutableTraverser',
    'MutableTraverser',
    'create_traverser',
    'DataCollector',
    'ValueCollector',
    'PathCollector',
    'DepthCollector',
    'ChildCountCollector',
    'FullNodeCollector',
    'CustomCollector',
    # Config
    'TraversalConfig',
    'TraversalStrategy',
    'DepthConfig',
    # API
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

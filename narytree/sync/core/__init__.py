"""Core synchronous traversal components."""

from .traverser import (
    TreeTraverser,
    ImmutableTraverser,
    MutableTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    ValueCollector,
    PathCollector,
    DepthCollector,
    ChildCountCollector,
    FullNodeCollector,
    CustomCollector,
)

__all__ = [
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
]

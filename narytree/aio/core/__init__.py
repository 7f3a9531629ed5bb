"""Core abstractions for async tree traversal.

The async traversers share the pre-order cursor and the Node/Tree model
with the sync package; only the driving loop differs.
"""

from .traverser import (
    AsyncTreeTraverser,
    AsyncImmutableTraverser,
    AsyncMutableTraverser,
    create_async_traverser,
)
from .collector import (
    AsyncDataCollector,
    AsyncValueCollector,
    AsyncPathCollector,
    AsyncCustomCollector,
)

__all__ = [
    # Traversers
    'AsyncTreeTraverser',
    'AsyncImmutableTraverser',
    'AsyncMutableTraverser',
    'create_async_traverser',
    # Collectors
    'AsyncDataCollector',
    'AsyncValueCollector',
    'AsyncPathCollector',
    'AsyncCustomCollector',
]

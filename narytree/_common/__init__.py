"""Common components shared between sync and aio implementations.

This internal package contains non-I/O code that is identical between
both implementations. It should NOT be imported directly by users.

Components here include:
- Configuration classes (TraversalConfig, TraversalStrategy)
- Child-index path helpers
- The pre-order cursor both traverser families drive

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .config import (
    Access,
    ExecutionMode,
    TraversalStrategy,
    DepthConfig,
    TraversalConfig,
)
from .paths import Path, ROOT, normalize, parent_of, child_of

__all__ = [
    'Access',
    'ExecutionMode',
    'TraversalStrategy',
    'DepthConfig',
    'TraversalConfig',
    'Path',
    'ROOT',
    'normalize',
    'parent_of',
    'child_of',
]

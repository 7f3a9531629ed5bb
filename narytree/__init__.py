"""narytree - n-ary trees with mutable and async pre-order traversal.

narytree provides an owned tree of arbitrary arity (Node, Tree) and four
traversal strategies over it that all visit in pre-order depth-first order:

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from narytree.sync import traverse

Asynchronous:
    from narytree.aio import traverse_async

Either, by strategy:
    tree.traverse(TraversalStrategy.MUTABLE_ASYNC)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Mutable strategies hand out a NodeHandle per visit; edits made through it
before the next step shape the rest of the walk.
"""

import logging

__version__ = "0.1.0"

from .core import Node, node, Tree, NodeHandle
from .exceptions import (
    TreeError,
    IndexOutOfBounds,
    PathNotFound,
    EmptyTree,
    CycleError,
    StaleHandleError,
)
from ._common.config import (
    Access,
    ExecutionMode,
    TraversalStrategy,
    DepthConfig,
    TraversalConfig,
)
from ._common.cursor import Visit
from ._common.paths import parent_of
from .traversal import open_traversal

# Re-export submodules for convenient access
from . import sync
from . import aio

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Node",
    "node",
    "Tree",
    "NodeHandle",
    "Visit",
    "parent_of",
    "TreeError",
    "IndexOutOfBounds",
    "PathNotFound",
    "EmptyTree",
    "CycleError",
    "StaleHandleError",
    "Access",
    "ExecutionMode",
    "TraversalStrategy",
    "DepthConfig",
    "TraversalConfig",
    "open_traversal",
    "sync",
    "aio",
]

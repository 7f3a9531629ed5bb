"""Testing utilities for narytree consumers."""

from .fixtures import (
    SAMPLE_POST_ORDER,
    SAMPLE_PRE_ORDER,
    TraversalRecorder,
    build_node,
    build_tree,
    chain_tree,
    drain,
    drain_async,
    sample_tree,
)

__all__ = [
    'SAMPLE_POST_ORDER',
    'SAMPLE_PRE_ORDER',
    'TraversalRecorder',
    'build_node',
    'build_tree',
    'chain_tree',
    'drain',
    'drain_async',
    'sample_tree',
]

"""Configuration re-export for convenient access.

This module re-exports configuration components from the _common package.
"""

from ._common.config import (
    Access,
    ExecutionMode,
    TraversalStrategy,
    DepthConfig,
    TraversalConfig,
)

__all__ = [
    'Access',
    'ExecutionMode',
    'TraversalStrategy',
    'DepthConfig',
    'TraversalConfig',
]

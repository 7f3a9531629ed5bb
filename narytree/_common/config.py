"""Configuration system for narytree traversals.

This module defines how callers pick a traversal strategy and bound the walk.
It is shared by the sync and aio packages and must not import from either.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Access(Enum):
    """What a traversal hands to the caller at each visit."""
    READ_ONLY = "read_only"   # Node references, no edit handle
    MUTABLE = "mutable"       # NodeHandle with exclusive edit rights


class ExecutionMode(Enum):
    """How a traversal is driven."""
    SYNC = "sync"     # Iterator, runs on the caller's thread
    ASYNC = "async"   # Async iterator, suspends between visits


class TraversalStrategy(Enum):
    """The four traversal behaviors.

    Every strategy visits nodes in pre-order depth-first order; they differ
    only in access and execution mode.
    """
    IMMUTABLE_SYNC = (Access.READ_ONLY, ExecutionMode.SYNC)
    MUTABLE_SYNC = (Access.MUTABLE, ExecutionMode.SYNC)
    IMMUTABLE_ASYNC = (Access.READ_ONLY, ExecutionMode.ASYNC)
    MUTABLE_ASYNC = (Access.MUTABLE, ExecutionMode.ASYNC)

    @property
    def access(self) -> Access:
        return self.value[0]

    @property
    def mode(self) -> ExecutionMode:
        return self.value[1]

    @property
    def mutable(self) -> bool:
        return self.access is Access.MUTABLE

    @property
    def asynchronous(self) -> bool:
        return self.mode is ExecutionMode.ASYNC

    @classmethod
    def of(cls, mutable: bool = False, asynchronous: bool = False) -> 'TraversalStrategy':
        """Pick the strategy for a pair of axis flags."""
        access = Access.MUTABLE if mutable else Access.READ_ONLY
        mode = ExecutionMode.ASYNC if asynchronous else ExecutionMode.SYNC
        return cls((access, mode))

    @classmethod
    def parse(cls, value) -> 'TraversalStrategy':
        """Accept a strategy member or its name ("mutable_sync", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(
                f"Unknown traversal strategy: {value}. "
                f"Choose from: {', '.join(m.name.lower() for m in cls)}"
            ) from None


@dataclass
class DepthConfig:
    """Configuration for depth-based bounding of a walk.

    Depth is relative to the traversal root (root = 0).
    """

    min_depth: int = 0                  # Nodes shallower than this are walked but not yielded
    max_depth: Optional[int] = None     # Nodes deeper than this are never reached

    def should_yield(self, depth: int) -> bool:
        """Check if a node at this depth is handed to the caller."""
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of a node at this depth are descended into."""
        if self.max_depth is None:
            return True
        return depth < self.max_depth


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal.

    ``yield_control`` only matters for async strategies: when True the
    traverser hands control back to the event loop before computing each
    visit.
    """

    strategy: TraversalStrategy = TraversalStrategy.IMMUTABLE_SYNC
    depth: DepthConfig = field(default_factory=DepthConfig)
    yield_control: bool = True

    @classmethod
    def for_strategy(cls, mutable: bool = False, asynchronous: bool = False,
                     **kwargs) -> 'TraversalConfig':
        """Create a config from the two axis flags."""
        return cls(strategy=TraversalStrategy.of(mutable, asynchronous), **kwargs)

    @classmethod
    def shallow(cls, max_depth: int = 1, **kwargs) -> 'TraversalConfig':
        """Create a config that stops descending below ``max_depth``."""
        return cls(depth=DepthConfig(max_depth=max_depth), **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        return errors

    def ensure_valid(self) -> 'TraversalConfig':
        """Raise ValueError listing every problem found by validate()."""
        errors = self.validate()
        if errors:
            raise ValueError("Invalid traversal config: " + "; ".join(errors))
        return self


__all__ = [
    'Access',
    'ExecutionMode',
    'TraversalStrategy',
    'DepthConfig',
    'TraversalConfig',
]

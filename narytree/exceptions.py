"""Error kinds raised by narytree.

Every structural or path-addressed operation reports failure by raising one
of these. They are input errors: retrying without corrected input fails the
same way.
"""

from typing import Optional, Sequence


class TreeError(Exception):
    """Base class for all narytree errors."""
    pass


class IndexOutOfBounds(TreeError, IndexError):
    """A child index exceeds the current child count of a node."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"child index {index} out of range for node with {length} children")


class PathNotFound(TreeError, LookupError):
    """A path references a node that does not exist at some depth.

    Attributes:
        path: The full path that was requested
        depth: Position in ``path`` where resolution failed
    """

    def __init__(self, path: Sequence[int], depth: Optional[int] = None):
        self.path = tuple(path)
        self.depth = depth
        where = f" (failed at depth {depth})" if depth is not None else ""
        super().__init__(f"no node at path {list(self.path)}{where}")


class EmptyTree(TreeError):
    """An operation requiring a root was invoked on a tree without one."""

    def __init__(self, message: str = "tree has no root"):
        super().__init__(message)


class CycleError(TreeError, ValueError):
    """Attaching a node would make it its own ancestor or give it a second owner."""
    pass


class StaleHandleError(TreeError, RuntimeError):
    """A NodeHandle was used after its traversal moved past the node."""
    pass


__all__ = [
    'TreeError',
    'IndexOutOfBounds',
    'PathNotFound',
    'EmptyTree',
    'CycleError',
    'StaleHandleError',
]

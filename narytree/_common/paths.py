"""Child-index paths.

A path is a sequence of child indices leading from a root to a node; the
empty path addresses the root itself. Paths are normalized to tuples so they
can be compared, hashed and stored in visit records.
"""

from typing import Iterable, Tuple

Path = Tuple[int, ...]

ROOT: Path = ()


def normalize(path: Iterable[int]) -> Path:
    """Turn any iterable of indices into a Path tuple.

    Raises:
        TypeError: If an element is not an integer
    """
    result = tuple(path)
    for index in result:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"path elements must be integers, got {index!r}")
    return result


def parent_of(path: Iterable[int]) -> Path:
    """Return the path of the parent of ``path``.

    Raises:
        ValueError: If ``path`` addresses the root
    """
    path = normalize(path)
    if not path:
        raise ValueError("the root path has no parent")
    return path[:-1]


def split(path: Iterable[int]) -> Tuple[Path, int]:
    """Split a non-root path into (parent path, child index)."""
    path = normalize(path)
    return parent_of(path), path[-1]


def child_of(path: Iterable[int], index: int) -> Path:
    """Return the path of child ``index`` under ``path``."""
    return normalize(path) + (index,)

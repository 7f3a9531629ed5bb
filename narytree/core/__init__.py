"""Core data model for narytree.

Node and Tree are shared by the sync and aio packages; NodeHandle is the
edit handle mutable traversals hand out.
"""

from .node import Node, node
from .tree import Tree
from .handle import NodeHandle

__all__ = [
    "Node",
    "node",
    "Tree",
    "NodeHandle",
]

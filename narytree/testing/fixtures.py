"""Test fixtures for narytree consumers.

These helpers build canned trees and record what a traversal handed out,
so test suites of projects using narytree don't need to rebuild them.
"""

from typing import Any, List, Sequence, Tuple, Union

from ..core.handle import NodeHandle
from ..core.node import Node, node
from ..core.tree import Tree

# (value, [children...]) nested shape, e.g. ("A", [("B", []), ("C", [])])
TreeShape = Tuple[Any, Sequence['TreeShape']]


def build_node(shape: Union[TreeShape, Any]) -> Node:
    """Build a node graph from a nested ``(value, [children])`` shape.

    A bare value (anything that is not a 2-tuple) becomes a leaf.
    """
    if isinstance(shape, tuple) and len(shape) == 2 and isinstance(shape[1], (list, tuple)):
        value, children = shape
        return Node(value, [build_node(child) for child in children])
    return Node(shape)


def build_tree(shape: Union[TreeShape, Any]) -> Tree:
    """Build a Tree from a nested ``(value, [children])`` shape."""
    return Tree(build_node(shape))


def sample_tree() -> Tree:
    """A three-level tree with uneven fan-out.

    Structure:
        10
        ├── 20
        │   ├── 40
        │   ├── 50
        │   └── 60
        └── 30
            ├── 70
            └── 80

    Pre-order: 10, 20, 40, 50, 60, 30, 70, 80
    """
    return Tree(node(10,
                     node(20, node(40), node(50), node(60)),
                     node(30, node(70), node(80))))


SAMPLE_PRE_ORDER = [10, 20, 40, 50, 60, 30, 70, 80]
SAMPLE_POST_ORDER = [40, 50, 60, 20, 70, 80, 30, 10]


def chain_tree(length: int) -> Tree:
    """A single branch of ``length`` nodes with values 0..length-1."""
    root = Node(0)
    current = root
    for value in range(1, length):
        child = Node(value)
        current.add_child(child)
        current = child
    return Tree(root)


class TraversalRecorder:
    """Records what a traversal handed out.

    Accepts Nodes, NodeHandles and Visit records alike.

    Example:
        recorder = TraversalRecorder()
        for handle in tree.traverse(TraversalStrategy.MUTABLE_SYNC):
            recorder.record(handle)
        assert recorder.values == ["A", "B", "C"]
    """

    def __init__(self):
        self.values: List[Any] = []
        self.paths: List[Tuple[int, ...]] = []

    def record(self, item: Any) -> Any:
        if isinstance(item, NodeHandle):
            self.values.append(item.value)
            self.paths.append(item.path)
        elif isinstance(item, Node):
            self.values.append(item.value)
        else:
            self.values.append(item.node.value)
            self.paths.append(item.path)
        return item

    def __len__(self) -> int:
        return len(self.values)


def drain(traverser) -> List[Any]:
    """Consume a sync traverser and return the values it visited."""
    recorder = TraversalRecorder()
    for item in traverser:
        recorder.record(item)
    return recorder.values


async def drain_async(traverser) -> List[Any]:
    """Consume an async traverser and return the values it visited."""
    recorder = TraversalRecorder()
    async for item in traverser:
        recorder.record(item)
    return recorder.values

"""The pre-order state machine shared by every traversal strategy.

PreOrderCursor keeps the walk as plain data: a stack with one frame per node
on the current branch. Each call to ``step()`` produces exactly one Visit (or
None once exhausted) and never suspends, so sync and async traversers can
both drive it and each visit is atomic.

Every frame remembers, by identity, the children it has handed out and the
siblings still queued behind them. Child lists are re-read whenever a node
reports a change to them, which is what makes edits applied between steps
visible:

- children appended to the node just visited are walked;
- a descendant removed before it is reached is skipped;
- a queued sibling is walked wherever it has moved to, and a child already
  handed out is never handed out again;
- new children placed after the first queued sibling still attached (or,
  when none is left, after the last child already handed out) are walked;
- a node put in place of another by ``replace_child`` stands in for it, so
  replacing an ancestor or a visited node adds nothing to the walk;
- a node detached right after its visit is not descended into.

Visit paths are rebuilt from the live stack after any edit, so they stay
correct after earlier siblings of an ancestor are removed or inserted.

This module is import-safe from ``narytree.core``: it only duck-types nodes.
"""

from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

from .config import DepthConfig
from .paths import Path

if TYPE_CHECKING:
    from ..core.node import Node
    from ..core.tree import Tree


class EditClock:
    """Counts structural edits made to any node.

    Nodes tick it on every child-list change; the cursor compares readings
    to reuse a parent's visit path while nothing has been edited.
    """

    ticks = 0

    @classmethod
    def tick(cls) -> None:
        cls.ticks += 1


class Visit(NamedTuple):
    """One step of a traversal: the node plus where it was reached."""
    node: 'Node'
    path: Path
    depth: int


class RootSlot:
    """The place the traversal root lives: a tree, a parent node, or nowhere.

    ``ancestors`` lists the nodes from the top of the walked graph down to
    the parent of the traversal root (empty when the root is the top). Used
    to decide whether the root is still attached when the cursor is about to
    descend into it, to rebuild visit paths, and by NodeHandle to detach or
    replace the root.
    """

    def __init__(self, tree: Optional['Tree'] = None, ancestors: Sequence['Node'] = ()):
        self.tree = tree
        self.ancestors = list(ancestors)

    @property
    def parent(self) -> Optional['Node']:
        return self.ancestors[-1] if self.ancestors else None

    def holds(self, node: 'Node') -> bool:
        if self.parent is not None:
            return self.parent.index_of(node) is not None
        if self.tree is not None:
            return not self.tree.is_empty() and self.tree.root() is node
        return True

    def release(self, node: 'Node') -> bool:
        """Detach ``node`` from this slot. Returns False when there is nothing to detach from."""
        if not self.holds(node):
            return False
        if self.parent is not None:
            self.parent.remove_child(self.parent.index_of(node))
            return True
        if self.tree is not None:
            self.tree.take_root()
            return True
        return False

    def replace(self, node: 'Node', replacement: 'Node') -> bool:
        """Put ``replacement`` where ``node`` is. Returns False when ``node`` has no owner."""
        if not self.holds(node):
            return False
        if self.parent is not None:
            self.parent.replace_child(self.parent.index_of(node), replacement)
            return True
        if self.tree is not None:
            self.tree.set_root(replacement)
            return True
        return False


def _locate(parent: 'Node', child: 'Node', hint: int) -> Optional[int]:
    """Index of ``child`` under ``parent``, trying ``hint`` first."""
    children = parent._children
    if 0 <= hint < len(children) and children[hint] is child:
        return hint
    return parent.index_of(child)


class _Frame:
    """Walk state for one node on the current branch."""

    __slots__ = ('node', 'index', 'depth', 'started', 'pruned',
                 'queue', 'head', 'handed', 'version', 'path', 'clock')

    def __init__(self, node: 'Node', index: int, depth: int):
        self.node = node
        self.index = index          # position under the parent frame's node, last seen
        self.depth = depth
        self.started = False
        self.pruned = False
        self.queue: Optional[List[Tuple['Node', int]]] = None   # siblings still to hand out
        self.head = 0
        self.handed: Dict[int, 'Node'] = {}                       # id -> child already handed out
        self.version = -1
        self.path: Optional[Path] = None    # visit path, valid while EditClock reads clock
        self.clock = -1

    def advance(self) -> Tuple[Optional['Node'], int]:
        """Hand out the next unvisited child, reading the live child list."""
        node = self.node
        if self.queue is None:
            self.queue = [(child, index) for index, child in enumerate(node._children)]
            self.version = node._version
        elif node._version != self.version:
            self._requeue()

        if self.head >= len(self.queue):
            return None, -1
        child, index = self.queue[self.head]
        self.head += 1
        self.handed[id(child)] = child
        return child, index

    def _requeue(self) -> None:
        """Rebuild the queue after the child list changed.

        A child put in place of another through ``replace_child`` stands in
        for the node it displaced: it counts as handed out if that node was,
        and as queued if that node was.
        """
        children = self.node._children
        waiting = {id(child) for child, _ in self.queue[self.head:]}
        roles = []
        boundary = None
        last_handed = -1
        for index, child in enumerate(children):
            role = self._role(child, waiting)
            if role == 'handed':
                self.handed[id(child)] = child
                last_handed = index
            elif role == 'waiting' and boundary is None:
                boundary = index
            roles.append(role)
        if boundary is None:
            boundary = last_handed + 1

        self.queue = [(child, index) for index, (child, role) in enumerate(zip(children, roles))
                      if role == 'waiting' or (role is None and index >= boundary)]
        self.head = 0
        self.version = self.node._version

    def _role(self, child: 'Node', waiting: Set[int]) -> Optional[str]:
        seen = set()
        while child is not None and id(child) not in seen:
            key = id(child)
            if key in self.handed:
                return 'handed'
            if key in waiting:
                return 'waiting'
            seen.add(key)
            child = child._replaced() if child._replaced is not None else None
        return None


class PreOrderCursor:
    """Lazily walks a node graph in pre-order depth-first order.

    Args:
        root: Node the walk starts at
        slot: Where ``root`` lives; defaults to a detached root
        depth: Depth bounds for yielding and descending
        base_path: Path of ``root`` below the first of ``slot.ancestors``

    The cursor is single-use: once exhausted or closed, ``step()`` keeps
    returning None.
    """

    def __init__(self,
                 root: 'Node',
                 slot: Optional[RootSlot] = None,
                 depth: Optional[DepthConfig] = None,
                 base_path: Path = ()):
        self.slot = slot or RootSlot()
        self.depth_config = depth or DepthConfig()
        self._base_path = list(base_path)
        self._pending: Optional['Node'] = root
        self._stack: List[_Frame] = []
        self._closed = False
        self.generation = 0
        self.visited = 0

    @property
    def finished(self) -> bool:
        return self._closed

    @property
    def frontier_depth(self) -> int:
        """Number of frames currently held (0 once exhausted or closed)."""
        return len(self._stack)

    @property
    def current(self) -> Optional[_Frame]:
        """Frame of the node produced by the last step, if the walk is still on it."""
        if self._closed or not self._stack or self._stack[-1].started:
            return None
        return self._stack[-1]

    def parent_of_current(self) -> Optional['Node']:
        """Return the node the current node was reached through, or None for the root."""
        if self.current is None or len(self._stack) < 2:
            return None
        return self._stack[-2].node

    def on_branch(self, node: 'Node') -> bool:
        """Check whether ``node`` is the current node or one of its ancestors."""
        return (any(frame.node is node for frame in self._stack)
                or any(ancestor is node for ancestor in self.slot.ancestors))

    def prune_current(self) -> None:
        """Do not descend into the node produced by the last step."""
        frame = self.current
        if frame is not None:
            frame.pruned = True

    def step(self) -> Optional[Visit]:
        """Advance to the next node to hand out.

        Returns:
            The next Visit, or None when the walk is exhausted
        """
        if self._closed:
            return None
        self.generation += 1

        if self._pending is not None:
            root, self._pending = self._pending, None
            frame = _Frame(root, self._base_path[-1] if self._base_path else 0, 0)
            self._stack.append(frame)
            if self.depth_config.should_yield(0):
                return self._emit(frame)

        while self._stack:
            frame = self._stack[-1]
            if not frame.started:
                frame.started = True
                if frame.pruned or not self._attached(frame) \
                        or not self.depth_config.should_explore(frame.depth):
                    self._stack.pop()
                    continue

            child, index = frame.advance()
            if child is None:
                self._stack.pop()
                continue

            child_frame = _Frame(child, index, frame.depth + 1)
            self._stack.append(child_frame)
            if self.depth_config.should_yield(child_frame.depth):
                return self._emit(child_frame)

        self.close()
        return None

    def close(self) -> None:
        """Release all walk state; the cursor is exhausted afterwards."""
        self._stack.clear()
        self._pending = None
        self._closed = True

    def _emit(self, frame: _Frame) -> Visit:
        self.visited += 1
        parent = self._stack[-2] if len(self._stack) >= 2 else None
        if parent is not None and parent.path is not None and parent.clock == EditClock.ticks:
            frame.path = parent.path + (frame.index,)
        else:
            frame.path = self._live_path()
        frame.clock = EditClock.ticks
        return Visit(frame.node, frame.path, frame.depth)

    def _live_path(self) -> Path:
        """Path of the top frame, re-located edge by edge from the walk's top node.

        An edge whose child is no longer attached keeps its last known index.
        """
        path = []
        ancestors = self.slot.ancestors
        for position, ancestor in enumerate(ancestors):
            child = ancestors[position + 1] if position + 1 < len(ancestors) else self._stack[0].node
            found = _locate(ancestor, child, self._base_path[position])
            if found is not None:
                self._base_path[position] = found
            path.append(self._base_path[position])
        if not ancestors and self._base_path:
            path.extend(self._base_path)
        for parent, frame in zip(self._stack, self._stack[1:]):
            found = _locate(parent.node, frame.node, frame.index)
            if found is not None:
                frame.index = found
            path.append(frame.index)
        return tuple(path)

    def _attached(self, frame: _Frame) -> bool:
        if len(self._stack) < 2:
            return self.slot.holds(frame.node)
        parent = self._stack[-2]
        found = _locate(parent.node, frame.node, frame.index)
        if found is None:
            return False
        frame.index = found
        return True


def slot_for(top: 'Node', path: Path, tree: Optional['Tree'] = None) -> RootSlot:
    """Build the RootSlot of the node at ``path`` below ``top``; ``path`` must exist."""
    if not path:
        return RootSlot(tree=tree)
    ancestors = [top]
    for index in path[:-1]:
        ancestors.append(ancestors[-1].child(index))
    return RootSlot(tree=tree, ancestors=ancestors)


__all__ = ['EditClock', 'Visit', 'RootSlot', 'PreOrderCursor', 'slot_for']

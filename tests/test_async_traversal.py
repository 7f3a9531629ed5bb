"""Tests for the async traversers.

The async walk must produce the same sequence as the sync one, honor the
same mutation rules, and release its state on cancellation.
"""

import asyncio

import pytest

from narytree import (
    DepthConfig,
    NodeHandle,
    StaleHandleError,
    TraversalConfig,
    TraversalStrategy,
    Tree,
    TreeError,
    node,
)
from narytree.aio import (
    AsyncImmutableTraverser,
    AsyncMutableTraverser,
    create_async_traverser,
)
from narytree.testing import SAMPLE_PRE_ORDER, drain_async


@pytest.mark.asyncio
async def test_async_pre_order(tree):
    assert await drain_async(AsyncImmutableTraverser(tree)) == SAMPLE_PRE_ORDER


@pytest.mark.asyncio
async def test_async_visits_with_paths(abc_tree):
    visits = [v async for v in AsyncImmutableTraverser(abc_tree).visits()]
    assert [(v.node.value, v.path, v.depth) for v in visits] == [
        ("A", (), 0),
        ("B", (0,), 1),
        ("C", (1,), 1),
    ]


@pytest.mark.asyncio
async def test_async_depth_bounds(tree):
    config = TraversalConfig(strategy=TraversalStrategy.IMMUTABLE_ASYNC,
                             depth=DepthConfig(max_depth=1))
    assert await drain_async(AsyncImmutableTraverser(tree, config=config)) == [10, 20, 30]


@pytest.mark.asyncio
async def test_async_without_yield_control(tree):
    config = TraversalConfig(strategy=TraversalStrategy.IMMUTABLE_ASYNC, yield_control=False)
    assert await drain_async(AsyncImmutableTraverser(tree, config=config)) == SAMPLE_PRE_ORDER


@pytest.mark.asyncio
async def test_async_mutable_append_and_remove(abc_tree):
    seen = []
    async for handle in AsyncMutableTraverser(abc_tree):
        assert isinstance(handle, NodeHandle)
        seen.append(handle.value)
        if handle.value == "A":
            handle.remove_child(1)
            handle.add_child("D")
    assert seen == ["A", "B", "D"]


@pytest.mark.asyncio
async def test_async_detach_current(tree):
    seen = []
    async for handle in AsyncMutableTraverser(tree):
        seen.append(handle.value)
        if handle.value == 30:
            handle.detach()
    assert seen == [10, 20, 40, 50, 60, 30]
    assert tree.size() == 5


@pytest.mark.asyncio
async def test_async_handle_goes_stale(abc_tree):
    walk = AsyncMutableTraverser(abc_tree)
    first = await walk.__anext__()
    await walk.__anext__()
    with pytest.raises(StaleHandleError):
        first.set_value("late")


@pytest.mark.asyncio
async def test_aclose_after_first_visit(tree):
    before = tree.copy()
    walk = AsyncMutableTraverser(tree)
    handle = await walk.__anext__()
    assert handle.value == 10
    await walk.aclose()

    assert walk.exhausted
    assert walk.frontier_depth == 0
    assert tree == before
    with pytest.raises(StopAsyncIteration):
        await walk.__anext__()


@pytest.mark.asyncio
async def test_async_context_manager_releases_walk(tree):
    async with tree.traverse(TraversalStrategy.IMMUTABLE_ASYNC) as walk:
        async for n in walk:
            if n.value == 40:
                break
    assert walk.exhausted
    assert walk.frontier_depth == 0


@pytest.mark.asyncio
async def test_edits_before_cancel_persist(abc_tree):
    async with AsyncMutableTraverser(abc_tree) as walk:
        async for handle in walk:
            handle.add_child("kept")
            break
    assert [c.value for c in abc_tree.root().children()] == ["B", "C", "kept"]


@pytest.mark.asyncio
async def test_task_cancellation_closes_walk():
    tree = Tree(node(0, *(node(i) for i in range(1, 1000))))
    walk = AsyncImmutableTraverser(tree)
    seen = []
    started = asyncio.Event()

    async def consume():
        async for n in walk:
            seen.append(n.value)
            started.set()

    task = asyncio.create_task(consume())
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert walk.exhausted
    assert walk.frontier_depth == 0
    assert 0 < len(seen) < 1000
    assert seen == list(range(len(seen)))


@pytest.mark.asyncio
async def test_walks_interleave_with_other_tasks(tree):
    order = []

    async def walker():
        async for n in AsyncImmutableTraverser(tree):
            order.append(("walk", n.value))

    async def ticker():
        for i in range(3):
            order.append(("tick", i))
            await asyncio.sleep(0)

    await asyncio.gather(walker(), ticker())
    walked = [value for kind, value in order if kind == "walk"]
    assert walked == SAMPLE_PRE_ORDER
    assert order.index(("tick", 1)) < order.index(("walk", 80))


@pytest.mark.asyncio
async def test_create_async_traverser(abc_tree):
    assert isinstance(create_async_traverser(abc_tree, mutable=True), AsyncMutableTraverser)
    walk = abc_tree.traverse("immutable_async", path=[1])
    assert await drain_async(walk) == ["C"]


@pytest.mark.asyncio
async def test_async_moving_current_later_visits_skipped_sibling():
    tree = Tree(node("A", node("B"), node("C"), node("D")))
    seen = []
    async for handle in AsyncMutableTraverser(tree):
        seen.append(handle.value)
        if handle.value == "C":
            tree.insert_at([], tree.remove_at([1]))
    assert seen == ["A", "B", "C", "D"]


@pytest.mark.asyncio
async def test_async_detach_then_append_keeps_unvisited_siblings():
    tree = Tree(node("A", node("B"), node("C"), node("D")))
    seen = []
    async for handle in AsyncMutableTraverser(tree):
        seen.append((handle.value, handle.path))
        if handle.value == "C":
            handle.detach()
            tree.insert_at([], "E")
    assert seen == [("A", ()), ("B", (0,)), ("C", (1,)), ("D", (1,)), ("E", (2,))]


@pytest.mark.asyncio
async def test_async_replacing_ancestor_finishes_its_subtree():
    tree = Tree(node("R", node("A", node("B"), node("C")), node("D")))
    seen = []
    async for handle in AsyncMutableTraverser(tree):
        seen.append(handle.value)
        if handle.value == "B":
            tree.replace_at([0], node("X"))
    assert seen == ["R", "A", "B", "C", "D"]
    assert [c.value for c in tree.root().children()] == ["X", "D"]


@pytest.mark.asyncio
async def test_async_paths_follow_removal_before_an_ancestor():
    tree = Tree(node("R", node("X"), node("A", node("B"), node("C"))))
    seen = []
    async for handle in AsyncMutableTraverser(tree):
        seen.append((handle.value, handle.path))
        assert tree.get(handle.path) is handle.node
        if handle.value == "B":
            tree.remove_at([0])
    assert seen == [("R", ()), ("X", (0,)), ("A", (1,)), ("B", (1, 0)), ("C", (0, 1))]


@pytest.mark.asyncio
async def test_async_replace_current_after_tree_detached_it(abc_tree):
    seen = []
    async for handle in AsyncMutableTraverser(abc_tree):
        seen.append(handle.value)
        if handle.value == "B":
            abc_tree.remove_at([0])
            with pytest.raises(TreeError):
                handle.replace_at([], node("Z"))
    assert seen == ["A", "B", "C"]

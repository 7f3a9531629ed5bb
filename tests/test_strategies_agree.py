"""All four strategies must visit the same nodes in the same order."""

import pytest

from narytree import TraversalStrategy, Tree, node
from narytree.testing import TraversalRecorder, build_tree


def _shapes():
    yield Tree.with_root("solo")
    yield build_tree(("r", [("a", [("a1", []), ("a2", [])]), ("b", []), ("c", [("c1", [("c2", [])])])]))
    yield Tree(node(0, *(node(i) for i in range(1, 30))))
    wide_and_deep = node(0)
    current = wide_and_deep
    for level in range(1, 6):
        siblings = [node((level, i)) for i in range(3)]
        current.with_children(siblings)
        current = siblings[1]
    yield Tree(wide_and_deep)


async def _walk(tree, strategy, path=()):
    recorder = TraversalRecorder()
    walk = tree.traverse(strategy, path=path)
    if strategy.asynchronous:
        async for item in walk:
            recorder.record(item)
    else:
        for item in walk:
            recorder.record(item)
    return recorder.values


@pytest.mark.asyncio
@pytest.mark.parametrize("tree", list(_shapes()), ids=["single", "nested", "wide", "mixed"])
async def test_strategies_produce_identical_sequences(tree):
    expected = [n.value for n in tree.root().iter_subtree()]
    for strategy in TraversalStrategy:
        assert await _walk(tree, strategy) == expected, strategy.name


@pytest.mark.asyncio
async def test_strategies_agree_on_sub_tree(tree):
    results = {strategy: await _walk(tree, strategy, path=[1]) for strategy in TraversalStrategy}
    assert set(map(tuple, results.values())) == {(30, 70, 80)}


@pytest.mark.asyncio
async def test_mutable_strategies_agree_under_edits():
    async def run(strategy):
        tree = build_tree(("A", [("B", [("B1", [])]), ("C", []), ("D", [])]))
        seen = []

        def edit(handle):
            seen.append(handle.value)
            if handle.value == "A":
                handle.add_child("E")
            elif handle.value == "B":
                handle.detach()
            elif handle.value == "C":
                handle.add_child("C1")

        walk = tree.traverse(strategy)
        if strategy.asynchronous:
            async for handle in walk:
                edit(handle)
        else:
            for handle in walk:
                edit(handle)
        return seen, tree

    sync_seen, sync_tree = await run(TraversalStrategy.MUTABLE_SYNC)
    async_seen, async_tree = await run(TraversalStrategy.MUTABLE_ASYNC)
    assert sync_seen == async_seen == ["A", "B", "C", "C1", "D", "E"]
    assert sync_tree == async_tree


@pytest.mark.slow
@pytest.mark.asyncio
async def test_strategies_agree_on_large_tree():
    root = node(0)
    frontier = [root]
    value = 1
    while value < 50_000:
        parent = frontier.pop(0)
        children = [node(value + i) for i in range(4)]
        parent.with_children(children)
        frontier.extend(children)
        value += 4
    tree = Tree(root)
    expected = [n.value for n in root.iter_subtree()]
    for strategy in TraversalStrategy:
        assert await _walk(tree, strategy) == expected, strategy.name

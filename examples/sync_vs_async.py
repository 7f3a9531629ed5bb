#!/usr/bin/env python3
"""
Side-by-side sync and async traversal of the same tree.

This example demonstrates:
- The four traversal strategies visiting in the same order
- Growing a tree while walking it with a mutable traverser
- Interleaving an async walk with other tasks
"""

import asyncio
import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from narytree import Tree, TraversalStrategy, node
from narytree.aio import traverse_async
from narytree.sync import get_tree_stats, traverse


def build_catalog() -> Tree:
    return Tree(node("catalog",
                     node("books", node("fiction"), node("history")),
                     node("music", node("jazz")),
                     node("games")))


def expand_sync(tree: Tree) -> None:
    """Give every top-level section a 'new arrivals' child while walking."""
    for handle in traverse(tree, mutable=True):
        if handle.depth == 1:
            handle.add_child(f"{handle.value}/new")
        print("  " * handle.depth + str(handle.value))


async def expand_async(tree: Tree) -> None:
    async for handle in traverse_async(tree, mutable=True):
        if handle.depth == 1:
            handle.add_child(f"{handle.value}/new")
        print("  " * handle.depth + str(handle.value))


async def heartbeat(stop: asyncio.Event) -> int:
    beats = 0
    while not stop.is_set():
        beats += 1
        await asyncio.sleep(0)
    return beats


async def walk_alongside_heartbeat(tree: Tree) -> None:
    stop = asyncio.Event()
    beat_task = asyncio.create_task(heartbeat(stop))
    count = 0
    async for _ in tree.traverse(TraversalStrategy.IMMUTABLE_ASYNC):
        count += 1
    stop.set()
    beats = await beat_task
    print(f"Visited {count} nodes while the heartbeat ran {beats} times")


def main():
    print("=" * 60)
    print("SYNC: mutable walk")
    print("=" * 60)
    sync_tree = build_catalog()
    start = time.perf_counter()
    expand_sync(sync_tree)
    print(f"Took {time.perf_counter() - start:.6f}s, stats: {get_tree_stats(sync_tree)}")

    print("\n" + "=" * 60)
    print("ASYNC: mutable walk")
    print("=" * 60)
    async_tree = build_catalog()
    start = time.perf_counter()
    asyncio.run(expand_async(async_tree))
    print(f"Took {time.perf_counter() - start:.6f}s")

    print("\nBoth walks built the same tree:", sync_tree == async_tree)

    print("\n" + "=" * 60)
    print("ASYNC: cooperative scheduling")
    print("=" * 60)
    asyncio.run(walk_alongside_heartbeat(sync_tree))


if __name__ == "__main__":
    main()

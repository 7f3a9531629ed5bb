"""Async data collectors for tree traversal.

Collectors extract data from each visit of an async traversal. The
custom collector accepts plain or coroutine functions.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Callable, List, Optional

from ..._common.cursor import Visit


class AsyncDataCollector(ABC):
    """Abstract base class for async data collectors.

    Collectors process visits during traversal to extract specific
    information and keep what they collected until ``reset()``.
    """

    def __init__(self):
        """Initialize collector with empty state."""
        self.reset()

    @abstractmethod
    async def collect(self, visit: Visit) -> Any:
        """Collect data from a single visit.

        Args:
            visit: The (node, path, depth) record of the visit

        Returns:
            Collected data (type depends on collector)
        """
        pass

    def reset(self) -> None:
        """Reset collector state.

        Called before starting a new traversal.
        """
        self.results: List[Any] = []

    def get_result(self) -> List[Any]:
        return self.results

    async def process_stream(self, visits: AsyncIterator[Visit]) -> List[Any]:
        """Process an entire stream of visits.

        Args:
            visits: Async iterator of Visit records

        Returns:
            Final collected result
        """
        self.reset()
        async for visit in visits:
            self.results.append(await self.collect(visit))
        return self.get_result()


class AsyncValueCollector(AsyncDataCollector):
    """Collects node payloads."""

    async def collect(self, visit: Visit) -> Any:
        return visit.node.value


class AsyncPathCollector(AsyncDataCollector):
    """Collects the path each node was reached at."""

    async def collect(self, visit: Visit) -> tuple:
        return visit.path


class AsyncCustomCollector(AsyncDataCollector):
    """Collector backed by a user function, sync or async."""

    def __init__(self, collect_func: Callable[[Visit], Any], name: Optional[str] = None):
        self.collect_func = collect_func
        self.name = name or getattr(collect_func, '__name__', 'custom')
        super().__init__()

    async def collect(self, visit: Visit) -> Any:
        result = self.collect_func(visit)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"AsyncCustomCollector({self.name})"

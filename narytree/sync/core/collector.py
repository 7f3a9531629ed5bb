"""Data collection strategies for narytree.

DataCollectors define what information to extract from each visit of a
traversal. This allows the same walk to collect different data based on
requirements.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ..._common.cursor import Visit


class DataCollector(ABC):
    """Abstract base class for data collection strategies.

    DataCollectors determine what information is extracted from each visit.
    They keep the collected items so ``get_result()`` can return the whole
    list once the walk is done.
    """

    def __init__(self):
        self.reset()

    @abstractmethod
    def collect(self, visit: Visit) -> Any:
        """Collect data from a single visit.

        Args:
            visit: The (node, path, depth) record of the visit

        Returns:
            Collected data (type depends on collector)
        """
        pass

    def reset(self) -> None:
        """Forget anything collected so far."""
        self.results: List[Any] = []

    def get_result(self) -> List[Any]:
        return self.results

    def process(self, visits) -> List[Any]:
        """Collect from every visit of an iterable of Visit records."""
        self.reset()
        for visit in visits:
            self.results.append(self.collect(visit))
        return self.get_result()


class ValueCollector(DataCollector):
    """Collects node payloads."""

    def collect(self, visit: Visit) -> Any:
        return visit.node.value


class PathCollector(DataCollector):
    """Collects the path each node was reached at."""

    def collect(self, visit: Visit) -> tuple:
        return visit.path


class DepthCollector(DataCollector):
    """Collects (value, depth) pairs, handy for indented listings."""

    def collect(self, visit: Visit) -> tuple:
        return (visit.node.value, visit.depth)


class ChildCountCollector(DataCollector):
    """Collects the number of immediate children of each node."""

    def collect(self, visit: Visit) -> int:
        return visit.node.children_len()


class FullNodeCollector(DataCollector):
    """Collects everything known about a visit in one dictionary."""

    def collect(self, visit: Visit) -> Dict[str, Any]:
        node = visit.node
        return {
            'value': node.value,
            'path': visit.path,
            'depth': visit.depth,
            'children': node.children_len(),
            'is_leaf': node.is_leaf(),
        }


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self, collect_func: Callable[[Visit], Any],
                 name: Optional[str] = None):
        """Initialize with custom collection function.

        Args:
            collect_func: Function(visit) -> Any
            name: Label used in repr
        """
        self.collect_func = collect_func
        self.name = name or getattr(collect_func, '__name__', 'custom')
        super().__init__()

    def collect(self, visit: Visit) -> Any:
        return self.collect_func(visit)

    def __repr__(self) -> str:
        return f"CustomCollector({self.name})"

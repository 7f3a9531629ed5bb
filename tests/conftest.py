"""Shared fixtures for the narytree test suite."""

import pytest

from narytree import Tree, node
from narytree.testing import sample_tree


@pytest.fixture
def tree():
    """The sample tree: 10(20(40, 50, 60), 30(70, 80))."""
    return sample_tree()


@pytest.fixture
def sample_root(tree):
    return tree.root()


@pytest.fixture
def abc_tree():
    """A(B, C): the smallest tree with siblings."""
    return Tree(node("A", node("B"), node("C")))


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large-tree tests excluded from the default run")

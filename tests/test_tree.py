"""Tests for Tree: root access and path-addressed mutation."""

import logging

import pytest

from narytree import CycleError, EmptyTree, Node, PathNotFound, Tree, node, parent_of
from narytree.sync import collect_values


class TestRootAccess:

    def test_with_root(self):
        tree = Tree.with_root(42)
        assert tree.root().value == 42
        assert tree.root().is_leaf()
        assert tree.root_mut() is tree.root()
        assert not tree.is_empty()

    def test_empty_tree(self):
        tree = Tree()
        assert tree.is_empty()
        assert tree.size() == 0
        assert tree.height() == 0
        with pytest.raises(EmptyTree):
            tree.root()
        with pytest.raises(EmptyTree):
            tree.root_mut()

    def test_root_must_be_a_node(self):
        with pytest.raises(TypeError):
            Tree("not a node")

    def test_root_mut_edits_are_visible(self):
        tree = Tree.with_root("a")
        tree.root_mut().add_child(Node("b"))
        assert tree.get([0]).value == "b"

    def test_take_and_set_root(self, tree):
        old = tree.take_root()
        assert old.value == 10
        assert tree.is_empty()
        assert tree.set_root(Node(1)) is None
        assert tree.root().value == 1

    def test_from_node(self, sample_root):
        assert Tree.from_node(sample_root).root() is sample_root


class TestInsert:

    def test_insert_under_root_returns_path(self, abc_tree):
        path = abc_tree.insert_at([], "D")
        assert path == (2,)
        assert abc_tree.get(path).value == "D"

    def test_insert_nested(self, tree):
        path = tree.insert_at([1, 0], 99)
        assert path == (1, 0, 0)
        assert tree.get([1, 0]).children_len() == 1

    def test_insert_subtree(self, abc_tree):
        subtree = node("X", node("Y"))
        abc_tree.insert_at([0], subtree)
        assert abc_tree.get([0, 0]) is subtree
        assert abc_tree.get([0, 0, 0]).value == "Y"

    def test_insert_missing_path(self, abc_tree):
        with pytest.raises(PathNotFound):
            abc_tree.insert_at([5], "D")
        assert abc_tree.size() == 3

    def test_insert_into_empty_tree(self):
        with pytest.raises(EmptyTree):
            Tree().insert_at([], "a")

    def test_insert_node_already_in_tree(self, abc_tree):
        with pytest.raises(CycleError):
            abc_tree.insert_at([0], abc_tree.get([1]))
        assert abc_tree.get([0]).is_leaf()


class TestRemove:

    def test_remove_leaf(self, abc_tree):
        removed = abc_tree.remove_at([1])
        assert removed.value == "C"
        assert [c.value for c in abc_tree.root().children()] == ["B"]

    def test_remove_subtree_detaches_descendants(self, tree):
        removed = tree.remove_at([0])
        assert removed.size() == 3
        assert tree.size() == 4
        assert not tree.contains(removed.child(0))

    def test_remove_root_empties_tree(self, abc_tree):
        removed = abc_tree.remove_at([])
        assert removed.value == "A"
        assert abc_tree.is_empty()

    def test_remove_missing(self, abc_tree):
        with pytest.raises(PathNotFound) as exc_info:
            abc_tree.remove_at([2])
        assert exc_info.value.path == (2,)
        with pytest.raises(PathNotFound):
            abc_tree.remove_at([0, 0])
        assert abc_tree.size() == 3

    def test_remove_from_empty_tree(self):
        with pytest.raises(EmptyTree):
            Tree().remove_at([0])

    def test_insert_then_remove_restores_tree(self, tree):
        before = tree.copy()
        path = tree.insert_at([1], node("new", node("leaf")))
        tree.remove_at(path)
        assert tree == before


class TestReplace:

    def test_replace_returns_previous(self, abc_tree):
        previous = abc_tree.replace_at([0], node("Z", node("Z1")))
        assert previous.value == "B"
        assert abc_tree.get([0, 0]).value == "Z1"

    def test_replace_root(self, abc_tree):
        previous = abc_tree.replace_at([], Node("R"))
        assert previous.value == "A"
        assert abc_tree.root().value == "R"
        assert abc_tree.size() == 1

    def test_replace_missing(self, abc_tree):
        with pytest.raises(PathNotFound):
            abc_tree.replace_at([3], Node("Z"))

    def test_replace_with_own_descendant(self, tree):
        with pytest.raises(CycleError):
            tree.replace_at([0], tree.get([0, 1]))
        assert tree.get([0]).value == 20

    def test_replacement_must_be_a_node(self, abc_tree):
        with pytest.raises(TypeError):
            abc_tree.replace_at([0], "Z")


class TestQueries:

    def test_path_of(self, tree):
        target = tree.get([1, 1])
        assert tree.path_of(target) == (1, 1)
        assert tree.path_of(tree.root()) == ()
        assert tree.path_of(Node(80)) is None
        assert Tree().path_of(target) is None

    def test_size_height_len(self, tree):
        assert tree.size() == 8
        assert len(tree) == 8
        assert tree.height() == 3

    def test_equality(self, tree):
        assert tree == tree.copy()
        assert Tree() == Tree()
        assert tree != Tree()

    def test_repr(self, abc_tree):
        assert repr(abc_tree) == "Tree(root='A', size=3)"
        assert repr(Tree()) == "Tree(empty)"


def test_mutations_are_logged(abc_tree, caplog):
    with caplog.at_level(logging.DEBUG, logger="narytree"):
        abc_tree.insert_at([], "D")
        abc_tree.remove_at([0])
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Inserted") for message in messages)
    assert any(message.startswith("Removed") for message in messages)


@pytest.mark.parametrize("path", [(1,), (0, 2), (1, 1)])
def test_remove_insert_round_trip(tree, path):
    before = tree.copy()
    subtree = tree.remove_at(path)
    assert tree.insert_at(parent_of(path), subtree) == path
    assert collect_values(tree) == collect_values(before)
    assert tree == before


def test_round_trip_of_inner_child_moves_it_last(tree):
    subtree = tree.remove_at([0, 0])
    tree.insert_at([0], subtree)
    assert [c.value for c in tree.get([0]).children()] == [50, 60, 40]
    assert tree.size() == 8


def test_insert_one_level_past_leaf(abc_tree):
    before = abc_tree.copy()
    with pytest.raises(PathNotFound):
        abc_tree.insert_at([0, 0], "X")
    assert abc_tree == before


def test_read_access_is_idempotent(tree):
    assert tree.root() is tree.root()
    first = [c.value for c in tree.root().children()]
    second = [c.value for c in tree.root().children()]
    assert first == second == [20, 30]

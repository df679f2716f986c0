"""Tests for the OverlapForest arena."""

import pytest

from timegrid_layout.core.forest import OverlapForest


@pytest.fixture
def chain():
    """0 -> 1 -> 2, settled at levels 0, 1, 2."""
    forest = OverlapForest(3)
    forest.settle(0, 0)
    forest.link(1, 0)
    forest.settle(1, 1)
    forest.link(2, 1)
    forest.settle(2, 2)
    return forest


class TestOverlapForest:
    def test_new_forest_is_all_roots(self):
        forest = OverlapForest(3)
        assert forest.size == 3
        assert forest.roots() == [0, 1, 2]
        assert all(forest.is_leaf(i) for i in range(3))
        assert forest.level(0) is None

    def test_link(self, chain):
        assert chain.parent(1) == 0
        assert chain.children(0) == (1,)
        assert not chain.is_leaf(0)
        assert chain.is_leaf(2)
        assert chain.roots() == [0]

    def test_link_with_release(self):
        forest = OverlapForest(3)
        forest.link(2, 0)
        forest.link(1, 0)
        forest.link(2, 1, release_from=0)
        assert forest.parent(2) == 1
        assert forest.children(0) == (1,)
        assert forest.children(1) == (2,)

    def test_release_from_unrelated_node_is_harmless(self):
        forest = OverlapForest(3)
        forest.link(1, 0, release_from=2)
        assert forest.children(0) == (1,)
        assert forest.children(2) == ()

    def test_children_is_a_copy(self, chain):
        kids = chain.children(0)
        assert isinstance(kids, tuple)
        assert chain.to_dict()["children"][0] == [1]

    def test_orders(self, chain):
        assert chain.pre_order() == [0, 1, 2]
        assert chain.post_order() == [2, 1, 0]

    def test_unsettled_order_raises(self):
        forest = OverlapForest(2)
        forest.settle(0, 0)
        with pytest.raises(RuntimeError, match="not settled"):
            forest.pre_order()

    def test_verify_integrity_ok(self, chain):
        chain.verify_integrity()

    def test_verify_detects_cycle(self):
        forest = OverlapForest(2)
        forest.link(1, 0)
        forest.link(0, 1)
        with pytest.raises(RuntimeError, match="Cycle"):
            forest.verify_integrity()

    def test_verify_detects_duplicate_child(self):
        forest = OverlapForest(2)
        forest.link(1, 0)
        forest.link(1, 0)
        with pytest.raises(RuntimeError, match="more than once"):
            forest.verify_integrity()

    def test_stale_listing_is_tolerated(self):
        # A node may stay listed under a former parent; only the parent
        # link itself has to be consistent.
        forest = OverlapForest(3)
        forest.link(2, 0)
        forest.link(2, 1)
        assert forest.parent(2) == 1
        assert forest.children(0) == (2,)
        forest.verify_integrity()

    def test_to_dict(self, chain):
        assert chain.to_dict() == {
            "parent": [None, 0, 1],
            "children": [[1], [2], []],
            "level": [0, 1, 2],
        }

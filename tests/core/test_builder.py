"""
Graph Builder Tests
===================

INVARIANTS TESTED:
1. One node per story, label falls back to id
2. One INVERTED edge per option, duplicates kept
3. Dangling targets are kept in the model but not in the projection
4. Building twice gives equal models
"""

import pytest

from backend.contracts.story import Story, Option
from backend.contracts.graph import GraphEdge
from backend.core.builder import GraphBuilder
from tests.fixtures import two_stories, branching_stories


@pytest.fixture
def builder():
    return GraphBuilder()


class TestNodes:

    def test_one_node_per_story(self, builder):
        stories = branching_stories()
        model = builder.build(stories)

        assert len(model.nodes) == len(stories)
        assert model.node_ids == tuple(s.id for s in stories)

    def test_label_falls_back_to_id(self, builder):
        model = builder.build(branching_stories())

        assert model.get_node("1-1").label == "Crossroads"
        assert model.get_node("2-2").label == "2-2"

    def test_empty_input(self, builder):
        model = builder.build(())

        assert model.nodes == ()
        assert model.edges == ()


class TestEdges:

    def test_edges_are_inverted(self, builder):
        """Option on 1-1 pointing at 1-2 becomes the edge 1-2 -> 1-1."""
        model = builder.build(two_stories())

        assert model.edges == (GraphEdge(source="1-2", destination="1-1"),)

    def test_one_edge_per_option_in_order(self, builder):
        stories = branching_stories()
        model = builder.build(stories)

        expected = tuple(
            GraphEdge(source=o.target, destination=s.id)
            for s in stories for o in s.options
        )
        assert model.edges == expected
        assert len(model.edges) == sum(len(s.options) for s in stories)

    def test_duplicate_options_are_parallel_edges(self, builder):
        stories = (
            Story(id="a", options=(Option(target="b"), Option(target="b", text="again"))),
            Story(id="b"),
        )
        model = builder.build(stories)

        assert model.edges.count(GraphEdge(source="b", destination="a")) == 2

        graph = GraphBuilder.to_networkx(model)
        assert graph.number_of_edges("b", "a") == 2

    def test_dangling_target_kept_in_model(self, builder):
        model = builder.build(branching_stories())

        assert GraphEdge(source="9-9", destination="2-1") in model.edges

    def test_projection_keeps_node_set_one_to_one(self, builder):
        model = builder.build(branching_stories())
        graph = GraphBuilder.to_networkx(model)

        assert list(graph.nodes) == list(model.node_ids)
        assert "9-9" not in graph
        assert graph.number_of_edges() == len(model.edges) - 1


class TestPurity:

    def test_rebuild_is_identical(self, builder):
        stories = branching_stories()

        assert builder.build(stories) == builder.build(stories)

    def test_accepts_any_iterable(self, builder):
        stories = branching_stories()

        assert builder.build(iter(stories)) == builder.build(list(stories))

"""
Property Tests for Graph and Layout Contracts
Verifies the builder and layout invariants over generated story sets.
"""

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from backend.contracts.story import Story, Option
from backend.contracts.events import NodeClicked, OptionActivated, DialogClosed, SelectionState
from backend.core.builder import GraphBuilder
from backend.core.layout import LayoutEngine
from backend.core.selection import SelectionController

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

story_ids = st.text(alphabet="0123456789-", min_size=1, max_size=4)


@composite
def story_sets(draw):
    """Stories with unique ids; option targets may dangle."""
    ids = draw(st.lists(story_ids, min_size=1, max_size=12, unique=True))
    targets = st.one_of(st.sampled_from(ids), story_ids)

    stories = []
    for story_id in ids:
        options = draw(st.lists(
            st.builds(Option, target=targets, text=st.one_of(st.none(), st.text(max_size=10))),
            max_size=4
        ))
        stories.append(Story(
            id=story_id,
            title=draw(st.one_of(st.none(), st.text(max_size=20))),
            options=tuple(options),
        ))
    return tuple(stories)


@composite
def story_sets_with_root(draw):
    stories = draw(story_sets())
    root = draw(st.sampled_from([s.id for s in stories]))
    return stories, root


# =============================================================================
# PROPERTY TESTS
# =============================================================================

@given(story_sets())
def test_node_count_matches_stories(stories):
    model = GraphBuilder().build(stories)

    assert len(model.nodes) == len(stories)
    assert len(set(model.node_ids)) == len(stories)
    assert set(model.node_ids) == {s.id for s in stories}


@given(story_sets())
def test_edge_count_matches_options(stories):
    model = GraphBuilder().build(stories)

    assert len(model.edges) == sum(len(s.options) for s in stories)
    pairs = [(o.target, s.id) for s in stories for o in s.options]
    assert [(e.source, e.destination) for e in model.edges] == pairs


@given(story_sets_with_root())
def test_layout_places_every_node_once(stories_root):
    stories, root = stories_root
    layout = LayoutEngine().compute(GraphBuilder().build(stories), root)

    placed = [p.node_id for p in layout.placements]
    assert sorted(placed) == sorted(s.id for s in stories)
    assert len({(p.x, p.y) for p in layout.placements}) == len(stories)


@given(story_sets_with_root())
def test_root_alone_at_depth_zero(stories_root):
    stories, root = stories_root
    layout = LayoutEngine().compute(GraphBuilder().build(stories), root)

    assert layout.layers[0] == (root,)
    assert all(p.depth > 0 for p in layout.placements if p.node_id != root)


@given(story_sets_with_root())
def test_layout_is_deterministic(stories_root):
    stories, root = stories_root
    model = GraphBuilder().build(stories)

    assert LayoutEngine().compute(model, root) == LayoutEngine().compute(model, root)


@given(story_sets(), st.lists(st.integers(min_value=0, max_value=2), max_size=20), st.data())
def test_selection_always_holds_a_known_story(stories, kinds, data):
    controller = SelectionController(stories)
    known = {s.id for s in stories}
    ids = st.one_of(st.sampled_from(sorted(known)), story_ids)

    for kind in kinds:
        if kind == 0:
            snapshot = controller.dispatch(NodeClicked(data.draw(ids)))
        elif kind == 1:
            snapshot = controller.dispatch(OptionActivated(data.draw(ids)))
        else:
            snapshot = controller.dispatch(DialogClosed())
            assert snapshot.state == SelectionState.IDLE

        if snapshot.is_open:
            assert snapshot.story.id in known
        else:
            assert snapshot.story is None

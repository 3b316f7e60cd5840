"""
View Contract Tests

TEST CATEGORIES:
================
1. Immutability - views cannot be mutated
2. Graph view - positions and flags come straight from the layout
3. Dialog view - labels fall back, order and line breaks are kept
4. Session chrome - loading, error and export button states
"""

import pytest
from dataclasses import FrozenInstanceError

from backend.contracts.events import SelectionSnapshot
from backend.contracts.session import LoadPhase
from backend.contracts.story import Story, Option
from backend.core.builder import GraphBuilder
from backend.core.layout import LayoutEngine
from frontend.dtos import AvailabilityState
from frontend.mapper import ViewMapper
from frontend.presentation.viewmodels import LOADING_MESSAGE
from frontend.visualization.mermaid import generate_mermaid, mermaid_id
from tests.fixtures import branching_stories


@pytest.fixture
def mapper():
    return ViewMapper()


@pytest.fixture
def stories():
    return branching_stories()


@pytest.fixture
def model(stories):
    return GraphBuilder().build(stories)


@pytest.fixture
def layout(model):
    return LayoutEngine().compute(model, "1-1")


class TestGraphView:

    def test_nodes_follow_layout(self, mapper, model, layout):
        view = mapper.map_graph(model, layout)
        placements = layout.placement_map()

        assert view.availability == AvailabilityState.PRESENT
        assert [n.node_id for n in view.nodes] == list(model.node_ids)
        for node in view.nodes:
            assert (node.x, node.y) == (placements[node.node_id].x, placements[node.node_id].y)

    def test_root_is_focal_point(self, mapper, model, layout):
        view = mapper.map_graph(model, layout)

        assert [n.node_id for n in view.nodes if n.is_focal_point] == ["1-1"]

    def test_selected_node_flagged(self, mapper, model, layout, stories):
        view = mapper.map_graph(model, layout, SelectionSnapshot.inspecting(stories[1]))

        assert view.selected_id == "2-1"
        assert [n.node_id for n in view.nodes if n.is_selected] == ["2-1"]

    def test_dangling_edge_not_renderable(self, mapper, model, layout):
        view = mapper.map_graph(model, layout)
        dangling = [e for e in view.edges if not e.is_renderable]

        assert [(e.source_id, e.target_id) for e in dangling] == [("9-9", "2-1")]

    def test_view_id_is_stable(self, mapper, model, layout):
        assert mapper.map_graph(model, layout).view_id == mapper.map_graph(model, layout).view_id

    def test_default_styles(self, mapper, model, layout):
        view = mapper.map_graph(model, layout)

        assert view.node_style.background_color == "#0074D9"
        assert view.node_style.font_size == 10
        assert view.edge_style.line_color == "#ccc"
        assert view.edge_style.arrow_shape == "triangle"

    def test_duplicate_ids_render_once(self, mapper):
        stories = [
            Story(id="1-1", title="Start", options=(Option(target="2-1"),)),
            Story(id="2-1", title="First"),
            Story(id="2-1", title="Second"),
        ]
        model = GraphBuilder().build(stories)
        layout = LayoutEngine().compute(model, "1-1")
        view = mapper.map_graph(model, layout)

        assert len(model.nodes) == 3
        assert sorted(p.node_id for p in layout.placements) == ["1-1", "2-1"]
        assert [(n.node_id, n.label) for n in view.nodes] == [("1-1", "Start"), ("2-1", "First")]

    def test_view_is_frozen(self, mapper, model, layout):
        view = mapper.map_graph(model, layout)

        with pytest.raises(FrozenInstanceError):
            view.nodes[0].x = 0.0


class TestDialogView:

    def test_dialog_content(self, mapper, stories):
        dialog = mapper.map_dialog(stories[0])

        assert dialog.title == "Crossroads"
        assert dialog.content_lines == ("Two paths split in the fog.", "One climbs, one descends.")
        assert [(o.target, o.label) for o in dialog.options] == [("2-1", "Climb"), ("2-2", "Descend")]

    def test_fallback_labels(self, mapper, stories):
        dialog = mapper.map_dialog(stories[2])

        assert dialog.title == "2-2"
        assert dialog.options[0].label == "3-1"

    def test_story_without_content(self, mapper):
        dialog = mapper.map_dialog(Story(id="bare"))

        assert dialog.content == ""
        assert dialog.options == ()

    def test_idle_selection_has_no_dialog(self, mapper):
        assert mapper.map_selection(SelectionSnapshot.idle()) is None


class TestChrome:

    def test_loading_banner(self, mapper):
        loading = mapper.map_loading(LoadPhase.LOADING)

        assert loading.message == LOADING_MESSAGE
        assert loading.is_blocking is True
        assert mapper.map_loading(LoadPhase.READY) is None

    def test_error_banner(self, mapper):
        assert mapper.map_error(None) is None
        assert mapper.map_error("Failed to load stories: boom").message.endswith("boom")

    @pytest.mark.parametrize("phase,availability", [
        (LoadPhase.LOADING, AvailabilityState.LOADING),
        (LoadPhase.READY, AvailabilityState.PRESENT),
        (LoadPhase.FAILED, AvailabilityState.MISSING),
        (LoadPhase.DISPOSED, AvailabilityState.UNKNOWN),
    ])
    def test_availability_follows_phase(self, mapper, phase, availability):
        assert mapper.map_availability(phase) == availability

    @pytest.mark.parametrize("phase,visible", [
        (LoadPhase.LOADING, False),
        (LoadPhase.READY, True),
        (LoadPhase.FAILED, False),
        (LoadPhase.DISPOSED, False),
    ])
    def test_export_button_only_when_ready(self, mapper, phase, visible):
        assert mapper.map_export_action(phase).is_visible is visible


class TestMermaid:

    def test_edges_and_labels(self, model):
        text = generate_mermaid(model, root_id="1-1", selected_id="2-1")

        assert text.splitlines()[0] == "graph BT"
        assert f'{mermaid_id("1-1")}["Crossroads"]:::story' in text
        assert f"{mermaid_id('2-1')} --> {mermaid_id('1-1')}" in text
        assert f"class {mermaid_id('1-1')} root;" in text
        assert f"class {mermaid_id('2-1')} selected;" in text

    def test_dangling_edges_skipped(self, model):
        assert "9_9" not in generate_mermaid(model)

    def test_quotes_escaped(self):
        model = GraphBuilder().build([Story(id="q", title='Say "hi"')])

        assert '#quot;hi#quot;' in generate_mermaid(model)

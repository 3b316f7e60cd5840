"""
Backend to View Mapper

Converts core graph/selection objects into read-only frontend views.

MAPPING BOUNDARY:
=================
This is the ONLY place where core objects become view models.

MAPPING RULES:
==============
1. Preserve layout and option ordering
2. Always include explicit availability
3. Fall back to ids where labels are missing, never invent text
"""

from __future__ import annotations
from typing import Optional
import hashlib

from backend.contracts.story import Story
from backend.contracts.graph import GraphModel, LayoutResult
from backend.contracts.events import SelectionSnapshot
from backend.contracts.session import LoadPhase
from frontend.dtos import AvailabilityState
from frontend.visualization.graph import GraphNode, GraphEdge, NetworkGraphView
from frontend.presentation.viewmodels import (
    OptionLinkViewModel, StoryDialogViewModel, LoadingStateViewModel,
    ErrorBannerViewModel, ExportActionViewModel, LOADING_MESSAGE
)


class ViewMapper:
    """
    Maps core objects to frontend views.

    SINGLE POINT OF CONVERSION:
    ===========================
    All core -> frontend conversion goes through this class.
    """

    # =========================================================================
    # GRAPH MAPPING
    # =========================================================================

    def map_graph(
        self,
        model: GraphModel,
        layout: LayoutResult,
        selection: Optional[SelectionSnapshot] = None
    ) -> NetworkGraphView:
        placements = layout.placement_map()
        selected_id = selection.story_id if selection else None

        nodes = []
        seen = set()
        for node in model.nodes:
            # Repeated story ids share one placement; the first record wins
            if node.id in seen:
                continue
            seen.add(node.id)
            placement = placements[node.id]
            nodes.append(GraphNode(
                node_id=node.id,
                x=placement.x,
                y=placement.y,
                width=placement.width,
                height=placement.height,
                label=node.label,
                depth=placement.depth,
                is_focal_point=node.id == layout.root_id,
                is_selected=node.id == selected_id,
                is_overflow=placement.is_overflow,
            ))

        edges = tuple(
            GraphEdge(
                edge_id=f"e{i}",
                source_id=edge.source,
                target_id=edge.destination,
                is_renderable=edge.source in placements and edge.destination in placements,
            )
            for i, edge in enumerate(model.edges)
        )

        return NetworkGraphView(
            view_id=self._view_id(layout),
            nodes=tuple(nodes),
            edges=edges,
            availability=AvailabilityState.PRESENT,
            selected_id=selected_id,
        )

    @staticmethod
    def _view_id(layout: LayoutResult) -> str:
        content = "|".join(f"{p.node_id}:{p.x}:{p.y}" for p in layout.placements)
        return "view_" + hashlib.sha256(content.encode('utf-8')).hexdigest()[:12]

    # =========================================================================
    # DIALOG MAPPING
    # =========================================================================

    def map_dialog(self, story: Story) -> StoryDialogViewModel:
        content = story.content or ""
        return StoryDialogViewModel(
            story_id=story.id,
            title=story.label,
            content=content,
            content_lines=tuple(content.splitlines()),
            options=tuple(
                OptionLinkViewModel(target=option.target, label=option.label, position=i)
                for i, option in enumerate(story.options)
            ),
        )

    def map_selection(self, snapshot: SelectionSnapshot) -> Optional[StoryDialogViewModel]:
        if not snapshot.is_open or snapshot.story is None:
            return None
        return self.map_dialog(snapshot.story)

    # =========================================================================
    # SESSION CHROME
    # =========================================================================

    def map_loading(self, phase: LoadPhase) -> Optional[LoadingStateViewModel]:
        if phase != LoadPhase.LOADING:
            return None
        return LoadingStateViewModel(message=LOADING_MESSAGE, progress=None, is_blocking=True)

    def map_error(self, message: Optional[str]) -> Optional[ErrorBannerViewModel]:
        if not message:
            return None
        return ErrorBannerViewModel(message=message)

    def map_availability(self, phase: LoadPhase) -> AvailabilityState:
        return {
            LoadPhase.LOADING: AvailabilityState.LOADING,
            LoadPhase.READY: AvailabilityState.PRESENT,
            LoadPhase.FAILED: AvailabilityState.MISSING,
            LoadPhase.DISPOSED: AvailabilityState.UNKNOWN,
        }[phase]

    def map_export_action(self, phase: LoadPhase) -> ExportActionViewModel:
        return ExportActionViewModel(label="Save as JPEG", is_visible=phase == LoadPhase.READY)

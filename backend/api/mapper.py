"""
API Mapper
==========

Transforms frontend view objects into JSON-ready dicts.
No smoothing: every field of the view is exposed as is.
"""
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Optional

from frontend.visualization.graph import NetworkGraphView
from frontend.presentation.viewmodels import (
    StoryDialogViewModel, LoadingStateViewModel, ErrorBannerViewModel, ExportActionViewModel
)
from ..contracts.events import SelectionSnapshot


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def map_graph_view(view: NetworkGraphView) -> Dict[str, Any]:
    """Map NetworkGraphView to GraphViewDTO."""
    return _plain(asdict(view))


def map_dialog(dialog: Optional[StoryDialogViewModel]) -> Optional[Dict[str, Any]]:
    if dialog is None:
        return None
    return _plain(asdict(dialog))


def map_selection(snapshot: SelectionSnapshot, dialog: Optional[StoryDialogViewModel]) -> Dict[str, Any]:
    """Map SelectionSnapshot (+ its dialog) to SelectionDTO."""
    return {
        "state": snapshot.state.value,
        "is_open": snapshot.is_open,
        "story_id": snapshot.story_id,
        "dialog": map_dialog(dialog),
    }


def map_chrome(
    loading: Optional[LoadingStateViewModel],
    error_banner: Optional[ErrorBannerViewModel],
    export_action: ExportActionViewModel
) -> Dict[str, Any]:
    """Map session chrome (banners, export button) to dicts."""
    return {
        "loading": _plain(asdict(loading)) if loading else None,
        "error_banner": _plain(asdict(error_banner)) if error_banner else None,
        "export_action": _plain(asdict(export_action)),
        "export_available": export_action.is_visible,
    }

"""
Graph Visualization Contracts

Responsibility:
Deterministic transformation of a laid-out story graph into a
renderable graph view. Styling lives here and nowhere in the core.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

from frontend.dtos import AvailabilityState


@dataclass(frozen=True)
class NodeStyle:
    background_color: str = "#0074D9"
    label_color: str = "#fff"
    text_outline_color: str = "#0074D9"
    text_outline_width: float = 2.0
    font_size: float = 10.0
    width: float = 40.0
    height: float = 40.0


@dataclass(frozen=True)
class EdgeStyle:
    width: float = 2.0
    line_color: str = "#ccc"
    arrow_shape: str = "triangle"
    arrow_color: str = "#ccc"
    curve_style: str = "bezier"


DEFAULT_NODE_STYLE = NodeStyle()
DEFAULT_EDGE_STYLE = EdgeStyle()


@dataclass(frozen=True)
class GraphNode:
    """Renderable graph node."""
    node_id: str
    x: float
    y: float
    width: float
    height: float
    label: str
    depth: int
    is_focal_point: bool  # the layout root
    is_selected: bool
    is_overflow: bool


@dataclass(frozen=True)
class GraphEdge:
    """Renderable graph edge."""
    edge_id: str
    source_id: str
    target_id: str
    is_renderable: bool  # False when an endpoint has no node


@dataclass(frozen=True)
class NetworkGraphView:
    """
    Pre-layouted network graph.
    Layout must be stable.
    """
    view_id: str
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]
    availability: AvailabilityState
    node_style: NodeStyle = DEFAULT_NODE_STYLE
    edge_style: EdgeStyle = DEFAULT_EDGE_STYLE
    selected_id: Optional[str] = None

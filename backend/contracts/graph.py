"""
Graph Contracts

Immutable graph model derived from the story collection, and the
layout result computed over it.

DIRECTION:
==========
Edges are INVERTED relative to the choices they come from:
an option on story S pointing at T yields the edge T -> S.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class GraphNode:
    """One node per story."""
    id: str
    label: str


@dataclass(frozen=True)
class GraphEdge:
    """One edge per option. No identity, no weight; duplicates allowed."""
    source: str
    destination: str


@dataclass(frozen=True)
class GraphModel:
    """Nodes and edges of one fetch cycle."""
    nodes: Tuple[GraphNode, ...] = field(default_factory=tuple)
    edges: Tuple[GraphEdge, ...] = field(default_factory=tuple)

    @property
    def node_ids(self) -> Tuple[str, ...]:
        return tuple(n.id for n in self.nodes)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


@dataclass(frozen=True)
class NodePlacement:
    """Position of one node after layout."""
    node_id: str
    depth: int
    index: int
    x: float
    y: float
    width: float
    height: float
    is_overflow: bool = False


@dataclass(frozen=True)
class BoundingBox:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


@dataclass(frozen=True)
class LayoutResult:
    """
    Complete layout of a GraphModel.

    Layers are ordered by depth; each layer lists node ids in
    placement order. The overflow layer (if any) is the last one.
    """
    root_id: str
    placements: Tuple[NodePlacement, ...]
    layers: Tuple[Tuple[str, ...], ...]
    overflow: Tuple[str, ...] = field(default_factory=tuple)

    def placement_map(self) -> Dict[str, NodePlacement]:
        return {p.node_id: p for p in self.placements}

    def depth_of(self, node_id: str) -> Optional[int]:
        placement = self.placement_map().get(node_id)
        return placement.depth if placement else None

    @property
    def bounding_box(self) -> BoundingBox:
        """Extent of all node footprints (empty layout -> zero box)."""
        if not self.placements:
            return BoundingBox(0.0, 0.0, 0.0, 0.0)
        return BoundingBox(
            x1=min(p.x - p.width / 2 for p in self.placements),
            y1=min(p.y - p.height / 2 for p in self.placements),
            x2=max(p.x + p.width / 2 for p in self.placements),
            y2=max(p.y + p.height / 2 for p in self.placements),
        )

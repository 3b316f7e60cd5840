"""
Layout Engine
=============

Breadth-first layered placement rooted at a fixed start node.

DEPTH ASSIGNMENT:
=================
1. Directed BFS from the root along source -> destination.
2. Nodes the BFS missed but that touch a placed node (either direction)
   hang one layer below their first placed neighbour. Repeated until a
   pass makes no progress.
3. Whatever is left (components cut off from the root) goes into a
   single overflow layer after the deepest one.

POSITIONING:
============
Layers are spread along y, nodes of a layer evenly along x, both
never closer than the largest node footprint. The result is scaled
about the centre by spacing_factor, then y is negated so deeper
layers sit ABOVE the root.

INVARIANT: compute(model, root) is a PURE FUNCTION.
Same model and root -> bit-identical coordinates.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import chain
from typing import Dict, List, Optional, Tuple
import logging

import networkx as nx

from ..contracts.graph import GraphModel, NodePlacement, LayoutResult
from .builder import GraphBuilder

logger = logging.getLogger(__name__)

DEFAULT_ROOT_ID = "1-1"


@dataclass(frozen=True)
class LayoutConfig:
    """Layout tuning. Defaults match the stock viewer styling."""
    padding: float = 80.0
    spacing_factor: float = 0.6
    viewport_width: float = 1280.0
    viewport_height: float = 800.0
    node_width: float = 40.0
    node_height: float = 40.0
    font_size: float = 10.0
    text_outline_width: float = 2.0
    node_dimensions_include_labels: bool = True
    invert_depth_axis: bool = True

    # Average glyph advance relative to font size
    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.2


class LayoutEngine:
    """
    Computes LayoutResults.

    Holds only configuration; every call recomputes from scratch.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self._config = config or LayoutConfig()

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def compute(self, model: GraphModel, root_id: str = DEFAULT_ROOT_ID) -> LayoutResult:
        graph = GraphBuilder.to_networkx(model)

        layers, overflow = self._assign_layers(graph, root_id)
        placements = self._place(graph, layers, set(overflow))

        logger.debug(
            "Layout of %d nodes: %d layers, %d overflow",
            len(placements), len(layers), len(overflow)
        )

        return LayoutResult(
            root_id=root_id,
            placements=placements,
            layers=tuple(tuple(layer) for layer in layers),
            overflow=tuple(overflow),
        )

    # =========================================================================
    # DEPTHS
    # =========================================================================

    def _assign_layers(
        self,
        graph: nx.MultiDiGraph,
        root_id: str
    ) -> Tuple[List[List[str]], List[str]]:
        depth: Dict[str, int] = {}
        layers: List[List[str]] = []

        if root_id in graph:
            for level, members in enumerate(nx.bfs_layers(graph, [root_id])):
                layers.append(list(members))
                for node in members:
                    depth[node] = level
        else:
            logger.warning(
                "Root %r not among %d stories; every node goes to overflow",
                root_id, graph.number_of_nodes()
            )

        pending = [n for n in graph.nodes if n not in depth]
        progress = True
        while pending and progress:
            progress = False
            remaining = []
            for node in pending:
                anchor = next(
                    (nb for nb in chain(graph.predecessors(node), graph.successors(node))
                     if nb in depth),
                    None
                )
                if anchor is None:
                    remaining.append(node)
                    continue
                level = depth[anchor] + 1
                while len(layers) <= level:
                    layers.append([])
                layers[level].append(node)
                depth[node] = level
                progress = True
            pending = remaining

        overflow = pending
        if overflow:
            layers.append(list(overflow))

        return layers, overflow

    # =========================================================================
    # POSITIONS
    # =========================================================================

    def footprint(self, label: str) -> Tuple[float, float]:
        """Approximate rendered (width, height) of a node with its label."""
        cfg = self._config
        if not cfg.node_dimensions_include_labels:
            return cfg.node_width, cfg.node_height

        outline = 2 * cfg.text_outline_width
        text_w = len(label) * cfg.font_size * cfg.char_width_ratio + outline
        text_h = cfg.font_size * cfg.line_height_ratio + outline
        return max(cfg.node_width, text_w), max(cfg.node_height, text_h)

    def _place(
        self,
        graph: nx.MultiDiGraph,
        layers: List[List[str]],
        overflow: set
    ) -> Tuple[NodePlacement, ...]:
        cfg = self._config

        sizes = {
            node: self.footprint(graph.nodes[node].get("label", node))
            for node in graph.nodes
        }
        min_distance = max((max(w, h) for w, h in sizes.values()), default=0.0)

        box_w = max(cfg.viewport_width - 2 * cfg.padding, 0.0)
        box_h = max(cfg.viewport_height - 2 * cfg.padding, 0.0)
        cx = cfg.padding + box_w / 2
        cy = cfg.padding + box_h / 2

        layer_count = len(layers)
        row_gap = max(box_h / (layer_count + 1), min_distance)

        placements = []
        for level, members in enumerate(layers):
            size = len(members)
            col_gap = max(box_w / (size + 1), min_distance)
            y = cy + (level + 1 - (layer_count + 1) / 2) * row_gap
            y = cy + (y - cy) * cfg.spacing_factor
            if cfg.invert_depth_axis:
                y = -y

            for index, node in enumerate(members):
                x = cx + (index + 1 - (size + 1) / 2) * col_gap
                x = cx + (x - cx) * cfg.spacing_factor
                width, height = sizes[node]
                placements.append(NodePlacement(
                    node_id=node,
                    depth=level,
                    index=index,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                    is_overflow=node in overflow,
                ))

        return tuple(placements)

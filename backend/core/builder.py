"""
Graph Builder
=============

Turns the flat story collection into a directed graph model.

INVERSION:
==========
Each option on story S pointing at T becomes the edge T -> S.
The inversion happens HERE and nowhere else, so the layout stage
stays a generic layered BFS over whatever direction it is given.

GUARANTEES:
===========
- One node per story, in input order
- One edge per option, in input order (no dedup, no cycle checks)
- Pure: same input, equal output
"""

from __future__ import annotations
from typing import Iterable

import networkx as nx

from ..contracts.story import Story
from ..contracts.graph import GraphNode, GraphEdge, GraphModel


class GraphBuilder:
    """Builds GraphModels and their networkx projections."""

    def build(self, stories: Iterable[Story]) -> GraphModel:
        stories = tuple(stories)

        nodes = tuple(
            GraphNode(id=story.id, label=story.label)
            for story in stories
        )

        edges = tuple(
            GraphEdge(source=option.target, destination=story.id)
            for story in stories
            for option in story.options
        )

        return GraphModel(nodes=nodes, edges=edges)

    @staticmethod
    def to_networkx(model: GraphModel) -> nx.MultiDiGraph:
        """
        Project a model onto a MultiDiGraph.

        Parallel edges survive as separate keys. A repeated story id
        keeps its first label. Edges touching an id
        that is not a story are dropped from the projection: the node
        set must stay 1:1 with the stories.
        """
        graph = nx.MultiDiGraph()

        for node in model.nodes:
            if node.id not in graph:
                graph.add_node(node.id, label=node.label)

        for edge in model.edges:
            if edge.source in graph and edge.destination in graph:
                graph.add_edge(edge.source, edge.destination)

        return graph

"""
Core Graph Engine

RESPONSIBILITY: Graph construction, layered layout, selection state
ALLOWED INPUTS: Story tuples from the contracts layer, selection events
OUTPUTS: GraphModel, LayoutResult, SelectionSnapshot (all immutable)

WHAT THIS LAYER MUST NOT DO:
============================
- Fetch data (ingestion layer's job)
- Draw or rasterize anything (frontend's job)
- Mutate the story collection or the graph
- Infer a root from the data (the root is configuration)
"""

from .builder import GraphBuilder
from .layout import LayoutEngine, LayoutConfig, DEFAULT_ROOT_ID
from .selection import SelectionController

__all__ = [
    'GraphBuilder',
    'LayoutEngine', 'LayoutConfig', 'DEFAULT_ROOT_ID',
    'SelectionController',
]

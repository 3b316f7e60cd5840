"""
Mermaid Renderer
================

Text rendering of a story graph for surfaces that cannot draw.

Uses "graph BT" so that, like the drawn layout, edges point up from
the choices towards the stories that offer them.
"""

import re
from typing import Dict, Optional

from backend.contracts.graph import GraphModel


_UNSAFE_ID = re.compile(r'[^A-Za-z0-9_]')


def mermaid_id(node_id: str) -> str:
    """Mermaid node ids may not contain dashes, spaces or punctuation."""
    return "n_" + _UNSAFE_ID.sub("_", node_id)


def _escape_label(label: str) -> str:
    return label.replace('"', "#quot;")


def generate_mermaid(
    model: GraphModel,
    root_id: Optional[str] = None,
    selected_id: Optional[str] = None
) -> str:
    """
    Generate a Mermaid flowchart.

    Root = thick outline, Selected = filled.
    Dangling edges are skipped: they have nothing to point at.
    """
    lines = ["graph BT"]

    lines.append("    classDef story fill:#0074D9,color:#fff,stroke:#0074D9;")
    lines.append("    classDef root stroke:#001f3f,stroke-width:4px;")
    lines.append("    classDef selected fill:#FF851B,stroke:#FF851B;")

    ids: Dict[str, str] = {}
    for node in model.nodes:
        if node.id in ids:
            continue
        candidate = mermaid_id(node.id)
        if candidate in ids.values():
            candidate = f"{candidate}_{len(ids)}"
        ids[node.id] = candidate
        lines.append(f'    {ids[node.id]}["{_escape_label(node.label)}"]:::story')

    for edge in model.edges:
        if edge.source in ids and edge.destination in ids:
            lines.append(f"    {ids[edge.source]} --> {ids[edge.destination]}")

    if root_id in ids:
        lines.append(f"    class {ids[root_id]} root;")
    if selected_id in ids:
        lines.append(f"    class {ids[selected_id]} selected;")

    return "\n".join(lines)

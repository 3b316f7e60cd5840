"""
Story Graph Viewer Backend

Turns a branching narrative into a laid-out, clickable directed graph.
Each layer communicates only through explicit contracts, never through
shared mutable state.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Story, Option, GraphModel, LayoutResult, selection events
   - Immutable; imported by every other layer

2. CORE GRAPH ENGINE (core/)
   - GraphBuilder: stories -> nodes + INVERTED edges
   - LayoutEngine: breadth-first layered placement from the root
   - SelectionController: Idle / Inspecting state machine
   - MUST NOT: fetch, draw, or mutate the story collection

3. SESSION (engine.py)
   - One fetch, then build + layout once
   - Owns the selection controller and the export path

4. API & CLI (api/, cli.py)
   - Read-only HTTP surface and command-line entry points

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: stories, graph and layout are frozen
- Deterministic: identical input -> identical coordinates
- Explicit errors: fetch failures are data with a message
- Dangling references are inert, never errors
"""

"""
Frontend Layer

Views, styling, text rendering and image export for the story graph.
Consumes backend contracts; never mutates them.
"""

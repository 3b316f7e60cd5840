"""Renderable graph views."""
